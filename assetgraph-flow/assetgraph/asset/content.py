
"""
Content shape handling for asset create.

normalize_content is the compatibility adapter for the legacy shorthand, in
which a bare JSON-LD document stands for the public part.  The remaining
helpers assume the normalized {"public": ..., "private": ...} shape.
"""

from .. rdf import PRIVATE_ASSERTION_PREDICATE

CONTENT_KEYS = ("public", "private")

def normalize_content(content):
    if not any(key in content for key in CONTENT_KEYS):
        return {"public": content}
    return content

def non_empty(value):
    return value if value else None

def public_graph(public, private_assertion=None):
    """
    Public graph for an asset.  When a private assertion exists, a linking
    triple carrying its id is added next to the public content.
    """

    graph = []

    if non_empty(public):
        graph.append(public)

    if private_assertion is not None:
        graph.append({
            PRIVATE_ASSERTION_PREDICATE: private_assertion.assertion_id,
        })

    return {"@graph": graph}

