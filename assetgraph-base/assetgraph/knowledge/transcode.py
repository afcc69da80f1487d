
"""
Conversion between raw N-Quads and the output formats returned to callers.
Every failure surfaces as ConversionError so managers can attach it to the
operation result instead of aborting.
"""

from pyld import jsonld
from rdflib import Dataset, Literal, URIRef
from rdflib.exceptions import ParserError

from .. constants import OutputFormats
from .. exceptions import ConversionError
from .. rdf import PRIVATE_ASSERTION_PREDICATE, NQUADS_FORMAT
from .. rdf import CANONICALIZATION_ALGORITHM
from . assertion import format_assertion

PRIVATE_ASSERTION = URIRef(PRIVATE_ASSERTION_PREDICATE)

def to_nquads(content, input_format=NQUADS_FORMAT):
    """Canonical statement list from N-Quads text (or JSON-LD when
    input_format is None)"""

    if input_format and not isinstance(content, str):
        raise ConversionError(
            f"Expected N-Quads text, got {type(content).__name__}"
        )

    return format_assertion(content, input_format)

def to_jsonld(assertion):

    try:
        return jsonld.from_rdf(
            "\n".join(assertion),
            {
                "algorithm": CANONICALIZATION_ALGORITHM,
                "format": NQUADS_FORMAT,
            }
        )
    except jsonld.JsonLdError as e:
        raise ConversionError(f"N-Quads to JSON-LD conversion failed: {e}") from e

def to_output_format(assertion, output_format):

    if output_format == OutputFormats.N_QUADS:
        return "\n".join(assertion)

    return to_jsonld(assertion)

def find_private_assertion_id(assertion):
    """
    Object of the linking triple in a public assertion, or None when the
    asset has no private part.
    """

    dataset = Dataset()

    try:
        dataset.parse(data="\n".join(assertion) + "\n", format="nquads")
    except ParserError as e:
        raise ConversionError(f"Unable to parse assertion: {e}") from e

    for s, p, o, g in dataset.quads((None, PRIVATE_ASSERTION, None, None)):
        if isinstance(o, Literal):
            return str(o)

    return None

