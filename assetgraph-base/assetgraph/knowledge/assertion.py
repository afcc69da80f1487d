
"""
Assertion canonicalization and content addressing.

An assertion is the URDNA2015 canonical N-Quads form of a JSON-LD graph,
one statement per entry.  Its id is the root of a keccak256 Merkle tree
over the sorted statements, so equal content always yields an equal id.
"""

import logging
from Crypto.Hash import keccak
from pyld import jsonld

from .. schema import Assertion
from .. exceptions import InvalidAssertionError
from .. rdf import NQUADS_FORMAT, CANONICALIZATION_ALGORITHM

# Module logger
logger = logging.getLogger(__name__)

def keccak256(data):
    digest = keccak.new(digest_bits=256)
    digest.update(data)
    return digest.digest()

def format_assertion(content, input_format=None):

    options = {
        "algorithm": CANONICALIZATION_ALGORITHM,
        "format": NQUADS_FORMAT,
    }

    if input_format:
        options["inputFormat"] = input_format

    try:
        canonized = jsonld.normalize(content, options)
    except jsonld.JsonLdError as e:
        raise InvalidAssertionError(f"Canonicalization failed: {e}") from e

    assertion = [
        statement
        for statement in canonized.split("\n")
        if statement
    ]

    if not assertion:
        raise InvalidAssertionError(
            "File format is corrupted, no n-quads are extracted."
        )

    return assertion

def _leaf(statement, index):
    # keccak256(abi.encodePacked(bytes32 statementHash, uint256 index))
    return keccak256(
        keccak256(statement.encode("utf-8")) + index.to_bytes(32, "big")
    )

def calculate_root(assertion):

    if not assertion:
        raise InvalidAssertionError("Cannot calculate root of an empty assertion")

    layer = [
        _leaf(statement, index)
        for index, statement in enumerate(sorted(assertion))
    ]

    while len(layer) > 1:

        parents = []

        for i in range(0, len(layer), 2):

            # Odd node out is promoted unchanged
            if i + 1 == len(layer):
                parents.append(layer[i])
                continue

            left, right = sorted((layer[i], layer[i + 1]))
            parents.append(keccak256(left + right))

        layer = parents

    return "0x" + layer[0].hex()

def get_assertion_size_in_bytes(assertion):
    return len("\n".join(assertion).encode("utf-8"))

def get_assertion_triples_number(assertion):
    return len(assertion)

def get_assertion_chunks_number(assertion):
    # One chunk per statement
    return len(assertion)

def build_assertion(content, input_format=None):

    statements = format_assertion(content, input_format)

    assertion = Assertion(
        statements = tuple(statements),
        assertion_id = calculate_root(statements),
        size_in_bytes = get_assertion_size_in_bytes(statements),
        triples_number = get_assertion_triples_number(statements),
        chunks_number = get_assertion_chunks_number(statements),
    )

    logger.debug(
        f"Assertion {assertion.assertion_id}: {assertion.triples_number} "
        f"triples, {assertion.size_in_bytes} bytes"
    )

    return assertion

