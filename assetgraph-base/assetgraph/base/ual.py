
"""
Universal Asset Locator codec.

A UAL has the form did:dkg:<blockchain>/<contract>/<token-id>.  The
blockchain part may carry a chain id after a colon (otp:2043), so a UAL
has either three or four colon-separated segments.
"""

from .. schema import ResolvedUAL
from .. exceptions import InvalidUALError
from .. rdf import UAL_PREFIX

def derive_ual(blockchain, contract, token_id):
    """
    Blockchain and contract are lower-cased, so resolving a derived UAL
    gives back the original values only up to case.
    """
    return f"{UAL_PREFIX}{blockchain.lower()}/{contract.lower()}/{token_id}"

def split_ual(ual):
    """Returns the three path parts of a UAL, or raises InvalidUALError"""

    if not isinstance(ual, str):
        raise InvalidUALError(f"UAL must be a string, got {type(ual).__name__}")

    segments = ual.split(":")

    if len(segments) not in (3, 4) or not ual.startswith(UAL_PREFIX):
        raise InvalidUALError(f"UAL doesn't have correct format: {ual}")

    # Re-join the chain id so otp:2043 survives the round trip
    args = ":".join(segments[2:]).split("/")

    if len(args) != 3 or not all(args):
        raise InvalidUALError(f"UAL doesn't have correct format: {ual}")

    return args

def resolve_ual(ual):

    blockchain, contract, token_id = split_ual(ual)

    try:
        token_id = int(token_id, 10)
    except ValueError:
        raise InvalidUALError(
            f"UAL token id must be an integer: {ual}"
        )

    if token_id < 0:
        raise InvalidUALError(f"UAL token id must not be negative: {ual}")

    return ResolvedUAL(
        blockchain = blockchain,
        contract = contract,
        token_id = token_id,
    )

