
from dataclasses import dataclass
from typing import Tuple

############################################################################

# Canonical N-Quads statements plus the metadata derived from them.  Never
# mutated: new content produces a new Assertion.

@dataclass(frozen=True)
class Assertion:
    statements: Tuple[str, ...]
    assertion_id: str
    size_in_bytes: int
    triples_number: int
    chunks_number: int

    def __len__(self):
        return len(self.statements)

    def to_local_store(self, blockchain, contract, token_id):
        """Payload entry for a local-store request"""
        return {
            "blockchain": blockchain,
            "contract": contract,
            "tokenId": token_id,
            "assertionId": self.assertion_id,
            "assertion": list(self.statements),
        }

