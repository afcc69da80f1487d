
from dataclasses import dataclass

############################################################################

# Parameters for minting an asset token, handed to BlockchainService

@dataclass(frozen=True)
class AssetCreateParams:
    assertion_id: str
    assertion_size: int
    triples_number: int
    chunks_number: int
    epochs_num: int
    token_amount: int
    score_function_id: int
    immutable: bool

############################################################################

# UAL components, see base.ual

@dataclass(frozen=True)
class ResolvedUAL:
    blockchain: str
    contract: str
    token_id: int

