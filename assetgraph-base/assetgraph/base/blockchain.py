
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Optional

from .. exceptions import ValidationError

@dataclass(frozen=True)
class Blockchain:
    name: Optional[str] = None
    hub_contract: Optional[str] = None
    rpc: Optional[str] = None
    public_key: Optional[str] = None
    private_key: Optional[str] = None

    @classmethod
    def from_value(cls, value):
        """Accepts a Blockchain, a mapping of its fields, or None"""

        if value is None or isinstance(value, cls):
            return value

        if not isinstance(value, Mapping):
            raise ValidationError("blockchain must be an object")

        known = {f.name for f in fields(cls)}

        return cls(**{
            k: v for k, v in dict(value).items()
            if k in known
        })

    @property
    def chain_tag(self):
        # Bid suggestions are keyed by network family, not chain id
        if self.name and self.name.startswith("otp"):
            return "otp"
        return self.name

class BlockchainService:
    """
    Asset registry access.  Contract binding and transaction signing live
    in implementations of this interface; the managers only depend on the
    calls below.
    """

    # Whether this service can sign transactions.  Credentials are only
    # demanded from callers when it can.
    signing_capable = True

    async def get_contract_address(self, contract_name, blockchain):
        raise NotImplementedError()

    async def create_asset(self, params, blockchain, step_hooks):
        """Mints an asset token from AssetCreateParams, returns the token id"""
        raise NotImplementedError()

    async def get_latest_assertion_id(self, token_id, blockchain):
        raise NotImplementedError()

    async def transfer_asset(self, token_id, new_owner, blockchain):
        raise NotImplementedError()

    async def get_asset_owner(self, token_id, blockchain):
        raise NotImplementedError()

