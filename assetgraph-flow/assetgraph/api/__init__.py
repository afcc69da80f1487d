
"""
Client entry point.

    api = Api.from_endpoint(
        "https://node.example.org", port=8900,
        blockchain_service=service,
        config={"blockchain": {"name": "otp:20430", "hub_contract": "0x..."}},
    )

    result = await api.asset.create({"public": {...}}, {"epochs_num": 2})
    content = await api.asset.get(result["UAL"])
"""

from .. base import NodeApiService, BlockchainService
from .. validation.service import ValidationService
from .. asset.manager import AssetOperationsManager
from .. graph.manager import GraphOperationsManager
from .. node.manager import NodeOperationsManager

class Api:

    def __init__(self, node_api, blockchain_service=None, config=None):

        if blockchain_service is None:
            blockchain_service = BlockchainService()

        self.config = dict(config or {})

        self.validation_service = ValidationService(
            signing_capable = blockchain_service.signing_capable,
        )

        self.asset = AssetOperationsManager(
            node_api, blockchain_service, self.validation_service,
            self.config,
        )

        self.graph = GraphOperationsManager(
            node_api, self.validation_service, self.config,
        )

        self.node = NodeOperationsManager(
            node_api, self.validation_service, self.config,
        )

    @classmethod
    def from_endpoint(
            cls, endpoint, port=None, blockchain_service=None, config=None,
            **node_params,
    ):

        config = dict(config or {})
        config["endpoint"] = endpoint
        if port is not None:
            config["port"] = port

        return cls(
            NodeApiService(**node_params), blockchain_service, config,
        )

