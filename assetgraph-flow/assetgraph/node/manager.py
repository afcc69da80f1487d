
from .. asset.options import NodeOptions

class NodeOperationsManager:

    def __init__(self, node_api, validation_service, config=None):
        self.node_api = node_api
        self.validation_service = validation_service
        self.config = config or {}

    async def info(self, options=None):

        opts = NodeOptions.resolve(options, self.config)

        self.validation_service.validate_node_info(
            opts.endpoint, opts.port, opts.auth_token
        )

        opts = opts.normalized()

        return await self.node_api.info(
            opts.endpoint, opts.port, opts.auth_token
        )

