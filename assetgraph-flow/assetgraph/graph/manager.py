
import logging

from .. schema import operation_status
from .. constants import Operations, QueryTypes
from .. asset.options import GraphQueryOptions

# Module logger
logger = logging.getLogger(__name__)

class GraphOperationsManager:

    def __init__(self, node_api, validation_service, config=None):
        self.node_api = node_api
        self.validation_service = validation_service
        self.config = config or {}

    async def query(self, query_string, query_type=QueryTypes.SELECT, options=None):

        opts = GraphQueryOptions.resolve(options, self.config)

        self.validation_service.validate_graph_query(
            query_string,
            query_type,
            opts.endpoint,
            opts.port,
            opts.max_number_of_retries,
            opts.frequency,
            opts.auth_token,
        )

        opts = opts.normalized()

        logger.debug(f"Submitting {query_type} query...")

        operation_id = await self.node_api.query(
            opts.endpoint, opts.port, opts.auth_token, query_string, query_type,
        )

        result = await self.node_api.get_operation_result(
            opts.endpoint,
            opts.port,
            opts.auth_token,
            Operations.QUERY,
            opts.max_number_of_retries,
            opts.frequency,
            operation_id,
        )

        return {
            "data": None if result.failed else result.data,
            "operation": operation_status(result, operation_id),
        }

