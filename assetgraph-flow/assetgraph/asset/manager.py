
"""
Knowledge asset operations: create, get, transfer and get_owner.

create publishes content to the node and mints its on-chain token; get reads
the latest public assertion for a UAL back from the node, plus the private
assertion linked from it.  Operation failures are returned as status
records.  Validation and integrity failures raise.
"""

import logging

from .. schema import AssetCreateParams, OperationResult, operation_status
from .. base import EmptyHooks, Blockchain, derive_ual, resolve_ual
from .. constants import Operations, OperationStatuses, OperationStepStatuses
from .. constants import ContentTypes, QueryTypes
from .. constants import CONTENT_ASSET_STORAGE_CONTRACT
from .. constants import DEFAULT_GET_LOCAL_STORE_RESULT_FREQUENCY
from .. exceptions import AssertionIntegrityError, ConversionError
from .. exceptions import OperationTimeoutError
from .. knowledge import build_assertion, calculate_root
from .. knowledge import to_nquads, to_output_format
from .. knowledge import find_private_assertion_id
from .. rdf import ASSERTION_GRAPH_PREFIX
from . content import normalize_content, non_empty, public_graph
from . options import AssetCreateOptions, AssetGetOptions, pick

# Module logger
logger = logging.getLogger(__name__)

############################################################################

class CreateStates:
    VALIDATED = "VALIDATED"
    COSTED = "COSTED"
    MINTED = "MINTED"
    STORED = "STORED"
    FAILED = "FAILED"
    PUBLISHED = "PUBLISHED"

class CreateWorkflow:
    """
    Progress of one create call.  Local store failure moves STORED to the
    terminal FAILED state, so publish is never reached from it.
    """

    TRANSITIONS = {
        CreateStates.VALIDATED: {CreateStates.COSTED},
        CreateStates.COSTED: {CreateStates.MINTED},
        CreateStates.MINTED: {CreateStates.STORED},
        CreateStates.STORED: {CreateStates.FAILED, CreateStates.PUBLISHED},
        CreateStates.FAILED: set(),
        CreateStates.PUBLISHED: set(),
    }

    def __init__(self):
        self.state = CreateStates.VALIDATED
        self.history = [self.state]

    @property
    def terminal(self):
        return not self.TRANSITIONS[self.state]

    def can_advance_to(self, target):
        return target in self.TRANSITIONS[self.state]

    def advance_to(self, target):

        if not self.can_advance_to(target):
            raise RuntimeError(
                f"Invalid create transition: {self.state} -> {target}"
            )

        logger.debug(f"Create: {self.state} -> {target}")

        self.state = target
        self.history.append(target)

    def stored(self, local_store_result):
        """Records the local store outcome, returns True if publish may run"""

        self.advance_to(CreateStates.STORED)

        if local_store_result.failed:
            self.advance_to(CreateStates.FAILED)
            return False

        return True

############################################################################

def private_assertion_query(assertion_id):
    return f"""
        CONSTRUCT {{ ?s ?p ?o }}
        WHERE {{
            {{
                GRAPH <{ASSERTION_GRAPH_PREFIX}{assertion_id}>
                {{
                    ?s ?p ?o .
                }}
            }}
        }}"""

def verify_assertion(assertion, expected_id):

    calculated = calculate_root(assertion) if assertion else None

    if calculated != expected_id:
        raise AssertionIntegrityError(expected_id, calculated)

def client_error_status(message, operation_id=None):
    return operation_status(
        OperationResult(status=OperationStatuses.FAILED).with_error(message),
        operation_id,
    )

class AssetOperationsManager:

    def __init__(
            self, node_api, blockchain_service, validation_service,
            config=None,
    ):
        self.node_api = node_api
        self.blockchain_service = blockchain_service
        self.validation_service = validation_service
        self.config = config or {}

    async def create(self, content, options=None, step_hooks=None):

        if step_hooks is None:
            step_hooks = EmptyHooks()

        self.validation_service.validate_content_object(content)

        content = normalize_content(content)

        opts = AssetCreateOptions.resolve(options, self.config)

        self.validation_service.validate_asset_create(
            content,
            opts.blockchain,
            opts.endpoint,
            opts.port,
            opts.max_number_of_retries,
            opts.frequency,
            opts.epochs_num,
            opts.hash_function_id,
            opts.score_function_id,
            opts.immutable,
            opts.token_amount,
            opts.auth_token,
        )

        opts = opts.normalized()
        blockchain = opts.blockchain

        workflow = CreateWorkflow()

        # Private first: the public graph links to its id
        private_assertion = None
        if non_empty(content.get("private")):
            logger.debug("Canonicalizing private assertion...")
            private_assertion = build_assertion(content["private"])

        logger.debug("Canonicalizing public assertion...")
        public_assertion = build_assertion(
            public_graph(content.get("public"), private_assertion)
        )

        contract = await self.blockchain_service.get_contract_address(
            CONTENT_ASSET_STORAGE_CONTRACT, blockchain,
        )

        token_amount = opts.token_amount

        if token_amount is None:
            logger.debug("Requesting bid suggestion...")
            token_amount = await self.node_api.get_bid_suggestion(
                opts.endpoint,
                opts.port,
                opts.auth_token,
                blockchain.chain_tag,
                opts.epochs_num,
                public_assertion.size_in_bytes,
                contract,
                public_assertion.assertion_id,
                opts.hash_function_id,
            )

        workflow.advance_to(CreateStates.COSTED)

        logger.debug("Creating asset on chain...")

        token_id = await self.blockchain_service.create_asset(
            AssetCreateParams(
                assertion_id = public_assertion.assertion_id,
                assertion_size = public_assertion.size_in_bytes,
                triples_number = public_assertion.triples_number,
                chunks_number = public_assertion.chunks_number,
                epochs_num = opts.epochs_num,
                token_amount = token_amount,
                score_function_id = opts.score_function_id,
                immutable = opts.immutable,
            ),
            blockchain,
            step_hooks,
        )

        workflow.advance_to(CreateStates.MINTED)

        ual = derive_ual(blockchain.name, contract, token_id)

        logger.info(f"Minted {ual}, storing assertions...")

        assertions = [
            public_assertion.to_local_store(blockchain.name, contract, token_id)
        ]

        if private_assertion is not None:
            assertions.append(
                private_assertion.to_local_store(
                    blockchain.name, contract, token_id
                )
            )

        operation_id = await self.node_api.local_store(
            opts.endpoint, opts.port, opts.auth_token, assertions,
        )

        result = await self.poll_minted(
            ual,
            opts.endpoint,
            opts.port,
            opts.auth_token,
            Operations.LOCAL_STORE,
            opts.max_number_of_retries,
            DEFAULT_GET_LOCAL_STORE_RESULT_FREQUENCY,
            operation_id,
        )

        if workflow.stored(result):

            logger.debug("Publishing public assertion...")

            operation_id = await self.node_api.publish(
                opts.endpoint,
                opts.port,
                opts.auth_token,
                public_assertion.assertion_id,
                public_assertion.statements,
                blockchain.name,
                contract,
                token_id,
                opts.hash_function_id,
            )

            result = await self.poll_minted(
                ual,
                opts.endpoint,
                opts.port,
                opts.auth_token,
                Operations.PUBLISH,
                opts.max_number_of_retries,
                opts.frequency,
                operation_id,
            )

            workflow.advance_to(CreateStates.PUBLISHED)

            step_hooks.after_hook({
                "status": OperationStepStatuses.CREATE_ASSET_COMPLETED,
                "data": {
                    "operation_id": operation_id,
                    "operation_result": result,
                },
            })

        else:
            logger.warning(f"Local store failed for {ual}, not publishing")

        logger.info(f"Create {ual} finished in state {workflow.state}")

        return {
            "UAL": ual,
            "public_assertion_id": public_assertion.assertion_id,
            "operation": operation_status(result, operation_id),
        }

    async def poll_minted(self, ual, *args):
        """Polls an operation issued after minting.  A timeout carries the
        UAL so the caller can still reach the minted asset."""

        try:
            return await self.node_api.get_operation_result(*args)
        except OperationTimeoutError as e:
            e.ual = ual
            logger.error(f"{e} Asset {ual} is already minted.")
            raise

    def convert(self, assertion, output_format, result):
        """
        Converts an assertion to the output format.  On failure the raw
        statements are kept and the error replaces the result data.
        """

        try:
            return to_output_format(assertion, output_format), result
        except ConversionError as e:
            logger.warning(f"Assertion conversion failed: {e}")
            return assertion, result.with_error(str(e))

    async def get(self, ual, options=None):

        opts = AssetGetOptions.resolve(options, self.config)

        self.validation_service.validate_asset_get(
            ual,
            opts.blockchain,
            opts.endpoint,
            opts.port,
            opts.max_number_of_retries,
            opts.frequency,
            opts.state,
            opts.content_type,
            opts.hash_function_id,
            opts.validate,
            opts.output_format,
            opts.auth_token,
        )

        opts = opts.normalized()

        content = {"operation": {}}

        token_id = resolve_ual(ual).token_id

        # Only the latest state passes validation
        public_assertion_id = await self.blockchain_service.get_latest_assertion_id(
            token_id, opts.blockchain,
        )

        get_operation_id = await self.node_api.get(
            opts.endpoint, opts.port, opts.auth_token, ual,
            opts.hash_function_id,
        )

        get_result = await self.node_api.get_operation_result(
            opts.endpoint,
            opts.port,
            opts.auth_token,
            Operations.GET,
            opts.max_number_of_retries,
            opts.frequency,
            get_operation_id,
        )

        if get_result.failed:
            logger.warning(f"Get operation failed for {ual}")
            content["operation"]["public_get"] = operation_status(
                get_result, get_operation_id
            )
            return content

        data = get_result.data if isinstance(get_result.data, dict) else {}
        public_assertion = list(data.get("assertion") or [])

        if opts.validate:
            verify_assertion(public_assertion, public_assertion_id)

        if opts.content_type != ContentTypes.PRIVATE:

            public, get_result = self.convert(
                public_assertion, opts.output_format, get_result
            )

            content["public"] = public
            content["public_assertion_id"] = public_assertion_id
            content["operation"]["public_get"] = operation_status(
                get_result, get_operation_id
            )

        if opts.content_type != ContentTypes.PUBLIC:
            await self.get_private(
                ual, public_assertion, opts, content
            )

        return content

    async def get_private(self, ual, public_assertion, opts, content):

        try:
            private_assertion_id = find_private_assertion_id(public_assertion)
        except ConversionError as e:
            logger.warning(f"Unable to scan public assertion of {ual}: {e}")
            content["operation"]["query_private"] = client_error_status(str(e))
            return

        if private_assertion_id is None:

            if opts.content_type == ContentTypes.PRIVATE:
                content["operation"]["query_private"] = client_error_status(
                    f"Node doesn't have private data of {ual}"
                )

            return

        query_operation_id = await self.node_api.query(
            opts.endpoint,
            opts.port,
            opts.auth_token,
            private_assertion_query(private_assertion_id),
            QueryTypes.CONSTRUCT,
        )

        query_result = await self.node_api.get_operation_result(
            opts.endpoint,
            opts.port,
            opts.auth_token,
            Operations.QUERY,
            opts.max_number_of_retries,
            opts.frequency,
            query_operation_id,
        )

        private = None

        if not query_result.failed:

            try:
                private_assertion = to_nquads(query_result.data)
            except ConversionError as e:
                logger.warning(f"Private assertion of {ual} unreadable: {e}")
                query_result = query_result.with_error(str(e))
            else:
                if opts.validate:
                    verify_assertion(private_assertion, private_assertion_id)
                private, query_result = self.convert(
                    private_assertion, opts.output_format, query_result
                )

        content["private"] = private
        content["private_assertion_id"] = private_assertion_id
        content["operation"]["query_private"] = operation_status(
            query_result, query_operation_id
        )

    async def transfer(self, ual, new_owner, options=None):

        blockchain = Blockchain.from_value(
            pick("blockchain", options or {}, self.config)
        )

        self.validation_service.validate_asset_transfer(
            ual, new_owner, blockchain
        )

        token_id = resolve_ual(ual).token_id

        logger.info(f"Transferring {ual} to {new_owner}...")

        await self.blockchain_service.transfer_asset(
            token_id, new_owner, blockchain
        )

        owner = await self.blockchain_service.get_asset_owner(
            token_id, blockchain
        )

        return {
            "UAL": ual,
            "owner": owner,
            "operation": operation_status(
                OperationResult(status=OperationStatuses.COMPLETED), None
            ),
        }

    async def get_owner(self, ual, options=None):

        blockchain = Blockchain.from_value(
            pick("blockchain", options or {}, self.config)
        )

        self.validation_service.validate_asset_get_owner(ual, blockchain)

        token_id = resolve_ual(ual).token_id

        owner = await self.blockchain_service.get_asset_owner(
            token_id, blockchain
        )

        return {
            "UAL": ual,
            "owner": owner,
            "operation": operation_status(
                OperationResult(status=OperationStatuses.COMPLETED), None
            ),
        }

