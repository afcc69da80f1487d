"""
Unit tests for asset get, transfer and get_owner.
"""

from unittest import IsolatedAsyncioTestCase
from unittest.mock import AsyncMock, patch

from assetgraph.asset import AssetOperationsManager
from assetgraph.asset.content import public_graph
from assetgraph.validation import ValidationService
from assetgraph.base import Blockchain
from assetgraph.schema import OperationResult
from assetgraph.knowledge import build_assertion
from assetgraph.constants import OperationStatuses, QueryTypes, Operations
from assetgraph.constants import CLIENT_ERROR_TYPE
from assetgraph.exceptions import AssertionIntegrityError, ConversionError
from assetgraph.exceptions import ValidationError

UAL = "did:dkg:hardhat/0xcontract/7"

CONFIG = {
    "endpoint": "http://localhost",
    "port": 8900,
    "blockchain": {
        "name": "hardhat",
        "hub_contract": "0xhub",
        "rpc": "http://localhost:8545",
        "public_key": "0xpub",
        "private_key": "0xpriv",
    },
    "frequency": 0,
    "max_number_of_retries": 3,
}

PUBLIC = {
    "@id": "http://example.org/asset",
    "http://schema.org/name": "Asset",
}

PRIVATE = {
    "@id": "http://example.org/asset",
    "http://schema.org/secret": "hidden",
}

PRIVATE_ASSERTION = build_assertion(PRIVATE)
LINKED_PUBLIC_ASSERTION = build_assertion(public_graph(PUBLIC, PRIVATE_ASSERTION))
PUBLIC_ASSERTION = build_assertion(public_graph(PUBLIC))

N_QUADS = {"output_format": "n-quads"}


def completed(data):
    return OperationResult(status=OperationStatuses.COMPLETED, data=data)


def make_manager(public_assertion, results):

    node_api = AsyncMock()
    node_api.get.return_value = "get-1"
    node_api.query.return_value = "q-1"
    node_api.get_operation_result.side_effect = results

    blockchain_service = AsyncMock()
    blockchain_service.get_latest_assertion_id.return_value = \
        public_assertion.assertion_id

    manager = AssetOperationsManager(
        node_api, blockchain_service, ValidationService(), CONFIG,
    )

    return manager, node_api, blockchain_service


def linked_results(public_statements=None):
    if public_statements is None:
        public_statements = list(LINKED_PUBLIC_ASSERTION.statements)
    return [
        completed({"assertion": public_statements}),
        completed("\n".join(PRIVATE_ASSERTION.statements)),
    ]


class TestAssetGet(IsolatedAsyncioTestCase):
    """Validate reading assets back from the node."""

    async def test_public_and_private(self):
        manager, node_api, blockchain_service = make_manager(
            LINKED_PUBLIC_ASSERTION, linked_results(),
        )

        result = await manager.get(UAL, N_QUADS)

        blockchain_service.get_latest_assertion_id.assert_awaited_once()
        assert blockchain_service.get_latest_assertion_id.await_args.args[0] == 7

        assert node_api.get.await_args.args[3] == UAL

        assert result["public"] == "\n".join(LINKED_PUBLIC_ASSERTION.statements)
        assert result["public_assertion_id"] == \
            LINKED_PUBLIC_ASSERTION.assertion_id
        assert result["private"] == "\n".join(PRIVATE_ASSERTION.statements)
        assert result["private_assertion_id"] == PRIVATE_ASSERTION.assertion_id
        assert result["operation"] == {
            "public_get": {
                "operation_id": "get-1",
                "status": OperationStatuses.COMPLETED,
            },
            "query_private": {
                "operation_id": "q-1",
                "status": OperationStatuses.COMPLETED,
            },
        }

    async def test_private_query(self):
        manager, node_api, _ = make_manager(
            LINKED_PUBLIC_ASSERTION, linked_results(),
        )

        await manager.get(UAL, N_QUADS)

        query, query_type = node_api.query.await_args.args[3:5]
        assert query_type == QueryTypes.CONSTRUCT
        assert f"GRAPH <assertion:{PRIVATE_ASSERTION.assertion_id}>" in query

        calls = node_api.get_operation_result.await_args_list
        assert calls[0].args[3] == Operations.GET
        assert calls[1].args[3] == Operations.QUERY
        assert calls[1].args[6] == "q-1"

    async def test_json_ld_output(self):
        manager, _, _ = make_manager(
            LINKED_PUBLIC_ASSERTION, linked_results(),
        )

        result = await manager.get(UAL)

        assert result["private"] == [{
            "@id": "http://example.org/asset",
            "http://schema.org/secret": [{"@value": "hidden"}],
        }]
        assert isinstance(result["public"], list)

    async def test_tampered_public_assertion(self):
        tampered = list(LINKED_PUBLIC_ASSERTION.statements)
        tampered[0] = tampered[0].replace("Asset", "Forged")

        manager, node_api, _ = make_manager(
            LINKED_PUBLIC_ASSERTION, linked_results(tampered),
        )

        with self.assertRaises(AssertionIntegrityError):
            await manager.get(UAL, N_QUADS)

        node_api.query.assert_not_awaited()

    async def test_tampered_private_assertion(self):
        forged = build_assertion(dict(PRIVATE, **{
            "http://schema.org/secret": "forged",
        }))

        manager, _, _ = make_manager(
            LINKED_PUBLIC_ASSERTION,
            [
                completed({"assertion": list(LINKED_PUBLIC_ASSERTION.statements)}),
                completed("\n".join(forged.statements)),
            ],
        )

        with self.assertRaises(AssertionIntegrityError):
            await manager.get(UAL, N_QUADS)

    async def test_validate_off_skips_root_check(self):
        tampered = list(PUBLIC_ASSERTION.statements)
        tampered[0] = tampered[0].replace("Asset", "Forged")

        manager, _, _ = make_manager(
            PUBLIC_ASSERTION, [completed({"assertion": tampered})],
        )

        result = await manager.get(
            UAL, {"output_format": "n-quads", "validate": False},
        )

        assert result["public"] == "\n".join(tampered)
        assert "private" not in result

    async def test_public_content_type(self):
        manager, node_api, _ = make_manager(
            LINKED_PUBLIC_ASSERTION, linked_results(),
        )

        result = await manager.get(
            UAL, {"output_format": "n-quads", "content_type": "public"},
        )

        node_api.query.assert_not_awaited()
        assert "private" not in result
        assert list(result["operation"].keys()) == ["public_get"]

    async def test_private_content_type(self):
        manager, _, _ = make_manager(
            LINKED_PUBLIC_ASSERTION, linked_results(),
        )

        result = await manager.get(
            UAL, {"output_format": "n-quads", "content_type": "private"},
        )

        assert "public" not in result
        assert result["private"] == "\n".join(PRIVATE_ASSERTION.statements)

    async def test_private_content_type_without_private_data(self):
        manager, node_api, _ = make_manager(
            PUBLIC_ASSERTION,
            [completed({"assertion": list(PUBLIC_ASSERTION.statements)})],
        )

        result = await manager.get(UAL, {"content_type": "private"})

        node_api.query.assert_not_awaited()
        assert "private" not in result
        assert result["operation"]["query_private"] == {
            "operation_id": None,
            "status": OperationStatuses.FAILED,
            "error_type": CLIENT_ERROR_TYPE,
            "error_message": f"Node doesn't have private data of {UAL}",
        }

    async def test_public_only_asset_with_all_content(self):
        manager, node_api, _ = make_manager(
            PUBLIC_ASSERTION,
            [completed({"assertion": list(PUBLIC_ASSERTION.statements)})],
        )

        result = await manager.get(UAL, N_QUADS)

        node_api.query.assert_not_awaited()
        assert "private" not in result
        assert "query_private" not in result["operation"]

    async def test_failed_get(self):
        failed = OperationResult(
            status=OperationStatuses.FAILED,
            data={"errorType": "GET_ERROR", "errorMessage": "not found"},
        )
        manager, node_api, _ = make_manager(PUBLIC_ASSERTION, [failed])

        result = await manager.get(UAL)

        node_api.query.assert_not_awaited()
        assert result == {
            "operation": {
                "public_get": {
                    "operation_id": "get-1",
                    "status": OperationStatuses.FAILED,
                    "error_type": "GET_ERROR",
                    "error_message": "not found",
                },
            },
        }

    async def test_failed_private_query(self):
        failed = OperationResult(
            status=OperationStatuses.FAILED,
            data={"errorType": "QUERY_ERROR", "errorMessage": "gone"},
        )
        manager, _, _ = make_manager(
            LINKED_PUBLIC_ASSERTION,
            [
                completed({"assertion": list(LINKED_PUBLIC_ASSERTION.statements)}),
                failed,
            ],
        )

        result = await manager.get(UAL, N_QUADS)

        assert result["private"] is None
        assert result["operation"]["query_private"]["status"] == \
            OperationStatuses.FAILED
        assert result["operation"]["query_private"]["error_message"] == "gone"

    async def test_conversion_error_is_reported(self):
        manager, _, _ = make_manager(
            PUBLIC_ASSERTION,
            [completed({"assertion": list(PUBLIC_ASSERTION.statements)})],
        )

        with patch(
                "assetgraph.asset.manager.to_output_format",
                side_effect=ConversionError("bad output"),
        ):
            result = await manager.get(UAL, {"content_type": "public"})

        assert result["public"] == list(PUBLIC_ASSERTION.statements)
        assert result["operation"]["public_get"] == {
            "operation_id": "get-1",
            "status": OperationStatuses.COMPLETED,
            "error_type": CLIENT_ERROR_TYPE,
            "error_message": "bad output",
        }

    async def test_non_latest_state_rejected(self):
        manager, node_api, blockchain_service = make_manager(
            PUBLIC_ASSERTION, [],
        )

        with self.assertRaises(ValidationError):
            await manager.get(UAL, {"state": PUBLIC_ASSERTION.assertion_id})

        blockchain_service.get_latest_assertion_id.assert_not_awaited()
        node_api.get.assert_not_awaited()


class TestAssetOwnership(IsolatedAsyncioTestCase):
    """Validate transfer and get_owner."""

    async def test_transfer(self):
        blockchain_service = AsyncMock()
        blockchain_service.get_asset_owner.return_value = "0xnew"

        manager = AssetOperationsManager(
            AsyncMock(), blockchain_service, ValidationService(), CONFIG,
        )

        result = await manager.transfer(UAL, "0xnew")

        token_id, new_owner, blockchain = \
            blockchain_service.transfer_asset.await_args.args
        assert token_id == 7
        assert new_owner == "0xnew"
        assert blockchain == Blockchain(**CONFIG["blockchain"])

        assert result == {
            "UAL": UAL,
            "owner": "0xnew",
            "operation": {
                "operation_id": None,
                "status": OperationStatuses.COMPLETED,
            },
        }

    async def test_transfer_needs_new_owner(self):
        blockchain_service = AsyncMock()
        manager = AssetOperationsManager(
            AsyncMock(), blockchain_service, ValidationService(), CONFIG,
        )

        with self.assertRaises(ValidationError):
            await manager.transfer(UAL, None)

        blockchain_service.transfer_asset.assert_not_awaited()

    async def test_get_owner_without_keys(self):
        blockchain_service = AsyncMock()
        blockchain_service.get_asset_owner.return_value = "0xowner"

        manager = AssetOperationsManager(
            AsyncMock(), blockchain_service, ValidationService(),
        )

        result = await manager.get_owner(UAL, {
            "blockchain": {
                "name": "hardhat",
                "hub_contract": "0xhub",
                "rpc": "http://localhost:8545",
            },
        })

        assert result["owner"] == "0xowner"
        assert blockchain_service.get_asset_owner.await_args.args[0] == 7

    async def test_get_owner_bad_ual(self):
        manager = AssetOperationsManager(
            AsyncMock(), AsyncMock(), ValidationService(), CONFIG,
        )

        with self.assertRaises(ValidationError):
            await manager.get_owner("did:dkg:hardhat/0xcontract")

    async def test_get_owner_blockchain_must_be_mapping(self):
        blockchain_service = AsyncMock()
        manager = AssetOperationsManager(
            AsyncMock(), blockchain_service, ValidationService(),
        )

        for blockchain in ["otp:2043", ["hardhat"], 42]:
            with self.assertRaises(ValidationError):
                await manager.get_owner(UAL, {"blockchain": blockchain})

        blockchain_service.get_asset_owner.assert_not_awaited()


class TestAssetRoundTrip(IsolatedAsyncioTestCase):
    """Validate that what create stores is what get reads back."""

    def setUp(self):
        self.node_api = AsyncMock()
        self.node_api.get_bid_suggestion.return_value = 100
        self.node_api.local_store.return_value = "ls-1"
        self.node_api.publish.return_value = "pub-1"
        self.node_api.get.return_value = "get-1"
        self.node_api.query.return_value = "q-1"

        self.blockchain_service = AsyncMock()
        self.blockchain_service.get_contract_address.return_value = "0xCONTRACT"
        self.blockchain_service.create_asset.return_value = 7

        self.manager = AssetOperationsManager(
            self.node_api, self.blockchain_service, ValidationService(), CONFIG,
        )

    async def create(self):

        self.node_api.get_operation_result.side_effect = [
            completed({}), completed({}),
        ]

        created = await self.manager.create(
            {"public": PUBLIC, "private": PRIVATE},
        )

        stored = self.node_api.local_store.await_args.args[3]
        published = self.node_api.publish.await_args.args

        assert published[3] == created["public_assertion_id"]
        assert list(published[4]) == stored[0]["assertion"]

        self.blockchain_service.get_latest_assertion_id.return_value = \
            created["public_assertion_id"]

        return created, stored[0]["assertion"], stored[1]

    def node_returns(self, public_statements, private_statements):
        self.node_api.get_operation_result.side_effect = [
            completed({"assertion": list(public_statements)}),
            completed("\n".join(private_statements)),
        ]

    async def test_nquads_round_trip(self):
        created, public_statements, private = await self.create()
        self.node_returns(public_statements, private["assertion"])

        result = await self.manager.get(
            created["UAL"], {"output_format": "n-quads", "validate": True},
        )

        assert self.node_api.get.await_args.args[3] == created["UAL"]
        assert result["public"] == "\n".join(public_statements)
        assert result["public_assertion_id"] == created["public_assertion_id"]
        assert result["private"] == "\n".join(private["assertion"])
        assert result["private_assertion_id"] == private["assertionId"]
        assert result["operation"]["public_get"]["status"] == \
            OperationStatuses.COMPLETED
        assert result["operation"]["query_private"]["status"] == \
            OperationStatuses.COMPLETED

    async def test_json_ld_round_trip(self):
        created, public_statements, private = await self.create()
        self.node_returns(public_statements, private["assertion"])

        result = await self.manager.get(created["UAL"], {"validate": True})

        assert result["private"] == [{
            "@id": "http://example.org/asset",
            "http://schema.org/secret": [{"@value": "hidden"}],
        }]
        assert {
            "@id": "http://example.org/asset",
            "http://schema.org/name": [{"@value": "Asset"}],
        } in result["public"]

    async def test_round_trip_detects_swapped_private_data(self):
        created, public_statements, private = await self.create()
        self.node_returns(
            public_statements, PUBLIC_ASSERTION.statements,
        )

        with self.assertRaises(AssertionIntegrityError):
            await self.manager.get(created["UAL"], {"validate": True})
