
"""
HTTP client for the DKG node operation API.

Submitting work (local-store, publish, get, query) returns an operation id
immediately; results are collected with get_operation_result, which polls
GET /<operation>/<operation-id> until the node reports a terminal status.
Blocking requests calls are run in the event loop's default executor.
"""

import asyncio
import functools
import logging
import requests

from .. schema import OperationResult
from .. exceptions import NodeRequestError
from .. constants import OperationStatuses, CLIENT_ERROR_TYPE
from .. constants import DEFAULT_REQUEST_TIMEOUT
from . operation_poller import OperationPoller

# Module logger
logger = logging.getLogger(__name__)

class NodeApiService:

    def __init__(
            self, session=None, api_version=None,
            timeout=DEFAULT_REQUEST_TIMEOUT, poller=None,
    ):

        self.session = session or requests.Session()
        self.api_version = api_version
        self.timeout = timeout
        self.poller = poller or OperationPoller()

    def base_url(self, endpoint, port):
        url = f"{endpoint.rstrip('/')}:{port}"
        if self.api_version:
            url = f"{url}/{self.api_version}"
        return url

    @staticmethod
    def headers(auth_token):
        if auth_token:
            return {"Authorization": f"Bearer {auth_token}"}
        return {}

    def _send(self, method, url, auth_token, **kwargs):

        resp = self.session.request(
            method, url, headers=self.headers(auth_token),
            timeout=self.timeout, **kwargs
        )

        resp.raise_for_status()

        return resp.json()

    async def request(self, method, url, auth_token, **kwargs):
        """Runs one blocking request in the executor, returns decoded JSON"""

        return await asyncio.get_event_loop().run_in_executor(
            None,
            functools.partial(self._send, method, url, auth_token, **kwargs)
        )

    async def submit(self, method, url, auth_token, **kwargs):
        """Request whose failure is fatal to the caller"""

        try:
            return await self.request(method, url, auth_token, **kwargs)
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            body = e.response.text if e.response is not None else ""
            raise NodeRequestError(
                f"Node request {method.upper()} {url} failed: {status_code} {body}",
                status_code=status_code,
            ) from e
        except requests.RequestException as e:
            raise NodeRequestError(
                f"Node request {method.upper()} {url} failed: {e}"
            ) from e

    async def info(self, endpoint, port, auth_token):

        return await self.submit(
            "get", f"{self.base_url(endpoint, port)}/info", auth_token
        )

    # ---> AssetOperationsManager.create > [get_bid_suggestion] > token amount
    async def get_bid_suggestion(
            self, endpoint, port, auth_token, blockchain, epochs_num,
            assertion_size, content_asset_storage_address,
            first_assertion_id, hash_function_id,
    ):

        body = await self.submit(
            "get", f"{self.base_url(endpoint, port)}/bid-suggestion",
            auth_token,
            params = {
                "blockchain": blockchain,
                "epochsNumber": epochs_num,
                "assertionSize": assertion_size,
                "contentAssetStorageAddress": content_asset_storage_address,
                "firstAssertionId": first_assertion_id,
                "hashFunctionId": hash_function_id,
            },
        )

        return int(body["bidSuggestion"])

    async def local_store(self, endpoint, port, auth_token, assertions):

        body = await self.submit(
            "post", f"{self.base_url(endpoint, port)}/local-store",
            auth_token, json=assertions,
        )

        return body["operationId"]

    async def publish(
            self, endpoint, port, auth_token, assertion_id, assertion,
            blockchain, contract, token_id, hash_function_id,
    ):

        body = await self.submit(
            "post", f"{self.base_url(endpoint, port)}/publish", auth_token,
            json = {
                "assertionId": assertion_id,
                "assertion": list(assertion),
                "blockchain": blockchain,
                "contract": contract,
                "tokenId": token_id,
                "hashFunctionId": hash_function_id,
            },
        )

        return body["operationId"]

    async def get(self, endpoint, port, auth_token, ual, hash_function_id):

        body = await self.submit(
            "post", f"{self.base_url(endpoint, port)}/get", auth_token,
            json = {"id": ual, "hashFunctionId": hash_function_id},
        )

        return body["operationId"]

    async def query(self, endpoint, port, auth_token, query, query_type):

        body = await self.submit(
            "post", f"{self.base_url(endpoint, port)}/query", auth_token,
            json = {"query": query, "type": query_type},
        )

        return body["operationId"]

    @staticmethod
    def error_data(e):
        """Error descriptor for a status check that failed at the HTTP level"""

        body = {}

        if e.response is not None:
            try:
                body = e.response.json()
            except ValueError:
                body = {}

        if not isinstance(body, dict):
            body = {}

        return {
            "errorType": body.get("errorType", CLIENT_ERROR_TYPE),
            "errorMessage": body.get("errorMessage", str(e)),
        }

    async def get_operation_result(
            self, endpoint, port, auth_token, operation, max_retries,
            frequency, operation_id,
    ):

        url = f"{self.base_url(endpoint, port)}/{operation}/{operation_id}"

        async def fetch():
            try:
                body = await self.request("get", url, auth_token)
            except requests.RequestException as e:
                logger.error(
                    f"Status check for {operation} {operation_id} failed: {e}",
                    exc_info=True,
                )
                return OperationResult(
                    status = OperationStatuses.FAILED,
                    data = self.error_data(e),
                )
            return OperationResult.from_response(body)

        return await self.poller.poll(
            fetch, operation, operation_id, max_retries, frequency
        )

