
"""
Pre-flight checks for every manager entry point.  All checks are pure and
raise ValidationError before any node or blockchain call is made.
"""

import json
import math
from collections.abc import Mapping

from .. exceptions import ValidationError
from .. constants import Operations, MAX_FILE_SIZE
from .. constants import QUERY_TYPES, OUTPUT_FORMATS, CONTENT_TYPES
from .. constants import ASSERTION_STATES
from .. base.ual import split_ual

class ValidationService:

    def __init__(self, signing_capable=True):

        # Credentials are only demanded where transactions can be signed
        self.signing_capable = signing_capable

    def validate_node_info(self, endpoint, port, auth_token):
        self.validate_endpoint(endpoint)
        self.validate_port(port)
        self.validate_auth_token(auth_token)

    def validate_graph_query(
            self, query_string, query_type, endpoint, port,
            max_number_of_retries, frequency, auth_token,
    ):
        self.validate_query_string(query_string)
        self.validate_query_type(query_type)
        self.validate_endpoint(endpoint)
        self.validate_port(port)
        self.validate_max_number_of_retries(max_number_of_retries)
        self.validate_frequency(frequency)
        self.validate_auth_token(auth_token)

    def validate_asset_create(
            self, content, blockchain, endpoint, port, max_number_of_retries,
            frequency, epochs_num, hash_function_id, score_function_id,
            immutable, token_amount, auth_token,
    ):
        self.validate_content(content)
        self.validate_blockchain(blockchain)
        self.validate_endpoint(endpoint)
        self.validate_port(port)
        self.validate_max_number_of_retries(max_number_of_retries)
        self.validate_frequency(frequency)
        self.validate_epochs_num(epochs_num)
        self.validate_hash_function_id(hash_function_id)
        self.validate_score_function_id(score_function_id)
        self.validate_immutable(immutable)
        self.validate_token_amount(token_amount)
        self.validate_auth_token(auth_token)

    def validate_asset_get(
            self, ual, blockchain, endpoint, port, max_number_of_retries,
            frequency, state, content_type, hash_function_id, validate,
            output_format, auth_token,
    ):
        self.validate_ual(ual)
        self.validate_blockchain(blockchain, Operations.GET)
        self.validate_endpoint(endpoint)
        self.validate_port(port)
        self.validate_max_number_of_retries(max_number_of_retries)
        self.validate_frequency(frequency)
        self.validate_state(state)
        self.validate_content_type(content_type)
        self.validate_hash_function_id(hash_function_id)
        self.validate_validate(validate)
        self.validate_output_format(output_format)
        self.validate_auth_token(auth_token)

    def validate_asset_transfer(self, ual, new_owner, blockchain):
        self.validate_ual(ual)
        self.validate_new_owner(new_owner)
        self.validate_blockchain(blockchain)

    def validate_asset_get_owner(self, ual, blockchain):
        self.validate_ual(ual)
        self.validate_blockchain(blockchain, Operations.GET)

    # Field checks

    def validate_required_param(self, param_name, param):
        if param is None:
            raise ValidationError(f"{param_name} is missing.")

    def validate_param_type(self, param_name, param, param_type):

        if param_type in (int, float):

            # Numeric fields accept numeric strings, never booleans
            if isinstance(param, bool):
                raise ValidationError(f"{param_name} must be of type number.")

            try:
                value = float(param)
            except (TypeError, ValueError, OverflowError):
                raise ValidationError(f"{param_name} must be of type number.")

            if not math.isfinite(value):
                raise ValidationError(f"{param_name} must be a finite number.")

            if param_type is int:
                self.validate_integer(param_name, param, value)

            return

        if not isinstance(param, param_type):
            raise ValidationError(
                f"{param_name} must be of type {param_type.__name__}."
            )

    def validate_integer(self, param_name, param, value):

        # Compared exactly so large token amounts keep their precision
        try:
            whole = int(param) if isinstance(param, (int, str)) else int(value)
        except ValueError:
            raise ValidationError(f"{param_name} must be an integer.")

        if isinstance(param, float) and whole != value:
            raise ValidationError(f"{param_name} must be an integer.")

    def validate_non_negative(self, param_name, param):
        if float(param) < 0:
            raise ValidationError(f"{param_name} must not be negative.")

    def validate_query_string(self, query_string):
        self.validate_required_param("query_string", query_string)
        self.validate_param_type("query_string", query_string, str)

    def validate_query_type(self, query_type):
        self.validate_required_param("query_type", query_type)
        if query_type not in QUERY_TYPES:
            raise ValidationError(
                "Invalid query type: available query types: "
                + ", ".join(sorted(QUERY_TYPES))
            )

    def validate_ual(self, ual):
        self.validate_required_param("UAL", ual)
        self.validate_param_type("UAL", ual, str)
        split_ual(ual)

    def validate_content_object(self, content):
        if not isinstance(content, Mapping):
            raise ValidationError("Content must be an object")
        if not content:
            raise ValidationError("Content must not be empty")

    def validate_content(self, content):

        self.validate_required_param("content", content)
        self.validate_content_object(content)

        keys = set(content.keys())

        if not keys or not keys <= {"public", "private"}:
            raise ValidationError(
                'content keys can only be "public", "private" or both.'
            )

        if not content.get("public") and not content.get("private"):
            raise ValidationError("Public or private content must be defined")

        try:
            size = len(json.dumps(content).encode("utf-8"))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Content is not serializable: {e}")

        if size > MAX_FILE_SIZE:
            raise ValidationError(
                f"File size limit is {MAX_FILE_SIZE / (1024 * 1024)}MB."
            )

    def validate_endpoint(self, endpoint):
        self.validate_required_param("endpoint", endpoint)
        self.validate_param_type("endpoint", endpoint, str)
        if not endpoint.startswith("http") and not endpoint.startswith("ws"):
            raise ValidationError(
                'Endpoint should start with either "http" or "ws"'
            )

    def validate_port(self, port):
        self.validate_required_param("port", port)
        self.validate_param_type("port", port, int)
        self.validate_non_negative("port", port)

    def validate_max_number_of_retries(self, max_number_of_retries):
        self.validate_required_param("max_number_of_retries", max_number_of_retries)
        self.validate_param_type("max_number_of_retries", max_number_of_retries, int)
        self.validate_non_negative("max_number_of_retries", max_number_of_retries)

    def validate_frequency(self, frequency):
        self.validate_required_param("frequency", frequency)
        self.validate_param_type("frequency", frequency, float)
        self.validate_non_negative("frequency", frequency)

    def validate_epochs_num(self, epochs_num):
        self.validate_required_param("epochs_num", epochs_num)
        self.validate_param_type("epochs_num", epochs_num, int)

    def validate_hash_function_id(self, hash_function_id):
        self.validate_required_param("hash_function_id", hash_function_id)
        self.validate_param_type("hash_function_id", hash_function_id, int)

    def validate_score_function_id(self, score_function_id):
        self.validate_required_param("score_function_id", score_function_id)
        self.validate_param_type("score_function_id", score_function_id, int)

    def validate_immutable(self, immutable):
        self.validate_required_param("immutable", immutable)
        self.validate_param_type("immutable", immutable, bool)

    def validate_token_amount(self, token_amount):
        if token_amount is None:
            return
        self.validate_param_type("token_amount", token_amount, int)
        self.validate_non_negative("token_amount", token_amount)

    def validate_auth_token(self, auth_token):
        if auth_token is None:
            return
        self.validate_param_type("auth_token", auth_token, str)

    def validate_validate(self, validate):
        self.validate_required_param("validate", validate)
        self.validate_param_type("validate", validate, bool)

    def validate_output_format(self, output_format):
        self.validate_required_param("output_format", output_format)
        if output_format not in OUTPUT_FORMATS:
            raise ValidationError(
                "Invalid output format: available output formats: "
                + ", ".join(sorted(OUTPUT_FORMATS))
            )

    def validate_content_type(self, content_type):
        self.validate_required_param("content_type", content_type)
        if content_type not in CONTENT_TYPES:
            raise ValidationError(
                "Invalid content type: available content types: "
                + ", ".join(sorted(CONTENT_TYPES))
            )

    def validate_state(self, state):
        self.validate_required_param("state", state)
        # Only the latest on-chain state can be fetched
        if state not in ASSERTION_STATES:
            raise ValidationError(
                f"Unsupported state: {state}. Supported states: "
                + ", ".join(sorted(ASSERTION_STATES))
            )

    def validate_blockchain(self, blockchain, operation=None):

        self.validate_required_param("blockchain", blockchain)
        self.validate_required_param("blockchain name", blockchain.name)
        self.validate_required_param(
            "blockchain hub contract", blockchain.hub_contract
        )

        if self.signing_capable:

            self.validate_required_param("blockchain rpc", blockchain.rpc)

            if operation != Operations.GET:
                self.validate_required_param(
                    "blockchain public key", blockchain.public_key
                )
                self.validate_required_param(
                    "blockchain private key", blockchain.private_key
                )

    def validate_new_owner(self, new_owner):
        self.validate_required_param("new_owner", new_owner)
        self.validate_param_type("new_owner", new_owner, str)

