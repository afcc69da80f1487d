
"""
Per-call option resolution.

Each manager call resolves its options once into a frozen dataclass.  A
value is taken from the call options, then the client config, then the
environment (endpoint, port and auth token only), then the built-in
default.  resolve() does not coerce, so the validation gate sees exactly
what the caller passed; normalized() converts numeric fields afterwards.
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from .. base import Blockchain
from .. constants import DEFAULT_PORT, DEFAULT_FREQUENCY
from .. constants import DEFAULT_MAX_NUMBER_OF_RETRIES, DEFAULT_EPOCHS_NUM
from .. constants import DEFAULT_HASH_FUNCTION_ID, DEFAULT_SCORE_FUNCTION_ID
from .. constants import DEFAULT_IMMUTABLE, DEFAULT_VALIDATE
from .. constants import DEFAULT_OUTPUT_FORMAT, DEFAULT_STATE
from .. constants import DEFAULT_CONTENT_TYPE

ENDPOINT_ENV = "ASSETGRAPH_ENDPOINT"
PORT_ENV = "ASSETGRAPH_PORT"
AUTH_TOKEN_ENV = "ASSETGRAPH_AUTH_TOKEN"

def pick(key, options, config, default=None, env=None):

    for source in (options, config):
        if source and source.get(key) is not None:
            return source[key]

    if env and os.environ.get(env) is not None:
        return os.environ[env]

    return default

def _int(value):
    return None if value is None else int(value)

def _float(value):
    return None if value is None else float(value)

@dataclass(frozen=True)
class NodeOptions:
    endpoint: Optional[str]
    port: Any
    auth_token: Optional[str]

    @classmethod
    def resolve(cls, options=None, config=None):
        options = options or {}
        return cls(
            endpoint = pick("endpoint", options, config, env=ENDPOINT_ENV),
            port = pick("port", options, config, DEFAULT_PORT, env=PORT_ENV),
            auth_token = pick("auth_token", options, config, env=AUTH_TOKEN_ENV),
        )

    def normalized(self):
        return replace(self, port=_int(self.port))

@dataclass(frozen=True)
class AssetCreateOptions:
    blockchain: Optional[Blockchain]
    endpoint: Optional[str]
    port: Any
    max_number_of_retries: Any
    frequency: Any
    epochs_num: Any
    hash_function_id: Any
    score_function_id: Any
    immutable: Any
    token_amount: Any
    auth_token: Optional[str]

    @classmethod
    def resolve(cls, options=None, config=None):
        options = options or {}
        node = NodeOptions.resolve(options, config)
        return cls(
            blockchain = Blockchain.from_value(
                pick("blockchain", options, config)
            ),
            endpoint = node.endpoint,
            port = node.port,
            max_number_of_retries = pick(
                "max_number_of_retries", options, config,
                DEFAULT_MAX_NUMBER_OF_RETRIES
            ),
            frequency = pick("frequency", options, config, DEFAULT_FREQUENCY),
            epochs_num = pick("epochs_num", options, config, DEFAULT_EPOCHS_NUM),
            hash_function_id = pick(
                "hash_function_id", options, config, DEFAULT_HASH_FUNCTION_ID
            ),
            score_function_id = pick(
                "score_function_id", options, config, DEFAULT_SCORE_FUNCTION_ID
            ),
            immutable = pick("immutable", options, config, DEFAULT_IMMUTABLE),
            # Never taken from config: a stored amount would go stale
            token_amount = options.get("token_amount"),
            auth_token = node.auth_token,
        )

    def normalized(self):
        return replace(
            self,
            port = _int(self.port),
            max_number_of_retries = _int(self.max_number_of_retries),
            frequency = _float(self.frequency),
            epochs_num = _int(self.epochs_num),
            hash_function_id = _int(self.hash_function_id),
            score_function_id = _int(self.score_function_id),
            token_amount = _int(self.token_amount),
        )

@dataclass(frozen=True)
class AssetGetOptions:
    blockchain: Optional[Blockchain]
    endpoint: Optional[str]
    port: Any
    max_number_of_retries: Any
    frequency: Any
    state: Any
    content_type: Any
    validate: Any
    output_format: Any
    hash_function_id: Any
    auth_token: Optional[str]

    @classmethod
    def resolve(cls, options=None, config=None):
        options = options or {}
        node = NodeOptions.resolve(options, config)
        return cls(
            blockchain = Blockchain.from_value(
                pick("blockchain", options, config)
            ),
            endpoint = node.endpoint,
            port = node.port,
            max_number_of_retries = pick(
                "max_number_of_retries", options, config,
                DEFAULT_MAX_NUMBER_OF_RETRIES
            ),
            frequency = pick("frequency", options, config, DEFAULT_FREQUENCY),
            state = pick("state", options, config, DEFAULT_STATE),
            content_type = pick(
                "content_type", options, config, DEFAULT_CONTENT_TYPE
            ),
            validate = pick("validate", options, config, DEFAULT_VALIDATE),
            output_format = pick(
                "output_format", options, config, DEFAULT_OUTPUT_FORMAT
            ),
            hash_function_id = pick(
                "hash_function_id", options, config, DEFAULT_HASH_FUNCTION_ID
            ),
            auth_token = node.auth_token,
        )

    def normalized(self):
        return replace(
            self,
            port = _int(self.port),
            max_number_of_retries = _int(self.max_number_of_retries),
            frequency = _float(self.frequency),
            hash_function_id = _int(self.hash_function_id),
        )

@dataclass(frozen=True)
class GraphQueryOptions:
    endpoint: Optional[str]
    port: Any
    max_number_of_retries: Any
    frequency: Any
    auth_token: Optional[str]

    @classmethod
    def resolve(cls, options=None, config=None):
        options = options or {}
        node = NodeOptions.resolve(options, config)
        return cls(
            endpoint = node.endpoint,
            port = node.port,
            max_number_of_retries = pick(
                "max_number_of_retries", options, config,
                DEFAULT_MAX_NUMBER_OF_RETRIES
            ),
            frequency = pick("frequency", options, config, DEFAULT_FREQUENCY),
            auth_token = node.auth_token,
        )

    def normalized(self):
        return replace(
            self,
            port = _int(self.port),
            max_number_of_retries = _int(self.max_number_of_retries),
            frequency = _float(self.frequency),
        )

