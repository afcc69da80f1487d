
# Node operation names, also used as URL path segments
class Operations:
    LOCAL_STORE = "local-store"
    PUBLISH = "publish"
    GET = "get"
    QUERY = "query"

class OperationStatuses:
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

TERMINAL_OPERATION_STATUSES = {
    OperationStatuses.COMPLETED,
    OperationStatuses.FAILED,
}

# Progress events delivered through StepHooks.after_hook
class OperationStepStatuses:
    INCREASE_ALLOWANCE_COMPLETED = "INCREASE_ALLOWANCE_COMPLETED"
    CREATE_ASSET_COMPLETED = "CREATE_ASSET_COMPLETED"
    NETWORK_PUBLISH_FAILED = "NETWORK_PUBLISH_FAILED"

class AssertionStates:
    LATEST = "latest"

ASSERTION_STATES = {AssertionStates.LATEST}

class ContentTypes:
    PUBLIC = "public"
    PRIVATE = "private"
    ALL = "all"

CONTENT_TYPES = {ContentTypes.PUBLIC, ContentTypes.PRIVATE, ContentTypes.ALL}

class OutputFormats:
    JSON_LD = "json-ld"
    N_QUADS = "n-quads"

OUTPUT_FORMATS = {OutputFormats.JSON_LD, OutputFormats.N_QUADS}

class QueryTypes:
    CONSTRUCT = "CONSTRUCT"
    SELECT = "SELECT"

QUERY_TYPES = {QueryTypes.CONSTRUCT, QueryTypes.SELECT}

# Error type reported for failures raised on the client side
CLIENT_ERROR_TYPE = "DKG_CLIENT_ERROR"

# 2.5 MiB, measured over the JSON-serialized content
MAX_FILE_SIZE = 2621440

CONTENT_ASSET_STORAGE_CONTRACT = "ContentAssetStorage"

DEFAULT_PORT = 8900
DEFAULT_FREQUENCY = 5
DEFAULT_MAX_NUMBER_OF_RETRIES = 5
DEFAULT_EPOCHS_NUM = 2
DEFAULT_HASH_FUNCTION_ID = 1
DEFAULT_SCORE_FUNCTION_ID = 1
DEFAULT_IMMUTABLE = False
DEFAULT_VALIDATE = True
DEFAULT_OUTPUT_FORMAT = OutputFormats.JSON_LD
DEFAULT_STATE = AssertionStates.LATEST
DEFAULT_CONTENT_TYPE = ContentTypes.ALL

# Local store is polled on its own, faster schedule (seconds)
DEFAULT_GET_LOCAL_STORE_RESULT_FREQUENCY = 0.5

DEFAULT_REQUEST_TIMEOUT = 60

