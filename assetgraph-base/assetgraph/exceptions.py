
class RequestError(Exception):
    pass

# Malformed or missing input, raised before any remote call
class ValidationError(RequestError):
    pass

class InvalidUALError(ValidationError):
    pass

# Recomputed assertion root does not match the expected id
class AssertionIntegrityError(RequestError):

    def __init__(self, expected, calculated):
        super(AssertionIntegrityError, self).__init__(
            "Calculated root hashes don't match: "
            f"expected {expected}, calculated {calculated}"
        )
        self.expected = expected
        self.calculated = calculated

# RDF transcoding failure; managers report it as operation data
class ConversionError(RequestError):
    pass

class InvalidAssertionError(ConversionError):
    pass

class NodeRequestError(RequestError):

    def __init__(self, message, status_code=None):
        super(NodeRequestError, self).__init__(message)
        self.status_code = status_code

# Retry budget exhausted without a terminal operation status
class OperationTimeoutError(RequestError):

    def __init__(self, operation, operation_id, max_retries):
        super(OperationTimeoutError, self).__init__(
            f"Unable to get results for {operation} operation "
            f"{operation_id}. Max number of retries: {max_retries} reached."
        )
        self.operation = operation
        self.operation_id = operation_id
        self.max_retries = max_retries
        # Set by create once the asset token exists
        self.ual = None

