from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from botocore.exceptions import ClientError


class ChunkPagerError(Exception):
    """Base exception for all chunkpager errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class TokenEncodingError(ChunkPagerError):
    """
    Raised when chunk boundary keys cannot be encoded into a pagination token.

    This always indicates a programming or configuration defect (an unsupported
    key type), so it is never swallowed.
    """

    def __init__(
        self,
        message: str,
        first_key: Any | None = None,
        last_key: Any | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.first_key = first_key
        self.last_key = last_key


class TableNotFoundError(ChunkPagerError):
    """Raised when the DynamoDB table does not exist."""

    def __init__(self, table_name: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Table '{table_name}' not found", original_error)
        self.table_name = table_name


class ProvisionedThroughputExceededError(ChunkPagerError):
    """Raised when DynamoDB throttles requests."""

    def __init__(
        self, message: str = "Request rate exceeded", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class RequestTimeoutError(ChunkPagerError):
    """Raised when a request to DynamoDB times out."""

    def __init__(
        self, message: str = "Request timed out", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class ValidationError(ChunkPagerError):
    """Raised for request validation errors reported by DynamoDB."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message, original_error)


class DynamoSerializationError(ChunkPagerError):
    """Raised when a key or item cannot be converted to DynamoDB format."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message, original_error)


@contextmanager
def handle_dynamo_errors(table_name: str | None = None) -> Generator[None, None, None]:
    """
    Wraps the query loop of DynamoChunkFetcher.fetch.

    A ClientError raised while fetching a chunk surfaces as a ChunkPagerError
    subclass, so callers paging through a partition handle one hierarchy and
    never import botocore. A request that failed with a throttling or timeout
    error can be retried unchanged; its token still pins the resume position.

    Args:
        table_name: Table being paged, reported by TableNotFoundError
    """
    try:
        yield
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        error_message = e.response.get("Error", {}).get("Message", str(e))

        if error_code == "ResourceNotFoundException":
            raise TableNotFoundError(table_name=table_name or "unknown", original_error=e) from e

        if error_code in (
            "ProvisionedThroughputExceededException",
            "ThrottlingException",
            "RequestLimitExceeded",
        ):
            raise ProvisionedThroughputExceededError(message=error_message, original_error=e) from e

        if error_code in ("ValidationException", "SerializationException"):
            raise ValidationError(message=error_message, original_error=e) from e

        if error_code in ("RequestTimeout", "RequestTimeoutException"):
            raise RequestTimeoutError(message=error_message, original_error=e) from e

        # Anything else still carries the code for the caller
        table = table_name or "unknown"
        raise ChunkPagerError(
            message=f"Chunk query on {table} failed ({error_code}): {error_message}",
            original_error=e,
        ) from e
