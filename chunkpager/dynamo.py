"""
DynamoDB fetch collaborator.

Executes PaginationRequests as keyset queries over one partition of a table
(or Global Secondary Index) and wraps the results in Chunks.
"""

from collections.abc import Iterator
from typing import Any

from ._logging import logger, redact_key
from .chunk import Chunk
from .codec import TokenCodec
from .config import DynamoChunkOptions
from .exceptions import handle_dynamo_errors
from .factory import ChunkFactory, iter_chunks
from .request import PaginationRequest, SortDirection
from .serializer import KeySerializer


class DynamoChunkFetcher:
    """
    Fetches chunks of items sharing one partition key value.

    The token of a chunk holds the primary (and index) key of its first and
    last item. A NEXT request resumes strictly after the last key, a PREV
    request strictly before the first key by querying in the opposite order
    and reversing the result, so every chunk is returned in the request's
    direction order.

    Usage:
        fetcher = DynamoChunkFetcher(
            boto3.client("dynamodb"),
            DynamoChunkOptions(table_name="messages", pk_name="room_id", sk_name="timestamp"),
            partition_value="general",
            codec=JsonTokenCodec(),
        )
        chunk = fetcher.fetch_chunk(PaginationRequest.of(max_page_size=20))
        older = fetcher.fetch_chunk(chunk.next_chunkable())
    """

    def __init__(
        self,
        client: Any,
        options: DynamoChunkOptions,
        partition_value: Any,
        codec: TokenCodec,
        serializer: KeySerializer | None = None,
    ) -> None:
        self.client = client
        self.options = options
        self.partition_value = partition_value
        self.codec = codec
        self.serializer = serializer or KeySerializer()
        self.factory: ChunkFactory[dict[str, Any]] = ChunkFactory(codec, self.key_of)

    def key_of(self, item: dict[str, Any]) -> dict[str, Any]:
        """Returns the key attributes of an item, as stored in tokens."""
        return {name: item[name] for name in self.options.key_attributes() if name in item}

    def fetch(self, request: PaginationRequest) -> list[dict[str, Any]]:
        """
        Executes the request and returns at most max_page_size items.

        Follows LastEvaluatedKey until the page is full, so a short result
        always means the partition is exhausted in that direction.
        """
        pk_name, _ = self.options.query_key_names()
        ascending = request.direction is not SortDirection.DESC

        kwargs: dict[str, Any] = {
            "TableName": self.options.table_name,
            "KeyConditionExpression": "#pk = :pk",
            "ExpressionAttributeNames": {"#pk": pk_name},
            "ExpressionAttributeValues": {
                ":pk": self.serializer.to_dynamo_value(self.partition_value)
            },
            # PREV reads away from the token, i.e. against the sort direction
            "ScanIndexForward": ascending if request.is_forward else not ascending,
        }
        if self.options.index_name:
            kwargs["IndexName"] = self.options.index_name

        start_key = self._start_key(request)
        exclusive_start = self.serializer.to_dynamo(start_key) if start_key else None
        remaining = request.max_page_size

        logger.info(
            "Fetching chunk",
            extra={
                "table": self.options.table_name,
                "index": self.options.index_name,
                "pk_hash": redact_key(str(self.partition_value)),
                "limit": request.max_page_size,
                "relation": request.relation.value if request.relation else None,
                "has_cursor": start_key is not None,
            },
        )

        items: list[dict[str, Any]] = []
        with handle_dynamo_errors(table_name=self.options.table_name):
            while True:
                if remaining is not None:
                    kwargs["Limit"] = remaining
                if exclusive_start:
                    kwargs["ExclusiveStartKey"] = exclusive_start

                response = self.client.query(**kwargs)
                page = [self.serializer.from_dynamo(item) for item in response.get("Items", [])]
                items.extend(page)

                if remaining is not None:
                    remaining -= len(page)
                exclusive_start = response.get("LastEvaluatedKey")
                if not exclusive_start or (remaining is not None and remaining <= 0):
                    break

        if not request.is_forward:
            items.reverse()

        logger.debug(
            "Chunk fetched", extra={"table": self.options.table_name, "count": len(items)}
        )
        return items

    def fetch_chunk(self, request: PaginationRequest) -> Chunk[dict[str, Any]]:
        """Executes the request and wraps the items in a Chunk."""
        return self.factory.create(self.fetch(request), request)

    def iter_chunks(self, request: PaginationRequest) -> Iterator[Chunk[dict[str, Any]]]:
        """Walks the partition chunk by chunk, starting with request."""
        return iter_chunks(self.fetch, self.factory, request)

    def _start_key(self, request: PaginationRequest) -> dict[str, Any] | None:
        if request.token is None:
            return None

        if request.is_forward:
            key = self.codec.extract_last_key(request.token, dict[str, Any])
        else:
            key = self.codec.extract_first_key(request.token, dict[str, Any])

        if key is None:
            return None

        missing = [name for name in self.options.key_attributes() if name not in key]
        if missing:
            # Tokens from another table or index: start over instead of failing the query
            logger.warning(
                "Pagination token does not match table keys",
                extra={
                    "table": self.options.table_name,
                    "token_hash": redact_key(request.token),
                    "missing": missing,
                },
            )
            return None
        return {name: key[name] for name in self.options.key_attributes()}
