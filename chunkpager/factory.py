"""
Building chunks from fetched elements.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Any, Generic, TypeVar

from ._logging import logger
from .chunk import Chunk
from .codec import TokenCodec
from .request import PaginationRequest

T = TypeVar("T")

# Executes a request against the store and returns at most max_page_size
# elements in the request's direction order.
Fetcher = Callable[[PaginationRequest], Sequence[T]]


class ChunkFactory(Generic[T]):
    """
    Turns the elements returned for a request into a Chunk.

    The factory is configured explicitly with the codec that encodes tokens
    and with a function returning the key of an element. The key of the first
    and last element become the chunk's token.

    Usage:
        factory = ChunkFactory(JsonTokenCodec(), key_of=lambda user: user.user_id)
        chunk = factory.create(rows, request)
    """

    def __init__(self, codec: TokenCodec, key_of: Callable[[T], Any]) -> None:
        self.codec = codec
        self.key_of = key_of

    def token_for(self, elements: Sequence[T]) -> str | None:
        """
        Encodes the token for a list of elements. Empty lists have no token.

        Raises:
            TokenEncodingError: If an element key cannot be encoded.
        """
        if not elements:
            return None
        return self.codec.encode(self.key_of(elements[0]), self.key_of(elements[-1]))

    def create(self, elements: Sequence[T], request: PaginationRequest | None) -> Chunk[T]:
        chunk = Chunk(elements, self.token_for(elements), request)
        logger.debug(
            "Chunk created",
            extra={
                "count": len(chunk),
                "relation": request.relation.value if request and request.relation else None,
                "max_page_size": request.max_page_size if request else None,
                "is_first": chunk.is_first(),
                "is_last": chunk.is_last(),
            },
        )
        return chunk


def iter_chunks(
    fetch: Fetcher[T], factory: ChunkFactory[T], request: PaginationRequest
) -> Iterator[Chunk[T]]:
    """
    Walks the source chunk by chunk, starting with request.

    Walks forward by default and backward when request is a PREV request.
    Stops when the chunk has no successor in the walking direction or when
    a chunk comes back empty, which also ends unbounded walks.

    Usage:
        for chunk in iter_chunks(repository.fetch, factory, PaginationRequest.of(max_page_size=50)):
            process(chunk.content)
    """
    forward = request.is_forward
    current: PaginationRequest | None = request
    while current is not None:
        chunk = factory.create(fetch(current), current)
        yield chunk
        if not chunk.has_content():
            return
        current = chunk.next_chunkable() if forward else chunk.prev_chunkable()
