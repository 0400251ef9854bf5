"""
Chunk: one page of ordered results plus the token needed to move on.
"""

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

from .request import PaginationRelation, PaginationRequest, SortDirection

T = TypeVar("T")
S = TypeVar("S")


class Chunk(Sequence[T], Generic[T]):
    """
    Immutable, read-only snapshot of one chunk of results.

    Attributes:
        content: Elements in the order the source returned them
        token: Token describing this chunk's key range (None for an empty chunk)
        source_request: The request that produced this chunk, if known

    The chunk behaves as a read-only sequence (iteration, indexing, len, in).
    It has no mutating operations. Two chunks are equal when their content
    and token are equal, however they were requested.

    Navigation:
        chunk = factory.create(fetch(request), request)
        if chunk.has_next():
            following = factory.create(fetch(chunk.next_chunkable()), chunk.next_chunkable())
    """

    __slots__ = ("_content", "_token", "_source_request")

    def __init__(
        self,
        content: Iterable[T],
        token: str | None = None,
        source_request: PaginationRequest | None = None,
    ) -> None:
        if content is None:
            raise TypeError("Chunk content must not be None")
        self._content: tuple[T, ...] = tuple(content)
        self._token = token
        self._source_request = source_request

    # --- DATA ---

    @property
    def content(self) -> tuple[T, ...]:
        return self._content

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def source_request(self) -> PaginationRequest | None:
        return self._source_request

    @property
    def direction(self) -> SortDirection | None:
        """Sort direction of the request that produced this chunk."""
        return self._source_request.direction if self._source_request else None

    # --- SEQUENCE PROTOCOL ---

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...

    def __getitem__(self, index: int | slice) -> T | tuple[T, ...]:
        return self._content[index]

    def __len__(self) -> int:
        return len(self._content)

    def __iter__(self) -> Iterator[T]:
        return iter(self._content)

    def __contains__(self, value: object) -> bool:
        return value in self._content

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._content == other._content and self._token == other._token

    def __hash__(self) -> int:
        # Elements may be unhashable (rows as dicts); equal chunks share token and length
        return hash((self._token, len(self._content)))

    def __repr__(self) -> str:
        content_type = type(self._content[0]).__name__ if self._content else "UNKNOWN"
        return f"Chunk containing {content_type} instances"

    # --- NAVIGATION ---

    def has_content(self) -> bool:
        return len(self._content) > 0

    def is_first(self) -> bool:
        """True when the chunk was requested without a resume point."""
        return self._source_request is None or self._source_request.token is None

    def is_last(self) -> bool:
        """
        True when the chunk is shorter than the requested page size.

        Without a page size there is no way to tell, so this is always False.
        """
        if self._source_request is None or self._source_request.max_page_size is None:
            return False
        return len(self._content) < self._source_request.max_page_size

    def is_forward_walk(self) -> bool:
        return self._source_request is None or self._source_request.is_forward

    def has_next(self) -> bool:
        if self.is_forward_walk():
            return not self.is_last()
        # A backward walk can always head forward again.
        return True

    def has_prev(self) -> bool:
        if self.is_forward_walk():
            return not self.is_first()
        return self.has_content()

    def next_chunkable(self) -> PaginationRequest | None:
        """Request for the chunk following this one, or None at the end."""
        if not self.has_next():
            return None
        return self._derive(PaginationRelation.NEXT)

    def prev_chunkable(self) -> PaginationRequest | None:
        """Request for the chunk preceding this one, or None at the start."""
        if not self.has_prev():
            return None
        return self._derive(PaginationRelation.PREV)

    def _derive(self, relation: PaginationRelation) -> PaginationRequest:
        if self._source_request is None:
            return PaginationRequest(token=self._token, relation=relation)
        return self._source_request.with_relation(self._token, relation)

    # --- TRANSFORMATION ---

    def map(self, converter: Callable[[T], S]) -> "Chunk[S]":
        """
        Returns a new chunk with every element passed through converter.

        The token and source request are kept, so the mapped chunk navigates
        exactly like this one.
        """
        if not callable(converter):
            raise TypeError("Converter must be callable")
        return Chunk([converter(item) for item in self._content], self._token, self._source_request)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for API responses: the content and the token."""
        return {"content": list(self._content), "pagination_token": self._token}
