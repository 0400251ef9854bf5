"""
Pagination request descriptors.

A PaginationRequest tells the fetch layer where to resume (the opaque token),
which way to move relative to it (NEXT or PREV), how many elements to return at
most and in which sort order the source is walked.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, PositiveInt


class PaginationRelation(str, Enum):
    """Direction of movement relative to a pagination token."""

    NEXT = "next"
    PREV = "prev"


class SortDirection(str, Enum):
    """Sort order of the underlying source, independent of the relation."""

    ASC = "asc"
    DESC = "desc"


class PaginationRequest(BaseModel):
    """
    Immutable description of one chunk fetch.

    Every field is optional:
        token: resume token from a previous chunk; None starts from the beginning
        relation: NEXT or PREV; None behaves as NEXT but stays distinguishable
        max_page_size: upper bound of elements to fetch; None means unbounded
        direction: sort order of the source; None defers to the source default

    Usage:
        # First chunk of 20, ascending
        request = PaginationRequest.of(max_page_size=20)

        # Resume after a previous chunk
        request = PaginationRequest.of(token=chunk.token, max_page_size=20)
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    relation: PaginationRelation | None = None
    max_page_size: PositiveInt | None = None
    direction: SortDirection | None = None

    @classmethod
    def of(
        cls,
        token: str | None = None,
        max_page_size: int | None = None,
        direction: SortDirection | None = SortDirection.ASC,
    ) -> "PaginationRequest":
        """
        Shorthand constructor.

        The relation is NEXT when a token is given and left absent otherwise.
        The direction defaults to ASC.
        """
        relation = PaginationRelation.NEXT if token is not None else None
        return cls(
            token=token, relation=relation, max_page_size=max_page_size, direction=direction
        )

    @property
    def is_forward(self) -> bool:
        """True unless the relation is PREV. An absent relation counts as forward."""
        return self.relation is not PaginationRelation.PREV

    def with_relation(self, token: str | None, relation: PaginationRelation) -> "PaginationRequest":
        """Derives a follow-up request keeping this request's page size and direction."""
        return PaginationRequest(
            token=token,
            relation=relation,
            max_page_size=self.max_page_size,
            direction=self.direction,
        )
