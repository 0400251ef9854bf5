"""
Unit tests for PaginationRequest.
"""

import pytest
from pydantic import ValidationError

from chunkpager.request import PaginationRelation, PaginationRequest, SortDirection


@pytest.mark.unit
class TestPaginationRequestConstruction:
    """Test the canonical and shorthand constructors."""

    def test_defaults_are_absent(self):
        request = PaginationRequest()

        assert request.token is None
        assert request.relation is None
        assert request.max_page_size is None
        assert request.direction is None

    def test_canonical_constructor(self):
        request = PaginationRequest(
            token="t",
            relation=PaginationRelation.PREV,
            max_page_size=10,
            direction=SortDirection.DESC,
        )

        assert request.token == "t"
        assert request.relation is PaginationRelation.PREV
        assert request.max_page_size == 10
        assert request.direction is SortDirection.DESC

    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"token": "t"}, ("t", PaginationRelation.NEXT, None, SortDirection.ASC)),
            ({"max_page_size": 20}, (None, None, 20, SortDirection.ASC)),
            (
                {"token": "t", "max_page_size": 20},
                ("t", PaginationRelation.NEXT, 20, SortDirection.ASC),
            ),
            ({"direction": SortDirection.DESC}, (None, None, None, SortDirection.DESC)),
            (
                {"token": "t", "direction": SortDirection.DESC},
                ("t", PaginationRelation.NEXT, None, SortDirection.DESC),
            ),
            (
                {"max_page_size": 5, "direction": SortDirection.DESC},
                (None, None, 5, SortDirection.DESC),
            ),
        ],
    )
    def test_shorthand_constructor(self, kwargs, expected):
        """Test the relation and direction defaults of PaginationRequest.of()."""
        request = PaginationRequest.of(**kwargs)

        fields = (request.token, request.relation, request.max_page_size, request.direction)
        assert fields == expected

    def test_enum_values_are_accepted(self):
        request = PaginationRequest(relation="prev", direction="desc")

        assert request.relation is PaginationRelation.PREV
        assert request.direction is SortDirection.DESC

    @pytest.mark.parametrize("size", [0, -1])
    def test_max_page_size_must_be_positive(self, size):
        with pytest.raises(ValidationError):
            PaginationRequest(max_page_size=size)


@pytest.mark.unit
class TestPaginationRequestBehaviour:
    """Test immutability and derived requests."""

    def test_request_is_frozen(self):
        request = PaginationRequest.of(max_page_size=20)

        with pytest.raises(ValidationError):
            request.max_page_size = 30

        assert request.max_page_size == 20

    def test_equality_and_hash(self):
        a = PaginationRequest.of(token="t", max_page_size=20)
        b = PaginationRequest.of(token="t", max_page_size=20)

        assert a == b
        assert hash(a) == hash(b)
        assert a != PaginationRequest.of(token="t", max_page_size=21)

    def test_absent_relation_differs_from_next(self):
        """Test that an absent relation is kept distinct from an explicit NEXT."""
        implicit = PaginationRequest(token="t")
        explicit = PaginationRequest(token="t", relation=PaginationRelation.NEXT)

        assert implicit != explicit
        assert implicit.is_forward and explicit.is_forward

    def test_is_forward(self):
        assert PaginationRequest().is_forward is True
        assert PaginationRequest(relation=PaginationRelation.NEXT).is_forward is True
        assert PaginationRequest(relation=PaginationRelation.PREV).is_forward is False

    def test_with_relation_copies_size_and_direction(self):
        request = PaginationRequest(
            token="old",
            relation=PaginationRelation.NEXT,
            max_page_size=7,
            direction=SortDirection.DESC,
        )

        derived = request.with_relation("new", PaginationRelation.PREV)

        assert derived == PaginationRequest(
            token="new",
            relation=PaginationRelation.PREV,
            max_page_size=7,
            direction=SortDirection.DESC,
        )
        assert request.token == "old"
