"""
Shared pytest fixtures and configuration for chunkpager tests.

This module provides common fixtures used across unit and integration tests,
including a codec, an in-memory ordered source, mocked boto3 clients and
LocalStack clients.
"""

import os
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import boto3
import pytest

from chunkpager import ChunkFactory, JsonTokenCodec, PaginationRequest, SortDirection

if TYPE_CHECKING:
    from tests.helpers.localstack import LocalStackHelper


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests against LocalStack")


class InMemorySource:
    """
    Ordered list of user rows standing in for a store.

    Implements the fetch collaborator contract: at most max_page_size rows in
    the request's direction order, strictly after the token's last key (NEXT)
    or strictly before its first key (PREV).
    """

    def __init__(self, codec: JsonTokenCodec, user_ids: Sequence[str]) -> None:
        self.codec = codec
        self.rows = [{"user_id": uid, "name": f"name-{uid}"} for uid in sorted(user_ids)]
        self.requests: list[PaginationRequest] = []

    def fetch(self, request: PaginationRequest) -> list[dict[str, Any]]:
        self.requests.append(request)
        rows = self.rows if request.direction is not SortDirection.DESC else self.rows[::-1]
        ids = [row["user_id"] for row in rows]
        size = request.max_page_size

        if request.is_forward:
            start = 0
            last_key = self.codec.extract_last_key(request.token)
            if last_key is not None:
                start = ids.index(last_key) + 1
            return rows[start : start + size] if size else rows[start:]

        end = len(rows)
        first_key = self.codec.extract_first_key(request.token)
        if first_key is not None:
            end = ids.index(first_key)
        start = max(0, end - size) if size else 0
        return rows[start:end]


@pytest.fixture
def codec() -> JsonTokenCodec:
    """A fresh token codec."""
    return JsonTokenCodec()


@pytest.fixture
def user_factory(codec: JsonTokenCodec) -> ChunkFactory[dict[str, Any]]:
    """Chunk factory keyed on the user_id of each row."""
    return ChunkFactory(codec, key_of=lambda row: row["user_id"])


@pytest.fixture
def user_ids() -> list[str]:
    """45 ordered user ids: u100 .. u144."""
    return [f"u{n}" for n in range(100, 145)]


@pytest.fixture
def make_source(codec: JsonTokenCodec):
    """Builds an in-memory source over the given user ids."""

    def _make(ids: Sequence[str]) -> InMemorySource:
        return InMemorySource(codec, ids)

    return _make


@pytest.fixture
def memory_source(make_source, user_ids: list[str]) -> InMemorySource:
    return make_source(user_ids)


@pytest.fixture
def mock_client():
    """
    Creates a fully mocked boto3 DynamoDB client.

    This fixture provides a mock client for unit tests that don't need
    real DynamoDB interactions.
    """
    client = MagicMock()
    client.query.return_value = {"Items": [], "Count": 0}
    return client


@pytest.fixture
def dynamo_messages() -> list[dict[str, Any]]:
    """Five messages of room 'general' in DynamoDB format, in sort key order."""
    return [
        {
            "room_id": {"S": "general"},
            "timestamp": {"S": f"2024-01-01T10:00:0{n}Z"},
            "content": {"S": f"message {n}"},
            "likes": {"N": str(n)},
        }
        for n in range(1, 6)
    ]


@pytest.fixture(scope="session")
def localstack_endpoint() -> str:
    """Get LocalStack endpoint URL from environment or default."""
    return os.getenv("LOCALSTACK_ENDPOINT", "http://localhost:4566")


@pytest.fixture(scope="session")
def localstack_client(localstack_endpoint: str):
    """
    Creates a boto3 client connected to LocalStack.

    This fixture is session-scoped to avoid creating multiple clients.
    """
    return boto3.client(
        "dynamodb",
        endpoint_url=localstack_endpoint,
        region_name="eu-south-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


@pytest.fixture(scope="session")
def localstack_helper(localstack_endpoint: str) -> "LocalStackHelper":
    from tests.helpers.localstack import LocalStackHelper

    return LocalStackHelper(endpoint_url=localstack_endpoint)
