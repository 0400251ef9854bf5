from .chunk import Chunk
from .codec import JsonTokenCodec, TokenCodec
from .config import DynamoChunkOptions
from .dynamo import DynamoChunkFetcher
from .exceptions import (
    ChunkPagerError,
    DynamoSerializationError,
    ProvisionedThroughputExceededError,
    RequestTimeoutError,
    TableNotFoundError,
    TokenEncodingError,
    ValidationError,
)
from .factory import ChunkFactory, Fetcher, iter_chunks
from .request import PaginationRelation, PaginationRequest, SortDirection

__all__ = [
    # Core
    "Chunk",
    "PaginationRequest",
    "PaginationRelation",
    "SortDirection",
    # Tokens
    "TokenCodec",
    "JsonTokenCodec",
    # Building and walking chunks
    "ChunkFactory",
    "Fetcher",
    "iter_chunks",
    # DynamoDB collaborator
    "DynamoChunkFetcher",
    "DynamoChunkOptions",
    # Exceptions
    "ChunkPagerError",
    "TokenEncodingError",
    "DynamoSerializationError",
    "TableNotFoundError",
    "ProvisionedThroughputExceededError",
    "RequestTimeoutError",
    "ValidationError",
]
