"""
FastAPI Integration Example

Serves a chat room's messages chunk by chunk. Clients receive the tokens for the
next and previous chunk and send them back unchanged.
"""

from datetime import datetime

import boto3
from fastapi import FastAPI, Query
from pydantic import BaseModel

from chunkpager import (
    DynamoChunkFetcher,
    DynamoChunkOptions,
    JsonTokenCodec,
    PaginationRelation,
    PaginationRequest,
    SortDirection,
)


class Message(BaseModel):
    """Message as stored in the Messages table (room_id + timestamp)"""

    room_id: str
    timestamp: datetime
    author: str
    content: str


class MessageChunk(BaseModel):
    """Response model: one chunk plus navigation tokens"""

    messages: list[Message]
    next_token: str | None
    prev_token: str | None


OPTIONS = DynamoChunkOptions(table_name="Messages", pk_name="room_id", sk_name="timestamp")

# One codec and one client for the whole application
codec = JsonTokenCodec()
client = boto3.client("dynamodb")

app = FastAPI(title="chunkpager + FastAPI Example")


@app.get("/rooms/{room_id}/messages", response_model=MessageChunk)
def list_messages(
    room_id: str,
    token: str | None = None,
    relation: PaginationRelation | None = None,
    size: int = Query(default=20, ge=1, le=100),
    direction: SortDirection = SortDirection.DESC,
) -> MessageChunk:
    """List messages, newest first by default"""
    fetcher = DynamoChunkFetcher(client, OPTIONS, partition_value=room_id, codec=codec)
    request = PaginationRequest(
        token=token,
        relation=relation or (PaginationRelation.NEXT if token else None),
        max_page_size=size,
        direction=direction,
    )

    chunk = fetcher.fetch_chunk(request).map(Message.model_validate)

    following = chunk.next_chunkable()
    preceding = chunk.prev_chunkable()
    return MessageChunk(
        messages=list(chunk),
        next_token=following.token if following else None,
        prev_token=preceding.token if preceding else None,
    )


# Run with: uvicorn main:app --reload
# Visit: http://localhost:8000/docs
