"""
Walking an in-memory ordered list

Shows the request -> fetch -> chunk -> next request cycle without a database.
The fetch function honours the collaborator contract: at most max_page_size
rows, strictly after the token's last key (NEXT) or strictly before its first
key (PREV).
"""

from chunkpager import ChunkFactory, JsonTokenCodec, PaginationRequest, iter_chunks

USERS = [{"user_id": f"u{n}", "name": f"User {n}"} for n in range(100, 145)]

codec = JsonTokenCodec()
factory = ChunkFactory(codec, key_of=lambda user: user["user_id"])


def fetch(request: PaginationRequest) -> list[dict[str, str]]:
    ids = [user["user_id"] for user in USERS]
    size = request.max_page_size or len(USERS)

    if request.is_forward:
        last_key = codec.extract_last_key(request.token)
        start = ids.index(last_key) + 1 if last_key in ids else 0
        return USERS[start : start + size]

    first_key = codec.extract_first_key(request.token)
    end = ids.index(first_key) if first_key in ids else len(USERS)
    return USERS[max(0, end - size) : end]


# Walk everything forward, 20 at a time
for chunk in iter_chunks(fetch, factory, PaginationRequest.of(max_page_size=20)):
    print(f"{len(chunk)} users, first={chunk.is_first()}, last={chunk.is_last()}")

# Fetch two chunks, then step back once
request = PaginationRequest.of(max_page_size=20)
first = factory.create(fetch(request), request)

request = first.next_chunkable()
second = factory.create(fetch(request), request)

request = second.prev_chunkable()
back = factory.create(fetch(request), request)

print("back to the first chunk:", back == first)
print("token:", first.token)
print("first key:", codec.extract_first_key(first.token))
print("last key:", codec.extract_last_key(first.token))
