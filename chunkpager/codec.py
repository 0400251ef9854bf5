"""
Pagination token codec.

A token carries the keys of the first and last element of a chunk. It is the
URL-safe, unpadded base64 form of a UTF-8 JSON object:

    {"first_key": <first element key>, "last_key": <last element key>}

Clients treat it as opaque. Only the codec interprets its bytes.
"""

import base64
import binascii
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Protocol, TypeVar

from pydantic import ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import from_json, to_json

from ._logging import logger, redact_key
from .exceptions import TokenEncodingError

K = TypeVar("K")

FIRST_KEY = "first_key"
LAST_KEY = "last_key"


class TokenCodec(Protocol):
    """Encodes chunk boundary keys into a token and extracts them back."""

    def encode(self, first_key: Any, last_key: Any) -> str: ...

    def extract_first_key(self, token: str | None, key_type: type[K] = ...) -> K | None: ...

    def extract_last_key(self, token: str | None, key_type: type[K] = ...) -> K | None: ...


@lru_cache(maxsize=256)
def _adapter_for(key_type: Any) -> TypeAdapter[Any]:
    # Textual callers get numbers as their JSON text ("123"), not a failure.
    if key_type is str:
        return TypeAdapter(str, config=ConfigDict(coerce_numbers_to_str=True))
    return TypeAdapter(key_type)


class JsonTokenCodec:
    """
    JSON + base64url implementation of TokenCodec.

    Architectural Note:
    -------------------
    Encoding and decoding fail differently on purpose. A key that cannot be
    encoded is a defect in the caller's key extraction, so encode() raises
    TokenEncodingError. A token that cannot be decoded came from a client and may
    have been truncated or tampered with, so the extract methods log a warning
    and return None, which callers treat as "no resume point".

    The codec keeps no per-call state and can be shared between threads.
    """

    def __init__(self, fallback: Callable[[Any], Any] | None = None) -> None:
        """
        Args:
            fallback: Optional hook passed to pydantic_core.to_json, called for
                      key values it cannot serialize natively.
        """
        self._fallback = fallback

    def encode(self, first_key: Any, last_key: Any) -> str:
        """
        Encodes the first and last element keys of a chunk into a token.

        Raises:
            TokenEncodingError: If either key cannot be serialized to JSON.
        """
        # Insertion order keeps first_key ahead of last_key in the output.
        payload = {FIRST_KEY: first_key, LAST_KEY: last_key}
        try:
            json_bytes = to_json(payload, fallback=self._fallback)
        except (TypeError, ValueError) as e:
            raise TokenEncodingError(
                f"Failed to encode pagination keys. error={e!s}",
                first_key=first_key,
                last_key=last_key,
                original_error=e,
            ) from e
        return base64.urlsafe_b64encode(json_bytes).rstrip(b"=").decode("ascii")

    def decode(self, token: str | None) -> dict[str, Any] | None:
        """
        Decodes a token into its untyped JSON object.

        Returns None for a missing token and, with a warning, for a malformed one.
        """
        if token is None:
            return None
        try:
            raw = self._b64decode(token)
            tree = from_json(raw.decode("utf-8"))
        except ValueError:
            # binascii.Error, UnicodeDecodeError and JSON errors are all ValueErrors
            logger.warning(
                "Invalid pagination token", extra={"token_hash": redact_key(token)}
            )
            return None

        if not isinstance(tree, dict):
            logger.warning(
                "Invalid pagination token: payload is not an object",
                extra={"token_hash": redact_key(token)},
            )
            return None
        return tree

    def extract_first_key(
        self, token: str | None, key_type: type[K] = str  # type: ignore[assignment]
    ) -> K | None:
        """Extracts the first element key, validated into key_type."""
        return self._extract_key(token, FIRST_KEY, key_type)

    def extract_last_key(
        self, token: str | None, key_type: type[K] = str  # type: ignore[assignment]
    ) -> K | None:
        """Extracts the last element key, validated into key_type."""
        return self._extract_key(token, LAST_KEY, key_type)

    def _extract_key(self, token: str | None, name: str, key_type: type[K]) -> K | None:
        tree = self.decode(token)
        if tree is None:
            return None

        value = tree.get(name)
        if value is None:
            return None

        try:
            result: K = _adapter_for(key_type).validate_python(value)
        except PydanticValidationError as e:
            logger.warning(
                "Invalid pagination token: key does not match the requested type",
                extra={
                    "token_hash": redact_key(token),
                    "key": name,
                    "key_type": getattr(key_type, "__name__", str(key_type)),
                    "error_count": e.error_count(),
                },
            )
            return None
        return result

    @staticmethod
    def _b64decode(token: str) -> bytes:
        # b64decode would also accept the standard alphabet next to altchars
        if "+" in token or "/" in token:
            raise binascii.Error("Token is not URL-safe base64")
        # Tokens are emitted without padding; restore it before decoding.
        padded = token + "=" * (-len(token) % 4)
        return base64.b64decode(padded, altchars=b"-_", validate=True)
