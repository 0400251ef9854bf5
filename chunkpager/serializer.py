from decimal import Decimal
from enum import Enum
from typing import Any, cast

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from .exceptions import DynamoSerializationError


class KeySerializer:
    """
    Converts keys and items between plain Python values and DynamoDB Low-Level format.

    Keys travel through pagination tokens as JSON, so they come back as str, int
    and float. Boto3's TypeSerializer rejects floats, which are turned into
    Decimal here; on the way out, Decimals become int or float again so that
    keys are JSON-encodable. Sets are left as boto3 returns them.
    """

    def __init__(self) -> None:
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def to_dynamo(self, data: dict[str, Any]) -> dict[str, dict[str, Any]]:
        """Converts a plain key dict to DynamoDB JSON format ({"S": "...", "N": "..."})."""
        return {k: self.to_dynamo_value(v) for k, v in data.items()}

    def to_dynamo_value(self, value: Any) -> dict[str, Any]:
        """
        Serializes a single value to DynamoDB format.
        E.g.: 10.5 -> {'N': '10.5'}
        """
        try:
            return cast(dict[str, Any], self._serializer.serialize(self._prepare(value)))
        except TypeError as e:
            raise DynamoSerializationError(
                f"Failed to serialize value {value!r}. error={e!s}", original_error=e
            ) from e

    def from_dynamo(self, item: dict[str, Any]) -> dict[str, Any]:
        """Converts DynamoDB JSON format back to a plain Python dict."""
        return {k: self._restore(self._deserializer.deserialize(v)) for k, v in item.items()}

    def _prepare(self, value: Any) -> Any:
        if isinstance(value, float):
            # Go through str to avoid float precision artifacts in the Decimal
            return Decimal(str(value))
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, list):
            return [self._prepare(v) for v in value]
        if isinstance(value, dict):
            return {k: self._prepare(v) for k, v in value.items()}
        return value

    def _restore(self, value: Any) -> Any:
        if isinstance(value, Decimal):
            if value % 1 == 0:
                return int(value)
            return float(value)
        if isinstance(value, list):
            return [self._restore(v) for v in value]
        if isinstance(value, dict):
            return {k: self._restore(v) for k, v in value.items()}
        # SS/NS/BS sets are returned as deserialized; they never appear in key attributes
        return value
