from dataclasses import dataclass


@dataclass(frozen=True)
class DynamoChunkOptions:
    """
    Table layout used by DynamoChunkFetcher.

    The partition key selects the item collection being paged through and the
    sort key provides the order. When index_name is set the query runs against
    that Global Secondary Index, whose keys are index_pk_name/index_sk_name.
    """

    table_name: str
    pk_name: str
    sk_name: str | None = None
    index_name: str | None = None
    index_pk_name: str | None = None
    index_sk_name: str | None = None

    def __post_init__(self) -> None:
        if self.index_name and not self.index_pk_name:
            raise ValueError(f"GSI '{self.index_name}' requires index_pk_name")

    def query_key_names(self) -> tuple[str, str | None]:
        """
        Partition and sort key names the query runs on.

        Returns:
            (partition key name, sort key name or None)
        """
        if self.index_name and self.index_pk_name:
            return self.index_pk_name, self.index_sk_name
        return self.pk_name, self.sk_name

    def key_attributes(self) -> tuple[str, ...]:
        """
        Attributes that identify an element's position.

        DynamoDB needs the table keys plus, for a GSI, the index keys in an
        ExclusiveStartKey, so all of them go into the pagination token.
        """
        names: list[str] = []
        for name in (self.pk_name, self.sk_name, self.index_pk_name, self.index_sk_name):
            if name and name not in names:
                names.append(name)
        return tuple(names)
