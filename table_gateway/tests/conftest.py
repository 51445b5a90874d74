import typing

import pytest

from table_gateway import Connection, Entity, GatewayResolver, Record, Table


class MemoryConnection(Connection):
    def __init__(self, namespace: str = "", tables: typing.Optional[typing.Dict[str, typing.List[dict]]] = None) -> None:
        self._namespace = namespace
        self.tables = tables if tables is not None else {}

    @property
    def model_namespace(self) -> str:
        return self._namespace

    def table_exists(self, name: str) -> bool:
        return name in self.tables


class MemoryTable(Table):
    def get_defaults(self) -> typing.Dict[str, typing.Any]:
        return {}

    def get_field_types(self) -> typing.Dict[str, str]:
        return {}

    def get_identifier(self) -> str:
        return "id"

    @property
    def rows(self) -> typing.List[dict]:
        return self.db.tables.setdefault(self.name, [])

    def fetch_all(self) -> typing.List[Record]:
        return [self.record_class.from_values(self.cast_values(row)) for row in self.rows]

    def fetch(self, id_or_filter: typing.Any) -> typing.Optional[Record]:
        if isinstance(id_or_filter, typing.Mapping):
            filter = dict(id_or_filter)
        else:
            filter = {self.get_identifier(): id_or_filter}

        for row in self.rows:
            if all(row.get(key) == value for key, value in filter.items()):
                return self.record_class.from_values(self.cast_values(row))
        return None

    def save(self, record: typing.Any) -> Record:
        values = record.to_dict() if isinstance(record, Entity) else dict(record)
        identifier = self.get_identifier()

        for row in self.rows:
            if row.get(identifier) == values.get(identifier):
                row.update(values)
                break
        else:
            self.rows.append(dict(values))

        return record if isinstance(record, Record) else self.create(values)


@pytest.fixture()
def memory_connection_cls() -> typing.Type[MemoryConnection]:
    return MemoryConnection


@pytest.fixture()
def memory_table_cls() -> typing.Type[MemoryTable]:
    return MemoryTable


@pytest.fixture()
def connection() -> MemoryConnection:
    return MemoryConnection(
        "app.models", tables={"user_account": [{"id": 1, "name": "Arnold"}], "invoice": []}
    )


@pytest.fixture()
def resolver(connection: MemoryConnection) -> GatewayResolver:
    resolver = GatewayResolver()
    resolver.registry.bind(MemoryConnection, "Table", MemoryTable)
    resolver.add_connection("default", connection, default=True)
    return resolver
