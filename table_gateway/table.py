import abc
import typing

from table_gateway import naming
from table_gateway.connection import Connection
from table_gateway.exceptions import UnsupportedOperationError
from table_gateway.record import Record

if typing.TYPE_CHECKING:
    from table_gateway.resolver import GatewayResolver


class Table(abc.ABC):
    """
    Table gateway: CRUD access to one table or collection of a connection.

    Drivers subclass it and supply the abstract methods. Use `GatewayResolver.factory` rather than
    instantiating gateways directly, so there is a single gateway per connection and table.
    """

    # Option for `get_class`, don't check whether the record class exists.
    SKIP_CLASS_EXISTS = 1

    def __init__(self, resolver: "GatewayResolver", db: typing.Optional[Connection] = None) -> None:
        self._resolver = resolver
        self._db = db if db is not None else resolver.resolve_connection(type(self))
        self._name: typing.Optional[str] = None

    @property
    def resolver(self) -> "GatewayResolver":
        return self._resolver

    @property
    def db(self) -> Connection:
        return self._db

    @property
    def name(self) -> str:
        if self._name is None:
            self._name = naming.table_name(type(self).__name__)
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    def _record_class_name(self) -> str:
        return naming.qualify(self.db.model_namespace, naming.camelcase(self.name))

    def _default_record_class(self) -> typing.Type[Record]:
        return self._resolver.resolve_gateway_class("Record", self.db) or Record

    def get_class(self, options: int = 0) -> str:
        """Qualified name of the record class for this table."""
        qualified = self._record_class_name()
        if options & self.SKIP_CLASS_EXISTS or self._resolver.find_model(qualified, Record):
            return qualified
        return naming.qualified_name(self._default_record_class())

    @property
    def record_class(self) -> typing.Type[Record]:
        return self._resolver.find_model(self._record_class_name(), Record) or self._default_record_class()

    def create(self, values: typing.Optional[typing.Mapping[str, typing.Any]] = None, **kwargs: typing.Any) -> Record:
        """New record filled with the table defaults, overlaid with `values`."""
        return self.record_class.from_values({**self.get_defaults(), **(values or {}), **kwargs})

    def exists(self) -> bool:
        return bool(self.db.table_exists(self.name))

    def cast_value(self, value: typing.Any, type_tag: str) -> typing.Any:
        return self._resolver.caster.cast(value, type_tag)

    def cast_values(self, values: typing.Mapping[str, typing.Any]) -> typing.Dict[str, typing.Any]:
        """Cast the values of a result row that the driver doesn't return with the right type already."""
        field_types = self.get_field_types()
        native_types = self.result_value_types()

        result = {}
        for key, value in values.items():
            type_tag = field_types.get(key)
            if type_tag is None or type_tag in native_types:
                result[key] = value
            else:
                result[key] = self.cast_value(value, type_tag)
        return result

    @classmethod
    def result_value_types(cls) -> typing.FrozenSet[str]:
        """Type tags for which the driver already returns values of the right type."""
        return frozenset()

    def delete(self, record: Record) -> None:
        raise UnsupportedOperationError(f"Deleting records isn't supported for {type(self.db).__name__}")

    @abc.abstractmethod
    def get_defaults(self) -> typing.Dict[str, typing.Any]:
        """Default values for each field of the table."""

    @abc.abstractmethod
    def get_field_types(self) -> typing.Dict[str, str]:
        """Type tag for each field of the table."""

    @abc.abstractmethod
    def get_identifier(self) -> typing.Union[str, typing.List[str]]:
        """Field (or fields) uniquely identifying a record."""

    @abc.abstractmethod
    def fetch_all(self) -> typing.List[Record]:
        pass

    @abc.abstractmethod
    def fetch(self, id_or_filter: typing.Any) -> typing.Optional[Record]:
        """Load a record by id or filter, `None` if nothing matches."""

    @abc.abstractmethod
    def save(self, record: typing.Union[Record, typing.Mapping[str, typing.Any]]) -> Record:
        pass

    def __str__(self) -> str:
        return self.name
