import abc
import typing

from table_gateway.entity import Entity
from table_gateway.exceptions import ConfigurationError
from table_gateway.record import Record

if typing.TYPE_CHECKING:
    from table_gateway.resolver import GatewayResolver
    from table_gateway.table import Table


class Deletable(abc.ABC):
    @abc.abstractmethod
    def delete(self) -> None:
        pass


class ActiveRecord(Entity, Deletable):
    @classmethod
    @abc.abstractmethod
    def fetch(cls, filter: typing.Any) -> typing.Optional["ActiveRecord"]:
        """Fetch a single entity by id or filter."""

    @classmethod
    @abc.abstractmethod
    def exists(cls, filter: typing.Any) -> bool:
        pass

    @abc.abstractmethod
    def save(self) -> "ActiveRecord":
        pass


class GatewayRecord(Record, ActiveRecord):
    """
    Active record on top of a table gateway.

    Set `resolver` on a base class of your records; the table is derived from the class name and
    the connection from the class' module (see `GatewayResolver.use_connection`).
    """

    resolver: typing.ClassVar[typing.Optional["GatewayResolver"]] = None

    @classmethod
    def table(cls) -> "Table":
        if cls.resolver is None:
            raise ConfigurationError(f"No resolver set for {cls.__name__}")
        return cls.resolver.factory(cls.__name__, cls.resolver.resolve_connection(cls))

    @classmethod
    def fetch(cls, filter: typing.Any) -> typing.Optional[Record]:
        return cls.table().fetch(filter)

    @classmethod
    def exists(cls, filter: typing.Any) -> bool:
        return cls.fetch(filter) is not None

    def save(self) -> "GatewayRecord":
        self.table().save(self)
        return self

    def delete(self) -> None:
        self.table().delete(self)
