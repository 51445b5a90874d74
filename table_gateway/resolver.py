import logging
import threading
import typing

import attr

from table_gateway import naming
from table_gateway.casting import TypeCaster
from table_gateway.config import Configuration
from table_gateway.connection import Connection
from table_gateway.exceptions import ConfigurationError, UnsupportedOperationError
from table_gateway.record import Record
from table_gateway.registry import CAPABILITIES, Registry
from table_gateway.table import Table

logger = logging.getLogger(__name__)


Driver = typing.Callable[..., Connection]

_PACKAGE = __name__.partition(".")[0]


def _is_package_class(cls: typing.Type) -> bool:
    return cls.__module__ == _PACKAGE or cls.__module__.startswith(f"{_PACKAGE}.")


@attr.s(auto_attribs=True)
class GatewayResolver:
    """
    Resolves table names and record classes to table gateways.

    Holds the named connections and a single gateway per connection and table. With `auto_generate`,
    missing gateway and record classes in the model namespace of the default connection are created
    on the fly for existing tables.
    """

    registry: Registry = attr.Factory(Registry)
    caster: TypeCaster = attr.Factory(TypeCaster)
    auto_generate: bool = False

    _connections: typing.Dict[str, Connection] = attr.ib(factory=dict, init=False)
    _default: typing.Optional[Connection] = attr.ib(default=None, init=False)
    _namespaces: typing.Dict[str, Connection] = attr.ib(factory=dict, init=False)
    _tables: typing.Dict[typing.Tuple[int, str], Table] = attr.ib(factory=dict, init=False, repr=False)
    _lock: threading.RLock = attr.ib(factory=threading.RLock, init=False, repr=False, eq=False)

    def add_connection(self, name: str, connection: Connection, default: bool = False) -> Connection:
        self._connections[name] = connection
        logger.info(f"Added connection '{name}' ({type(connection).__name__})")
        if default:
            self.default_connection = connection
        return connection

    def alias(self, alias: str, name: str) -> None:
        self._connections[alias] = self.connection(name)

    def connection(self, name: str) -> Connection:
        try:
            return self._connections[name]
        except KeyError:
            raise ConfigurationError(f"Unknown connection '{name}'") from None

    @property
    def default_connection(self) -> typing.Optional[Connection]:
        return self._default

    @default_connection.setter
    def default_connection(self, connection: typing.Union[str, Connection, None]) -> None:
        self._default = self.connection(connection) if isinstance(connection, str) else connection

    def use_connection(self, namespace: str, connection: typing.Union[str, Connection]) -> None:
        """Use `connection` for the gateway and record classes of the module `namespace`."""
        self._namespaces[namespace] = self.connection(connection) if isinstance(connection, str) else connection

    def configure(self, configuration: Configuration, drivers: typing.Mapping[str, Driver]) -> None:
        for name, settings in configuration.connections.items():
            try:
                driver = drivers[settings.driver]
            except KeyError:
                raise ConfigurationError(f"Unknown driver '{settings.driver}' for connection '{name}'") from None
            self.add_connection(name, driver(**settings.settings))

        for alias in configuration.aliases:
            self.alias(alias, configuration.resolve(alias))

        if configuration.default is not None:
            self.default_connection = configuration.resolve(configuration.default)
            logger.info(f"Default connection is '{configuration.default}'")

    def resolve_connection(self, context: typing.Optional[typing.Type] = None) -> Connection:
        """
        The connection for `context`, a gateway or record class.

        The first class in the MRO of `context` whose module is bound with `use_connection` decides,
        otherwise it's the default connection. The walk stops at the base classes of this package.
        """
        if context is not None:
            for cls in context.__mro__:
                if _is_package_class(cls):
                    break
                connection = self._namespaces.get(cls.__module__)
                if connection is not None:
                    return connection

        if self._default is None:
            raise ConfigurationError("Default connection not set, please connect to a DB.")
        return self._default

    def resolve_gateway_class(self, capability: str, connection: typing.Optional[Connection] = None) -> typing.Optional[typing.Type]:
        """Standard class implementing `capability` for the connection, the most specific binding wins."""
        if capability not in CAPABILITIES:
            raise ConfigurationError(f"Unknown capability '{capability}'")
        if connection is None:
            connection = self.resolve_connection()

        for bindings in self.registry.bindings_for(type(connection)):
            if capability in bindings:
                return bindings[capability]
        return None

    def find_model(self, qualified_name: str, base: typing.Type) -> typing.Optional[typing.Type]:
        """Registered (or, with `auto_generate`, generated) model class that is a subclass of `base`."""
        with self._lock:
            model = self.registry.lookup_model(qualified_name, base)
            if model is None and self.auto_generate:
                model = self.auto_generate_model(qualified_name)
                if model is not None and not issubclass(model, base):
                    return None
            return model

    def factory(self, name: str, connection: typing.Optional[Connection] = None) -> Table:
        """
        Get the table gateway for a table name or record class name.

        Uses `<model namespace>.<CamelCase name>Table` if registered, otherwise the standard gateway
        class bound for the connection. Gateways are cached per connection and table.
        """
        name = naming.uncamelcase(naming.strip_namespace(name))
        if connection is None:
            connection = self.resolve_connection()

        with self._lock:
            gateway_name = naming.qualify(connection.model_namespace, f"{naming.camelcase(name)}Table")
            gateway_cls = self.find_model(gateway_name, Table) or self.resolve_gateway_class("Table", connection)
            if gateway_cls is None:
                raise UnsupportedOperationError(f"Table gateways aren't supported for {type(connection).__name__}")

            key = (id(connection), name)
            table = self._tables.get(key)
            if table is not None:
                if type(table) is gateway_cls:
                    logger.debug(f"Using cached {gateway_cls.__name__} for '{name}'")
                    return table
                logger.warning(f"Replacing {type(table).__name__} for '{name}' by {gateway_cls.__name__}")

            table = gateway_cls(self, connection)
            table.name = name
            self._tables[key] = table
            logger.debug(f"Created {gateway_cls.__name__} for '{name}'")

        return table

    def table_exists(self, name: str, connection: typing.Optional[Connection] = None) -> bool:
        if connection is None:
            connection = self.resolve_connection()
        return bool(connection.table_exists(name))

    def auto_generate_model(self, qualified_name: str) -> typing.Optional[typing.Type]:
        """
        Create a gateway or record class for an existing table of the default connection.

        The class is a plain subclass of the standard gateway (when the name ends with `Table`) or
        record class and is registered as a model.
        """
        connection = self._default
        if connection is None:
            return None

        namespace, _, class_name = qualified_name.rpartition(".")
        if namespace != connection.model_namespace.strip("."):
            return None

        name = naming.table_name(class_name)
        with self._lock:
            model = self.registry.lookup_model(qualified_name)
            if model is not None:
                return model
            if not self.table_exists(name, connection):
                return None

            if class_name.endswith("Table"):
                base = self.resolve_gateway_class("Table", connection)
                if base is None:
                    return None
            else:
                base = self.resolve_gateway_class("Record", connection) or Record

            model = type(class_name, (base,), {"__module__": namespace or base.__module__})
            self.registry.register_model(model, namespace=namespace)
            logger.info(f"Generated {qualified_name} from {base.__name__} for table '{name}'")
        return model

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()
