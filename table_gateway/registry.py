import typing

import attr

from table_gateway import naming
from table_gateway.connection import Connection
from table_gateway.exceptions import ConfigurationError
from table_gateway.record import Record
from table_gateway.table import Table


CAPABILITIES: typing.Dict[str, typing.Type] = {"Table": Table, "Record": Record}


@attr.s(auto_attribs=True)
class Registry:
    """
    Explicit registration of table gateway and record classes.

    `bindings` holds the standard gateway and record class per connection class, `models` the
    table specific classes by qualified name, eg. `app.models.UserAccountTable`.
    """

    bindings: typing.Dict[typing.Type[Connection], typing.Dict[str, typing.Type]] = attr.Factory(dict)
    models: typing.Dict[str, typing.Type] = attr.Factory(dict)

    def bind(
        self, connection_cls: typing.Type[Connection], capability: str, impl: typing.Optional[typing.Type] = None
    ) -> typing.Any:
        if capability not in CAPABILITIES:
            raise ConfigurationError(f"Unknown capability '{capability}', expected one of {sorted(CAPABILITIES)}")

        def decorator(cls: typing.Type) -> typing.Type:
            if not isinstance(cls, type) or not issubclass(cls, CAPABILITIES[capability]):
                raise ConfigurationError(f"{cls!r} doesn't implement {capability}")
            self.bindings.setdefault(connection_cls, {})[capability] = cls
            return cls

        return decorator if impl is None else decorator(impl)

    def bindings_for(self, connection_cls: typing.Type[Connection]) -> typing.Iterator[typing.Dict[str, typing.Type]]:
        """Bindings of the class and its bases, most specific first."""
        for cls in connection_cls.__mro__:
            if cls in self.bindings:
                yield self.bindings[cls]

    def register_model(self, cls: typing.Optional[typing.Type] = None, namespace: typing.Optional[str] = None) -> typing.Any:
        def decorator(model: typing.Type) -> typing.Type:
            model_namespace = model.__module__ if namespace is None else namespace
            self.models[naming.qualify(model_namespace, model.__name__)] = model
            return model

        return decorator if cls is None else decorator(cls)

    def lookup_model(self, qualified_name: str, base: typing.Optional[typing.Type] = None) -> typing.Optional[typing.Type]:
        model = self.models.get(qualified_name)
        if model is None or (base is not None and not issubclass(model, base)):
            return None
        return model
