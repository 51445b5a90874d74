import typing

import attr

from table_gateway.exceptions import ConfigurationError


@attr.s(auto_attribs=True, frozen=True)
class ConnectionSettings:
    driver: str
    settings: typing.Dict[str, typing.Any] = attr.Factory(dict)


@attr.s(auto_attribs=True)
class Configuration:
    """
    Connection settings by name.

    Parsed from a mapping like::

        {
            "default": {"driver": "mysql", "host": "localhost", "database": "shop"},
            "reporting": {"driver": "mysql", "host": "replica", "database": "shop"},
            "shop": "default",
        }

    where a string entry is an alias of another connection.
    """

    connections: typing.Dict[str, ConnectionSettings] = attr.Factory(dict)
    aliases: typing.Dict[str, str] = attr.Factory(dict)
    default: typing.Optional[str] = None

    @classmethod
    def from_mapping(
        cls, mapping: typing.Mapping[str, typing.Any], default: typing.Optional[str] = None
    ) -> "Configuration":
        connections: typing.Dict[str, ConnectionSettings] = {}
        aliases: typing.Dict[str, str] = {}

        for name, entry in mapping.items():
            if isinstance(entry, str):
                aliases[name] = entry
            elif isinstance(entry, typing.Mapping):
                settings = dict(entry)
                driver = settings.pop("driver", None)
                if not driver:
                    raise ConfigurationError(f"No driver configured for connection '{name}'")
                connections[name] = ConnectionSettings(driver, settings)
            else:
                raise ConfigurationError(f"Invalid settings for connection '{name}': {entry!r}")

        if default is None and mapping:
            default = "default" if "default" in mapping else next(iter(mapping))

        configuration = cls(connections, aliases, default)
        for alias in aliases:
            configuration.resolve(alias)
        if default is not None:
            configuration.resolve(default)
        return configuration

    def resolve(self, name: str) -> str:
        """Name of the configured connection `name` refers to, following aliases."""
        seen = []
        while name in self.aliases:
            if name in seen:
                raise ConfigurationError(f"Circular connection alias: {' -> '.join(seen + [name])}")
            seen.append(name)
            name = self.aliases[name]

        if name not in self.connections:
            raise ConfigurationError(f"Connection '{name}' isn't configured")
        return name
