from table_gateway.active_record import ActiveRecord, Deletable, GatewayRecord
from table_gateway.casting import TypeCaster, cast_value
from table_gateway.config import Configuration, ConnectionSettings
from table_gateway.connection import Connection
from table_gateway.entity import Entity, Identity, identity_fields
from table_gateway.exceptions import (
    CastError,
    ConfigurationError,
    InvalidTypeError,
    TableGatewayError,
    UnsupportedOperationError,
)
from table_gateway.naming import camelcase, uncamelcase
from table_gateway.record import Record
from table_gateway.registry import Registry
from table_gateway.resolver import GatewayResolver
from table_gateway.table import Table

__all__ = [
    "ActiveRecord",
    "CastError",
    "ConfigurationError",
    "Configuration",
    "Connection",
    "ConnectionSettings",
    "Deletable",
    "Entity",
    "GatewayRecord",
    "GatewayResolver",
    "Identity",
    "InvalidTypeError",
    "Record",
    "Registry",
    "Table",
    "TableGatewayError",
    "TypeCaster",
    "UnsupportedOperationError",
    "camelcase",
    "cast_value",
    "identity_fields",
    "uncamelcase",
]
