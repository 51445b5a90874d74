import typing

import pytest

from table_gateway import ConfigurationError, Record, Registry, Table


def test_binds_table_and_record_classes(memory_connection_cls: typing.Type, memory_table_cls: typing.Type):
    registry = Registry()

    class UserRecord(Record):
        pass

    registry.bind(memory_connection_cls, "Table", memory_table_cls)
    registry.bind(memory_connection_cls, "Record", UserRecord)

    assert list(registry.bindings_for(memory_connection_cls)) == [{"Table": memory_table_cls, "Record": UserRecord}]


def test_bind_works_as_decorator(memory_connection_cls: typing.Type, memory_table_cls: typing.Type):
    registry = Registry()

    @registry.bind(memory_connection_cls, "Table")
    class CustomTable(memory_table_cls):
        pass

    assert registry.bindings[memory_connection_cls] == {"Table": CustomTable}


def test_refuses_classes_not_implementing_the_capability(memory_connection_cls: typing.Type):
    registry = Registry()

    with pytest.raises(ConfigurationError):
        registry.bind(memory_connection_cls, "Table", Record)

    with pytest.raises(ConfigurationError):
        registry.bind(memory_connection_cls, "Record", object)

    assert registry.bindings == {}


def test_refuses_unknown_capabilities(memory_connection_cls: typing.Type, memory_table_cls: typing.Type):
    with pytest.raises(ConfigurationError):
        Registry().bind(memory_connection_cls, "Mapper", memory_table_cls)


def test_walks_bindings_most_specific_first(memory_connection_cls: typing.Type, memory_table_cls: typing.Type):
    registry = Registry()

    class ReplicaConnection(memory_connection_cls):
        pass

    class ReplicaTable(memory_table_cls):
        pass

    registry.bind(memory_connection_cls, "Table", memory_table_cls)
    registry.bind(ReplicaConnection, "Table", ReplicaTable)

    assert list(registry.bindings_for(ReplicaConnection)) == [{"Table": ReplicaTable}, {"Table": memory_table_cls}]
    assert list(registry.bindings_for(memory_connection_cls)) == [{"Table": memory_table_cls}]


def test_registers_models_by_qualified_name():
    registry = Registry()

    @registry.register_model(namespace="app.models")
    class UserAccount(Record):
        pass

    class Invoice(Record):
        pass

    registry.register_model(Invoice)

    assert registry.lookup_model("app.models.UserAccount") is UserAccount
    assert registry.lookup_model(f"{__name__}.Invoice") is Invoice
    assert registry.lookup_model("app.models.Invoice") is None


def test_registers_models_without_namespace():
    registry = Registry()

    class UserAccount(Record):
        pass

    registry.register_model(UserAccount, namespace="")

    assert registry.lookup_model("UserAccount") is UserAccount


def test_looks_up_models_of_a_base_class_only():
    registry = Registry()

    class UserAccountTable(Record):
        pass

    registry.register_model(UserAccountTable, namespace="app.models")

    assert registry.lookup_model("app.models.UserAccountTable", Record) is UserAccountTable
    assert registry.lookup_model("app.models.UserAccountTable", Table) is None
