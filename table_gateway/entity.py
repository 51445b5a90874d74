import abc
import inspect
import typing

import attr


T = typing.TypeVar("T")


class Identity(typing.Generic[T]):
    @classmethod
    def is_identity(cls, field: attr.Attribute) -> bool:
        return getattr(field.type, "__origin__", None) == cls


def _is_class_var(annotation: typing.Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _declares_fields(cls: typing.Type) -> bool:
    return any(not _is_class_var(annotation) for annotation in inspect.get_annotations(cls).values())


class EntityMeta(abc.ABCMeta):
    def __new__(mcs, name: str, bases: tuple, namespace: dict, **kwargs: typing.Any) -> typing.Type:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)
        if not _declares_fields(cls):
            return cls
        return attr.s(auto_attribs=True)(cls)


def _as_mapping(values: typing.Any) -> typing.Dict[str, typing.Any]:
    if isinstance(values, typing.Mapping):
        return dict(values)
    if isinstance(values, Entity):
        return values.to_dict()
    return {key: value for key, value in vars(values).items() if not key.startswith("_")}


class Entity(metaclass=EntityMeta):
    """
    A "thing" represented in a data store.

    Subclasses declaring annotated fields are turned into attrs classes.
    """

    def set_values(self, values: typing.Any) -> "Entity":
        """Set values from a mapping or an object, same as setting the attributes one by one."""
        for key, value in _as_mapping(values).items():
            setattr(self, key, value)
        return self

    @classmethod
    def from_values(cls, values: typing.Any) -> "Entity":
        values = _as_mapping(values)
        if not attr.has(cls):
            return cls.__new__(cls).set_values(values)

        init_args = {}
        for field in attr.fields(cls):
            if field.name in values and field.init:
                init_args[field.alias] = values.pop(field.name)
        return cls(**init_args).set_values(values)

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        return {key: value for key, value in vars(self).items() if not key.startswith("_")}


def identity_fields(cls: typing.Type[Entity]) -> typing.List[str]:
    if not attr.has(cls):
        return []
    return [field.name for field in attr.fields(cls) if Identity.is_identity(field)]
