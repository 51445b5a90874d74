import typing
import uuid
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation

import attr

from table_gateway.exceptions import CastError, InvalidTypeError


Caster = typing.Callable[[str], typing.Any]

FALSE_STRINGS = frozenset({"", "0"})


def to_bool(value: str) -> bool:
    return value not in FALSE_STRINGS


def to_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        # "5.0" as returned by some drivers for integer columns
        return int(float(value))


def to_array(value: str) -> typing.List[str]:
    return value.split(",")


native = {
    "bool": to_bool,
    "boolean": to_bool,
    "int": to_int,
    "integer": to_int,
    "float": float,
    "array": to_array,
}

classes = {
    Decimal: Decimal,
    uuid.UUID: uuid.UUID,
    date: date.fromisoformat,
    datetime: datetime.fromisoformat,
    time: time.fromisoformat,
}


@attr.s(auto_attribs=True)
class TypeCaster:
    """
    Casts string values to the type named by a type tag.

    Class tags are looked up in a table of registered constructors, never by importing the named type.
    """

    casters: typing.Dict[str, Caster] = attr.ib(factory=dict, converter=dict)

    def __attrs_post_init__(self) -> None:
        for tag, caster in native.items():
            self.casters.setdefault(tag, caster)
        for cls, constructor in classes.items():
            if cls.__name__ not in self.casters:
                self.register_type(cls, constructor)

    def register(self, tag: str, caster: typing.Optional[Caster] = None) -> typing.Any:
        if caster is None:

            def decorator(func: Caster) -> Caster:
                self.casters[tag] = func
                return func

            return decorator

        self.casters[tag] = caster
        return caster

    def register_type(self, cls: typing.Type, constructor: typing.Optional[Caster] = None) -> None:
        constructor = constructor or cls
        self.casters[cls.__name__] = constructor
        self.casters[f"{cls.__module__}.{cls.__qualname__}"] = constructor

    def __contains__(self, tag: str) -> bool:
        return tag in self.casters

    def cast(self, value: typing.Any, type_tag: str) -> typing.Any:
        if not isinstance(value, str) or type_tag == "string":
            return value

        try:
            caster = self.casters[type_tag]
        except KeyError:
            raise InvalidTypeError(type_tag)

        try:
            return caster(value)
        except (ValueError, TypeError, OverflowError, InvalidOperation) as e:
            raise CastError(value, type_tag) from e


default_caster = TypeCaster()


def cast_value(value: typing.Any, type_tag: str) -> typing.Any:
    return default_caster.cast(value, type_tag)
