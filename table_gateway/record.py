import typing

from table_gateway.entity import Entity


class Record(Entity):
    """One row of a table, as handed out by a table gateway."""

    def __init__(self, **values: typing.Any) -> None:
        self.set_values(values)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"{self.__class__.__name__}({fields})"
