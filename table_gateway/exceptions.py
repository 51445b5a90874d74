class TableGatewayError(Exception):
    pass


class ConfigurationError(TableGatewayError):
    pass


class UnsupportedOperationError(TableGatewayError, NotImplementedError):
    pass


class InvalidTypeError(TableGatewayError, TypeError):
    def __init__(self, type_tag: str) -> None:
        self.type_tag = type_tag
        super().__init__(f"Invalid type '{type_tag}'")


class CastError(TableGatewayError, ValueError):
    def __init__(self, value: str, type_tag: str) -> None:
        self.value = value
        self.type_tag = type_tag
        super().__init__(f"Can not cast {value!r} to {type_tag}")
