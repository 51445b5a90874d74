import re
import typing

import inflection


_TABLE_SUFFIX = re.compile(r"table$", re.IGNORECASE)


def camelcase(string: str) -> str:
    """Turn an under_scored string into a CamelCased one."""
    return inflection.camelize(string, uppercase_first_letter=True)


def uncamelcase(string: str) -> str:
    """Turn a CamelCased string into an under_scored one."""
    return inflection.underscore(string)


def strip_namespace(name: str) -> str:
    return name.rsplit(".", 1)[-1]


def qualify(namespace: typing.Optional[str], name: str) -> str:
    namespace = (namespace or "").strip(".")
    return f"{namespace}.{name}" if namespace else name


def qualified_name(cls: typing.Type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def table_name(name: str) -> str:
    """
    Table name for a record class, table gateway class or table name.

    `app.models.UserAccountTable`, `UserAccount` and `user_account` all give `user_account`.
    """
    base = strip_namespace(name)
    stripped = _TABLE_SUFFIX.sub("", base)
    return uncamelcase(stripped or base)
