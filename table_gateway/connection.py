import abc


class Connection(abc.ABC):
    """
    A handle to a data store, supplied by a driver.

    `model_namespace` is where the driver's users keep their table gateway and record classes,
    eg. `app.models` for `app.models.UserAccountTable` and `app.models.UserAccount`.
    """

    @property
    def model_namespace(self) -> str:
        return ""

    @abc.abstractmethod
    def table_exists(self, name: str) -> bool:
        pass
