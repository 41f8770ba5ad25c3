import abc
import typing

from sqlsink.utils.placeholders import DEFAULT_PLACEHOLDER_PREFIX


class BaseTransaction(abc.ABC):
    """
    A single open database transaction.

    A transaction is finished by exactly one call to ``commit`` or
    ``rollback``; implementations release their connection in both cases.
    """

    @abc.abstractmethod
    def execute(self, statement: str, values: typing.Sequence[typing.Any]) -> None:
        """
        Execute a parameterized statement inside the transaction.

        Args:
            statement: SQL text using the driver's positional placeholders.
            values: Parameters, bound in order to the placeholders.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        raise NotImplementedError


class BaseDriver(abc.ABC):
    """
    Abstract base class for the SQL drivers used by the batch writer.

    Drivers expose the minimal surface the writer needs: connect,
    begin a transaction and close. Pooling and network retries are the
    driver's own business.
    """

    placeholder_prefix: str = DEFAULT_PLACEHOLDER_PREFIX

    @abc.abstractmethod
    def connect(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def begin(self) -> BaseTransaction:
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


__all__ = ["BaseDriver", "BaseTransaction"]
