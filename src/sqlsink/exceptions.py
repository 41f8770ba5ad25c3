class SinkError(Exception):
    pass


class ConfigError(SinkError):
    pass


class AdapterNotStartedError(SinkError):
    pass


class DriverNotConnectedError(SinkError):
    pass


class BatchWriteError(SinkError):
    """
    A batch could not be written.

    No record of the batch was consumed; the caller keeps the whole batch
    and may submit it again.
    """

    def __init__(self, message: str, batch_size: int = 0):
        super().__init__(message)
        self.batch_size = batch_size


class BeginError(BatchWriteError):
    pass


class RollbackError(BatchWriteError):
    pass


class CommitError(BatchWriteError):
    pass


__all__ = [
    "SinkError",
    "ConfigError",
    "AdapterNotStartedError",
    "DriverNotConnectedError",
    "BatchWriteError",
    "BeginError",
    "RollbackError",
    "CommitError",
]
