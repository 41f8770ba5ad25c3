from sqlsink.drivers.base import BaseDriver, BaseTransaction
from sqlsink.drivers.sqlalchemy import SQLAlchemyDriver, SQLAlchemyTransaction

__all__ = [
    "BaseDriver",
    "BaseTransaction",
    "SQLAlchemyDriver",
    "SQLAlchemyTransaction",
]
