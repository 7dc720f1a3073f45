from typing import Optional, Union
from sqlalchemy.engine import URL
from ..domain.models import Credentials
from .base import SQLAlchemyConnector

class PostgresConnector(SQLAlchemyConnector):
    """
    PostgreSQL specific implementation.
    Sessions are opened read-only and every network step is bounded
    by `timeout` seconds (connect_timeout + server-side statement_timeout).
    """
    def __init__(self, connection_string: Union[str, URL], db_alias: str = "postgres", timeout: Optional[int] = None):
        connect_args = {"options": "-c default_transaction_read_only=on"}
        if timeout:
            connect_args["connect_timeout"] = timeout
            connect_args["options"] += f" -c statement_timeout={timeout * 1000}"
        super().__init__(connection_string, db_alias, connect_args)

    @classmethod
    def from_credentials(cls, credentials: Credentials, timeout: Optional[int] = None) -> "PostgresConnector":
        return cls(credentials.url, timeout=timeout)
