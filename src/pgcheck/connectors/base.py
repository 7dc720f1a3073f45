import logging
from typing import Any, Optional, Union
from sqlalchemy import create_engine, text, event
from sqlalchemy.engine import URL
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.pool import NullPool
from ..exceptions import ConnectionError, LivenessError, QueryError

logger = logging.getLogger(__name__)

def _describe(error: Exception) -> str:
    """Driver message without SQLAlchemy's statement/background-link decoration."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig).strip()
    return str(error).strip()

class SQLAlchemyConnector:
    """
    Generic SQLAlchemy Connector holding exactly one connection.
    Use it as a context manager: the connection is opened on enter
    and released once on exit, whichever step raised.
    """
    def __init__(self, connection_string: Union[str, URL], db_alias: str = "unknown", connect_args: Optional[dict] = None):
        self.connection_string = connection_string
        self.db_alias = db_alias
        self.connect_args = connect_args or {}
        self._engine = None
        self._connection = None

    @staticmethod
    def _enforce_read_only_listener(conn, cursor, statement, parameters, context, executemany):
        """
        Event Hook (Interceptor).
        Blocks any SQL that doesn't start with a whitelist keyword.
        """
        sql = statement.strip().upper()

        # Whitelist: Only allow safe starting keywords
        allowed_starts = (
            "SELECT",
            "WITH",
            "EXPLAIN",
            "SHOW",
            "SET",  # session configuration
        )

        if not any(sql.startswith(keyword) for keyword in allowed_starts):
            raise PermissionError(
                f"SAFETY BLOCK: Operation blocked! Only read-only queries are allowed. "
                f"Attempted: {sql[:50]}..."
            )

    def connect(self) -> None:
        if self._connection is not None:
            return
        try:
            # NullPool: closing the connection closes the socket, nothing lingers in a pool
            self._engine = create_engine(
                self.connection_string,
                poolclass=NullPool,
                connect_args=self.connect_args,
            )
            event.listen(self._engine, "before_cursor_execute", self._enforce_read_only_listener)
            self._connection = self._engine.connect()
        except (SQLAlchemyError, ImportError, ValueError) as e:
            # ValueError: URL the dialect cannot parse or use
            self._dispose_engine()
            raise ConnectionError(f"error connecting to {self.db_alias}: {_describe(e)}") from e
        logger.debug("Connected to %s", self.db_alias)

    def ping(self) -> None:
        self.connect()
        try:
            self._connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise LivenessError(f"error pinging {self.db_alias}: {_describe(e)}") from e

    def scalar(self, query: str, name: Optional[str] = None) -> Any:
        """Run a single-value query. Failures are reported under `name` (default: the query)."""
        self.connect()
        name = name or query
        try:
            return self._connection.execute(text(query)).scalar()
        except SQLAlchemyError as e:
            raise QueryError(name, f"error querying {self.db_alias} {name}: {_describe(e)}") from e

    def close(self) -> None:
        if self._connection is not None:
            connection, self._connection = self._connection, None
            try:
                connection.close()
            except SQLAlchemyError as e:
                logger.warning("Database closure failed: %s", _describe(e))
            else:
                logger.debug("Closed connection to %s", self.db_alias)
        self._dispose_engine()

    def _dispose_engine(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def __enter__(self) -> "SQLAlchemyConnector":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
