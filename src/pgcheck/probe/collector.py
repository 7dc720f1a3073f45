import logging
from typing import Any
from ..domain.interfaces import DatabaseConnector
from ..domain.models import ServerMetrics
from ..exceptions import QueryError

logger = logging.getLogger(__name__)

MAX_CONNECTIONS_QUERY = "SHOW max_connections"
RESERVED_CONNECTIONS_QUERY = "SHOW superuser_reserved_connections"
CURRENT_CONNECTIONS_QUERY = "SELECT count(*) FROM pg_stat_activity"

class MetricsCollector:
    """
    SRP: Responsible only for reading connection capacity and usage.
    The three queries run one after another on the same connection without
    a snapshot, so under load they may describe slightly different instants.
    """
    def __init__(self, connector: DatabaseConnector):
        self.connector = connector

    def collect(self) -> ServerMetrics:
        metrics = ServerMetrics(
            max_connections=self._fetch_int(MAX_CONNECTIONS_QUERY, "max_connections"),
            superuser_reserved_connections=self._fetch_int(
                RESERVED_CONNECTIONS_QUERY, "superuser_reserved_connections"
            ),
            current_connections=self._fetch_int(CURRENT_CONNECTIONS_QUERY, "current_connections"),
        )
        logger.debug("Collected %s", metrics)
        return metrics

    def _fetch_int(self, query: str, name: str) -> int:
        value = self.connector.scalar(query, name=name)
        return self._to_int(value, name)

    @staticmethod
    def _to_int(value: Any, name: str) -> int:
        # SHOW answers with text; a value that is not a number is an error, not 0
        if value is None or isinstance(value, bool):
            raise QueryError(name, f"error querying postgres {name}: unexpected value {value!r}")
        try:
            return int(str(value).strip())
        except ValueError:
            raise QueryError(name, f"error querying postgres {name}: unexpected value {value!r}")
