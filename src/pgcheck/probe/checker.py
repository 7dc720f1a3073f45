import logging
import time
from typing import Optional
from ..connectors.factory import get_connector
from ..domain.interfaces import DatabaseConnector
from ..domain.models import Credentials

logger = logging.getLogger(__name__)

class ConnectionProbe:
    """
    SRP: Responsible only for connectivity.
    `connect` hands back an unopened connector; entering it opens the
    connection and leaving it releases the connection.
    """
    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout

    def connect(self, credentials: Credentials) -> DatabaseConnector:
        logger.debug("Connecting with %s", credentials)
        return get_connector(credentials, timeout=self.timeout)

    def ping(self, connector: DatabaseConnector) -> None:
        start_time = time.time()
        connector.ping()
        latency = (time.time() - start_time) * 1000  # ms
        logger.debug("Ping answered in %.2fms", latency)
