from typing import Optional
from ..domain.interfaces import DatabaseConnector
from ..domain.models import Credentials
from .postgres import PostgresConnector

def get_connector(credentials: Credentials, timeout: Optional[int] = None) -> DatabaseConnector:
    """
    Factory function used by the checks to obtain a connector.
    Tests replace it to run the checks against a fake server.
    """
    return PostgresConnector.from_credentials(credentials, timeout=timeout)
