from .checker import ConnectionProbe
from .collector import MetricsCollector
from .credentials import CredentialResolver

__all__ = ["ConnectionProbe", "MetricsCollector", "CredentialResolver"]
