from typing import Any, Optional, Protocol, runtime_checkable

@runtime_checkable
class DatabaseConnector(Protocol):
    """
    What the probes need from a connection: open, ping, run a
    single-value query and release. Connectors are context managers
    so the release happens on every exit path.
    """
    def connect(self) -> None: ...

    def ping(self) -> None: ...

    def scalar(self, query: str, name: Optional[str] = None) -> Any: ...

    def close(self) -> None: ...

    def __enter__(self) -> "DatabaseConnector": ...

    def __exit__(self, exc_type, exc, tb) -> None: ...
