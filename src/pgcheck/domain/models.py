from enum import IntEnum
from typing import ClassVar, Optional
from pydantic import BaseModel, ConfigDict
from sqlalchemy.engine import URL
from ..exceptions import ConfigError

class Severity(IntEnum):
    """Check outcome. The value doubles as the process exit code."""
    OK = 0
    WARNING = 1
    CRITICAL = 2

class Credentials(BaseModel):
    """
    Everything needed to open one connection.
    Built either from CLI/env options or from a pgpass entry.
    """
    model_config = ConfigDict(frozen=True)

    user: str = ""
    password: str = ""
    host: str = "localhost"
    port: int = 5432
    database: str = "postgres"
    sslmode: str = "prefer"

    DRIVERNAME: ClassVar[str] = "postgresql+psycopg2"

    @property
    def url(self) -> URL:
        """Pinned to psycopg2; URL.create quotes every field and brackets IPv6 hosts."""
        return URL.create(
            drivername=self.DRIVERNAME,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
            query={"sslmode": self.sslmode},
        )

    @property
    def connection_string(self) -> str:
        return self.url.render_as_string(hide_password=False)

    def __repr__(self) -> str:
        # keep the password out of logs and tracebacks
        return (
            f"Credentials(user={self.user!r}, host={self.host!r}, port={self.port}, "
            f"database={self.database!r}, sslmode={self.sslmode!r})"
        )

    __str__ = __repr__

class PasswordFileEntry(BaseModel):
    """One line of a .pgpass file. Port stays textual since it may be '*'."""
    hostname: str = ""
    port: str = ""
    database: str = ""
    username: str = ""
    password: str = ""

class ServerMetrics(BaseModel):
    max_connections: int
    superuser_reserved_connections: int
    current_connections: int

    @property
    def available_connections(self) -> int:
        return self.max_connections - self.superuser_reserved_connections

class ThresholdConfig(BaseModel):
    """
    warning/critical are absolute connection counts, or percentages of
    max_connections when use_percentage is set.
    """
    model_config = ConfigDict(frozen=True)

    warning: int = 200
    critical: int = 250
    use_percentage: bool = False

class CheckResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str

class ValidationResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    error: Optional[ConfigError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
