from ..config import CheckConfig
from ..domain.models import ValidationResult
from ..exceptions import ConfigError

MIN_PORT = 1
MAX_PORT = 65535
MIN_TIMEOUT = 1

def validate(config: CheckConfig) -> ValidationResult:
    """
    Argument checks done before any network activity.
    Valid ports are strictly between MIN_PORT and MAX_PORT.
    """
    if config.port <= MIN_PORT or config.port >= MAX_PORT:
        return ValidationResult(
            error=ConfigError(f"invalid port, should be a value between {MIN_PORT} and {MAX_PORT}")
        )
    if config.pgpass is not None and not config.pgpass.exists():
        return ValidationResult(
            error=ConfigError(f"unable to open the supplied config file {config.pgpass}")
        )
    if config.timeout < MIN_TIMEOUT:
        return ValidationResult(
            error=ConfigError(f"invalid timeout, should be at least {MIN_TIMEOUT} second")
        )
    return ValidationResult()
