import logging
from ..config import CheckConfig
from ..domain.models import CheckResult, Severity, ValidationResult
from ..exceptions import PgCheckException
from ..probe import ConnectionProbe, CredentialResolver
from . import common

NAME = "check-postgres-alive"

logger = logging.getLogger(__name__)

def validate(config: CheckConfig) -> ValidationResult:
    return common.validate(config)

def execute(config: CheckConfig) -> CheckResult:
    """Connect and ping, nothing else."""
    try:
        credentials = CredentialResolver().resolve(config)
        probe = ConnectionProbe(timeout=config.timeout)
        with probe.connect(credentials) as connector:
            probe.ping(connector)
    except PgCheckException as e:
        logger.debug("%s failed: %r", NAME, e)
        return CheckResult(severity=Severity.CRITICAL, message=str(e))

    return CheckResult(severity=Severity.OK, message="postgres server is alive.")
