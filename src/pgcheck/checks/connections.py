import logging
from ..config import ConnectionsCheckConfig
from ..domain.models import CheckResult, Severity, ValidationResult
from ..evaluation import ThresholdEvaluator
from ..exceptions import PgCheckException
from ..probe import ConnectionProbe, CredentialResolver, MetricsCollector
from . import common

NAME = "check-postgres-connections"

logger = logging.getLogger(__name__)

def validate(config: ConnectionsCheckConfig) -> ValidationResult:
    return common.validate(config)

def execute(config: ConnectionsCheckConfig) -> CheckResult:
    """
    Connect, ping, read capacity and usage, then grade against the thresholds.
    Any failure is CRITICAL; the connection is released before grading.
    """
    try:
        credentials = CredentialResolver().resolve(config)
        probe = ConnectionProbe(timeout=config.timeout)
        with probe.connect(credentials) as connector:
            probe.ping(connector)
            metrics = MetricsCollector(connector).collect()
    except PgCheckException as e:
        logger.debug("%s failed: %r", NAME, e)
        return CheckResult(severity=Severity.CRITICAL, message=str(e))

    return ThresholdEvaluator().evaluate(metrics, config.thresholds)
