from ..domain.models import CheckResult, ServerMetrics, Severity, ThresholdConfig

class ThresholdEvaluator:
    """
    Maps collected metrics onto a severity.
    Comparisons are inclusive and CRITICAL is tested before WARNING,
    so a value reaching both thresholds is CRITICAL.
    """
    def evaluate(self, metrics: ServerMetrics, thresholds: ThresholdConfig) -> CheckResult:
        if thresholds.use_percentage:
            return self._evaluate_percentage(metrics, thresholds)
        return self._evaluate_absolute(metrics, thresholds)

    def _evaluate_percentage(self, metrics: ServerMetrics, thresholds: ThresholdConfig) -> CheckResult:
        max_connections = metrics.max_connections
        if max_connections <= 0:
            return CheckResult(
                severity=Severity.CRITICAL,
                message=f"critical: postgres reports max_connections={max_connections}, "
                        f"cannot compute connection percentage",
            )

        percentage = 100 * metrics.current_connections / max_connections
        if percentage >= thresholds.critical:
            return CheckResult(
                severity=Severity.CRITICAL,
                message=f"critical: postgres connections at {percentage:.2f}% out of {max_connections} connections",
            )
        if percentage >= thresholds.warning:
            return CheckResult(
                severity=Severity.WARNING,
                message=f"warning: postgres connections at {percentage:.2f}% out of {max_connections} connections",
            )
        return CheckResult(
            severity=Severity.OK,
            message=f"postgres connections at {percentage:.2f}% out of {metrics.available_connections} connections.",
        )

    def _evaluate_absolute(self, metrics: ServerMetrics, thresholds: ThresholdConfig) -> CheckResult:
        current = metrics.current_connections
        available = metrics.available_connections
        if current >= thresholds.critical:
            return CheckResult(
                severity=Severity.CRITICAL,
                message=f"critical: postgres connections at {current} out of {available} connections",
            )
        if current >= thresholds.warning:
            return CheckResult(
                severity=Severity.WARNING,
                message=f"warning: postgres connections at {current} out of {available} connections",
            )
        return CheckResult(
            severity=Severity.OK,
            message=f"postgres connections at {current} out of {available} connections.",
        )

def evaluate(metrics: ServerMetrics, thresholds: ThresholdConfig) -> CheckResult:
    return ThresholdEvaluator().evaluate(metrics, thresholds)
