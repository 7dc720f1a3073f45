from .thresholds import ThresholdEvaluator, evaluate

__all__ = ["ThresholdEvaluator", "evaluate"]
