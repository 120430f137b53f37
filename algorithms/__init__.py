from .set_classifier import Outcome, classify_set, aggregate_outcomes
from .target_resolver import DEFAULT_TARGET, resolve_targets, set_target, target_for
from .weight_converter import WeightConverter

__all__ = [
    "Outcome",
    "classify_set",
    "aggregate_outcomes",
    "DEFAULT_TARGET",
    "resolve_targets",
    "set_target",
    "target_for",
    "WeightConverter",
]
