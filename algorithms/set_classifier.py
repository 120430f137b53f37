from enum import Enum
from typing import Iterable, Tuple


class Outcome(str, Enum):
    """Result of a logged set measured against its target rep range."""

    STRUGGLED = "Struggled"
    SUCCEEDED = "Succeeded"
    EXCEEDED = "Exceeded"


def classify_set(reps: int | None, target: Tuple[int, int]) -> Outcome:
    """Classify ``reps`` against the inclusive ``(lo, hi)`` range.

    Missing reps count as zero.
    """
    lo, hi = target
    r = reps if reps is not None else 0
    if r < lo:
        return Outcome.STRUGGLED
    if r <= hi:
        return Outcome.SUCCEEDED
    return Outcome.EXCEEDED


def aggregate_outcomes(outcomes: Iterable[Outcome]) -> Outcome:
    """Return the overall outcome of an exercise.

    Any struggled set marks the whole exercise as struggled. Exceeded is
    only reported when every set exceeded; everything else, including an
    exercise without sets, counts as succeeded.
    """
    items = list(outcomes)
    if Outcome.STRUGGLED in items:
        return Outcome.STRUGGLED
    if items and all(o is Outcome.EXCEEDED for o in items):
        return Outcome.EXCEEDED
    return Outcome.SUCCEEDED
