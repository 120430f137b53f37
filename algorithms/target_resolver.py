from __future__ import annotations

from typing import Dict, Optional, Tuple

from models import Routine, RoutineSet

TargetKey = Tuple[str, int]
TargetRange = Tuple[int, int]

DEFAULT_TARGET: TargetRange = (8, 10)


def set_target(routine_set: RoutineSet) -> TargetRange:
    """Return the inclusive rep range a routine set asks for."""
    rep_range = routine_set.rep_range
    if rep_range is not None and (
        rep_range.start is not None or rep_range.end is not None
    ):
        lo = rep_range.start if rep_range.start is not None else DEFAULT_TARGET[0]
        # an open-ended "start+" range is scored as exactly ``start``
        hi = rep_range.end if rep_range.end is not None else lo
        return lo, hi
    if routine_set.reps is not None:
        reps = routine_set.reps
        return max(reps - 1, 0), reps + 1
    return DEFAULT_TARGET


def resolve_targets(routine: Optional[Routine]) -> Dict[TargetKey, TargetRange]:
    """Map ``(exercise_template_id, set_index)`` to the routine's rep range.

    Exercises without a template id cannot be matched and are skipped.
    """
    targets: Dict[TargetKey, TargetRange] = {}
    if routine is None:
        return targets
    for exercise in routine.exercises:
        template_id = exercise.exercise_template_id
        if not template_id:
            continue
        for i, routine_set in enumerate(exercise.sets):
            targets[(template_id, i)] = set_target(routine_set)
    return targets


def target_for(
    targets: Dict[TargetKey, TargetRange],
    template_id: Optional[str],
    index: int,
) -> TargetRange:
    if template_id is None:
        return DEFAULT_TARGET
    return targets.get((template_id, index), DEFAULT_TARGET)
