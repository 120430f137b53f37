"""Performance report for a completed workout.

The report compares each logged set against the rep range the originating
routine prescribed for the same exercise template and set position, then
prints the routine targets followed by the workout results.
"""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from algorithms import (
    Outcome,
    WeightConverter,
    aggregate_outcomes,
    classify_set,
    resolve_targets,
    target_for,
)
from client import HevyClientError
from models import Exercise, Routine, RoutineExercise, RoutineSet, WebhookPayload, Workout

logger = logging.getLogger(__name__)

OUTCOME_STYLES: Dict[Outcome, str] = {
    Outcome.STRUGGLED: "yellow",
    Outcome.SUCCEEDED: "green",
    Outcome.EXCEEDED: "cyan",
}

EMPTY = "—"
TITLE_WIDTH = 35
RULE_WIDTH = 120

ROUTINE_ROW = "  {:<35} {:>5} {:>18} {:>12} {:>12}   {}"
WORKOUT_ROW = "  {:<35} {:>5} {:>18} {:>13} {:>12}   {}"


def truncate(text: str, limit: int = TITLE_WIDTH) -> str:
    """Shorten ``text`` to ``limit`` characters, ending in an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def rep_display(routine_set: RoutineSet) -> str:
    rep_range = routine_set.rep_range
    if rep_range is not None and rep_range.start is not None:
        if rep_range.end is not None:
            return f"{rep_range.start}-{rep_range.end}"
        return f"{rep_range.start}+"
    if routine_set.reps is not None:
        return str(routine_set.reps)
    return EMPTY


def set_label(number: int, set_type: Optional[str]) -> str:
    suffix = f" ({set_type})" if set_type else ""
    return f"  Set {number}{suffix}"


def heaviest_target(exercise: RoutineExercise) -> tuple[float, str]:
    """Return the heaviest target weight and the reps prescribed with it."""
    best_kg, best_reps = 0.0, EMPTY
    for routine_set in exercise.sets:
        weight = routine_set.weight_kg or 0.0
        if weight > best_kg:
            best_kg, best_reps = weight, rep_display(routine_set)
    return best_kg, best_reps


class ReportRenderer:
    """Write the routine and workout tables to a rich console."""

    def __init__(
        self,
        console: Console,
        styles: Optional[Dict[Outcome, str]] = None,
    ) -> None:
        self.console = console
        self.styles = styles if styles is not None else OUTCOME_STYLES

    def _print(self, text: str = "") -> None:
        self.console.print(text, highlight=False, soft_wrap=True, emoji=False)

    def _plain(self, text: str) -> str:
        return escape(text)

    def _outcome(self, outcome: Outcome, width: int = 12) -> str:
        cell = f"{outcome.value:>{width}}"
        style = self.styles.get(outcome)
        if not style:
            return cell
        return f"[{style}]{cell}[/{style}]"

    def _row(self, template: str, *cells: str, outcome: Optional[Outcome] = None) -> str:
        # outcome cells are styled after padding so markup never skews widths
        if outcome is None:
            return self._plain(template.format(*cells))
        head, _, tail = template.rpartition("{:>12}")
        return (
            self._plain(head.format(*cells[:4]))
            + self._outcome(outcome)
            + self._plain(tail.format(*cells[4:]))
        )

    def header(self, workout: Workout) -> None:
        title = workout.title or "Untitled Workout"
        self._print()
        self._print(self._plain(f"  {title}"))
        self._print(f"  {'─' * len(title)}")
        if workout.routine_id:
            self._print(self._plain(f"  Routine ID: {workout.routine_id}"))
        self._print()

    def routine_section(self, routine: Routine) -> None:
        title = routine.title or "Untitled Routine"
        self._print(self._plain(f"  Routine: {title}"))
        self._print(f"  {'─' * (len(title) + 10)}")
        self._print()
        self._print(
            self._row(
                ROUTINE_ROW,
                "Exercise", "Sets", "Target Wt (lbs)", "Target Reps", "Rest (s)", "Notes",
            )
        )
        self._print(f"  {'─' * RULE_WIDTH}")

        for exercise in routine.exercises:
            best_kg, best_reps = heaviest_target(exercise)
            rest = exercise.rest_display()
            self._print(
                self._row(
                    ROUTINE_ROW,
                    truncate(exercise.title or "Unknown Exercise"),
                    str(len(exercise.sets)),
                    WeightConverter.format_lb(best_kg, empty=EMPTY),
                    best_reps,
                    str(rest) if rest is not None else EMPTY,
                    exercise.notes or "",
                )
            )
            for i, routine_set in enumerate(exercise.sets, start=1):
                self._print(
                    self._row(
                        ROUTINE_ROW,
                        set_label(i, routine_set.set_type),
                        "",
                        WeightConverter.format_lb(routine_set.weight_kg, empty=EMPTY),
                        rep_display(routine_set),
                        "",
                        "",
                    )
                )
        self._print()

    def workout_section(self, workout: Workout, targets: dict) -> None:
        self._print(
            self._row(WORKOUT_ROW, "Exercise", "Sets", "Weight (lbs)", "Reps", "Result", "Notes")
        )
        self._print(f"  {'─' * RULE_WIDTH}")

        for exercise in workout.exercises:
            outcomes = exercise_outcomes(exercise, targets)
            self._print(
                self._row(
                    WORKOUT_ROW,
                    truncate(exercise.title or "Unknown Exercise"),
                    str(len(exercise.sets)),
                    "",
                    "",
                    exercise.notes or "",
                    outcome=aggregate_outcomes(outcomes),
                )
            )
            for i, (logged, outcome) in enumerate(zip(exercise.sets, outcomes), start=1):
                self._print(
                    self._row(
                        WORKOUT_ROW,
                        set_label(i, logged.set_type),
                        "",
                        WeightConverter.format_lb(logged.weight_kg),
                        str(logged.reps) if logged.reps is not None else EMPTY,
                        f"RPE {logged.rpe:g}" if logged.rpe is not None else "",
                        outcome=outcome,
                    )
                )
        self._print()


def exercise_outcomes(exercise: Exercise, targets: dict) -> List[Outcome]:
    return [
        classify_set(
            logged.reps,
            target_for(targets, exercise.exercise_template_id, i),
        )
        for i, logged in enumerate(exercise.sets)
    ]


def parse_payload(raw: str) -> str:
    """Return the workout id from a webhook payload or raise ``ValueError``."""
    expected = 'Expected: {"workoutId":"<UUID>"}'
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid webhook JSON ({e}). {expected}") from e
    try:
        payload = WebhookPayload.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid webhook payload. {expected}") from e
    workout_id = payload.workout_id.strip()
    if not workout_id:
        raise ValueError(f"Invalid webhook payload: empty workoutId. {expected}")
    return workout_id


class PerformanceReportService:
    """Fetch a workout, score it against its routine and print the report.

    ``provider`` needs ``fetch_workout(id)`` and ``fetch_routine(id)``;
    ``HevyClient`` is the production implementation.
    """

    def __init__(
        self,
        provider,
        console: Optional[Console] = None,
        styles: Optional[Dict[Outcome, str]] = None,
    ) -> None:
        self.provider = provider
        self.renderer = ReportRenderer(console or Console(), styles)

    def process_payload(self, raw: str) -> None:
        self.generate_report(parse_payload(raw))

    def generate_report(self, workout_id: str) -> None:
        workout = self.provider.fetch_workout(workout_id)
        routine = self.load_routine(workout)
        self.render(workout, routine)

    def load_routine(self, workout: Workout) -> Optional[Routine]:
        if not workout.routine_id:
            return None
        try:
            return self.provider.fetch_routine(workout.routine_id)
        except HevyClientError as e:
            logger.warning(
                "Routine %s unavailable, using default targets: %s",
                workout.routine_id,
                e,
            )
            return None

    def render(self, workout: Workout, routine: Optional[Routine]) -> None:
        targets = resolve_targets(routine)
        self.renderer.header(workout)
        if routine is not None:
            self.renderer.routine_section(routine)
        self.renderer.workout_section(workout, targets)
