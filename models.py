from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HevyModel(BaseModel):
    """Base for API entities; unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RepRange(HevyModel):
    start: Optional[int] = None
    end: Optional[int] = None


class WorkoutSet(HevyModel):
    index: Optional[int] = None
    set_type: Optional[str] = Field(None, alias="type")
    weight_kg: Optional[float] = None
    reps: Optional[int] = None
    distance_meters: Optional[float] = None
    duration_seconds: Optional[float] = None
    rpe: Optional[float] = None
    custom_metric: Optional[float] = None


class RoutineSet(WorkoutSet):
    rep_range: Optional[RepRange] = None


class Exercise(HevyModel):
    index: Optional[int] = None
    title: Optional[str] = None
    notes: Optional[str] = None
    exercise_template_id: Optional[str] = None
    superset_id: Optional[int] = Field(None, alias="supersets_id")
    sets: List[WorkoutSet] = Field(default_factory=list)


class RoutineExercise(HevyModel):
    index: Optional[int] = None
    title: Optional[str] = None
    notes: Optional[str] = None
    exercise_template_id: Optional[str] = None
    superset_id: Optional[int] = Field(None, alias="supersets_id")
    # the API returns either a number or a numeric string
    rest_seconds: Optional[Any] = None
    sets: List[RoutineSet] = Field(default_factory=list)

    def rest_display(self) -> Optional[int]:
        try:
            return int(float(self.rest_seconds))
        except (TypeError, ValueError):
            return None


class Workout(HevyModel):
    id: Optional[str] = None
    title: Optional[str] = None
    routine_id: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    exercises: List[Exercise] = Field(default_factory=list)


class Routine(HevyModel):
    id: Optional[str] = None
    title: Optional[str] = None
    folder_id: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    exercises: List[RoutineExercise] = Field(default_factory=list)


class SingleRoutineResponse(HevyModel):
    routine: Routine


class WebhookPayload(HevyModel):
    """Body delivered by a ``workout.completed`` webhook."""

    workout_id: str = Field(alias="workoutId", min_length=1)
