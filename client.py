import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from models import Routine, SingleRoutineResponse, Workout

logger = logging.getLogger(__name__)

BASE_URL = "https://api.hevyapp.com/v1"


class HevyClientError(RuntimeError):
    """Base error for failed Hevy API calls."""


class TransportError(HevyClientError):
    pass


class APIResponseError(HevyClientError):
    def __init__(self, method: str, path: str, status_code: int, body: str) -> None:
        super().__init__(f"{method} {path} returned {status_code}: {body}")
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body


class NotFoundError(APIResponseError):
    pass


class DecodeError(HevyClientError):
    pass


class HevyClient:
    """REST client for the Hevy API.

    Every request carries the ``api-key`` header. Keys require Hevy Pro and
    are issued at https://hevy.com/settings?developer.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"api-key": api_key, "Accept": "application/json"})

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.session.request(
                method, url, params=params, json=body, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"Failed to send request to {method} {path}: {e}") from e
        if resp.status_code == 404:
            raise NotFoundError(method, path, resp.status_code, resp.text)
        if not resp.ok:
            raise APIResponseError(method, path, resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"Failed to parse {method} {path} response: {e}") from e

    # workouts

    def list_workouts(self, page: int = 1, page_size: int = 5) -> dict:
        return self._request("GET", "/workouts", {"page": page, "pageSize": page_size})

    def get_workout(self, workout_id: str) -> dict:
        return self._request("GET", f"/workouts/{workout_id}")

    def fetch_workout(self, workout_id: str) -> Workout:
        data = self.get_workout(workout_id)
        try:
            return Workout.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Failed to parse workout response: {e}") from e

    def workout_count(self) -> dict:
        return self._request("GET", "/workouts/count")

    def workout_events(
        self, page: int = 1, page_size: int = 5, since: Optional[str] = None
    ) -> dict:
        return self._request(
            "GET",
            "/workouts/events",
            {"page": page, "pageSize": page_size, "since": since},
        )

    def create_workout(self, body: dict) -> dict:
        return self._request("POST", "/workouts", body=body)

    def update_workout(self, workout_id: str, body: dict) -> dict:
        return self._request("PUT", f"/workouts/{workout_id}", body=body)

    # routines

    def list_routines(self, page: int = 1, page_size: int = 5) -> dict:
        return self._request("GET", "/routines", {"page": page, "pageSize": page_size})

    def get_routine(self, routine_id: str) -> dict:
        return self._request("GET", f"/routines/{routine_id}")

    def fetch_routine(self, routine_id: str) -> Routine:
        data = self.get_routine(routine_id)
        try:
            return SingleRoutineResponse.model_validate(data).routine
        except ValidationError as e:
            raise DecodeError(f"Failed to parse routine response: {e}") from e

    def create_routine(self, body: dict) -> dict:
        return self._request("POST", "/routines", body=body)

    def update_routine(self, routine_id: str, body: dict) -> dict:
        return self._request("PUT", f"/routines/{routine_id}", body=body)

    # exercise templates

    def list_exercise_templates(self, page: int = 1, page_size: int = 5) -> dict:
        return self._request(
            "GET", "/exercise_templates", {"page": page, "pageSize": page_size}
        )

    def get_exercise_template(self, template_id: str) -> dict:
        return self._request("GET", f"/exercise_templates/{template_id}")

    def create_exercise_template(self, body: dict) -> dict:
        return self._request("POST", "/exercise_templates", body=body)

    # routine folders

    def list_routine_folders(self, page: int = 1, page_size: int = 5) -> dict:
        return self._request(
            "GET", "/routine_folders", {"page": page, "pageSize": page_size}
        )

    def get_routine_folder(self, folder_id: str) -> dict:
        return self._request("GET", f"/routine_folders/{folder_id}")

    def create_routine_folder(self, body: dict) -> dict:
        return self._request("POST", "/routine_folders", body=body)

    # history / user

    def exercise_history(
        self,
        template_id: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> dict:
        return self._request(
            "GET",
            f"/exercise_history/{template_id}",
            {"start_date": start, "end_date": end},
        )

    def user_info(self) -> dict:
        return self._request("GET", "/user/info")
