import os
import sys
import unittest
from unittest import mock
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
import requests

from client import (
    APIResponseError,
    DecodeError,
    HevyClient,
    NotFoundError,
    TransportError,
)


def fake_response(status: int = 200, payload=None, text: str = "") -> mock.Mock:
    resp = mock.Mock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.text = text
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


class ClientTest(unittest.TestCase):
    def setUp(self) -> None:
        self.session = mock.Mock()
        self.session.headers = {}
        self.client = HevyClient("secret", base_url="https://api.test/v1/", session=self.session)

    def test_api_key_header(self) -> None:
        self.assertEqual(self.session.headers["api-key"], "secret")

    def test_list_workouts_params(self) -> None:
        self.session.request.return_value = fake_response(payload={"page": 1, "workouts": []})
        data = self.client.list_workouts(2, 10)
        self.assertEqual(data["page"], 1)
        self.session.request.assert_called_once_with(
            "GET",
            "https://api.test/v1/workouts",
            params={"page": 2, "pageSize": 10},
            json=None,
            timeout=30,
        )

    def test_optional_params_dropped(self) -> None:
        self.session.request.return_value = fake_response(payload={"exercise_history": []})
        self.client.exercise_history("D04AC939", start="2024-01-01T00:00:00Z")
        _, kwargs = self.session.request.call_args
        self.assertEqual(kwargs["params"], {"start_date": "2024-01-01T00:00:00Z"})

    def test_create_sends_body(self) -> None:
        body = {"routine_folder": {"title": "Push"}}
        self.session.request.return_value = fake_response(payload={"id": 42})
        self.client.create_routine_folder(body)
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ("POST", "https://api.test/v1/routine_folders"))
        self.assertEqual(kwargs["json"], body)

    def test_fetch_workout_model(self) -> None:
        self.session.request.return_value = fake_response(
            payload={
                "id": "w1",
                "title": "Leg Day",
                "routine_id": "r1",
                "exercises": [
                    {
                        "title": "Squat",
                        "exercise_template_id": "SQUAT",
                        "sets": [{"type": "normal", "weight_kg": 100.0, "reps": 5, "rpe": None}],
                    }
                ],
            }
        )
        workout = self.client.fetch_workout("w1")
        self.assertEqual(workout.routine_id, "r1")
        self.assertEqual(workout.exercises[0].sets[0].set_type, "normal")
        self.assertEqual(workout.exercises[0].sets[0].reps, 5)

    def test_fetch_routine_unwraps(self) -> None:
        self.session.request.return_value = fake_response(
            payload={"routine": {"id": "r1", "title": "Push", "exercises": []}}
        )
        routine = self.client.fetch_routine("r1")
        self.assertEqual(routine.title, "Push")

    def test_not_found(self) -> None:
        self.session.request.return_value = fake_response(404, text="Workout not found")
        with self.assertRaises(NotFoundError) as ctx:
            self.client.fetch_workout("missing")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn("GET /workouts/missing returned 404", str(ctx.exception))

    def test_unauthorized(self) -> None:
        self.session.request.return_value = fake_response(401, text="Unauthorized")
        with self.assertRaises(APIResponseError) as ctx:
            self.client.user_info()
        self.assertNotIsInstance(ctx.exception, NotFoundError)
        self.assertEqual(ctx.exception.body, "Unauthorized")

    def test_transport_error(self) -> None:
        self.session.request.side_effect = requests.ConnectionError("boom")
        with self.assertRaises(TransportError):
            self.client.workout_count()

    def test_bad_json(self) -> None:
        self.session.request.return_value = fake_response(payload=ValueError("no json"))
        with self.assertRaises(DecodeError):
            self.client.get_workout("w1")

    def test_bad_shape(self) -> None:
        self.session.request.return_value = fake_response(payload={"exercises": "nope"})
        with self.assertRaises(DecodeError):
            self.client.fetch_workout("w1")
        self.session.request.return_value = fake_response(payload={"title": "no wrapper"})
        with self.assertRaises(DecodeError):
            self.client.fetch_routine("r1")


if __name__ == "__main__":
    unittest.main()
