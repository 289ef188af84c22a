from __future__ import annotations

import unittest
from datetime import date

from fastapi.testclient import TestClient

from fitlog.core.session import get_store
from fitlog.main import app
from fitlog.models import DEFAULT_EXERCISE_TYPES, ViewWindow
from fitlog.services.analytics import dates
from fitlog.services.store import ExerciseStore
from tests.test_exercise_store import FakeIdentity, FakeRepository


class TestApi(unittest.TestCase):
    def setUp(self):
        self.repository = FakeRepository()
        self.identity = FakeIdentity()
        self.store = ExerciseStore(self.repository, self.identity)
        app.dependency_overrides[get_store] = lambda: self.store
        # no context manager: the lifespan (remote load) is not run
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _create(self, day: str = "2024-03-05", minutes: int = 30, **extra):
        payload = {"date": day, "type": "Running", "minutes": minutes, "intensity": 2, **extra}
        return self.client.post("/api/records", json=payload)

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_create_list_and_get_record(self):
        response = self._create(memo="  easy pace  ")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["memo"], "easy pace")
        self.assertFalse(body["local"])

        listed = self.client.get("/api/records").json()
        self.assertEqual([r["id"] for r in listed], [body["id"]])

        by_day = self.client.get("/api/records", params={"date": "2024-03-06"}).json()
        self.assertEqual(by_day, [])

        fetched = self.client.get(f"/api/records/{body['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["minutes"], 30)

    def test_unknown_record_is_404(self):
        self.assertEqual(self.client.get("/api/records/nope").status_code, 404)

    def test_minutes_bounds_are_validated(self):
        self.assertEqual(self._create(minutes=0).status_code, 422)
        self.assertEqual(self._create(minutes=601).status_code, 422)
        self.assertEqual(self.client.post("/api/records", json={
            "date": "2024-03-05", "type": "Running", "minutes": 30, "intensity": 4,
        }).status_code, 422)

    def test_create_with_remote_down_keeps_local_record(self):
        self.repository.fail = True

        body = self._create().json()

        self.assertTrue(body["local"])
        self.assertTrue(body["id"].startswith("local-"))
        self.assertEqual(len(self.store.records), 1)

    def test_create_without_identity_is_accepted_but_not_recorded(self):
        self.identity.user_id = None

        response = self._create()

        self.assertEqual(response.status_code, 202)
        self.assertIsNone(response.json())
        self.assertEqual(self.store.records, ())

    def test_update_and_delete_report_whether_applied(self):
        record_id = self._create().json()["id"]

        updated = self.client.patch(f"/api/records/{record_id}", json={"minutes": 45})
        self.assertEqual(updated.json(), {"applied": True})
        self.assertEqual(self.store.find(record_id).minutes, 45)

        self.repository.fail = True
        self.assertEqual(self.client.delete(f"/api/records/{record_id}").json(), {"applied": False})
        self.assertIsNotNone(self.store.find(record_id))

    def test_update_blank_memo_is_cleared(self):
        record_id = self._create(memo="tempo").json()["id"]

        self.client.patch(f"/api/records/{record_id}", json={"memo": "   "})

        self.assertIsNone(self.store.find(record_id).memo)
        self.assertEqual(self.repository.calls[-1][3], {"memo": None})

    def test_quick_add_uses_type_defaults(self):
        response = self.client.post("/api/records/quick", json={"typeId": "6"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["type"], "Walking")
        self.assertEqual(body["intensity"], 1)
        self.assertEqual(body["minutes"], 20)
        self.assertEqual(body["date"], dates.format_date(dates.today()))

        dated = self.client.post(
            "/api/records/quick", json={"typeId": "1", "minutes": 50, "date": "2024-03-05"},
        ).json()
        self.assertEqual((dated["minutes"], dated["date"]), (50, "2024-03-05"))

    def test_quick_add_unknown_type_is_404(self):
        response = self.client.post("/api/records/quick", json={"typeId": "missing"})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.store.records, ())

    def test_quick_add_without_identity_is_accepted_but_not_recorded(self):
        self.identity.user_id = None

        response = self.client.post("/api/records/quick", json={"typeId": "1"})

        self.assertEqual(response.status_code, 202)
        self.assertEqual(self.store.records, ())

    def test_monthly_year_out_of_range_is_422(self):
        response = self.client.get("/api/stats/monthly", params={"year": 10000, "month": 1})
        self.assertEqual(response.status_code, 422)

    def test_week_records_and_stats(self):
        self._create(day="2024-03-04", minutes=30)
        self._create(day="2024-03-04", minutes=20)
        self._create(day="2024-03-10", minutes=40)

        week = self.client.get("/api/records/week/2024-03-04").json()
        self.assertEqual(len(week), 3)

        weekly = self.client.get("/api/stats/weekly", params={"week_start": "2024-03-04"}).json()
        self.assertEqual(weekly["completed_days"], 2)
        self.assertEqual(weekly["total_minutes"], 90)
        self.assertEqual(weekly["goal"], 5)
        self.assertEqual(weekly["remaining_days"], 3)
        self.assertEqual(weekly["completion_rate"], 40)
        self.assertFalse(weekly["goal_reached"])

        monthly = self.client.get("/api/stats/monthly", params={"year": 2024, "month": 3}).json()
        self.assertEqual(monthly["total_days"], 31)
        self.assertEqual(monthly["completed_days"], 2)
        self.assertEqual(monthly["completion_rate"], 6)

    def test_streak_counts_today(self):
        self._create(day=dates.format_date(dates.today()))

        streak = self.client.get("/api/stats/streak").json()

        self.assertEqual(streak["current"], 1)
        self.assertEqual(streak["longest"], 1)

    def test_board_follows_displayed_date(self):
        self._create(day="2024-03-10", minutes=40)
        self.client.put("/api/state/displayed-date", json={"displayedDate": "2024-03-07"})

        board = self.client.get("/api/stats/board").json()

        self.assertEqual(board["stats"]["week_start"], "2024-03-04")
        self.assertEqual([d["label"] for d in board["days"]], ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"])
        self.assertEqual(board["days"][6]["shortDate"], "3/10")
        self.assertEqual(len(board["days"][6]["records"]), 1)

    def test_state_and_view_window(self):
        state = self.client.get("/api/state").json()
        self.assertEqual(state["viewWindow"], "weekly")
        self.assertEqual(state["displayedDate"], dates.format_date(dates.today()))
        self.assertEqual(state["exerciseTypeCount"], len(DEFAULT_EXERCISE_TYPES))

        updated = self.client.put("/api/state/view-window", json={"viewWindow": "monthly"}).json()
        self.assertEqual(updated["viewWindow"], "monthly")
        self.assertEqual(self.store.view_window, ViewWindow.MONTHLY)

        self.client.put("/api/state/displayed-date", json={"displayedDate": "2024-02-10"})
        self.assertEqual(self.store.displayed_date, date(2024, 2, 10))

    def test_refresh_reloads_from_remote(self):
        self._create()
        self.repository.rows = []

        state = self.client.post("/api/state/refresh").json()

        self.assertEqual(state["recordCount"], 0)

    def test_exercise_types(self):
        created = self.client.post(
            "/api/exercise-types", json={"name": "Rowing", "default_intensity": 3}
        )
        self.assertEqual(created.status_code, 200)

        names = [t["name"] for t in self.client.get("/api/exercise-types").json()]
        self.assertEqual(names[0], "Running")
        self.assertEqual(names[-1], "Rowing")


if __name__ == "__main__":
    unittest.main()
