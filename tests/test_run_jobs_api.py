"""Tests for the run-jobs webhook endpoint."""

import unittest
from unittest.mock import MagicMock, patch

from fakes import FakeLockStore
from fastapi.testclient import TestClient

from jobrunner.jobs.api import get_dispatcher
from jobrunner.jobs.dispatcher import Dispatcher
from jobrunner.jobs.job import create_job
from jobrunner.jobs.lock import ACTIVE, JobLock
from jobrunner.jobs.registry import JobRegistry
from jobrunner.main import app

TOKEN = "test-webhook-token"


class TestRunJobsEndpoint(unittest.TestCase):
    """GET/POST /webhooks/run-jobs"""

    def setUp(self):
        self.calls = []
        self.store = FakeLockStore()

        async def record(name):
            self.calls.append(name)

        async def waited():
            await record("waited")

        async def background():
            await record("background")

        async def manual():
            await record("manual")

        registry = JobRegistry(
            [
                create_job("waited", "* * * * *", waited, should_wait=True),
                create_job("background", "* * * * *", background),
                create_job("manual", "0 0 31 2 *", manual, should_wait=True),
            ]
        )
        self.dispatcher = Dispatcher(registry, JobLock(self.store, enabled=True))
        app.dependency_overrides[get_dispatcher] = lambda: self.dispatcher
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_runs_due_jobs_and_background_after_response(self):
        response = self.client.get("/webhooks/run-jobs", params={"token": TOKEN})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"ok": True, "ran": ["waited"], "toRun": ["background"], "alreadyRunning": []},
        )
        # TestClient returns once background tasks have finished
        self.assertEqual(self.calls, ["waited", "background"])
        self.assertEqual(self.store.data, {})

    def test_post_with_header_token(self):
        response = self.client.post("/webhooks/run-jobs", headers={"X-Webhook-Token": TOKEN})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["ran"], ["waited"])

    def test_explicit_run_ignores_schedule(self):
        response = self.client.get("/webhooks/run-jobs", params={"token": TOKEN, "run": "manual"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"ok": True, "ran": ["manual"], "toRun": [], "alreadyRunning": []},
        )
        self.assertEqual(self.calls, ["manual"])

    def test_locked_job_reported_as_already_running(self):
        self.store.data["job:background"] = ACTIVE

        response = self.client.get("/webhooks/run-jobs", params={"token": TOKEN})

        self.assertEqual(response.json()["alreadyRunning"], ["background"])
        self.assertEqual(response.json()["toRun"], [])
        self.assertNotIn("background", self.calls)

    def test_job_failure_still_ok(self):
        async def explode():
            raise RuntimeError("database unavailable")

        self.dispatcher = Dispatcher(
            JobRegistry([create_job("explode", "* * * * *", explode, should_wait=True)]),
            JobLock(self.store, enabled=True),
        )

        response = self.client.get("/webhooks/run-jobs", params={"token": TOKEN})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"ok": True, "ran": ["explode"], "toRun": [], "alreadyRunning": []})
        self.assertEqual(self.store.data, {})

    def test_missing_token_rejected(self):
        response = self.client.get("/webhooks/run-jobs")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.calls, [])

    def test_wrong_token_rejected(self):
        response = self.client.get("/webhooks/run-jobs", params={"token": "nope"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.calls, [])

    def test_non_ascii_token_rejected(self):
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/webhooks/run-jobs", params={"token": "tökén"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.calls, [])

    @patch("jobrunner.auth.get_settings")
    def test_unconfigured_token_is_unavailable(self, mock_settings):
        mock_settings.return_value = MagicMock(WEBHOOK_TOKEN=None)

        response = self.client.get("/webhooks/run-jobs", params={"token": TOKEN})

        self.assertEqual(response.status_code, 503)

    def test_overlong_run_parameter_rejected(self):
        response = self.client.get("/webhooks/run-jobs", params={"token": TOKEN, "run": "x" * 200})

        self.assertEqual(response.status_code, 422)
        self.assertEqual(self.calls, [])


class TestServiceEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_healthz(self):
        response = self.client.get("/healthz")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["ok"])
        self.assertIn("version", response.json())

    def test_metrics_exposed(self):
        response = self.client.get("/metrics")

        self.assertEqual(response.status_code, 200)
        self.assertIn("jobrunner_held_job_locks", response.text)
