"""Integration tests for the full feedback pipeline.

These exercise the CLI, the SQLite store and the web API against the same
data directory. Mark as integration tests to skip in regular test runs.
"""

from datetime import datetime, timedelta

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from repwise.cli import main
from repwise.config import get_settings
from repwise.db import ProgressStateRepository, get_db_path
from repwise.services.engine import ProgressEngine
from repwise.web import create_app


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Isolated data directory shared by CLI and API."""
    monkeypatch.setenv("REPWISE_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield tmp_path / "data"
    get_settings.cache_clear()


def at(days_ago: int) -> str:
    moment = datetime.now().replace(microsecond=0) - timedelta(days=days_ago)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


class TestPipelineIntegration:
    """Integration tests across the CLI, storage and API."""

    def test_cli_then_api(self, data_dir):
        """Test that feedback logged on the CLI is visible over HTTP."""
        runner = CliRunner()
        assert runner.invoke(main, ["init"]).exit_code == 0

        for days_ago, workout_id in [(2, "legs"), (1, "push"), (0, "pull")]:
            result = runner.invoke(
                main,
                [
                    "--user", "sam", "feedback", "log", workout_id,
                    "-d", "too-easy", "--exercise", "squat",
                    "--target-reps", "10", "--target-weight", "50",
                    "--at", at(days_ago),
                ],
            )
            assert result.exit_code == 0, result.output

        app = create_app(db_path=get_db_path())
        with TestClient(app) as client:
            summary = client.get("/progress/sam").json()
            adaptation = client.get("/progress/sam/adaptations/squat").json()
            streak = client.get("/progress/sam/streak").json()

        assert summary["total_workouts"] == 3
        assert [w["workoutId"] for w in summary["recent_workouts"]] == ["pull", "push", "legs"]
        assert adaptation == {"reps": 12, "weight": 55}
        assert streak["current_streak"] == 3
        assert streak["is_on_streak"] is True

    @pytest.mark.asyncio
    async def test_api_then_engine(self, data_dir):
        """Test that feedback posted over HTTP is durable for a new engine."""
        app = create_app(db_path=get_db_path())
        with TestClient(app) as client:
            response = client.post(
                "/progress/kim/feedback",
                data={"workout_id": "run-1", "difficulty": "too-hard", "feedback": "windy"},
            )
            assert response.status_code == 200

        engine = ProgressEngine(ProgressStateRepository(get_db_path()), user_id="kim")
        recent = await engine.get_recent_workouts()

        assert len(recent) == 1
        assert recent[0].workout_id == "run-1"
        assert recent[0].feedback_text == "windy"
        assert (await engine.get_streak_status()).current_streak == 1
