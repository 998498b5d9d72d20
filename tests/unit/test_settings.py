from collections.abc import Iterator
from pathlib import Path

import pytest

from exam_service.scoring.marking import DEFAULT_MARKING_SCHEME
from exam_service.settings import ExamSettings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestExamSettings:
    def test_defaults(self) -> None:
        settings = ExamSettings()
        assert settings.tick_interval_ms == 1000
        assert settings.marking_scheme() == DEFAULT_MARKING_SCHEME

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXAM_TICK_INTERVAL_MS", "250")
        monkeypatch.setenv("EXAM_CORRECT_MARK", "4")
        monkeypatch.setenv("EXAM_WRONG_MARK", "-1")
        monkeypatch.setenv("EXAM_RESULTS_PATH", "/tmp/out.jsonl")

        settings = get_settings()

        assert settings.tick_interval_ms == 250
        assert settings.results_path == Path("/tmp/out.jsonl")
        scheme = settings.marking_scheme()
        assert scheme.correct == 4.0
        assert scheme.wrong == -1.0

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_positive_wrong_mark_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EXAM_WRONG_MARK", "0.5")
        with pytest.raises(ValueError):
            get_settings().marking_scheme()
