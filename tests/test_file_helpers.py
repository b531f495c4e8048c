"""Unit tests for the JSON debug log writer."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from dotenv import load_dotenv

from app_builder.core.llm_client import CompletionInvoker
from app_builder.utils.file_helpers import debug_enabled, get_log_dir, save_debug_log


class TestSaveDebugLog:
    def test_writes_json_file(self, tmp_path: Path) -> None:
        path = save_debug_log("llm_attempt", {"prompt": "héllo", "n": 1}, log_dir=str(tmp_path))
        assert path is not None
        written = Path(path)
        assert written.parent == tmp_path
        assert written.name.endswith("_llm_attempt.json")
        assert json.loads(written.read_text(encoding="utf-8")) == {"prompt": "héllo", "n": 1}

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "logs"
        path = save_debug_log("x", {}, log_dir=str(target))
        assert path is not None
        assert target.is_dir()

    def test_unserialisable_values_become_strings(self, tmp_path: Path) -> None:
        path = save_debug_log("obj", {"value": object()}, log_dir=str(tmp_path))
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        assert data["value"].startswith("<object object")

    def test_distinct_files_within_one_second(self, tmp_path: Path) -> None:
        first = save_debug_log("same", {}, log_dir=str(tmp_path))
        second = save_debug_log("same", {}, log_dir=str(tmp_path))
        assert first != second

    def test_write_failure_returns_none(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        assert save_debug_log("x", {}, log_dir=str(blocker)) is None


class TestDotenvSettings:
    """Debug settings come from .env files loaded after import too."""

    def test_debug_flag_from_dotenv(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("AI_BACKEND_DEBUG", "false")
        monkeypatch.setenv("AI_BACKEND_LOG_DIR", "./ai_backend_logs")
        log_dir = tmp_path / "dotenv_logs"
        env_file = tmp_path / ".env"
        env_file.write_text(f"AI_BACKEND_DEBUG=true\nAI_BACKEND_LOG_DIR={log_dir}\n", encoding="utf-8")
        assert debug_enabled() is False

        load_dotenv(env_file, override=True)

        assert debug_enabled() is True
        assert get_log_dir() == str(log_dir)
        path = save_debug_log("from_env", {"ok": True})
        assert path is not None
        assert Path(path).parent == log_dir

    @pytest.mark.parametrize("value", ["1", "TRUE", " yes ", "on"])
    def test_truthy_values(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("AI_BACKEND_DEBUG", value)
        assert debug_enabled() is True

    @pytest.mark.parametrize("value", ["", "0", "false", "off", "nope"])
    def test_falsy_values(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("AI_BACKEND_DEBUG", value)
        assert debug_enabled() is False

    def test_invoker_reads_flag_at_construction(self, fake_llm, monkeypatch) -> None:
        monkeypatch.setenv("AI_BACKEND_DEBUG", "true")
        assert CompletionInvoker(fake_llm)._debug is True
        monkeypatch.setenv("AI_BACKEND_DEBUG", "false")
        assert CompletionInvoker(fake_llm)._debug is False
