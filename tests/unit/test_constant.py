"""Unit tests for project-wide constants."""

from __future__ import annotations

import importlib
from collections.abc import Iterator

import pytest

import yasp.utils.constant as constant


@pytest.fixture
def reload_constant(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    yield monkeypatch
    monkeypatch.undo()
    importlib.reload(constant)


def test_defaults_match_decoder_settings() -> None:
    assert constant.DEFAULT_SAMPLE_RATE == 16000
    assert constant.DEFAULT_LANGUAGE_WEIGHT == 2.0
    assert constant.DEFAULT_CMN == "batch"
    assert constant.MAX_TOKEN_BYTES == 1023
    assert constant.ERROR_LOG_SUFFIX == "_err"


def test_env_overrides_are_read_at_import(reload_constant: pytest.MonkeyPatch) -> None:
    reload_constant.setenv("YASP_MODEL_DIR", "/opt/models")
    reload_constant.setenv("YASP_LOG_FILE", "session_log")
    reload_constant.setenv("YASP_DITHER", "false")

    reloaded = importlib.reload(constant)

    assert reloaded.MODEL_DIR == "/opt/models"
    assert reloaded.DEFAULT_LOG_FILE == "session_log"
    assert reloaded.DEFAULT_DITHER is False


def test_empty_model_dir_means_bundled_models(reload_constant: pytest.MonkeyPatch) -> None:
    reload_constant.setenv("YASP_MODEL_DIR", "")

    reloaded = importlib.reload(constant)

    assert reloaded.MODEL_DIR is None
