"""
목적: 테스트 공통 환경/로깅 훅을 단일화해 제공한다.
설명: 루트 .env가 있으면 로딩하되 중계 설정 값은 테스트마다 격리하고, 테스트 진행 상황을 로깅한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅
참조: pyproject.toml, tests/relay_fakes.py
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

import pytest
from dotenv import load_dotenv

_LOGGER = logging.getLogger("tests")
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_RELAY_ENV_KEYS = (
    "SLACK_BOT_TOKEN",
    "SLACK_SIGNING_SECRET",
    "SLACK_APP_TOKEN",
    "BACKEND_WS_URL",
    "RELAY_ACK_MARKER",
    "RELAY_GREETING_TOKEN",
    "RELAY_SESSION_TIMEOUT_SECONDS",
    "RELAY_UPDATE_INTERVAL_SECONDS",
    "RELAY_DEFAULT_RETRY_AFTER_SECONDS",
    "RELAY_CONNECT_TIMEOUT_SECONDS",
    "RELAY_ENV",
    "ENV",
    "APP_ENV",
)


def _load_env_files() -> None:
    """환경 변수 파일이 있으면 로딩한다."""

    env_path = _PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_files()
os.environ["LOG_STDOUT"] = "false"


@pytest.fixture
def clean_relay_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """중계 설정 관련 환경 변수를 비운 monkeypatch를 반환하고, 종료 시 환경 전체를 되돌린다."""

    saved = dict(os.environ)
    for key in _RELAY_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield monkeypatch
    os.environ.clear()
    os.environ.update(saved)


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
