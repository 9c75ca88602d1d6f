"""
목적: 런타임 환경 로더를 검증한다.
설명: 기본 local 판별, 별칭 정규화, 환경별 리소스 파일 로딩, 잘못된 값 거부를 확인한다.
디자인 패턴: 상태 기반 단위 테스트
참조: src/relay_bot/shared/config/runtime_env_loader.py
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from relay_bot.shared.config import RuntimeEnvironmentLoader

from relay_fakes import quiet_logger


def _loader(tmp_path: Path) -> RuntimeEnvironmentLoader:
    return RuntimeEnvironmentLoader(
        logger=quiet_logger(),
        project_root=tmp_path,
        resources_root=tmp_path / "resources",
    )


def test_defaults_to_local_without_env(clean_relay_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """환경 값이 없으면 local로 판별하고 추가 파일을 읽지 않아야 한다."""

    result = _loader(tmp_path).load()

    assert result.name == "local"
    assert result.loaded_files == []


def test_alias_loads_resource_env(clean_relay_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """별칭(production)은 prod로 정규화되고 리소스 파일을 기존 값 우선으로 로드해야 한다."""

    resource = tmp_path / "resources" / "prod" / ".env"
    resource.parent.mkdir(parents=True)
    resource.write_text("RELAY_GREETING_TOKEN=howdy\nBACKEND_WS_URL=ws://from-file\n", encoding="utf-8")
    clean_relay_env.setenv("ENV", "production")
    clean_relay_env.setenv("BACKEND_WS_URL", "ws://from-process")

    result = _loader(tmp_path).load()

    assert result.name == "prod"
    assert result.loaded_files == [str(resource)]
    assert os.environ["RELAY_GREETING_TOKEN"] == "howdy"
    assert os.environ["BACKEND_WS_URL"] == "ws://from-process"


def test_unknown_env_is_rejected(clean_relay_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """지원하지 않는 환경 값은 거부해야 한다."""

    clean_relay_env.setenv("ENV", "qa")

    with pytest.raises(ValueError):
        _loader(tmp_path).load()
