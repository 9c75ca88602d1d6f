"""
목적: 세션 ID 생성과 백엔드 주소 조립을 검증한다.
설명: 고유성, 경로 결합 규칙, 빈 입력 거부를 확인한다.
디자인 패턴: 순수 함수 단위 테스트
참조: src/relay_bot/shared/relay/utils/session_id.py
"""

from __future__ import annotations

import pytest

from relay_bot.shared.relay.utils import build_backend_url, generate_session_id


def test_generate_session_id_is_unique() -> None:
    """생성된 세션 ID는 서로 달라야 한다."""

    ids = {generate_session_id() for _ in range(200)}
    assert len(ids) == 200


def test_build_backend_url_appends_session_path() -> None:
    """기본 주소 끝의 슬래시를 정리하고 세션 ID를 경로로 붙여야 한다."""

    assert build_backend_url("ws://host:8000/ws", "abc") == "ws://host:8000/ws/abc"
    assert build_backend_url("ws://host:8000/ws/", "abc") == "ws://host:8000/ws/abc"


@pytest.mark.parametrize("base_url, session_id", [("", "abc"), ("   ", "abc"), ("ws://host", "")])
def test_build_backend_url_rejects_empty_input(base_url: str, session_id: str) -> None:
    """빈 주소나 빈 세션 ID는 거부해야 한다."""

    with pytest.raises(ValueError):
        build_backend_url(base_url, session_id)
