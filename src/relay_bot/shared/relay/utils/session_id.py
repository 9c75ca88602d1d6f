"""
목적: 세션 식별자 생성과 백엔드 주소 조립을 제공한다.
설명: 요청마다 전역 고유한 불투명 토큰(UUID4)을 만들고 `<base>/<session_id>` 형태의 연결 주소를 만든다.
디자인 패턴: 유틸리티 함수
참조: src/relay_bot/shared/relay/services/streaming_relay.py
"""

from __future__ import annotations

from uuid import uuid4


def generate_session_id() -> str:
    """새 세션 ID를 생성한다."""

    return str(uuid4())


def build_backend_url(base_url: str, session_id: str) -> str:
    """백엔드 기본 주소 뒤에 세션 ID를 경로로 붙인다.

    Raises:
        ValueError: 기본 주소나 세션 ID가 비어 있는 경우.
    """

    base = (base_url or "").strip().rstrip("/")
    if not base:
        raise ValueError("backend base url은 비어 있을 수 없습니다.")
    if not session_id:
        raise ValueError("session_id는 비어 있을 수 없습니다.")
    return f"{base}/{session_id}"
