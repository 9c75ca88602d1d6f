"""
목적: 중계 세션 상태 모델을 정의한다.
설명: 세션 생명주기 상태 열거형과 외부에 노출하는 세션 스냅샷을 Pydantic으로 제공한다.
디자인 패턴: 상태 패턴 + 데이터 전송 객체(DTO)
참조: src/relay_bot/shared/relay/services/relay_session.py
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from relay_bot.shared.relay.models.message import MessageHandle


class SessionState(str, Enum):
    """세션 상태 열거형.

    선언 순서가 곧 진행 순서이며, 상태는 앞으로만 이동한다.
    """

    CREATED = "CREATED"
    AWAITING_ACK = "AWAITING_ACK"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    STREAMING = "STREAMING"
    CLOSED = "CLOSED"
    TIMED_OUT = "TIMED_OUT"
    FAILED = "FAILED"

    @property
    def rank(self) -> int:
        return _STATE_ORDER.index(self)

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_STATE_ORDER = list(SessionState)
_TERMINAL_STATES = frozenset({SessionState.CLOSED, SessionState.TIMED_OUT, SessionState.FAILED})


class SessionSnapshot(BaseModel):
    """세션 상태 스냅샷이다.

    Args:
        session_id: 세션 식별자.
        state: 현재 상태.
        acknowledged: 백엔드 확인 응답 수신 여부.
        text: 지금까지 누적된 스트림 텍스트.
        displayed_text: 출력 메시지에 마지막으로 반영된 텍스트.
        handle: 출력 메시지 식별자. 게시에 실패했으면 None.
        error_text: 백엔드가 보고한 에러 설명.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str
    state: SessionState
    acknowledged: bool = False
    text: str = Field(default="")
    displayed_text: Optional[str] = None
    handle: Optional[MessageHandle] = None
    error_text: Optional[str] = None
