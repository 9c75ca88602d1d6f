"""
목적: 중계 세션이 소비하는 생명주기 이벤트를 정의한다.
설명: 연결 수립/프레임 수신/전송 실패/연결 종료/시간 초과를 타입 있는 이벤트로 표현해 전달 방식과 세션 로직을 분리한다.
디자인 패턴: 이벤트 소싱(Event Sourcing)
참조: src/relay_bot/shared/relay/services/relay_session.py, src/relay_bot/integrations/backend/websocket_connector.py
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ConnectionOpened(BaseModel):
    """백엔드 연결이 열렸음을 알린다."""

    model_config = ConfigDict(frozen=True)


class FrameReceived(BaseModel):
    """백엔드 프레임 1건을 수신했음을 알린다.

    Args:
        raw: 수신한 원시 텍스트/바이너리 프레임.
    """

    model_config = ConfigDict(frozen=True)

    raw: Union[str, bytes]


class ConnectionFailed(BaseModel):
    """전송 계층 오류가 발생했음을 알린다.

    Args:
        error: 원인 예외.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: BaseException


class ConnectionClosed(BaseModel):
    """연결이 정상 종료되었음을 알린다(양쪽 어느 쪽이든).

    Args:
        code: WebSocket 종료 코드.
        reason: 종료 사유.
    """

    model_config = ConfigDict(frozen=True)

    code: Optional[int] = None
    reason: str = Field(default="")


class SessionTimedOut(BaseModel):
    """세션 제한 시간이 지나 연결을 강제로 닫았음을 알린다."""

    model_config = ConfigDict(frozen=True)


RelayEvent = Union[ConnectionOpened, FrameReceived, ConnectionFailed, ConnectionClosed, SessionTimedOut]
