"""
목적: 중계 모델 공개 API를 제공한다.
설명: 프레임, 이벤트, 메시지 식별자, 세션 상태 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/relay/models/frame.py, src/relay_bot/shared/relay/models/event.py, src/relay_bot/shared/relay/models/session.py
"""

from relay_bot.shared.relay.models.event import (
    ConnectionClosed,
    ConnectionFailed,
    ConnectionOpened,
    FrameReceived,
    RelayEvent,
    SessionTimedOut,
)
from relay_bot.shared.relay.models.frame import BackendFrame, ChatRequestFrame, FrameType, parse_backend_frame
from relay_bot.shared.relay.models.message import MessageHandle
from relay_bot.shared.relay.models.session import SessionSnapshot, SessionState

__all__ = [
    "BackendFrame",
    "ChatRequestFrame",
    "FrameType",
    "parse_backend_frame",
    "ConnectionOpened",
    "FrameReceived",
    "ConnectionFailed",
    "ConnectionClosed",
    "SessionTimedOut",
    "RelayEvent",
    "MessageHandle",
    "SessionState",
    "SessionSnapshot",
]
