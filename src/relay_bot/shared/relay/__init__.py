"""
목적: 스트리밍 중계 모듈 공개 API를 제공한다.
설명: 세션 상태 머신, 출력 투영기, 중계 실행기와 관련 모델/포트를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/relay/services, src/relay_bot/shared/relay/models, src/relay_bot/shared/relay/interface
"""

from relay_bot.shared.relay.interface import (
    BackendConnectionPort,
    BackendConnectorPort,
    ClockPort,
    OutputSinkPort,
    RelayPort,
)
from relay_bot.shared.relay.models import MessageHandle, SessionSnapshot, SessionState
from relay_bot.shared.relay.services import OutputProjector, RelaySession, StreamingRelay

__all__ = [
    "BackendConnectionPort",
    "BackendConnectorPort",
    "ClockPort",
    "OutputSinkPort",
    "RelayPort",
    "MessageHandle",
    "SessionSnapshot",
    "SessionState",
    "OutputProjector",
    "RelaySession",
    "StreamingRelay",
]
