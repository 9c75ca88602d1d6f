"""
목적: 중계 인터페이스 공개 API를 제공한다.
설명: 출력 싱크/백엔드 연결/시계/중계 포트를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/relay/interface/ports.py
"""

from relay_bot.shared.relay.interface.ports import (
    BackendConnectionPort,
    BackendConnectorPort,
    ClockPort,
    OutputSinkPort,
    RelayPort,
)

__all__ = [
    "OutputSinkPort",
    "BackendConnectionPort",
    "BackendConnectorPort",
    "ClockPort",
    "RelayPort",
]
