"""
목적: 요청 분류 모듈 공개 API를 제공한다.
설명: 이벤트 분류 함수와 핸들러 집합을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/core/relay/dispatcher.py
"""

from relay_bot.core.relay.dispatcher import (
    DispatchDecision,
    RequestDispatcher,
    RequestKind,
    classify_mention,
    classify_message,
    strip_mention,
)

__all__ = [
    "DispatchDecision",
    "RequestDispatcher",
    "RequestKind",
    "classify_mention",
    "classify_message",
    "strip_mention",
]
