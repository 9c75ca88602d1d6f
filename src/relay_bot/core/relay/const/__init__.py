"""
목적: 요청 분류기 상수 공개 API를 제공한다.
설명: 고정 응답 문구와 기본 인사 토큰을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/core/relay/const/messages.py
"""

from relay_bot.core.relay.const.messages import (
    APOLOGY_BLOCK_PREFIX,
    EMPTY_MENTION_TEMPLATE,
    GREETING_TEMPLATE,
    MENTION_APOLOGY,
    MESSAGE_APOLOGY,
)

DEFAULT_GREETING_TOKEN = "hello"

__all__ = [
    "GREETING_TEMPLATE",
    "EMPTY_MENTION_TEMPLATE",
    "MESSAGE_APOLOGY",
    "MENTION_APOLOGY",
    "APOLOGY_BLOCK_PREFIX",
    "DEFAULT_GREETING_TOKEN",
]
