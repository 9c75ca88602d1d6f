"""
목적: 수신 이벤트 분류기와 핸들러를 제공한다.
설명: Slack 메시지/멘션 이벤트를 무시, 인사, 빈 멘션, 중계 요청으로 분류해 고정 응답을 보내거나 스트리밍 중계로 넘긴다.
디자인 패턴: 디스패처 + 전략 함수
참조: src/relay_bot/shared/relay/services/streaming_relay.py, src/relay_bot/api/slack/handlers.py, src/relay_bot/core/relay/const/messages.py
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

from pydantic import BaseModel

from relay_bot.core.relay.const import (
    APOLOGY_BLOCK_PREFIX,
    DEFAULT_GREETING_TOKEN,
    EMPTY_MENTION_TEMPLATE,
    GREETING_TEMPLATE,
    MENTION_APOLOGY,
    MESSAGE_APOLOGY,
)
from relay_bot.integrations.slack import build_section_blocks
from relay_bot.shared.logging import LogContext, Logger, create_default_logger
from relay_bot.shared.relay.interface import OutputSinkPort, RelayPort

SayFn = Callable[..., Awaitable[Any]]
SinkFactory = Callable[[str], OutputSinkPort]

_MENTION_PATTERN = re.compile(r"<@[A-Z0-9]+>")
_BOT_SUBTYPE = "bot_message"


class RequestKind(str, Enum):
    """수신 이벤트 분류 결과."""

    IGNORE = "IGNORE"
    GREETING = "GREETING"
    EMPTY_MENTION = "EMPTY_MENTION"
    RELAY = "RELAY"


class DispatchDecision(BaseModel):
    """분류 결과 모델이다.

    Args:
        kind: 분류 결과.
        request_text: 중계할 요청 원문(RELAY일 때).
        reply_text: 고정 응답 문구(GREETING/EMPTY_MENTION일 때).
        thread_ts: 고정 응답을 달 스레드 타임스탬프.
    """

    kind: RequestKind
    request_text: Optional[str] = None
    reply_text: Optional[str] = None
    thread_ts: Optional[str] = None


def strip_mention(text: str) -> str:
    """첫 번째 `<@ID>` 멘션 토큰을 제거하고 공백을 정리한다."""

    return _MENTION_PATTERN.sub("", text or "", count=1).strip()


def classify_message(message: Mapping[str, Any], greeting_token: str = DEFAULT_GREETING_TOKEN) -> DispatchDecision:
    """일반 메시지 이벤트를 분류한다."""

    text = message.get("text")
    if not text or message.get("subtype") == _BOT_SUBTYPE or message.get("bot_id"):
        return DispatchDecision(kind=RequestKind.IGNORE)
    if text.strip().lower() == greeting_token.strip().lower():
        return DispatchDecision(
            kind=RequestKind.GREETING,
            reply_text=GREETING_TEMPLATE.format(user=message.get("user")),
        )
    return DispatchDecision(kind=RequestKind.RELAY, request_text=text)


def classify_mention(event: Mapping[str, Any]) -> DispatchDecision:
    """멘션 이벤트를 분류한다. 빈 멘션 안내는 thread_ts가 있으면 그 스레드에, 없으면 멘션 자체에 단다."""

    text = strip_mention(event.get("text") or "")
    if not text:
        return DispatchDecision(
            kind=RequestKind.EMPTY_MENTION,
            reply_text=EMPTY_MENTION_TEMPLATE.format(user=event.get("user")),
            thread_ts=event.get("thread_ts") or event.get("ts"),
        )
    return DispatchDecision(kind=RequestKind.RELAY, request_text=text)


class RequestDispatcher:
    """수신 이벤트 핸들러 집합.

    핸들러 내부의 모든 예외는 경계에서 잡아 사과 메시지로 바꾸며, 사과 전송 실패도 로그만 남긴다.

    Args:
        relay: 스트리밍 중계 실행기.
        sink_factory: 채널 ID로 출력 싱크를 만드는 함수.
        greeting_token: 고정 인사 응답을 트리거하는 단어.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        relay: RelayPort,
        sink_factory: SinkFactory,
        greeting_token: str = DEFAULT_GREETING_TOKEN,
        logger: Optional[Logger] = None,
    ) -> None:
        self._relay = relay
        self._sink_factory = sink_factory
        self._greeting_token = greeting_token
        self._logger = logger or create_default_logger("RequestDispatcher")

    async def on_message(self, message: Mapping[str, Any], say: SayFn) -> Optional[DispatchDecision]:
        """일반 메시지 이벤트를 처리한다."""

        logger = self._logger.with_context(LogContext(user_id=message.get("user")))
        try:
            decision = classify_message(message, self._greeting_token)
            logger.info(f"dispatch.message: kind={decision.kind.value}")
            await self._execute(decision, message, say)
            return decision
        except Exception as error:  # noqa: BLE001 - 핸들러 경계에서 사과 메시지로 대체한다
            logger.error(f"dispatch.message.failed: error={error!r}")
            await self._apologize(say, MESSAGE_APOLOGY, logger)
            return None

    async def on_mention(self, event: Mapping[str, Any], say: SayFn) -> Optional[DispatchDecision]:
        """멘션 이벤트를 처리한다."""

        logger = self._logger.with_context(LogContext(user_id=event.get("user")))
        try:
            decision = classify_mention(event)
            logger.info(f"dispatch.mention: kind={decision.kind.value}")
            await self._execute(decision, event, say)
            return decision
        except Exception as error:  # noqa: BLE001 - 핸들러 경계에서 사과 메시지로 대체한다
            logger.error(f"dispatch.mention.failed: error={error!r}")
            await self._apologize(say, MENTION_APOLOGY, logger)
            return None

    async def _execute(self, decision: DispatchDecision, event: Mapping[str, Any], say: SayFn) -> None:
        if decision.kind is RequestKind.IGNORE:
            return
        if decision.kind is RequestKind.RELAY:
            sink = self._sink_factory(event["channel"])
            await self._relay.relay(decision.request_text or "", sink)
            return
        reply = decision.reply_text or ""
        await say(text=reply, blocks=build_section_blocks(reply), thread_ts=decision.thread_ts)

    async def _apologize(self, say: SayFn, apology: str, logger: Logger) -> None:
        try:
            await say(text=apology, blocks=build_section_blocks(APOLOGY_BLOCK_PREFIX + apology))
        except Exception as error:  # noqa: BLE001 - 사과 전송 실패는 로그로만 남긴다
            logger.error(f"dispatch.apology_failed: error={error!r}")
