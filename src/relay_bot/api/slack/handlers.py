"""
목적: Slack 이벤트 핸들러 등록을 제공한다.
설명: message/app_mention 이벤트를 요청 분류기에 연결하고, Bolt 전역 오류 처리기를 등록한다.
디자인 패턴: 라우터 등록 함수
참조: src/relay_bot/api/slack/context.py, src/relay_bot/core/relay/dispatcher.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from slack_bolt.context.say.async_say import AsyncSay

from relay_bot.api.slack.context import AppContext


def register_handlers(context: AppContext) -> None:
    """컨텍스트의 앱에 이벤트 핸들러를 등록한다."""

    app = context.app
    dispatcher = context.dispatcher
    logger = context.logger

    async def handle_message(message: Dict[str, Any], say: AsyncSay) -> None:
        await dispatcher.on_message(message, say)

    async def handle_mention(event: Dict[str, Any], say: AsyncSay) -> None:
        await dispatcher.on_mention(event, say)

    async def handle_error(error: Exception, body: Optional[Dict[str, Any]] = None) -> None:
        event_type = ((body or {}).get("event") or {}).get("type")
        logger.error(f"slack.listener.unhandled: event={event_type}, error={error!r}")

    app.message()(handle_message)
    app.event("app_mention")(handle_mention)
    app.error(handle_error)
    logger.info("slack.handlers.registered")
