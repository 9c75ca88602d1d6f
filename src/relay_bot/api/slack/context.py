"""
목적: 애플리케이션 컨텍스트를 제공한다.
설명: 설정, Bolt 앱, 중계 실행기, 요청 분류기를 하나의 명시적 객체로 묶어 핸들러 등록에 전달한다. 기동 시 1회 생성한다.
디자인 패턴: 컴포지션 루트
참조: src/relay_bot/api/slack/handlers.py, src/relay_bot/main.py
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from slack_bolt.async_app import AsyncApp

from relay_bot.core.relay import RequestDispatcher
from relay_bot.integrations.backend import WebSocketBackendConnector
from relay_bot.integrations.slack import SlackOutputSink
from relay_bot.shared.config import RelaySettings
from relay_bot.shared.logging import Logger, create_default_logger
from relay_bot.shared.relay import OutputSinkPort, StreamingRelay


@dataclass(frozen=True)
class AppContext:
    """실행 중 공유되는 구성 요소 묶음."""

    settings: RelaySettings
    app: AsyncApp
    relay: StreamingRelay
    dispatcher: RequestDispatcher
    logger: Logger


def build_app_context(
    settings: RelaySettings,
    logger: Optional[Logger] = None,
    app: Optional[AsyncApp] = None,
) -> AppContext:
    """설정으로 컨텍스트를 조립한다."""

    logger = logger or create_default_logger("RelayBot")
    app = app or AsyncApp(token=settings.slack_bot_token, signing_secret=settings.slack_signing_secret)
    connector = WebSocketBackendConnector(
        connect_timeout_seconds=settings.relay_connect_timeout_seconds,
        logger=logger,
    )
    relay = StreamingRelay(
        connector=connector,
        backend_base_url=settings.backend_ws_url,
        ack_marker=settings.relay_ack_marker,
        session_timeout_seconds=settings.relay_session_timeout_seconds,
        update_interval_seconds=settings.relay_update_interval_seconds,
        default_retry_after_seconds=settings.relay_default_retry_after_seconds,
        logger=logger,
    )

    def sink_factory(channel: str) -> OutputSinkPort:
        return SlackOutputSink(app.client, channel, logger=logger)

    dispatcher = RequestDispatcher(
        relay=relay,
        sink_factory=sink_factory,
        greeting_token=settings.relay_greeting_token,
        logger=logger,
    )
    return AppContext(settings=settings, app=app, relay=relay, dispatcher=dispatcher, logger=logger)
