"""
목적: 중계 봇 실행 엔트리 포인트를 제공한다.
설명: 런타임 환경 로딩, 설정 검증, 최후 처리기 설치, 핸들러 등록 후 Slack Socket Mode를 1회 기동하고 종료 신호까지 대기한다.
디자인 패턴: 단일 책임 원칙(SRP)
참조: src/relay_bot/api/slack/context.py, src/relay_bot/shared/runtime/supervisor.py, src/relay_bot/shared/config/runtime_env_loader.py
"""

from __future__ import annotations

import asyncio

from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler

from relay_bot.api.slack import build_app_context, register_handlers
from relay_bot.shared.config import RuntimeEnvironmentLoader, load_relay_settings
from relay_bot.shared.exceptions import BaseAppException
from relay_bot.shared.logging import create_default_logger
from relay_bot.shared.runtime import ProcessSupervisor


async def run() -> None:
    """봇을 기동하고 종료 요청까지 실행한다."""

    logger = create_default_logger("RelayBot")
    # 런타임 환경(local/dev/stg/prod)을 판별해 환경 파일을 로드한다.
    RuntimeEnvironmentLoader(logger=logger).load()
    try:
        settings = load_relay_settings(logger=logger)
    except BaseAppException as error:
        logger.critical(f"app.config_invalid: code={error.code}", metadata=error.to_dict())
        return

    loop = asyncio.get_running_loop()
    supervisor = ProcessSupervisor(logger=logger)
    supervisor.install(loop)

    context = build_app_context(settings, logger=logger)
    register_handlers(context)
    handler = AsyncSocketModeHandler(context.app, settings.slack_app_token)

    if not await supervisor.start(handler.connect_async):
        return
    logger.info("app.running: ⚡️ Bolt app is running!")
    supervisor.install_signal_handlers(loop)
    try:
        await supervisor.wait_for_stop()
    finally:
        await handler.close_async()
        logger.info("app.stopped")


def main() -> None:
    """콘솔 스크립트 진입점."""

    asyncio.run(run())


if __name__ == "__main__":
    main()
