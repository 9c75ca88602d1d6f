"""
목적: Slack 진입점 공개 API를 제공한다.
설명: 애플리케이션 컨텍스트와 핸들러 등록 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/api/slack/context.py, src/relay_bot/api/slack/handlers.py
"""

from relay_bot.api.slack.context import AppContext, build_app_context
from relay_bot.api.slack.handlers import register_handlers

__all__ = ["AppContext", "build_app_context", "register_handlers"]
