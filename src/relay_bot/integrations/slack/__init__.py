"""
목적: Slack 연동 공개 API를 제공한다.
설명: 출력 싱크 어댑터와 블록 렌더링 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/integrations/slack/output_sink.py, src/relay_bot/integrations/slack/blocks.py
"""

from relay_bot.integrations.slack.blocks import build_section_blocks
from relay_bot.integrations.slack.output_sink import SlackOutputSink

__all__ = ["SlackOutputSink", "build_section_blocks"]
