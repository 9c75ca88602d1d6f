"""
목적: Slack 메시지 블록 렌더링을 제공한다.
설명: 텍스트를 mrkdwn section 블록으로 감싸며, section 텍스트 한도(3000자)를 넘으면 여러 블록으로 나눈다.
디자인 패턴: 유틸리티 함수
참조: src/relay_bot/integrations/slack/output_sink.py, src/relay_bot/core/relay/dispatcher.py
"""

from __future__ import annotations

from typing import Any, Dict, List

SECTION_TEXT_LIMIT = 3000
MAX_BLOCKS = 50
_ELLIPSIS = "…"


def build_section_blocks(text: str) -> List[Dict[str, Any]]:
    """텍스트를 mrkdwn section 블록 목록으로 변환한다."""

    if not text:
        return []
    pieces = [text[start : start + SECTION_TEXT_LIMIT] for start in range(0, len(text), SECTION_TEXT_LIMIT)]
    if len(pieces) > MAX_BLOCKS:
        pieces = pieces[:MAX_BLOCKS]
        pieces[-1] = pieces[-1][: SECTION_TEXT_LIMIT - len(_ELLIPSIS)] + _ELLIPSIS
    return [{"type": "section", "text": {"type": "mrkdwn", "text": piece}} for piece in pieces]
