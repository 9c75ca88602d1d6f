"""
목적: 요청 분류기의 고정 응답 문구를 정의한다.
설명: 인사, 빈 멘션 안내, 핸들러 오류 사과 문구를 제공한다.
디자인 패턴: 상수 모듈
참조: src/relay_bot/core/relay/dispatcher.py
"""

GREETING_TEMPLATE = "Hey there <@{user}>! 👋\nI'm your DevOps assistant. How can I help you today?"
EMPTY_MENTION_TEMPLATE = "Hi <@{user}>! How can I help you?"
MESSAGE_APOLOGY = "Sorry, there was an error processing your message."
MENTION_APOLOGY = "Sorry, there was an error processing your mention."
APOLOGY_BLOCK_PREFIX = "❌ "
