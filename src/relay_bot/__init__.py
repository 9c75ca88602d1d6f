"""
목적: relay_bot 패키지 루트를 정의한다.
설명: Slack 요청을 스트리밍 백엔드로 중계하는 봇 애플리케이션의 최상위 패키지이다.
디자인 패턴: 패키지 루트
참조: src/relay_bot/main.py
"""

__version__ = "0.1.0"
