"""
목적: 외부 진입점 패키지를 정의한다.
설명: Slack 이벤트 수신 표면을 묶는다.
디자인 패턴: 패키지 루트
참조: src/relay_bot/api/slack
"""
