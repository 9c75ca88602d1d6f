"""
목적: 외부 시스템 연동 패키지를 정의한다.
설명: 백엔드 WebSocket과 Slack 출력 채널 어댑터를 묶는다.
디자인 패턴: 패키지 루트
참조: src/relay_bot/integrations/backend, src/relay_bot/integrations/slack
"""
