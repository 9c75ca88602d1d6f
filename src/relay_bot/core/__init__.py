"""
목적: 도메인 코어 패키지를 정의한다.
설명: 수신 이벤트 분류와 고정 응답 같은 봇 고유 규칙을 묶는다.
디자인 패턴: 패키지 루트
참조: src/relay_bot/core/relay
"""
