"""
목적: 런타임 모듈 공개 API를 제공한다.
설명: 프로세스 감독자를 노출한다.
디자인 패턴: 퍼사드
참조: src/relay_bot/shared/runtime/supervisor.py
"""

from relay_bot.shared.runtime.supervisor import ProcessSupervisor

__all__ = ["ProcessSupervisor"]
