"""
목적: 애플리케이션 설정 로더를 제공한다.
설명: 허용된 환경 변수와 dict 오버라이드를 병합해 설정 사전을 만든다. 토큰/URL처럼 원문을 지켜야 하는 키는 타입 변환을 건너뛴다.
디자인 패턴: 빌더 패턴
참조: src/relay_bot/shared/config/settings.py
"""

from __future__ import annotations

import os
from typing import Any, Dict, Iterable, Mapping, Optional

from relay_bot.shared.logging import Logger, create_default_logger


class ConfigLoader:
    """설정 로더 구현체이다.

    나중에 추가한 소스가 앞선 소스를 덮어쓴다.

    Args:
        logger: 주입 가능한 로거.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("ConfigLoader")
        self._sources: list[Dict[str, Any]] = []

    def add_env(self, keys: Iterable[str], raw_keys: Iterable[str] = ()) -> "ConfigLoader":
        """환경 변수 설정을 추가한다.

        Args:
            keys: 읽을 변수 이름. 대소문자를 구분하지 않으며 결과 키는 소문자다.
            raw_keys: 타입 변환 없이 문자열 그대로 보관할 변수 이름.
        """

        raw = {key.upper() for key in raw_keys}
        env_data: Dict[str, Any] = {}
        for key in keys:
            value = os.environ.get(key.upper())
            if value is None or not value.strip():
                continue
            env_data[key.lower()] = value if key.upper() in raw else self._parse_value(value)
        self._logger.debug(f"config.env.collected: keys={len(env_data)}")
        if env_data:
            self._sources.append(env_data)
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """수집된 설정을 병합해 반환한다."""

        merged: Dict[str, Any] = {}
        for source in self._sources:
            merged.update(source)
        if overrides:
            merged.update({str(key).lower(): value for key, value in overrides.items()})
        return merged

    def _parse_value(self, raw: str) -> Any:
        lowered = raw.strip().lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered in {"null", "none"}:
            return None
        try:
            if "." in raw:
                return float(raw)
            return int(raw)
        except ValueError:
            return raw
