"""
목적: 런타임 환경별 `.env` 로딩을 제공한다.
설명: 프로젝트 루트 `.env`를 먼저 로드한 뒤 `RELAY_ENV`/`ENV` 값으로 local/dev/stg/prod를 판별하고 환경별 리소스 파일을 덧씌운다.
디자인 패턴: 전략 패턴
참조: src/relay_bot/shared/config/settings.py, src/relay_bot/main.py
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from relay_bot.shared.logging import Logger, create_default_logger


class RuntimeEnvironment(BaseModel):
    """로드 결과 모델이다.

    Args:
        name: 판별된 런타임 환경(local/dev/stg/prod).
        loaded_files: 실제로 로드된 `.env` 파일 경로 목록.
    """

    name: str
    loaded_files: list[str] = Field(default_factory=list)


class RuntimeEnvironmentLoader:
    """런타임 환경별 `.env` 로더이다.

    동작 순서:
    1. 프로젝트 루트의 `.env`가 있으면 로드한다(없으면 경고만 남긴다).
    2. 후보 키(`RELAY_ENV`, `ENV`, `APP_ENV`) 중 처음 값이 있는 키로 환경을 결정한다.
    3. 값이 없으면 `local`로 간주하고 추가 파일을 읽지 않는다.
    4. `dev/stg/prod`이면 `src/relay_bot/resources/<env>/.env`를 기존 값 우선으로 로드한다.
    """

    _SUPPORTED_ENVS = {"local", "dev", "stg", "prod"}
    _ENV_ALIASES = {
        "development": "dev",
        "staging": "stg",
        "production": "prod",
    }
    _DEFAULT_ENV_KEY_CANDIDATES = ("RELAY_ENV", "ENV", "APP_ENV")
    _RESOURCE_ENV_FILENAME = ".env"

    def __init__(
        self,
        logger: Optional[Logger] = None,
        project_root: Optional[Path] = None,
        resources_root: Optional[Path] = None,
        env_key_candidates: Optional[Sequence[str]] = None,
    ) -> None:
        module_path = Path(__file__).resolve()
        self._project_root = Path(project_root or module_path.parents[4])
        self._resources_root = Path(resources_root or module_path.parents[2] / "resources")
        self._env_key_candidates = tuple(env_key_candidates or self._DEFAULT_ENV_KEY_CANDIDATES)
        self._logger = logger or create_default_logger("RuntimeEnvironmentLoader")

    @property
    def project_root(self) -> Path:
        """프로젝트 루트 경로를 반환한다."""

        return self._project_root

    @property
    def resources_root(self) -> Path:
        """환경 리소스 루트 경로를 반환한다."""

        return self._resources_root

    def load(self, override_root_env: bool = False) -> RuntimeEnvironment:
        """런타임 환경을 판별하고 관련 `.env`를 로드한다.

        Args:
            override_root_env: 루트 `.env`가 기존 환경 변수를 덮어쓸지 여부.

        Returns:
            판별된 환경과 로드된 파일 목록.
        """

        loaded: list[str] = []
        root_env = self._project_root / ".env"
        if root_env.exists():
            load_dotenv(dotenv_path=root_env, override=override_root_env)
            loaded.append(str(root_env))
        else:
            self._logger.warning(f"config.env.skip: path={root_env}")

        name = self._resolve_name()
        os.environ["ENV"] = name
        if name != "local":
            resource_env = self._resolve_resource_file(name)
            load_dotenv(dotenv_path=resource_env, override=False)
            loaded.append(str(resource_env))

        self._logger.info(f"config.env.loaded: env={name}, files={len(loaded)}")
        return RuntimeEnvironment(name=name, loaded_files=loaded)

    def _resolve_name(self) -> str:
        raw_value = self._first_candidate_value()
        if raw_value is None:
            return "local"
        normalized = raw_value.strip().lower()
        normalized = self._ENV_ALIASES.get(normalized, normalized)
        if normalized not in self._SUPPORTED_ENVS:
            supported_values = ", ".join(sorted(self._SUPPORTED_ENVS))
            raise ValueError(
                f"지원하지 않는 ENV 값입니다: {raw_value}. 허용값: {supported_values}"
            )
        return normalized

    def _first_candidate_value(self) -> str | None:
        for key in self._env_key_candidates:
            value = os.getenv(key)
            if value and value.strip():
                return value
        return None

    def _resolve_resource_file(self, name: str) -> Path:
        candidate = self._resources_root / name / self._RESOURCE_ENV_FILENAME
        if not candidate.exists():
            raise FileNotFoundError(f"환경 파일을 찾을 수 없습니다: {candidate}")
        return candidate
