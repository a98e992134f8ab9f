"""
Runtime settings read from the environment (and a local .env file).

Everything has a default except the API keys; a process without keys still
starts, but every /combined-jobs request fails until keys are configured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Union

from dotenv import load_dotenv

from .errors import ConfigurationError
from .keys import KEY_POLICIES, KeyPolicy


@dataclass(frozen=True)
class Settings:
    """Process configuration.

    Environment variables:
        RAPIDAPI_KEYS: comma-separated API keys.
        KEY1..KEYn: additional keys, read in order until the first gap.
        HOST, PORT: bind address of the HTTP server (127.0.0.1:3000).
        REQUEST_TIMEOUT_SECONDS: outbound request timeout (30).
        KEY_POLICY: "per_request" (default) or "per_source".
        ENABLED_SOURCES: comma-separated source names; empty means the defaults.
        LOG_LEVEL: console log level (INFO).
        LOG_FILE: optional path of a DEBUG log file.
        EXPOSE_CREDENTIAL: write the unmasked key into the export metadata.
    """

    api_keys: List[str] = field(default_factory=list)
    host: str = "127.0.0.1"
    port: int = 3000
    request_timeout_seconds: float = 30.0
    key_policy: KeyPolicy = "per_request"
    enabled_sources: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    expose_credential: bool = False


def _split_csv(raw: Optional[str]) -> List[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def _as_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


def _as_number(
    env: Mapping[str, str], name: str, default: str, cast: Callable[[str], Union[int, float]]
) -> Union[int, float]:
    raw = (env.get(name) or default).strip()
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def read_api_keys(env: Mapping[str, str]) -> List[str]:
    """Collect keys from RAPIDAPI_KEYS plus KEY1, KEY2, ... (stops at the first gap)."""
    keys = _split_csv(env.get("RAPIDAPI_KEYS"))
    index = 1
    while f"KEY{index}" in env:
        value = (env.get(f"KEY{index}") or "").strip()
        if value:
            keys.append(value)
        index += 1
    return keys


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    if env is None:
        load_dotenv()
        env = os.environ

    key_policy = (env.get("KEY_POLICY") or "per_request").strip().lower()
    if key_policy not in KEY_POLICIES:
        raise ConfigurationError(f"KEY_POLICY must be one of {', '.join(KEY_POLICIES)}, got {key_policy!r}")

    return Settings(
        api_keys=read_api_keys(env),
        host=(env.get("HOST") or "127.0.0.1").strip(),
        port=_as_number(env, "PORT", "3000", int),
        request_timeout_seconds=_as_number(env, "REQUEST_TIMEOUT_SECONDS", "30", float),
        key_policy=key_policy,
        enabled_sources=_split_csv(env.get("ENABLED_SOURCES")),
        log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
        log_file=(env.get("LOG_FILE") or "").strip() or None,
        expose_credential=_as_bool(env.get("EXPOSE_CREDENTIAL")),
    )
