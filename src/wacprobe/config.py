# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for wacprobe."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError
from .version import __version__

DEFAULT_USER_AGENT = f"wacprobe/{__version__}"

MIN_THREADS, MAX_THREADS = 1, 100
MIN_WAIT_SECONDS, MAX_WAIT_SECONDS = 1, 900
MIN_STATUS, MAX_STATUS = 100, 999
DEFAULT_THREADS = 10
DEFAULT_WAIT_SECONDS = 5


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = float(DEFAULT_WAIT_SECONDS)
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        user_agent = os.getenv("WACPROBE_USER_AGENT", "").strip() or cls.user_agent
        return cls(user_agent=user_agent)


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


@dataclass
class ProbeDefaults:
    """CLI defaults for the probe, overridable from the environment."""

    threads: int = DEFAULT_THREADS
    wait_seconds: int = DEFAULT_WAIT_SECONDS

    @classmethod
    def from_env(cls) -> ProbeDefaults:
        return cls(
            threads=_int_env("WACPROBE_THREADS", cls.threads),
            wait_seconds=_int_env("WACPROBE_WAIT", cls.wait_seconds),
        )


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str


def parse_auth(value: str | None) -> BasicAuth | None:
    """Split a ``username:password`` string on the first colon."""
    if not value:
        return None
    username, sep, password = value.partition(":")
    if not sep:
        raise ConfigError("auth value is invalid, must be provided as 'username:password'")
    return BasicAuth(username=username, password=password)


@dataclass(frozen=True)
class DetectionRules:
    """
    Conditions whose match means access was denied.

    Each rule is optional; ``None`` means the rule is not configured. A status of
    ``0`` is an explicit (and invalid) value, not an absent one.
    """

    status: int | None = None
    redirect: str | None = None
    body: str | None = None

    @property
    def configured(self) -> bool:
        return self.status is not None or bool(self.redirect) or bool(self.body)

    def validate(self) -> None:
        if not self.configured:
            raise ConfigError("Must supply either status, redirect or body arguments to check")
        if self.status is not None and not MIN_STATUS <= self.status <= MAX_STATUS:
            raise ConfigError(f"Status is invalid, must be between {MIN_STATUS} and {MAX_STATUS}")


@dataclass(frozen=True)
class ProbeConfig:
    """Read-only request configuration shared by every requester."""

    rules: DetectionRules
    threads: int = DEFAULT_THREADS
    wait_seconds: int = DEFAULT_WAIT_SECONDS
    cookie: str | None = None
    auth: BasicAuth | None = None

    @property
    def timeout(self) -> float:
        return float(self.wait_seconds)

    def validate(self) -> ProbeConfig:
        self.rules.validate()
        if not MIN_THREADS <= self.threads <= MAX_THREADS:
            raise ConfigError(f"Threads can be between {MIN_THREADS} and {MAX_THREADS}")
        if not MIN_WAIT_SECONDS <= self.wait_seconds <= MAX_WAIT_SECONDS:
            raise ConfigError(f"Wait can be between {MIN_WAIT_SECONDS} and {MAX_WAIT_SECONDS} (15mins)")
        return self

    @classmethod
    def build(
        cls,
        *,
        threads: int = DEFAULT_THREADS,
        wait_seconds: int = DEFAULT_WAIT_SECONDS,
        cookie: str | None = None,
        auth: str | None = None,
        status: int | None = None,
        redirect: str | None = None,
        body: str | None = None,
    ) -> ProbeConfig:
        """Build and validate a config from raw CLI-style values."""
        config = cls(
            rules=DetectionRules(status=status, redirect=redirect or None, body=body or None),
            threads=threads,
            wait_seconds=wait_seconds,
            cookie=cookie or None,
            auth=parse_auth(auth),
        )
        return config.validate()


__all__ = [
    "BasicAuth",
    "DEFAULT_USER_AGENT",
    "DetectionRules",
    "HttpSettings",
    "ProbeConfig",
    "ProbeDefaults",
    "load_http_settings",
    "parse_auth",
]
