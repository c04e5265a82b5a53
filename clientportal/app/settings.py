from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping, Optional

from ..utils.logging import env_debug_enabled

DEFAULT_API_BASE_URL = "https://app.ignitegrowth.biz"


@dataclass(frozen=True)
class PortalSettings:
    """Typed runtime settings for the portal client."""

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: int = 10
    retries: int = 2
    session_dir: str = "."
    debug_logging: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PortalSettings":
        """Build settings from ``PORTAL_*`` environment variables."""
        env = os.environ if environ is None else environ
        payload = {}
        for key, var in (
            ("api_base_url", "PORTAL_API_BASE_URL"),
            ("request_timeout_s", "PORTAL_REQUEST_TIMEOUT_S"),
            ("retries", "PORTAL_RETRIES"),
            ("session_dir", "PORTAL_SESSION_DIR"),
        ):
            value = env.get(var)
            if value not in (None, ""):
                payload[key] = value
        settings = cls(debug_logging=env_debug_enabled(env))
        return settings.apply_dict(payload)

    def apply_dict(self, payload: Mapping[str, Any]) -> "PortalSettings":
        """Return a copy with recognized keys from ``payload`` applied.

        Raises:
            ValueError: when a value cannot be coerced to its field type.
        """
        updates = {}
        if "api_base_url" in payload:
            updates["api_base_url"] = self._coerce_url(payload["api_base_url"])
        if "request_timeout_s" in payload:
            updates["request_timeout_s"] = self._coerce_int(
                "request_timeout_s", payload["request_timeout_s"], minimum=1
            )
        if "retries" in payload:
            updates["retries"] = self._coerce_int("retries", payload["retries"], minimum=0)
        if "session_dir" in payload:
            updates["session_dir"] = str(payload["session_dir"] or "").strip() or "."
        if "debug_logging" in payload:
            updates["debug_logging"] = self._coerce_bool(payload["debug_logging"])
        return replace(self, **updates) if updates else self

    def to_dict(self) -> dict:
        return asdict(self)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_url(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("api_base_url must be a non-empty string.")
        url = value.strip().rstrip("/")
        if not url.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://.")
        return url

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: int) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        try:
            coerced = int(str(value).strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer.") from exc
        if coerced < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return coerced


__all__ = ["DEFAULT_API_BASE_URL", "PortalSettings"]
