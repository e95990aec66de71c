# Runtime settings read from Streamlit secrets (safe defaults provided).

from dataclasses import dataclass

import streamlit as st


def _secret(name: str, default):
    try:
        return st.secrets.get(name, default)
    except FileNotFoundError:  # no secrets.toml at all
        return default


def _flag(val, default: bool) -> bool:
    if val is None: return default
    if isinstance(val, bool): return val
    return str(val).strip().lower() in ("1", "true", "yes", "on")


def _positive_int(val, default: int) -> int:
    try:
        out = int(val)
    except (TypeError, ValueError):
        return default
    return out if out > 0 else default


@dataclass(frozen=True)
class Settings:
    public_url: str = ""
    copied_notice_seconds: int = 3
    tick_seconds: int = 1
    native_share: bool = True
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        public_url=str(_secret("PUBLIC_URL", "") or "").strip().rstrip("/"),
        copied_notice_seconds=_positive_int(_secret("COPIED_NOTICE_SECONDS", 3), 3),
        tick_seconds=_positive_int(_secret("TICK_SECONDS", 1), 1),
        native_share=_flag(_secret("NATIVE_SHARE", True), True),
        log_level=str(_secret("LOG_LEVEL", "INFO")).upper(),
    )


def page_origin(settings: Settings) -> str:
    """Origin used in shareable links.

    ``PUBLIC_URL`` wins; otherwise the request's Host header; otherwise ""
    (links become relative, ``/?date=...``).
    """
    if settings.public_url:
        return settings.public_url
    try:
        host = st.context.headers.get("Host")
    except Exception:  # outside a browser session (bare mode, AppTest)
        return ""
    if not host:
        return ""
    scheme = "http" if host.startswith(("localhost", "127.0.0.1")) else "https"
    return f"{scheme}://{host}"
