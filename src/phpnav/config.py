import os

from pydantic import BaseModel

from phpnav.core.locator import DEFAULT_NAME_KINDS
from phpnav.core.versions import DEFAULT_AST_VERSION

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    ast_version: int = DEFAULT_AST_VERSION
    trace: bool = False
    name_kinds: tuple[str, ...] = tuple(sorted(DEFAULT_NAME_KINDS))


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_settings() -> Settings:
    name_kinds = os.getenv("PHPNAV_NAME_KINDS", ",".join(sorted(DEFAULT_NAME_KINDS)))
    return Settings(
        ast_version=_int_env("PHPNAV_AST_VERSION", DEFAULT_AST_VERSION),
        trace=os.getenv("PHPNAV_TRACE", "0").strip().lower() in _TRUTHY,
        name_kinds=tuple(k.strip() for k in name_kinds.split(",") if k.strip()),
    )
