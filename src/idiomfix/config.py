import os

from pydantic import BaseModel, field_validator

from idiomfix.core.engine import ConfigurationError
from idiomfix.presets import DEFAULT_PRESET, PRESET_NAMES
from idiomfix.rules import ALL_IDIOMS

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    preset: str = DEFAULT_PRESET
    # Overrides the preset when not empty.
    rules: list[str] = []
    type_info: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings() -> Settings:
    """Read ``IDIOMFIX_*`` environment variables into a ``Settings`` object."""
    preset = os.getenv("IDIOMFIX_PRESET", DEFAULT_PRESET)
    if preset not in PRESET_NAMES:
        raise ConfigurationError(f"Unknown preset '{preset}' in IDIOMFIX_PRESET")

    rules = [rule.strip() for rule in os.getenv("IDIOMFIX_RULES", "").split(",") if rule.strip()]
    unknown = sorted(set(rules) - {idiom.id for idiom in ALL_IDIOMS})
    if unknown:
        raise ConfigurationError(f"Unknown rule(s) in IDIOMFIX_RULES: {', '.join(unknown)}")
    try:
        return Settings(
            preset=preset,
            rules=rules,
            type_info=os.getenv("IDIOMFIX_TYPE_INFO", "0").strip().lower() in _TRUTHY,
            log_level=os.getenv("IDIOMFIX_LOG_LEVEL", "WARNING"),
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
