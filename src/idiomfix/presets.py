"""Named rule sets, mirroring the configurations the rules ship with."""

from collections.abc import Sequence

from idiomfix.core.engine import ConfigurationError
from idiomfix.core.matching import Idiom
from idiomfix.rules import ALL_IDIOMS

DEFAULT_PRESET = "recommended"

_PRESET_RULES: dict[str, tuple[str, ...]] = {
    "recommended": ("prefer-array-at",),
    "modernization": ("prefer-array-at", "prefer-array-fill", "prefer-includes"),
    "performance-improvements": (
        "prefer-array-from-map",
        "prefer-timer-args",
        "prefer-date-now",
        "prefer-regex-test",
        "prefer-array-some",
    ),
    "all": tuple(idiom.id for idiom in ALL_IDIOMS if not idiom.requires_types),
}

PRESET_NAMES: tuple[str, ...] = tuple(_PRESET_RULES)


def preset_rule_ids(name: str) -> tuple[str, ...]:
    try:
        return _PRESET_RULES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown preset '{name}'. Available presets: {', '.join(PRESET_NAMES)}") from None


def resolve_idioms(preset: str = DEFAULT_PRESET, rules: Sequence[str] | None = None) -> list[Idiom]:
    """Idioms for an explicit rule list, or for ``preset`` when no rules are given, in catalogue order."""
    wanted = set(rules) if rules else set(preset_rule_ids(preset))
    known = {idiom.id for idiom in ALL_IDIOMS}
    unknown = sorted(wanted - known)
    if unknown:
        raise ConfigurationError(f"Unknown rule(s): {', '.join(unknown)}")
    return [idiom for idiom in ALL_IDIOMS if idiom.id in wanted]
