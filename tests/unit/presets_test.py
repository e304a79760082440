"""Tests for rule presets."""

import pytest

from idiomfix.core.engine import ConfigurationError
from idiomfix.presets import DEFAULT_PRESET, PRESET_NAMES, preset_rule_ids, resolve_idioms
from idiomfix.rules import ALL_IDIOMS, get_idiom


class TestPresets:
    def test_names(self) -> None:
        assert PRESET_NAMES == ("recommended", "modernization", "performance-improvements", "all")
        assert DEFAULT_PRESET == "recommended"

    def test_recommended(self) -> None:
        assert preset_rule_ids("recommended") == ("prefer-array-at",)

    def test_modernization(self) -> None:
        assert preset_rule_ids("modernization") == ("prefer-array-at", "prefer-array-fill", "prefer-includes")

    def test_performance_improvements(self) -> None:
        assert set(preset_rule_ids("performance-improvements")) == {
            "prefer-array-from-map",
            "prefer-timer-args",
            "prefer-date-now",
            "prefer-regex-test",
            "prefer-array-some",
        }

    def test_all_excludes_rules_needing_types(self) -> None:
        rule_ids = preset_rule_ids("all")
        assert "no-indexof-equality" not in rule_ids
        assert len(rule_ids) == len(ALL_IDIOMS) - 1

    def test_every_preset_rule_exists(self) -> None:
        for name in PRESET_NAMES:
            for rule_id in preset_rule_ids(name):
                assert get_idiom(rule_id).id == rule_id

    def test_unknown_preset(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown preset 'strict'"):
            preset_rule_ids("strict")


class TestResolveIdioms:
    def test_default_preset(self) -> None:
        assert [idiom.id for idiom in resolve_idioms()] == ["prefer-array-at"]

    def test_explicit_rules_override_preset(self) -> None:
        idioms = resolve_idioms("all", ["prefer-includes"])
        assert [idiom.id for idiom in idioms] == ["prefer-includes"]

    def test_catalogue_order(self) -> None:
        idioms = resolve_idioms(rules=["prefer-includes", "prefer-array-at"])
        assert [idiom.id for idiom in idioms] == ["prefer-array-at", "prefer-includes"]

    def test_unknown_rule(self) -> None:
        with pytest.raises(ConfigurationError, match="prefer-nothing"):
            resolve_idioms(rules=["prefer-nothing"])


class TestCatalogue:
    def test_ids_are_unique(self) -> None:
        ids = [idiom.id for idiom in ALL_IDIOMS]
        assert len(ids) == len(set(ids))

    def test_unknown_rule_lookup(self) -> None:
        with pytest.raises(KeyError, match="Unknown rule"):
            get_idiom("prefer-nothing")

    @pytest.mark.parametrize("idiom", ALL_IDIOMS, ids=lambda idiom: idiom.id)
    def test_has_messages_and_description(self, idiom) -> None:
        assert idiom.messages
        assert idiom.description
