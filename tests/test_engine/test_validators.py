"""Tests for src/monster_arena/engine/validators.py."""
from __future__ import annotations

import pytest

from monster_arena.engine.validators import validate_selection


@pytest.fixture
def rex(monster_factory, punch):
    return monster_factory("Rex", actions=(punch,))


class TestValidateSelection:
    def test_known_action(self, rex):
        assert validate_selection(rex, "Punch") == (True, "")

    def test_case_insensitive(self, rex):
        ok, _ = validate_selection(rex, "punch")
        assert ok

    def test_unknown_action(self, rex):
        assert validate_selection(rex, "Kick") == (False, "Rex does not know the action Kick.")

    def test_fainted(self, rex):
        rex.set_hp(0)
        ok, reason = validate_selection(rex, "Punch")
        assert not ok
        assert reason == "Rex has fainted and cannot act."

    def test_already_chose(self, rex, punch):
        rex.selected_action = punch
        ok, reason = validate_selection(rex, "Punch")
        assert not ok
        assert "already chosen" in reason

    def test_already_passed(self, rex):
        rex.has_passed = True
        assert not validate_selection(rex, "Punch")[0]
