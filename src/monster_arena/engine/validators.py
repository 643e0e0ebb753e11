"""Validates action selections before they are recorded."""
from __future__ import annotations

from monster_arena.models.monster import Monster


def validate_selection(monster: Monster, action_name: str) -> tuple[bool, str]:
    """Check whether a monster may select the named action this round."""
    if monster.is_defeated:
        return False, f"{monster.name} has fainted and cannot act."
    if monster.selected_action is not None or monster.has_passed:
        return False, f"{monster.name} has already chosen for this round."
    if monster.find_action(action_name) is None:
        return False, f"{monster.name} does not know the action {action_name}."
    return True, ""
