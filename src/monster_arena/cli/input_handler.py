"""Classifies arena console commands."""
from __future__ import annotations

import re
from typing import Any

# "show monsters" etc. must be tried before the bare "show".
PATTERNS: list[tuple[str, str, re.Pattern]] = [
    # Meta commands
    ("quit", "meta", re.compile(r"^(?:quit|exit)$", re.I)),
    ("help", "meta", re.compile(r"^(?:help|\?)$", re.I)),
    ("load", "meta", re.compile(r"^load\s+(.+)$", re.I)),
    ("competition", "meta", re.compile(r"^competition\s+(.+)$", re.I)),

    # Inspection
    ("show_monsters", "show", re.compile(r"^show\s+monsters$", re.I)),
    ("show_actions", "show", re.compile(r"^show\s+actions$", re.I)),
    ("show_stats", "show", re.compile(r"^show\s+stats$", re.I)),
    ("show", "show", re.compile(r"^show$", re.I)),

    # Competition turns
    ("action", "turn", re.compile(r"^action\s+(\S+)(?:\s+(\S+))?$", re.I)),
    ("pass", "turn", re.compile(r"^pass$", re.I)),
]


class InputHandler:
    def classify(self, raw_input: str) -> dict[str, Any]:
        text = raw_input.strip()
        empty = {"command": None, "args": [], "category": None, "raw_input": raw_input}
        if not text:
            return empty

        for command, category, pattern in PATTERNS:
            match = pattern.match(text)
            if not match:
                continue
            args: list[str] = []
            if command == "competition":
                args = match.group(1).split()
            elif command == "load":
                args = [match.group(1).strip()]
            elif command == "action":
                args = [g for g in match.groups() if g]
            return {"command": command, "args": args, "category": category, "raw_input": raw_input}

        return empty
