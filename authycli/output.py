"""Formatting of computed token codes for the terminal and for Alfred."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable

from .token import Token

RED = "\033[1;31m{}\033[0m"
GREEN = "\033[1;32m{}\033[0m"
TEAL = "\033[1;36m{}\033[0m"

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Output:
    """The result shown for one token, or a message standing in for one."""

    token: Token | None = None
    fallback_title: str = ""
    code: str = ""
    remain_secs: int = 0
    error: str | None = None

    def title(self) -> str:
        """Return the token's title, or the fallback title without a token."""
        if self.token is not None:
            return self.token.title()
        return self.fallback_title

    def alfred_subtitle(self) -> str:
        """Return the subtitle line shown in Alfred."""
        if self.error is not None:
            return self.error
        return (
            f"Code: {self.code} [Press Enter copy to clipboard], "
            f"Expires in {self.remain_secs} second(s)"
        )

    def to_alfred(self) -> dict[str, Any]:
        """Return this output as an Alfred script filter item."""
        return {
            "title": self.title(),
            "subtitle": self.alfred_subtitle(),
            "arg": self.code,
            "icon": {"type": "", "path": ""},
            "valid": True,
            "text": {"copy": ""},
        }


def render_alfred(outputs: Iterable[Output]) -> str:
    """Return the Alfred script filter JSON document for *outputs*."""
    document = {"items": [output.to_alfred() for output in outputs]}
    text = json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in _JSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def render_pretty(outputs: Iterable[Output]) -> str:
    """Return a coloured, human-readable listing of *outputs*."""
    parts = ["\n"]
    for output in outputs:
        parts.append("- Title: " + GREEN.format(output.title()) + "\n")
        if output.error is not None:
            parts.append(f"- {output.error}\n\n")
        else:
            parts.append(
                "- Code: "
                + TEAL.format(output.code)
                + " Expires in "
                + RED.format(output.remain_secs)
                + "(s)\n\n"
            )
    return "".join(parts)