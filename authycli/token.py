"""OTP token records and their JSON cache file."""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Iterable


@dataclass
class Token:
    """One authenticator entry."""

    name: str = ""
    original_name: str = ""
    digital: int = 0
    secret: str = ""
    period: int = 0
    weight: int = 0

    def title(self) -> str:
        """Return the name to show for this token."""
        if self.name != self.original_name or not self.original_name:
            return self.name
        return self.original_name

    def update_weight(self) -> None:
        """Count one more use of this token."""
        self.weight += 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "Token":
        if not isinstance(data, dict):
            raise ValueError(f"token entry must be an object, not {type(data).__name__}")
        return cls(
            name=data.get("name") or "",
            original_name=data.get("original_name") or "",
            digital=data.get("digital") or 0,
            secret=data.get("secret") or "",
            period=data.get("period") or 0,
            weight=data.get("weight") or 0,
        )


def sort_tokens(tokens: Iterable[Token]) -> list[Token]:
    """Return the tokens ordered by descending weight."""
    return sorted(tokens, key=lambda token: token.weight, reverse=True)


def generate_md5(token: Token) -> str:
    """Return the hex digest that identifies a token in the cache."""
    text = token.name + token.original_name + token.secret
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def tokens_to_map(tokens: Iterable[Token]) -> dict[str, Token]:
    """Index tokens by digest; later duplicates replace earlier ones."""
    return {generate_md5(token): token for token in tokens}


def load_tokens(path: str | os.PathLike[str]) -> list[Token]:
    """Read tokens from a JSON cache file.

    Raises OSError when the file cannot be read and ValueError when it is malformed.
    """
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("token cache must hold a JSON array")
    return [Token.from_dict(entry) for entry in data]


def save_tokens(path: str | os.PathLike[str], tokens: Iterable[Token]) -> None:
    """Write tokens to a JSON cache file readable by the owner only."""
    payload = json.dumps(
        [token.to_dict() for token in tokens], separators=(",", ":"), ensure_ascii=False
    )
    fd = os.open(Path(path), os.O_CREAT | os.O_TRUNC | os.O_WRONLY, 0o600)
    with open(fd, "w", encoding="utf-8") as handle:
        handle.write(payload + "\n")