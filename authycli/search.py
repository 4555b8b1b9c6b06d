"""Fuzzy search over cached tokens and computation of their current codes."""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Sequence

from .device import Device, DeviceConfig, TokenCacheError
from .output import Output, render_alfred, render_pretty
from .token import Token, sort_tokens
from .totp import INTERVAL, get_challenge, get_totp_codes

_FIRST_CHAR_MATCH_BONUS = 10
_MATCH_FOLLOWING_SEPARATOR_BONUS = 20
_CAMEL_CASE_MATCH_BONUS = 20
_ADJACENT_MATCH_BONUS = 5
_UNMATCHED_LEADING_CHAR_PENALTY = -5
_MAX_UNMATCHED_LEADING_CHAR_PENALTY = -15
_SEPARATORS = frozenset("/-_ .\\")


@dataclass
class Match:
    """A candidate that contains every pattern character in order."""

    text: str
    index: int
    matched_indexes: list[int] = field(default_factory=list)
    score: int = 0


def _equal_fold(a: str, b: str) -> bool:
    return bool(a) and bool(b) and a.casefold() == b.casefold()


def _score_candidate(pattern: str, text: str) -> tuple[list[int], int]:
    matched: list[int] = []
    total = 0
    pattern_index = 0
    best = -1
    matched_index = -1
    adjacent = 0
    last = ""
    last_index = 0
    for j, char in enumerate(text):
        if _equal_fold(char, pattern[pattern_index]):
            score = 0
            if j == 0:
                score += _FIRST_CHAR_MATCH_BONUS
            if last.islower() and char.isupper():
                score += _CAMEL_CASE_MATCH_BONUS
            if j != 0 and last in _SEPARATORS:
                score += _MATCH_FOLLOWING_SEPARATOR_BONUS
            if matched:
                bonus = adjacent * 2 + _ADJACENT_MATCH_BONUS if matched[-1] == last_index else 0
                score += bonus
                adjacent += bonus
            if score > best:
                best = score
                matched_index = j
        next_pattern = pattern[pattern_index + 1] if pattern_index < len(pattern) - 1 else ""
        next_char = text[j + 1] if j + 1 < len(text) else ""
        # Commit the best position once the next pattern character comes up or the text ends.
        if (not next_char or _equal_fold(next_pattern, next_char)) and matched_index > -1:
            if not matched:
                best += max(
                    matched_index * _UNMATCHED_LEADING_CHAR_PENALTY,
                    _MAX_UNMATCHED_LEADING_CHAR_PENALTY,
                )
            total += best
            matched.append(matched_index)
            best = -1
            matched_index = -1
            pattern_index += 1
            if pattern_index >= len(pattern):
                break
        last_index = j
        last = char
    total += len(matched) - len(text)
    return matched, total


def fuzzy_find(pattern: str, candidates: Sequence[str]) -> list[Match]:
    """Return the candidates matching *pattern*, best score first, case-insensitively."""
    if not pattern:
        return []
    matches = []
    for index, text in enumerate(candidates):
        matched, score = _score_candidate(pattern, text)
        if len(matched) == len(pattern):
            matches.append(Match(text, index, matched, score))
    return sorted(matches, key=lambda match: -match.score)


def calc_remain_sec(challenge: int, now: float | None = None) -> int:
    """Return the seconds left in time step *challenge* at *now*."""
    if now is None:
        now = time.time()
    return INTERVAL - (int(now) - challenge * INTERVAL)


class Searcher:
    """Finds tokens by keyword and renders their current codes."""

    def __init__(self, keyword: str = "", is_alfred: bool = False, device: Device | None = None) -> None:
        self.keyword = keyword
        self.is_alfred = is_alfred
        self.device = device if device is not None else Device(DeviceConfig())

    def show_all(self) -> bool:
        """Tell whether every token is listed, i.e. no keyword was given."""
        return not self.keyword

    def search_tokens(self) -> list[Token]:
        """Return tokens matching the keyword and count one use of each."""
        tokens = self.device.tokens
        matches = fuzzy_find(self.keyword, [t.name + t.original_name for t in tokens])
        found = []
        for match in matches:
            token = tokens[match.index]
            token.update_weight()
            found.append(token)
        with contextlib.suppress(OSError):
            self.device.save_tokens()
        return found

    def calc_tokens(self, tokens: Sequence[Token], now: float | None = None) -> list[Output]:
        """Compute the current code of each token."""
        outputs = []
        for token in tokens:
            if not token.secret:
                outputs.append(Output(token=token, error="OTP token is empty"))
                continue
            codes = get_totp_codes(token.secret, token.digital, now)
            challenge = get_challenge(now)
            outputs.append(
                Output(token=token, code=codes[1], remain_secs=calc_remain_sec(challenge, now))
            )
        if not outputs:
            outputs.append(
                Output(
                    fallback_title=f"OTP token not found ({self.keyword})",
                    error="Please try another keyword",
                )
            )
        return outputs

    def search(self, now: float | None = None) -> str:
        """Run the search and return the rendered result."""
        with contextlib.suppress(TokenCacheError):
            self.device.load_token_from_cache()
        if self.show_all():
            self.device.tokens = sort_tokens(self.device.tokens)
            tokens = self.device.tokens
        else:
            tokens = self.search_tokens()
        if not self.device.tokens:
            outputs = [
                Output(
                    fallback_title="OTP tokens not found",
                    error="Please run 'authy refresh' in commandline",
                )
            ]
        else:
            outputs = self.calc_tokens(tokens, now)
        return render_alfred(outputs) if self.is_alfred else render_pretty(outputs)