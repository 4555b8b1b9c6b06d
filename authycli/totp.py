"""Time-based one-time password generation with a configurable base32 alphabet."""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time

INTERVAL = 30
PIN_MODULO = 1_000_000
DEFAULT_BASE32_STRING = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
DEFAULT_CODE_LENGTH = 6

# Lookup table mapping (lowest set bit % 37) to its bit position.
ZEROS_ON_RIGHT_MOD_LOOKUP = (
    32, 0, 1, 26, 2, 23, 27, 0, 3, 16, 24, 30, 28, 11, 0, 13, 4, 7, 17,
    0, 25, 22, 31, 15, 29, 10, 12, 6, 0, 21, 14, 9, 5, 20, 8, 19, 18,
)


def number_of_trailing_zeros(i: int) -> int:
    """Return the count of trailing zero bits of a 32-bit integer."""
    return ZEROS_ON_RIGHT_MOD_LOOKUP[(i & -i) % 37]


class Base32Decoder:
    """Decoder for base32 text over an arbitrary power-of-two alphabet."""

    def __init__(self, alphabet: str = DEFAULT_BASE32_STRING) -> None:
        self.alphabet = alphabet
        self._decode_map = {char: index for index, char in enumerate(alphabet)}

    def decode(self, encoded: str) -> bytes:
        """Decode *encoded*, ignoring dashes, spaces and letter case.

        Raises ValueError on a character outside the alphabet.
        """
        encoded = encoded.strip().replace("-", "").replace(" ", "").upper()
        if not encoded:
            return b""
        mask = len(self.alphabet) - 1
        shift = number_of_trailing_zeros(len(self.alphabet))
        result = bytearray()
        buffer = 0
        bits_left = 0
        for char in encoded:
            value = self._decode_map.get(char)
            if value is None:
                raise ValueError(f"Char illegal: {char}")
            buffer = (buffer << shift) | (value & mask)
            bits_left += shift
            if bits_left >= 8:
                bits_left -= 8
                result.append((buffer >> bits_left) & 0xFF)
                buffer &= (1 << bits_left) - 1
        return bytes(result)


def get_challenge(now: float | None = None) -> int:
    """Return the time step for *now* (seconds since the epoch, default: current time)."""
    if now is None:
        now = time.time()
    millis = int(now * 1000)
    return millis // 1000 // INTERVAL


def generate_response_code(
    secret: str, challenge: int, code_length: int = DEFAULT_CODE_LENGTH
) -> str:
    """Return the one-time code for a base32 *secret* at time step *challenge*."""
    key = Base32Decoder().decode(secret)
    message = challenge.to_bytes(8, "big", signed=True)
    digest = hmac.new(key, message, hashlib.sha1).digest()
    offset = digest[-1] & 0x0F
    truncated = int.from_bytes(digest[offset:offset + 4], "big") & 0x7FFFFFFF
    return str(truncated % PIN_MODULO).zfill(code_length)


def new_totp_token(length: int = 0) -> str:
    """Return a random base32 string of *length* characters (12 when zero)."""
    if length == 0:
        length = 12
    if length < 2:
        raise ValueError("token length must be at least 2")
    return "".join(
        DEFAULT_BASE32_STRING[secrets.randbelow(length - 1)] for _ in range(length)
    )


def get_totp_codes(
    secret: str, code_length: int = DEFAULT_CODE_LENGTH, now: float | None = None
) -> list[str]:
    """Return codes for the previous, current and next time step.

    A secret that cannot be decoded yields empty strings.
    """
    current = get_challenge(now)
    codes = []
    for step in (-1, 0, 1):
        try:
            codes.append(generate_response_code(secret, current + step, code_length))
        except ValueError:
            codes.append("")
    return codes


def valid_totp_code(totp_token: str, totp_code: str, now: float | None = None) -> bool:
    """Tell whether *totp_code* matches any code in the tolerated time window."""
    return totp_code in get_totp_codes(totp_token, DEFAULT_CODE_LENGTH, now)