"""Registered device details and the local files that hold them."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .token import Token, load_tokens, tokens_to_map
from .token import save_tokens as _write_tokens

CONFIG_FILE_NAME = ".authy.json"
CACHE_FILE_NAME = ".authycache.json"
ROOT_ENV_VAR = "AUTHY_ROOT"


class DeviceNotRegisteredError(Exception):
    """No usable device registration was found."""


class TokenCacheError(Exception):
    """The token cache could not be read."""


@dataclass
class DeviceRegistration:
    """Identity of a registered device; empty fields are left out when saved."""

    user_id: int = 0
    device_id: int = 0
    seed: str = ""
    api_key: str = ""
    main_password: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)
        }

    @classmethod
    def from_dict(cls, data: Any) -> "DeviceRegistration":
        if not isinstance(data, dict):
            raise ValueError("device registration must be a JSON object")
        return cls(
            user_id=data.get("user_id") or 0,
            device_id=data.get("device_id") or 0,
            seed=data.get("seed") or "",
            api_key=data.get("api_key") or "",
            main_password=data.get("main_password") or "",
        )


@dataclass
class DeviceConfig:
    """Where device files live and the account details for registration."""

    country_code: str = ""
    mobile: str = ""
    password: str = ""
    config_file_path: str = ""
    config_file_name: str = CONFIG_FILE_NAME
    cache_file_name: str = CACHE_FILE_NAME

    def __post_init__(self) -> None:
        if not self.config_file_name:
            self.config_file_name = CONFIG_FILE_NAME
        if not self.cache_file_name:
            self.cache_file_name = CACHE_FILE_NAME


def _write_private_json(path: Path, payload: Any) -> None:
    fd = os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, 0o600)
    with open(fd, "w", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n")


class Device:
    """A registered device with its token cache."""

    def __init__(self, config: DeviceConfig | None = None) -> None:
        self.config = config if config is not None else DeviceConfig()
        self.token_map: dict[str, Token] = {}
        self._tokens: list[Token] = []
        try:
            registration = self.load_existing_device_info()
        except (OSError, ValueError) as exc:
            raise DeviceNotRegisteredError(
                f"no device registration could be read: {exc}"
            ) from exc
        if not registration.user_id:
            raise DeviceNotRegisteredError("device registration has no user id")
        self.registration = registration

    @property
    def tokens(self) -> list[Token]:
        return self._tokens

    @tokens.setter
    def tokens(self, tokens: list[Token]) -> None:
        self._tokens = list(tokens)
        self.token_map = tokens_to_map(self._tokens)

    def config_path(self, fname: str) -> Path:
        """Return the path of *fname* in the configuration directory.

        The directory is taken from the config, else AUTHY_ROOT, else the home directory.
        """
        if not self.config.config_file_path:
            root = os.environ.get(ROOT_ENV_VAR)
            if root is None:
                root = str(Path.home())
            self.config.config_file_path = root
        return Path(self.config.config_file_path) / fname

    def load_existing_device_info(self) -> DeviceRegistration:
        """Read the saved registration; raises OSError or ValueError on failure."""
        path = self.config_path(self.config.config_file_name)
        with open(path, encoding="utf-8") as handle:
            return DeviceRegistration.from_dict(json.load(handle))

    def save_device_info(self) -> None:
        """Write the registration to the configuration file."""
        _write_private_json(
            self.config_path(self.config.config_file_name), self.registration.to_dict()
        )

    def delete_main_password(self) -> None:
        """Forget the saved backup password."""
        self.registration.main_password = ""
        self.save_device_info()

    def load_token_from_cache(self) -> list[Token]:
        """Load tokens from the cache file; raises TokenCacheError on failure."""
        path = self.config_path(self.config.cache_file_name)
        try:
            tokens = load_tokens(path)
        except (OSError, ValueError) as exc:
            raise TokenCacheError(f"cannot read token cache {path}: {exc}") from exc
        self.tokens = tokens
        return self.tokens

    def save_tokens(self) -> None:
        """Write the distinct cached tokens to the cache file."""
        _write_tokens(
            self.config_path(self.config.cache_file_name), list(self.token_map.values())
        )