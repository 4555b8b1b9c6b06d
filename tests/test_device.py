import json

import pytest

from authycli.device import (
    CACHE_FILE_NAME,
    CONFIG_FILE_NAME,
    Device,
    DeviceConfig,
    DeviceNotRegisteredError,
    DeviceRegistration,
    TokenCacheError,
)
from authycli.token import Token, load_tokens


def _register(directory, **overrides):
    data = {"user_id": 11, "device_id": 22, "seed": "secret", "api_key": "placeholder"}
    data.update(overrides)
    (directory / CONFIG_FILE_NAME).write_text(json.dumps(data), encoding="utf-8")


def _device(directory):
    return Device(DeviceConfig(config_file_path=str(directory)))


def test_registration_omits_empty_fields():
    assert DeviceRegistration(user_id=11).to_dict() == {"user_id": 11}


def test_registration_round_trip():
    password = "password"
    registration = DeviceRegistration(
        user_id=1, device_id=2, seed="secret", api_key="placeholder", main_password=password
    )
    assert DeviceRegistration.from_dict(registration.to_dict()) == registration


def test_registration_rejects_non_object():
    with pytest.raises(ValueError):
        DeviceRegistration.from_dict([1, 2])


def test_config_defaults_for_empty_names():
    config = DeviceConfig(config_file_name="", cache_file_name="")
    assert config.config_file_name == CONFIG_FILE_NAME
    assert config.cache_file_name == CACHE_FILE_NAME


def test_missing_registration(tmp_path):
    with pytest.raises(DeviceNotRegisteredError):
        _device(tmp_path)


def test_registration_without_user(tmp_path):
    _register(tmp_path, user_id=0)
    with pytest.raises(DeviceNotRegisteredError):
        _device(tmp_path)


def test_malformed_registration(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("not json", encoding="utf-8")
    with pytest.raises(DeviceNotRegisteredError):
        _device(tmp_path)


def test_loads_registration(tmp_path):
    _register(tmp_path)
    device = _device(tmp_path)
    assert device.registration == DeviceRegistration(
        user_id=11, device_id=22, seed="secret", api_key="placeholder"
    )


def test_config_path_uses_root_env(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTHY_ROOT", str(tmp_path))
    _register(tmp_path)
    device = Device()
    assert device.config_path("x.json") == tmp_path / "x.json"
    assert device.config.config_file_path == str(tmp_path)


def test_config_path_falls_back_to_home(tmp_path, monkeypatch):
    monkeypatch.delenv("AUTHY_ROOT", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    _register(tmp_path)
    device = Device()
    assert device.config_path(CACHE_FILE_NAME) == tmp_path / CACHE_FILE_NAME


def test_delete_main_password(tmp_path):
    password = "password"
    _register(tmp_path, main_password=password)
    device = _device(tmp_path)
    assert device.registration.main_password == password
    device.delete_main_password()
    saved = json.loads((tmp_path / CONFIG_FILE_NAME).read_text(encoding="utf-8"))
    assert "main_password" not in saved
    assert _device(tmp_path).registration.main_password == ""


def test_save_device_info_round_trip(tmp_path):
    _register(tmp_path)
    device = _device(tmp_path)
    device.registration.device_id = 99
    device.save_device_info()
    assert _device(tmp_path).registration.device_id == 99


def test_missing_token_cache(tmp_path):
    _register(tmp_path)
    with pytest.raises(TokenCacheError):
        _device(tmp_path).load_token_from_cache()


def test_broken_token_cache(tmp_path):
    _register(tmp_path)
    (tmp_path / CACHE_FILE_NAME).write_text("[{", encoding="utf-8")
    with pytest.raises(TokenCacheError):
        _device(tmp_path).load_token_from_cache()


def test_tokens_setter_builds_map(tmp_path):
    _register(tmp_path)
    device = _device(tmp_path)
    device.tokens = [Token(name="a"), Token(name="a"), Token(name="b")]
    assert len(device.tokens) == 3
    assert len(device.token_map) == 2


def test_token_cache_round_trip(tmp_path):
    _register(tmp_path)
    device = _device(tmp_path)
    tokens = [Token(name="a", secret="secret", digital=6), Token(name="b", secret="token")]
    device.tokens = tokens
    device.save_tokens()

    fresh = _device(tmp_path)
    loaded = fresh.load_token_from_cache()
    assert sorted(t.name for t in loaded) == ["a", "b"]
    assert fresh.tokens == loaded
    assert set(fresh.token_map) == set(device.token_map)


def test_saved_cache_drops_duplicates(tmp_path):
    _register(tmp_path)
    device = _device(tmp_path)
    device.tokens = [Token(name="a", weight=1), Token(name="a", weight=2)]
    device.save_tokens()
    assert load_tokens(tmp_path / CACHE_FILE_NAME) == [Token(name="a", weight=2)]


def test_weight_updates_persist(tmp_path):
    _register(tmp_path)
    device = _device(tmp_path)
    device.tokens = [Token(name="a")]
    device.tokens[0].update_weight()
    device.save_tokens()
    assert _device(tmp_path).load_token_from_cache()[0].weight == 1