import pytest

from drive_proxy.config import Settings, load_drive_config, normalize_origin
from drive_proxy.core.errors import ConfigurationMissing


@pytest.mark.parametrize("raw", [
    "https://drive.example",
    "https://drive.example/",
    "https://drive.example/api",
    "https://drive.example/api/",
    "https://drive.example///",
])
def test_normalize_origin_strips_slashes_and_api_suffix(raw):
    assert normalize_origin(raw) == "https://drive.example"


def test_normalize_origin_keeps_other_paths():
    assert normalize_origin("https://drive.example/apis") == "https://drive.example/apis"


def test_load_drive_config_normalizes_origin():
    cfg = load_drive_config(Settings(MK_API="https://drive.example/api", MK_TK="tk"))
    assert cfg.origin == "https://drive.example"
    assert cfg.token == "tk"


@pytest.mark.parametrize("api,token,missing", [
    (None, "tk", ["MK_API"]),
    ("https://drive.example", None, ["MK_TK"]),
    ("", "", ["MK_API", "MK_TK"]),
])
def test_load_drive_config_requires_both_values(api, token, missing):
    with pytest.raises(ConfigurationMissing) as excinfo:
        load_drive_config(Settings(MK_API=api, MK_TK=token))
    assert excinfo.value.missing == missing


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MK_API", "https://env.example")
    monkeypatch.setenv("MK_TK", "env-token")
    s = Settings()
    assert s.MK_API == "https://env.example"
    assert s.MK_TK == "env-token"
