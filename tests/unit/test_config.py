from pathlib import Path

import pytest

from tests.helpers.recon_imports import config_module, load_configuration

ENV_KEYS = [
    "RECON_COOKIE",
    "RECON_AUTHORIZATION",
    "RECON_CONFIG_DIR",
    "RECON_OUTPUT_DIR",
    "RECON_TIMEOUT",
    "RECON_PROBE_WORKERS",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_configuration_reads_config_files(tmp_path):
    (tmp_path / "blacklist.txt").write_text("google\n\n  baidu.com  \n", encoding="utf-8")
    (tmp_path / "api_core.txt").write_text("/v2/\n", encoding="utf-8")
    (tmp_path / "noise_strings.txt").write_text("webpack\nchunk\n", encoding="utf-8")

    config = load_configuration("https://example.com/#/home", config_dir=tmp_path)

    assert config.target_url == "https://example.com/"
    assert config.blacklist == ("google", "baidu.com")
    assert config.api_core == "/v2/"
    assert config.noise_strings == ("webpack", "chunk")


def test_load_configuration_defaults_when_files_missing(tmp_path):
    config = load_configuration("https://example.com", config_dir=tmp_path)

    assert config.blacklist == ()
    assert config.api_core == config_module.DEFAULT_API_CORE
    assert config.noise_strings == config_module.DEFAULT_NOISE_STRINGS
    assert config.cookie is None
    assert config.authorization is None
    assert config.request_timeout is None
    assert config.output_dir == Path("output")


def test_empty_api_core_file_falls_back_to_default(tmp_path):
    (tmp_path / "api_core.txt").write_text("\n", encoding="utf-8")

    config = load_configuration("https://example.com", config_dir=tmp_path)

    assert config.api_core == "/api/"


def test_undecodable_config_file_falls_back_to_default(tmp_path, caplog):
    (tmp_path / "blacklist.txt").write_bytes(b"\xff\xfegoogle\n")
    (tmp_path / "api_core.txt").write_text("/v2/\n", encoding="utf-8")

    config = load_configuration("https://example.com", config_dir=tmp_path)

    assert config.blacklist == ()
    assert config.api_core == "/v2/"
    assert "not valid UTF-8" in caplog.text


def test_environment_fills_missing_options(monkeypatch, tmp_path):
    monkeypatch.setenv("RECON_COOKIE", "session=abc")
    monkeypatch.setenv("RECON_AUTHORIZATION", "Bearer xyz")
    monkeypatch.setenv("RECON_TIMEOUT", "7.5")
    monkeypatch.setenv("RECON_PROBE_WORKERS", "4")

    config = load_configuration("https://example.com", config_dir=tmp_path)

    assert config.cookie == "session=abc"
    assert config.authorization == "Bearer xyz"
    assert config.request_timeout == 7.5
    assert config.probe_workers == 4


def test_explicit_options_override_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("RECON_COOKIE", "session=env")

    config = load_configuration(
        "https://example.com",
        cookie="session=cli",
        config_dir=tmp_path,
        output_dir=tmp_path / "out",
    )

    assert config.cookie == "session=cli"
    assert config.output_dir == tmp_path / "out"


def test_invalid_target_is_rejected(tmp_path):
    with pytest.raises(config_module.ConfigurationError):
        load_configuration("example.com", config_dir=tmp_path)


def test_invalid_numeric_setting_is_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("RECON_TIMEOUT", "soon")

    with pytest.raises(config_module.ConfigurationError):
        load_configuration("https://example.com", config_dir=tmp_path)


def test_provision_default_files_only_writes_missing(tmp_path):
    (tmp_path / "blacklist.txt").write_text("google\n", encoding="utf-8")

    written = config_module.provision_default_files(tmp_path)

    assert sorted(path.name for path in written) == ["api_core.txt", "noise_strings.txt"]
    assert (tmp_path / "blacklist.txt").read_text(encoding="utf-8") == "google\n"
    assert (tmp_path / "api_core.txt").read_text(encoding="utf-8") == "/api/"
    assert config_module.provision_default_files(tmp_path) == []

    config = load_configuration("https://example.com", config_dir=tmp_path)
    assert config.noise_strings == config_module.DEFAULT_NOISE_STRINGS
