from __future__ import annotations

import dataclasses

import pytest

from btzpay import BTZPayClient, ClientConfig, Config, ConfigurationError


@pytest.fixture(autouse=True)
def _reset_config(monkeypatch):
    for name in ("BTZPAY_APIKEY", "BTZPAY_BASE_URL", "BTZPAY_TIMEOUT_MS"):
        # load_dotenv writes to os.environ; setenv first so teardown removes it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
        monkeypatch.setattr(Config, name, getattr(Config, name))


def test_client_config_is_immutable() -> None:
    config = ClientConfig(apikey="k")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.apikey = "other"


def test_client_config_defaults_and_timeout_seconds() -> None:
    config = ClientConfig(apikey="k", base_url="https://example.test/", timeout_ms=45000)
    assert config.base_url == "https://example.test"
    assert config.timeout_s == 45.0
    assert ClientConfig(apikey="k").base_url == "https://web.btzpay.my.id"


def test_client_config_requires_apikey() -> None:
    with pytest.raises(ConfigurationError, match="API Key is required"):
        ClientConfig(apikey="")


def test_load_from_env_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "BTZPAY_APIKEY=env-key\nBTZPAY_BASE_URL=https://sandbox.test\nBTZPAY_TIMEOUT_MS=60000\n",
        encoding="utf-8",
    )

    client = BTZPayClient.from_env(str(env_file))

    assert client.config == ClientConfig(apikey="env-key", base_url="https://sandbox.test", timeout_ms=60000)
    client.close()


def test_process_environment_wins_over_env_file(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("BTZPAY_APIKEY=file-key\n", encoding="utf-8")
    monkeypatch.setenv("BTZPAY_APIKEY", "process-key")

    Config.load(str(env_file))

    assert Config.BTZPAY_APIKEY == "process-key"
    assert Config.BTZPAY_BASE_URL == "https://web.btzpay.my.id"
    assert Config.BTZPAY_TIMEOUT_MS == 30000


def test_missing_apikey_in_env(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("BTZPAY_BASE_URL=https://sandbox.test\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        BTZPayClient.from_env(str(env_file))


def test_bad_timeout_in_env(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("BTZPAY_APIKEY=k\nBTZPAY_TIMEOUT_MS=soon\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        Config.load(str(env_file))


def test_load_finds_env_file_in_working_directory(tmp_path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("BTZPAY_APIKEY=cwd-key\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    Config.load()

    assert Config.BTZPAY_APIKEY == "cwd-key"
    assert Config.client_config().apikey == "cwd-key"
