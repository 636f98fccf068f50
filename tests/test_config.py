"""Tests for lineirc/config."""

import json

import pytest
from pydantic import ValidationError

from lineirc.config import ClientConfig, load_config, load_raw
from lineirc.errors.internal import ConfigError


class TestClientConfig:
    """Model defaults and validation."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.port >= 1
        assert config.username == config.nick
        assert config.password is None
        assert config.connect_attempts >= 1

    def test_username_defaults_to_nick(self):
        assert ClientConfig(nick="alice").username == "alice"

    def test_explicit_username_is_kept(self):
        assert ClientConfig(nick="alice", username="ident").username == "ident"

    @pytest.mark.parametrize("nick", ["two words", ":colon", "line\nbreak", "   "])
    def test_nick_must_be_single_token(self, nick):
        with pytest.raises(ValidationError):
            ClientConfig(nick=nick)

    def test_nick_is_stripped(self):
        assert ClientConfig(nick="  alice ").nick == "alice"

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_range(self, port):
        with pytest.raises(ValidationError):
            ClientConfig(port=port)

    def test_realname_may_contain_spaces(self):
        assert ClientConfig(realname="Alice Liddell").realname == "Alice Liddell"

    def test_realname_rejects_line_breaks(self):
        with pytest.raises(ValidationError):
            ClientConfig(realname="a\r\nQUIT")

    def test_to_dict_omits_unset_password(self):
        data = ClientConfig(nick="alice").to_dict()
        assert "password" not in data
        assert data["nick"] == "alice"


class TestLoadConfig:
    """File loading, overrides and error wrapping."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.conf")
        assert config == ClientConfig()

    def test_file_values_are_applied(self, tmp_path):
        path = tmp_path / "lineirc.conf"
        path.write_text(json.dumps({"host": "irc.example.com", "port": 6667, "nick": "bob"}))
        config = load_config(path)
        assert (config.host, config.port, config.nick) == ("irc.example.com", 6667, "bob")

    def test_overrides_win_and_none_is_ignored(self, tmp_path):
        path = tmp_path / "lineirc.conf"
        path.write_text(json.dumps({"nick": "bob", "port": 6667}))
        config = load_config(path, {"nick": "carol", "port": None})
        assert config.nick == "carol"
        assert config.port == 6667

    def test_default_path_is_used_without_argument(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.conf"
        path.write_text(json.dumps({"nick": "dave"}))
        monkeypatch.setattr("lineirc.config.loader.DEFAULT_CONFIG_FILE", str(path))
        assert load_config().nick == "dave"

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "lineirc.conf"
        path.write_text("{not json")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.data["path"] == str(path)

    def test_non_object_json_raises_config_error(self, tmp_path):
        path = tmp_path / "lineirc.conf"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            load_raw(path)

    def test_validation_failure_raises_config_error(self, tmp_path):
        path = tmp_path / "lineirc.conf"
        path.write_text(json.dumps({"port": "not-a-port"}))
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.data["errors"]
        assert isinstance(exc_info.value.__cause__, ValidationError)
