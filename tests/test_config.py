from __future__ import annotations

import pytest

from sub_matcher.config import Config


def test_defaults(clean_env):
    clean_env.setenv("MPV_CONFIG_DIR", "/cfg/mpv")
    config = Config.from_env()
    assert config.debug is False
    assert config.subtitle_exts == ["srt", "ass", "ssa", "sub"]
    assert config.sub_file_paths == ""
    assert config.remote_sub_paths == ""
    assert config.config_dir == "/cfg/mpv"
    assert config.ipc_socket == "/tmp/mpvsocket"
    assert config.webdav_timeout == 20
    assert config.webdav_auth is None


def test_environment_overrides(clean_env):
    clean_env.setenv("SUBMATCHER_DEBUG", "true")
    clean_env.setenv("SUBMATCHER_SUB_EXTS", " .SRT, vtt ,")
    clean_env.setenv("SUBMATCHER_SUB_FILE_PATHS", "subs;~~/subs")
    clean_env.setenv("SUBMATCHER_REMOTE_SUB_PATHS", "https://dav.example.com/subs")
    clean_env.setenv("WEBDAV_USER", "alist")
    clean_env.setenv("WEBDAV_PASS", "secret")
    clean_env.setenv("WEBDAV_TIMEOUT", "5")
    config = Config.from_env()
    assert config.debug is True
    assert config.subtitle_exts == ["srt", "vtt"]
    assert config.sub_file_paths == "subs;~~/subs"
    assert config.remote_sub_paths == "https://dav.example.com/subs"
    assert config.webdav_auth == ("alist", "secret")
    assert config.webdav_timeout == 5


def test_dotenv_file_does_not_override_environment(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nSUBMATCHER_DEBUG=true\nMPV_IPC_SOCKET='/run/mpv.sock'\nnot a pair\n",
        encoding="utf-8",
    )
    clean_env.setenv("SUBMATCHER_ENV_FILE", str(env_file))
    clean_env.setenv("MPV_IPC_SOCKET", "/from/env")
    config = Config.from_env()
    assert config.debug is True
    assert config.ipc_socket == "/from/env"


@pytest.mark.parametrize(
    ("key", "value"),
    [("WEBDAV_TIMEOUT", "soon"), ("SUBMATCHER_SUB_EXTS", " , ")],
)
def test_invalid_values(clean_env, key, value):
    clean_env.setenv(key, value)
    with pytest.raises(ValueError):
        Config.from_env()
