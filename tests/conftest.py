from __future__ import annotations

from typing import Dict, List

import pytest

from sub_matcher.listers import DirectoryListingError

CONFIG_ENV_KEYS = (
    "SUBMATCHER_ENV_FILE",
    "SUBMATCHER_DEBUG",
    "LOG_LEVEL",
    "SUBMATCHER_SUB_EXTS",
    "SUBMATCHER_SUB_FILE_PATHS",
    "SUBMATCHER_REMOTE_SUB_PATHS",
    "MPV_CONFIG_DIR",
    "MPV_IPC_SOCKET",
    "WEBDAV_USER",
    "WEBDAV_PASS",
    "WEBDAV_VERIFY_SSL",
    "WEBDAV_TIMEOUT",
)


class FakeLister:
    """按字典返回目录内容，并记录被枚举过的目录。"""

    def __init__(self, listing: Dict[str, List[str]]) -> None:
        self.listing = listing
        self.calls: List[str] = []

    def list_directory(self, path: str) -> List[str]:
        self.calls.append(path)
        if path not in self.listing:
            raise DirectoryListingError(path, "Directory does not exist or is not accessible")
        return list(self.listing[path])


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # 先 setenv 再 delenv，保证 .env 里 setdefault 写入的值在测试结束后被还原
    for key in CONFIG_ENV_KEYS:
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    monkeypatch.setenv("SUBMATCHER_ENV_FILE", str(tmp_path / "missing.env"))
    return monkeypatch
