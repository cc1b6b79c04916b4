"""目录枚举：本地目录与 WebDAV 目录。"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol

from .paths import is_remote

if TYPE_CHECKING:
    from .webdav import WebDAVClient


class DirectoryLister(Protocol):
    def list_directory(self, path: str) -> List[str]:
        ...


class DirectoryListingError(Exception):
    """目录不存在、不是目录或无法读取。"""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class LocalDirectoryLister:
    """通过 os.listdir 枚举本地目录。"""

    def list_directory(self, path: str) -> List[str]:
        if not os.path.isdir(path):
            raise DirectoryListingError(path, "Directory does not exist or is not accessible")
        try:
            return sorted(os.listdir(path))
        except OSError as exc:
            raise DirectoryListingError(path, str(exc)) from exc


@dataclass
class RoutingLister:
    """按路径类型把请求分派给本地或 WebDAV 枚举器。"""

    local: LocalDirectoryLister
    remote: Optional["WebDAVClient"] = None

    def list_directory(self, path: str) -> List[str]:
        if is_remote(path):
            if self.remote is None:
                raise DirectoryListingError(path, "WebDAV listing is not configured")
            return self.remote.list_directory(path)
        return self.local.list_directory(path)
