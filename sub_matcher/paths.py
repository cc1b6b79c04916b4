"""字幕搜索路径解析。"""

from __future__ import annotations

import logging
import re
import urllib.parse
from typing import List, Optional, Tuple

CONFIG_ROOT_MARKER = "~~"
DEFAULT_SUB_DIR = "sub"

_SPLIT_RE = re.compile(r"[,;]")
_DRIVE_RE = re.compile(r"^[A-Za-z]:[/\\]")
_REMOTE_RE = re.compile(r"^https?://", re.IGNORECASE)


def is_remote(path: str) -> bool:
    return bool(_REMOTE_RE.match(path))


def is_absolute(path: str) -> bool:
    """Unix 绝对路径或 Windows 盘符路径。"""

    return path.startswith("/") or bool(_DRIVE_RE.match(path))


def join_path(base: str, name: str) -> str:
    """按 mpv 的 join_path 语义拼接：name 为绝对路径时直接返回。"""

    if is_absolute(name):
        return name
    if is_remote(base):
        name = urllib.parse.quote(name)
    if not base or base.endswith(("/", "\\")):
        return f"{base}{name}"
    return f"{base}/{name}"


def split_path(path: str) -> Tuple[str, str]:
    """拆成 (目录, 文件名)，目录不带末尾分隔符。"""

    index = max(path.rfind("/"), path.rfind("\\"))
    if index < 0:
        return ".", path
    directory = path[:index] or path[: index + 1]
    return directory, path[index + 1:]


def split_paths(raw: str) -> List[str]:
    """按逗号或分号切分 sub-file-paths，去掉首尾空白与空项。"""

    tokens = (token.strip() for token in _SPLIT_RE.split(raw or ""))
    return [token for token in tokens if token]


def _expand_config_root(token: str, config_dir: str) -> str:
    # 去掉 "~~" 以及紧随其后的一个分隔符
    rest = token[len(CONFIG_ROOT_MARKER) + 1:]
    if not rest:
        return config_dir
    return join_path(config_dir, rest)


def resolve_search_paths(
    raw_paths: str,
    video_dir: Optional[str],
    base_dir_for_relative: Optional[str],
    config_dir: Optional[str] = None,
) -> List[str]:
    """把 sub-file-paths 设置解析成有序的待扫描目录列表。"""

    resolved: List[str] = []

    if not (raw_paths or "").strip():
        if base_dir_for_relative is None:
            logging.debug("无法确定默认 sub 目录的基准目录。")
            return resolved
        default_dir = join_path(base_dir_for_relative, DEFAULT_SUB_DIR)
        if default_dir == video_dir:
            logging.debug("默认 sub 目录与视频目录相同，跳过：%s", default_dir)
        else:
            resolved.append(default_dir)
        return resolved

    for token in split_paths(raw_paths):
        if token.startswith(CONFIG_ROOT_MARKER):
            if config_dir is None:
                logging.debug("未知 mpv 配置目录，无法展开：%s", token)
                continue
            resolved.append(_expand_config_root(token, config_dir))
        elif is_absolute(token):
            resolved.append(token)
        elif base_dir_for_relative is None:
            logging.debug("无法确定相对路径的基准目录：%s", token)
        else:
            full_path = join_path(base_dir_for_relative, token)
            if full_path == video_dir:
                logging.debug("相对路径指向视频目录，跳过：%s", full_path)
                continue
            resolved.append(full_path)
    return resolved


def resolve_remote_paths(raw_remote: str) -> List[str]:
    """额外的 WebDAV 字幕目录设置，只接受 http(s) URL。"""

    remote: List[str] = []
    for token in split_paths(raw_remote):
        if is_remote(token):
            remote.append(token)
        else:
            logging.warning("忽略非 http(s) 的远端字幕目录：%s", token)
    return remote
