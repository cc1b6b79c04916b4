"""网络流文件名提取：从 shegu.net (FebBox) 链接的 KEY5 参数取真实文件名。"""

from __future__ import annotations

import logging
import re
import urllib.parse
from dataclasses import dataclass
from typing import List, Optional

from .models import HostAction, MediaContext, SetProperty, ShowMessage
from .paths import is_remote

SHEGU_HOST_RE = re.compile(r"shegu\.net", re.IGNORECASE)
FILENAME_PARAM = "KEY5"

# 依次设置窗口标题、OSD 标题、内部标题以及保存用文件名
TITLE_PROPERTIES = (
    "title",
    "force-media-title",
    "media-title",
    "stream-open-filename",
)


def url_decode(value: str) -> str:
    """先做百分号解码，再把 '+' 替换为空格（%2B 也会变成空格）。"""

    return urllib.parse.unquote(value).replace("+", " ")


def extract_stream_filename(url: Optional[str]) -> Optional[str]:
    """shegu.net 链接返回 KEY5 中的文件名，其余链接返回 None。"""

    if not url or not SHEGU_HOST_RE.search(url):
        return None
    match = re.search(FILENAME_PARAM + r"=([^&]+)", url)
    if not match:
        return None
    return url_decode(match.group(1))


def filename_from_url(url: str) -> Optional[str]:
    """推导网络流对应的文件名，优先使用 KEY5，其次取 URL 路径最后一段。"""

    filename = extract_stream_filename(url)
    if filename:
        logging.info("Extracted filename from shegu.net KEY5: %s", filename)
        return filename
    if SHEGU_HOST_RE.search(url):
        logging.warning("Could not extract KEY5 from shegu.net URL")

    path = urllib.parse.urlsplit(url).path
    segment = path.rstrip("/").rsplit("/", 1)[-1] if path else ""
    if not segment:
        return None
    return url_decode(segment)


@dataclass
class TitleExtractor:
    """file-loaded 时把 shegu.net 链接的显示标题改成真实文件名。"""

    def on_media_loaded(self, context: MediaContext) -> List[HostAction]:
        path = context.media_path
        if not path or not is_remote(path):
            return []

        filename = extract_stream_filename(path)
        if not filename:
            return []

        actions: List[HostAction] = [SetProperty(name, filename) for name in TITLE_PROPERTIES]
        actions.append(ShowMessage(f"Title set to: {filename}"))
        logging.info("Title changed to: %s", filename)
        return actions
