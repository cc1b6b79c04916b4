"""领域模型定义。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .paths import join_path


@dataclass(frozen=True)
class MovieIdentity:
    """从电影文件名中解析出的 (片名, 年份)。"""

    title: str
    year: str


@dataclass(frozen=True)
class EpisodeIdentity:
    """从剧集文件名中解析出的 (剧名, 季, 集)，季/集均保留两位字符串。"""

    title: str
    season: str
    episode: str


ContentIdentity = Union[MovieIdentity, EpisodeIdentity]


@dataclass(frozen=True)
class SubtitleCandidate:
    """扫描目录时发现的字幕文件。"""

    directory: str
    filename: str
    extension: str

    @property
    def path(self) -> str:
        return join_path(self.directory, self.filename)


@dataclass
class MediaContext:
    """一次 file-loaded 事件所需的宿主信息。"""

    media_path: Optional[str]
    sub_file_paths: str = ""
    config_dir: Optional[str] = None
    remote_sub_paths: str = ""


@dataclass(frozen=True)
class AttachSubtitle:
    """让播放器加载字幕。"""

    path: str

    def to_command(self) -> List[str]:
        return ["sub-add", self.path]


@dataclass(frozen=True)
class SetProperty:
    """设置播放器属性。"""

    name: str
    value: str

    def to_command(self) -> List[str]:
        return ["set_property", self.name, self.value]


@dataclass(frozen=True)
class ShowMessage:
    """在 OSD 上显示一条提示。"""

    text: str

    def to_command(self) -> List[str]:
        return ["show-text", self.text]


HostAction = Union[AttachSubtitle, SetProperty, ShowMessage]


@dataclass
class WebDAVResource:
    """表示一次 PROPFIND 返回的资源。"""

    path: str
    is_dir: bool
