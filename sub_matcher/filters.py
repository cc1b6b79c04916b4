"""文件名解析与字幕匹配逻辑。"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .models import EpisodeIdentity, MovieIdentity

DEFAULT_SUBTITLE_EXTS = ("srt", "ass", "ssa", "sub")

# "name.2019." / "name 2019 " —— 贪婪前缀，取最后一个合法的年份
_MOVIE_RE = re.compile(r"(.+)[.\s]([0-9]{4})[.\s]", re.DOTALL)
# "name (2019)"
_MOVIE_PAREN_RE = re.compile(r"(.+)[.\s]\(([0-9]{4})\)", re.DOTALL)
# "name.S01E02." / "name s01e02 "
_TV_RE = re.compile(r"(.+)[.\s][sS]([0-9]{2})[eE]([0-9]{2})[.\s]", re.DOTALL)

_SEPARATOR_RE = re.compile(r"[._]")
_SPACES_RE = re.compile(r"\s+")
_SQUARE_RE = re.compile(r"\[.*?\]", re.DOTALL)
_PAREN_RE = re.compile(r"\(.*?\)", re.DOTALL)
_LATIN_RUN_RE = re.compile(r"[A-Za-z\s._]+")


def clean_title(name: Optional[str]) -> Optional[str]:
    """清理片名：统一分隔符、去掉括号内容，并只保留英文部分（若存在）。"""

    if name is None:
        return None

    name = _SEPARATOR_RE.sub(" ", name)
    name = _SPACES_RE.sub(" ", name)
    name = _SQUARE_RE.sub("", name)
    name = _PAREN_RE.sub("", name)
    # 删除括号后可能留下连续空格，这里一并压缩
    name = _SPACES_RE.sub(" ", name).strip()

    runs = [run for run in _LATIN_RUN_RE.findall(name) if run.strip()]
    if runs:
        # 去掉英文片段两端的空格，保证 clean_title 幂等
        name = max(runs, key=len).strip()
    return name


def extract_movie_info(filename: Optional[str]) -> Optional[MovieIdentity]:
    """解析 "片名.年份." 或 "片名 (年份)" 形式的电影文件名。"""

    if filename is None:
        return None
    match = _MOVIE_RE.search(filename) or _MOVIE_PAREN_RE.search(filename)
    if not match:
        return None
    return MovieIdentity(title=clean_title(match.group(1)), year=match.group(2))


def extract_tv_info(filename: Optional[str]) -> Optional[EpisodeIdentity]:
    """解析 "剧名.S01E02." 形式的剧集文件名。"""

    if filename is None:
        return None
    match = _TV_RE.search(filename)
    if not match:
        return None
    return EpisodeIdentity(
        title=clean_title(match.group(1)),
        season=match.group(2),
        episode=match.group(3),
    )


def is_tv_show(filename: Optional[str]) -> bool:
    return extract_tv_info(filename) is not None


def is_matching_pair(video_file: str, sub_file: str) -> bool:
    """判断字幕文件与视频文件是否指向同一内容。

    只按视频文件的类型选择规则：剧集比较剧名/季/集，电影比较片名/年份。
    片名比较忽略大小写，季/集/年份按字符串精确比较。
    """

    if is_tv_show(video_file):
        video = extract_tv_info(video_file)
        sub = extract_tv_info(sub_file)
        return (
            video is not None
            and sub is not None
            and video.title.lower() == sub.title.lower()
            and video.season == sub.season
            and video.episode == sub.episode
        )

    video_movie = extract_movie_info(video_file)
    sub_movie = extract_movie_info(sub_file)
    return (
        video_movie is not None
        and sub_movie is not None
        and video_movie.title.lower() == sub_movie.title.lower()
        and video_movie.year == sub_movie.year
    )


@dataclass
class SubtitleMatcher:
    """负责判断文件是否为字幕以及是否与视频匹配。"""

    subtitle_exts: Iterable[str] = DEFAULT_SUBTITLE_EXTS
    debug: bool = False

    def __post_init__(self) -> None:
        self.subtitle_exts = frozenset(ext.lower().lstrip(".") for ext in self.subtitle_exts)

    def is_subtitle(self, filename: str) -> Optional[str]:
        """返回可识别的字幕扩展名（小写），否则返回 None。"""

        _, dot, ext = filename.rpartition(".")
        if not dot or not ext:
            return None
        ext = ext.lower()
        return ext if ext in self.subtitle_exts else None

    def matches(self, video_filename: str, candidate_filename: str) -> bool:
        if self.debug:
            self._log_comparison(video_filename, candidate_filename)
        return is_matching_pair(video_filename, candidate_filename)

    def _log_comparison(self, video_filename: str, candidate_filename: str) -> None:
        if is_tv_show(video_filename):
            logging.info("Comparing TV Show:")
            logging.info("  Video: %s", extract_tv_info(video_filename))
            logging.info("  Sub:   %s", extract_tv_info(candidate_filename))
        else:
            logging.info("Comparing Movie:")
            logging.info("  Video: %s", extract_movie_info(video_filename))
            logging.info("  Sub:   %s", extract_movie_info(candidate_filename))
