"""mpv 字幕自动匹配与网络流标题提取。"""

from .config import Config
from .filters import (
    SubtitleMatcher,
    clean_title,
    extract_movie_info,
    extract_tv_info,
    is_matching_pair,
    is_tv_show,
)
from .listers import DirectoryListingError, LocalDirectoryLister, RoutingLister
from .loader import SubtitleLoader
from .models import EpisodeIdentity, MediaContext, MovieIdentity
from .paths import resolve_search_paths
from .titles import TitleExtractor, extract_stream_filename
from .webdav import WebDAVClient

__all__ = [
    "Config",
    "SubtitleMatcher",
    "clean_title",
    "extract_movie_info",
    "extract_tv_info",
    "is_matching_pair",
    "is_tv_show",
    "DirectoryListingError",
    "LocalDirectoryLister",
    "RoutingLister",
    "SubtitleLoader",
    "EpisodeIdentity",
    "MediaContext",
    "MovieIdentity",
    "resolve_search_paths",
    "TitleExtractor",
    "extract_stream_filename",
    "WebDAVClient",
]
