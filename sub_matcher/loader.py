"""字幕自动匹配主逻辑。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .filters import SubtitleMatcher
from .listers import DirectoryLister, DirectoryListingError
from .models import AttachSubtitle, MediaContext, SubtitleCandidate
from .paths import is_remote, resolve_remote_paths, resolve_search_paths, split_path
from .titles import filename_from_url


@dataclass
class SubtitleLoader:
    """在视频目录与 sub-file-paths 中查找并加载匹配的字幕。"""

    matcher: SubtitleMatcher
    lister: DirectoryLister

    @property
    def debug(self) -> bool:
        return self.matcher.debug

    def on_media_loaded(self, context: MediaContext) -> List[AttachSubtitle]:
        video_path = context.media_path
        if not video_path:
            logging.warning("No video file currently playing")
            return []

        if self.debug:
            logging.info("Processing video: %s", video_path)

        video_dir, video_filename, is_network_stream = self._locate_video(video_path)
        if not video_filename:
            logging.error("Failed to determine video filename.")
            return []

        actions: List[AttachSubtitle] = []

        # 1. 视频所在目录（仅本地文件）
        if video_dir is not None:
            actions.extend(self.scan_directory(video_dir, video_filename))
        elif self.debug:
            logging.info("Skipping video directory scan for network stream.")

        # 2. sub-file-paths 中指定的目录
        if self.debug:
            logging.info("Sub file paths setting: %s", context.sub_file_paths)
        base_dir = context.config_dir if is_network_stream else video_dir
        search_paths = resolve_search_paths(
            context.sub_file_paths,
            video_dir=video_dir,
            base_dir_for_relative=base_dir,
            config_dir=context.config_dir,
        )
        for sub_dir in search_paths:
            if sub_dir == video_dir:
                if self.debug:
                    logging.info("Skipping re-scan of video directory: %s", sub_dir)
                continue
            actions.extend(self.scan_directory(sub_dir, video_filename))

        # 3. 额外配置的 WebDAV 字幕目录
        for remote_dir in resolve_remote_paths(context.remote_sub_paths):
            actions.extend(self.scan_directory(remote_dir, video_filename))

        if actions:
            logging.info("Loaded %s matching subtitle(s)", len(actions))
        else:
            logging.warning("No matching subtitles found in specified paths.")
        return actions

    def scan_directory(self, dir_path: str, video_filename: str) -> List[AttachSubtitle]:
        """扫描单个目录，返回其中匹配的字幕；目录不可用时视为没有字幕。"""

        if self.debug:
            logging.info("Checking directory: %s", dir_path)
        try:
            files = self.lister.list_directory(dir_path)
        except DirectoryListingError as exc:
            logging.warning("Directory does not exist or is not accessible: %s (%s)", dir_path, exc.reason)
            return []

        actions: List[AttachSubtitle] = []
        for candidate in self._collect_candidates(dir_path, files):
            if self.debug:
                logging.info("Checking subtitle file: %s", candidate.filename)
            if self.matcher.matches(video_filename, candidate.filename):
                logging.info("Loading matching subtitle: %s", candidate.path)
                actions.append(AttachSubtitle(candidate.path))
        return actions

    def _collect_candidates(self, dir_path: str, files: List[str]) -> List[SubtitleCandidate]:
        candidates: List[SubtitleCandidate] = []
        for filename in files:
            ext = self.matcher.is_subtitle(filename)
            if ext is None:
                continue
            candidates.append(SubtitleCandidate(directory=dir_path, filename=filename, extension=ext))
        return candidates

    @staticmethod
    def _locate_video(video_path: str) -> Tuple[Optional[str], Optional[str], bool]:
        """返回 (视频目录, 视频文件名, 是否网络流)；网络流没有视频目录。"""

        if is_remote(video_path):
            logging.info("Detected network stream: %s", video_path)
            filename = filename_from_url(video_path)
            if filename:
                logging.info("Extracted filename from network stream: %s", filename)
            else:
                logging.warning("Could not extract filename from network stream URL: %s", video_path)
            return None, filename, True

        video_dir, filename = split_path(video_path)
        logging.info("Processing local file: %s in dir: %s", filename, video_dir)
        return video_dir, filename, False
