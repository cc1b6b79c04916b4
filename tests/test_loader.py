from __future__ import annotations

import logging

import pytest

from sub_matcher.filters import SubtitleMatcher
from sub_matcher.listers import LocalDirectoryLister
from sub_matcher.loader import SubtitleLoader
from sub_matcher.models import AttachSubtitle, MediaContext

from .conftest import FakeLister


@pytest.fixture
def show_listing():
    return {
        "/videos/show": [
            "Show.S02E03.mkv",
            "Show.S02E03.en.srt",
            "Show.S02E04.en.srt",
            "notes.txt",
        ],
        "/videos/show/sub": ["show.s02e03.zh.ass", "Show.S02E03.nfo"],
    }


def make_loader(listing, debug=False):
    lister = FakeLister(listing)
    return SubtitleLoader(matcher=SubtitleMatcher(debug=debug), lister=lister), lister


def test_local_video_scans_video_dir_then_default_sub(show_listing):
    loader, lister = make_loader(show_listing)
    actions = loader.on_media_loaded(MediaContext(media_path="/videos/show/Show.S02E03.mkv"))
    assert actions == [
        AttachSubtitle("/videos/show/Show.S02E03.en.srt"),
        AttachSubtitle("/videos/show/sub/show.s02e03.zh.ass"),
    ]
    assert lister.calls == ["/videos/show", "/videos/show/sub"]


def test_missing_directories_are_skipped(show_listing, caplog):
    show_listing["/abs/subs"] = ["Show.S02E03.forced.ssa"]
    loader, lister = make_loader(show_listing)
    context = MediaContext(
        media_path="/videos/show/Show.S02E03.mkv",
        sub_file_paths="missing;/abs/subs",
    )
    with caplog.at_level(logging.WARNING):
        actions = loader.on_media_loaded(context)
    assert actions == [
        AttachSubtitle("/videos/show/Show.S02E03.en.srt"),
        AttachSubtitle("/abs/subs/Show.S02E03.forced.ssa"),
    ]
    assert lister.calls == ["/videos/show", "/videos/show/missing", "/abs/subs"]
    assert "Directory does not exist or is not accessible: /videos/show/missing" in caplog.text


def test_video_dir_is_not_scanned_twice(show_listing):
    loader, lister = make_loader(show_listing)
    loader.on_media_loaded(
        MediaContext(media_path="/videos/show/Show.S02E03.mkv", sub_file_paths="/videos/show")
    )
    assert lister.calls == ["/videos/show"]


def test_network_stream_uses_config_dir():
    listing = {"/cfg/sub": ["The.Matrix.1999.srt", "The.Matrix.2003.srt", "poster.jpg"]}
    loader, lister = make_loader(listing)
    context = MediaContext(
        media_path="https://x.shegu.net/v?KEY1=a&KEY5=The.Matrix.1999.1080p.mkv",
        config_dir="/cfg",
    )
    assert loader.on_media_loaded(context) == [AttachSubtitle("/cfg/sub/The.Matrix.1999.srt")]
    assert lister.calls == ["/cfg/sub"]


def test_network_stream_without_filename():
    loader, lister = make_loader({})
    assert loader.on_media_loaded(MediaContext(media_path="https://example.com/")) == []
    assert lister.calls == []


def test_no_media_path(caplog):
    loader, lister = make_loader({})
    with caplog.at_level(logging.WARNING):
        assert loader.on_media_loaded(MediaContext(media_path=None)) == []
    assert "No video file currently playing" in caplog.text
    assert lister.calls == []


def test_warns_when_nothing_found(caplog):
    loader, _ = make_loader({"/v": ["Other.2020.srt"]})
    with caplog.at_level(logging.WARNING):
        assert loader.on_media_loaded(MediaContext(media_path="/v/Movie.2020.mkv")) == []
    assert "No matching subtitles found" in caplog.text


def test_local_lister_end_to_end(tmp_path):
    video = tmp_path / "Movie.2020.1080p.mkv"
    video.write_bytes(b"")
    (tmp_path / "movie.2020.zh.srt").write_text("1\n", encoding="utf-8")
    (tmp_path / "Movie.2021.srt").write_text("1\n", encoding="utf-8")
    sub_dir = tmp_path / "sub"
    sub_dir.mkdir()
    (sub_dir / "Movie (2020).ASS").write_text("", encoding="utf-8")

    loader = SubtitleLoader(matcher=SubtitleMatcher(), lister=LocalDirectoryLister())
    actions = loader.on_media_loaded(MediaContext(media_path=str(video)))
    assert actions == [
        AttachSubtitle(f"{tmp_path}/movie.2020.zh.srt"),
        AttachSubtitle(f"{tmp_path}/sub/Movie (2020).ASS"),
    ]


def test_remote_sub_paths_are_scanned_after_local_ones(show_listing):
    remote = "https://dav.example.com/dav/subs"
    show_listing[remote] = ["Show.S02E03.remote.srt", "Show.S02E05.srt"]
    loader, lister = make_loader(show_listing)
    context = MediaContext(
        media_path="/videos/show/Show.S02E03.mkv",
        remote_sub_paths=f"{remote};not-a-url",
    )
    actions = loader.on_media_loaded(context)
    assert actions[-1] == AttachSubtitle(f"{remote}/Show.S02E03.remote.srt")
    assert lister.calls == ["/videos/show", "/videos/show/sub", remote]
