"""命令行入口。"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Config
from .filters import SubtitleMatcher
from .ipc import MpvIpcClient, MpvIpcError, path_list_to_setting
from .listers import LocalDirectoryLister, RoutingLister
from .loader import SubtitleLoader
from .models import HostAction, MediaContext
from .titles import TitleExtractor
from .webdav import WebDAVClient


def build_loader(config: Config) -> SubtitleLoader:
    """构建带依赖的字幕加载器实例，用于脚本或其他调用者复用。"""

    client = WebDAVClient(
        auth=config.webdav_auth,
        verify_ssl=config.webdav_verify_ssl,
        timeout=config.webdav_timeout,
    )
    matcher = SubtitleMatcher(subtitle_exts=config.subtitle_exts, debug=config.debug)
    return SubtitleLoader(matcher=matcher, lister=RoutingLister(local=LocalDirectoryLister(), remote=client))


def handle_media_loaded(
    context: MediaContext,
    loader: SubtitleLoader,
    title_extractor: TitleExtractor,
) -> List[HostAction]:
    """一次 file-loaded 事件产生的全部宿主动作，先改标题再加字幕。"""

    actions: List[HostAction] = []
    actions.extend(title_extractor.on_media_loaded(context))
    actions.extend(loader.on_media_loaded(context))
    return actions


def render_actions(actions: Sequence[HostAction], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not actions:
        console.print("[yellow]没有需要执行的动作。[/yellow]")
        return
    table = Table(title="mpv 动作")
    table.add_column("#", justify="right")
    table.add_column("类型")
    table.add_column("命令")
    for index, action in enumerate(actions, start=1):
        table.add_row(str(index), type(action).__name__, escape(" ".join(action.to_command())))
    console.print(table)


def context_from_mpv(client: MpvIpcClient, config: Config) -> MediaContext:
    config_dir = None
    try:
        config_dir = client.command("expand-path", "~~/")
    except MpvIpcError as exc:
        logging.debug("expand-path 失败，使用默认配置目录：%s", exc)
    return MediaContext(
        media_path=client.get_property("path"),
        sub_file_paths=path_list_to_setting(client.get_property("sub-file-paths", "")),
        config_dir=config_dir or config.config_dir,
        remote_sub_paths=config.remote_sub_paths,
    )


def run_match(args: argparse.Namespace, config: Config) -> int:
    sub_file_paths = args.sub_file_paths if args.sub_file_paths is not None else config.sub_file_paths
    context = MediaContext(
        media_path=args.media_path,
        sub_file_paths=sub_file_paths,
        config_dir=args.config_dir or config.config_dir,
        remote_sub_paths=args.remote_sub_paths if args.remote_sub_paths is not None else config.remote_sub_paths,
    )
    actions = handle_media_loaded(context, build_loader(config), TitleExtractor())
    render_actions(actions)
    return 0


def run_watch(args: argparse.Namespace, config: Config) -> int:
    socket_path = args.socket or config.ipc_socket
    loader = build_loader(config)
    title_extractor = TitleExtractor()
    try:
        client = MpvIpcClient(socket_path)
    except MpvIpcError as exc:
        logging.error("%s", exc)
        return 1

    logging.info("Auto subtitle matcher connected to mpv: %s", socket_path)
    with client:
        for event in client.events():
            if event.get("event") != "file-loaded":
                continue
            try:
                context = context_from_mpv(client, config)
                for action in handle_media_loaded(context, loader, title_extractor):
                    client.execute(action)
            except MpvIpcError as exc:
                logging.error("处理 file-loaded 事件失败：%s", exc)
    logging.info("mpv 已断开连接。")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sub-matcher",
        description="根据文件名为 mpv 自动匹配并加载字幕。",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    match_parser = subparsers.add_parser("match", help="离线计算某个视频会加载哪些字幕")
    match_parser.add_argument("media_path", help="视频路径或 URL")
    match_parser.add_argument("--sub-file-paths", default=None, help="等同于 mpv 的 sub-file-paths 设置")
    match_parser.add_argument("--config-dir", default=None, help="~~ 展开使用的 mpv 配置目录")
    match_parser.add_argument("--remote-sub-paths", default=None, help="额外扫描的 WebDAV 字幕目录 URL，逗号或分号分隔")
    match_parser.set_defaults(handler=run_match)

    watch_parser = subparsers.add_parser("watch", help="连接 mpv IPC，在 file-loaded 时自动加载字幕")
    watch_parser.add_argument("--socket", default=None, help="mpv --input-ipc-server 的路径")
    watch_parser.set_defaults(handler=run_watch)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """命令行执行入口。"""

    args = build_parser().parse_args(argv)
    config = Config.from_env()
    logging.getLogger().setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    return args.handler(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
