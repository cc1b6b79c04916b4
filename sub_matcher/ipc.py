"""mpv JSON IPC 客户端（--input-ipc-server）。"""

from __future__ import annotations

import json
import logging
import socket
from collections import deque
from typing import Any, Deque, Dict, Iterator, List, Optional

from .models import HostAction


class MpvIpcError(Exception):
    """mpv 返回错误或连接中断。"""


class MpvIpcClosed(MpvIpcError):
    """mpv 关闭了 IPC 连接。"""


class MpvIpcClient:
    """通过 Unix socket 与 mpv 通信，负责命令请求与事件读取。"""

    def __init__(self, socket_path: Optional[str] = None, sock: Optional[socket.socket] = None) -> None:
        if sock is None:
            if not socket_path:
                raise ValueError("socket_path or sock is required")
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(socket_path)
            except OSError as exc:
                sock.close()
                raise MpvIpcError(f"无法连接 mpv IPC socket {socket_path}: {exc}") from exc
        self._sock = sock
        self._reader = sock.makefile("r", encoding="utf-8")
        self._next_id = 1
        self._pending_events: Deque[Dict[str, Any]] = deque()

    def close(self) -> None:
        self._reader.close()
        self._sock.close()

    def __enter__(self) -> "MpvIpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def command(self, *args: Any) -> Any:
        request_id = self._next_id
        self._next_id += 1
        payload = json.dumps({"command": list(args), "request_id": request_id}, ensure_ascii=False)
        try:
            self._sock.sendall(payload.encode("utf-8") + b"\n")
        except OSError as exc:
            raise MpvIpcClosed(f"发送 IPC 命令失败：{exc}") from exc

        while True:
            message = self._read_message()
            if "event" in message:
                # 等待回复期间收到的事件留给 events() 处理
                self._pending_events.append(message)
                continue
            if message.get("request_id") != request_id:
                logging.debug("忽略不相关的 IPC 回复：%s", message)
                continue
            error = message.get("error", "success")
            if error != "success":
                raise MpvIpcError(f"{args[0] if args else ''}: {error}")
            return message.get("data")

    def get_property(self, name: str, default: Any = None) -> Any:
        try:
            return self.command("get_property", name)
        except MpvIpcError as exc:
            logging.debug("读取属性 %s 失败：%s", name, exc)
            return default

    def set_property(self, name: str, value: Any) -> None:
        self.command("set_property", name, value)

    def execute(self, action: HostAction) -> None:
        self.command(*action.to_command())

    def events(self) -> Iterator[Dict[str, Any]]:
        """持续产出 mpv 事件，连接关闭时结束。"""

        while True:
            if self._pending_events:
                yield self._pending_events.popleft()
                continue
            try:
                message = self._read_message()
            except MpvIpcClosed:
                return
            except MpvIpcError as exc:
                logging.warning("%s", exc)
                continue
            if "event" in message:
                yield message

    def _read_message(self) -> Dict[str, Any]:
        try:
            line = self._reader.readline()
        except OSError as exc:
            raise MpvIpcClosed(f"读取 IPC 消息失败：{exc}") from exc
        if not line:
            raise MpvIpcClosed("mpv IPC 连接已关闭")
        try:
            return json.loads(line)
        except json.JSONDecodeError as exc:
            raise MpvIpcError(f"无法解析 IPC 消息：{line!r}") from exc


def path_list_to_setting(value: Any) -> str:
    """sub-file-paths 通过 IPC 读取时是列表，拼回原始设置字符串。"""

    if value is None:
        return ""
    if isinstance(value, list):
        items: List[str] = [str(item) for item in value]
        return ";".join(items)
    return str(value)
