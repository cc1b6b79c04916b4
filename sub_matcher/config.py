"""配置加载模块。"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .filters import DEFAULT_SUBTITLE_EXTS


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _default_config_dir() -> str:
    if os.name == "nt":
        return os.path.join(os.getenv("APPDATA", os.path.expanduser("~")), "mpv")
    xdg = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(xdg, "mpv")


def _parse_exts(raw: str) -> List[str]:
    exts = [item.strip().lower().lstrip(".") for item in raw.split(",")]
    return [ext for ext in exts if ext]


@dataclass
class Config:
    """应用运行所需的配置参数。"""

    debug: bool
    log_level: str
    subtitle_exts: List[str]
    sub_file_paths: str
    remote_sub_paths: str
    config_dir: str
    ipc_socket: str
    webdav_user: str
    webdav_pass: str
    webdav_verify_ssl: bool
    webdav_timeout: int
    env_file: str
    raw_environment: Dict[str, str] = field(default_factory=dict)

    @property
    def webdav_auth(self) -> Optional[Tuple[str, str]]:
        if self.webdav_user or self.webdav_pass:
            return (self.webdav_user, self.webdav_pass)
        return None

    @classmethod
    def from_env(cls) -> "Config":
        """根据环境变量读取配置。"""

        env_file = os.getenv("SUBMATCHER_ENV_FILE", ".env")
        cls._load_dotenv(env_file)

        defaults = {
            "SUBMATCHER_DEBUG": "false",
            "LOG_LEVEL": "INFO",
            "SUBMATCHER_SUB_EXTS": ",".join(DEFAULT_SUBTITLE_EXTS),
            "SUBMATCHER_SUB_FILE_PATHS": "",
            "SUBMATCHER_REMOTE_SUB_PATHS": "",
            "MPV_CONFIG_DIR": _default_config_dir(),
            "MPV_IPC_SOCKET": "/tmp/mpvsocket",
            "WEBDAV_USER": "",
            "WEBDAV_PASS": "",
            "WEBDAV_VERIFY_SSL": "false",
            "WEBDAV_TIMEOUT": "20",
        }
        env_snapshot = {key: os.getenv(key, default) for key, default in defaults.items()}

        try:
            timeout = int(env_snapshot["WEBDAV_TIMEOUT"])
        except ValueError as exc:
            raise ValueError("WEBDAV_TIMEOUT 必须是整数秒数") from exc

        subtitle_exts = _parse_exts(env_snapshot["SUBMATCHER_SUB_EXTS"])
        if not subtitle_exts:
            raise ValueError("SUBMATCHER_SUB_EXTS 至少需要一个扩展名，例如 'srt,ass'")

        config = cls(
            debug=_env_bool("SUBMATCHER_DEBUG", False),
            log_level=env_snapshot["LOG_LEVEL"],
            subtitle_exts=subtitle_exts,
            sub_file_paths=env_snapshot["SUBMATCHER_SUB_FILE_PATHS"],
            remote_sub_paths=env_snapshot["SUBMATCHER_REMOTE_SUB_PATHS"],
            config_dir=env_snapshot["MPV_CONFIG_DIR"],
            ipc_socket=env_snapshot["MPV_IPC_SOCKET"],
            webdav_user=env_snapshot["WEBDAV_USER"],
            webdav_pass=env_snapshot["WEBDAV_PASS"],
            webdav_verify_ssl=_env_bool("WEBDAV_VERIFY_SSL", False),
            webdav_timeout=timeout,
            env_file=env_file,
            raw_environment=env_snapshot,
        )

        # 在此初始化基础日志配置，方便 CLI 或其他入口复用
        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.INFO),
            format="[%(asctime)s] %(levelname)s: %(message)s",
        )

        return config

    @staticmethod
    def _load_dotenv(file_path: str) -> None:
        if not file_path or not os.path.exists(file_path):
            return
        try:
            with open(file_path, "r", encoding="utf-8") as fp:
                for line in fp:
                    stripped = line.strip()
                    if not stripped or stripped.startswith("#"):
                        continue
                    if "=" not in stripped:
                        continue
                    key, value = stripped.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if not key:
                        continue
                    # 若环境变量已存在，优先保留外部传入的值
                    os.environ.setdefault(key, value)
        except OSError as exc:
            logging.warning("读取 %s 失败，沿用默认配置：%s", file_path, exc)
