# -*- coding: utf-8 -*-
"""mpv 字幕自动匹配脚本入口。

真正的实现位于 :mod:`sub_matcher` 包内，可直接复用其中的类。
"""

from __future__ import annotations

from sub_matcher.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
