from __future__ import annotations

import os
from typing import Protocol


class ReportWriter(Protocol):
    """报告落盘协议（测试里可以换成内存实现）。"""

    def write(self, path: str, content: str) -> None: ...


class FileReportWriter:
    """写本地文件；父目录不存在时先创建。失败直接抛 OSError。"""

    def write(self, path: str, content: str) -> None:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
