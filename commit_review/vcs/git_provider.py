"""
Git 变更 provider（外部系统连接器）。

约定：
- 只负责跑 git CLI、返回文本；不做分析（分析在 `review/` 下的纯函数里）
- git 失败直接抛 `GitCommandError`，由 orchestrator 边界统一转成 outcome
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)


class GitCommandError(RuntimeError):
    """git 命令返回非 0（或根本无法执行）时抛出。"""

    pass


class ChangeProvider(Protocol):
    """变更来源协议（依赖倒置：测试里可以换成内存 fake）。"""

    def list_changed_files(self, root_dir: str) -> list[str]: ...

    def get_file_diff(self, root_dir: str, path: str) -> str: ...


class GitChangeProvider:
    """基于 git CLI 的 provider：工作区相对于 index 的未暂存变更。"""

    def __init__(self, git_bin: str = "git") -> None:
        self._git_bin = git_bin

    def list_changed_files(self, root_dir: str) -> list[str]:
        # -z：路径不做转义（中文/空格路径原样返回）
        output = _run_git(self._git_bin, ["diff", "--name-only", "-z"], root_dir)
        return [path for path in output.split("\0") if path]

    def get_file_diff(self, root_dir: str, path: str) -> str:
        return _run_git(self._git_bin, ["diff", "--", path], root_dir)


def _run_git(git_bin: str, args: list[str], cwd: str) -> str:
    if not os.path.isdir(cwd):
        raise GitCommandError(f"Directory does not exist: {cwd}")
    cmd = [git_bin] + args
    try:
        # 非 UTF-8 内容按替换字符解码
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, encoding="utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise GitCommandError(f"git executable not found: {git_bin}") from exc
    if result.returncode != 0:
        logger.error(f"git failed: {' '.join(cmd)}\nstdout={result.stdout}\nstderr={result.stderr}")
        raise GitCommandError(f"git command failed: {' '.join(cmd)}: {result.stderr.strip()}")
    return result.stdout
