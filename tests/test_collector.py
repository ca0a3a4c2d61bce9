from __future__ import annotations

import time

import anyio
import pytest

from commit_review.vcs.collector import collect_file_diffs
from commit_review.vcs.git_provider import GitCommandError


class SlowFirstProvider:
    """第一个文件最慢返回，用来确认结果顺序按 provider 报告顺序还原。"""

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths

    def list_changed_files(self, root_dir: str) -> list[str]:
        return list(self.paths)

    def get_file_diff(self, root_dir: str, path: str) -> str:
        if path == self.paths[0]:
            time.sleep(0.05)
        if path == "broken.py":
            raise GitCommandError("git command failed: git diff -- broken.py")
        return f"+{path}"


def test_collect_preserves_provider_order() -> None:
    paths = ["a.py", "b.py", "c.py", "d.py"]
    provider = SlowFirstProvider(paths)

    async def scenario():
        return await collect_file_diffs(provider, "/repo", exclude_files=(), max_workers=4)

    diffs = anyio.run(scenario)
    assert [d.path for d in diffs] == paths
    assert [d.diff_text for d in diffs] == ["+a.py", "+b.py", "+c.py", "+d.py"]


def test_collect_applies_exclusions() -> None:
    provider = SlowFirstProvider(["dist", "a.py", "bun.lock"])

    async def scenario():
        return await collect_file_diffs(provider, "/repo", exclude_files=("dist", "bun.lock"), max_workers=2)

    assert [d.path for d in anyio.run(scenario)] == ["a.py"]


def test_collect_reraises_provider_error() -> None:
    provider = SlowFirstProvider(["a.py", "broken.py"])

    async def scenario():
        return await collect_file_diffs(provider, "/repo", exclude_files=(), max_workers=2)

    with pytest.raises(GitCommandError):
        anyio.run(scenario)


def test_collect_rejects_non_positive_workers() -> None:
    provider = SlowFirstProvider(["a.py"])

    async def scenario():
        return await collect_file_diffs(provider, "/repo", exclude_files=(), max_workers=0)

    with pytest.raises(ValueError):
        anyio.run(scenario)
