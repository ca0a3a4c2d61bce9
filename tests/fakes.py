from __future__ import annotations

from commit_review.vcs.git_provider import GitCommandError


class FakeChangeProvider:
    """内存 provider：按 dict 的插入顺序报告文件。"""

    def __init__(self, files: dict[str, str], fail: bool = False) -> None:
        self.files = files
        self.fail = fail
        self.root_dirs: list[str] = []

    def list_changed_files(self, root_dir: str) -> list[str]:
        self.root_dirs.append(root_dir)
        if self.fail:
            raise GitCommandError("git command failed: git diff --name-only: not a git repository")
        return list(self.files)

    def get_file_diff(self, root_dir: str, path: str) -> str:
        return self.files[path]


class InMemoryReportWriter:
    def __init__(self, error: OSError | None = None) -> None:
        self.files: dict[str, str] = {}
        self.error = error

    def write(self, path: str, content: str) -> None:
        if self.error is not None:
            raise self.error
        self.files[path] = content


class ScriptedLLMClient:
    """按顺序返回预设回复，并记录每次收到的 messages。"""

    def __init__(self, replies: list[str]) -> None:
        self.replies = list(replies)
        self.calls: list[list[str]] = []

    async def complete_text(self, messages, json_mode: bool = False) -> str:
        self.calls.append([m.content for m in messages])
        if len(self.replies) == 1:
            return self.replies[0]
        return self.replies.pop(0)
