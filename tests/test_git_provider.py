from __future__ import annotations

import shutil
import subprocess

import anyio
import pytest

from commit_review.config import ReviewSettings
from commit_review.review.models import AnalysisSuccess
from commit_review.review.models import ReportConfig
from commit_review.review.orchestrator import build_review_orchestrator
from commit_review.review.orchestrator import generate_markdown_file
from commit_review.storage.writer import FileReportWriter
from commit_review.vcs.git_provider import GitChangeProvider
from commit_review.vcs.git_provider import GitCommandError

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(cwd, *args: str) -> None:
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)


@pytest.fixture
def repo(tmp_path):
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "config", "user.email", "dev@example.com")
    _git(tmp_path, "config", "user.name", "dev")
    (tmp_path / "a.txt").write_text("one\ntwo\n", encoding="utf-8")
    (tmp_path / "b.txt").write_text("untouched\n", encoding="utf-8")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-q", "-m", "init")
    return tmp_path


@requires_git
def test_list_changed_files_reports_unstaged_changes(repo) -> None:
    (repo / "a.txt").write_text("one\nthree\n", encoding="utf-8")
    assert GitChangeProvider().list_changed_files(str(repo)) == ["a.txt"]


@requires_git
def test_get_file_diff_returns_unified_diff(repo) -> None:
    (repo / "a.txt").write_text("one\nthree\n", encoding="utf-8")
    diff = GitChangeProvider().get_file_diff(str(repo), "a.txt")
    assert "--- a/a.txt" in diff
    assert "-two" in diff
    assert "+three" in diff


@requires_git
def test_clean_tree_has_no_changes(repo) -> None:
    assert GitChangeProvider().list_changed_files(str(repo)) == []


def test_missing_directory_raises(tmp_path) -> None:
    with pytest.raises(GitCommandError):
        GitChangeProvider().list_changed_files(str(tmp_path / "missing"))


def test_missing_git_binary_raises(tmp_path) -> None:
    with pytest.raises(GitCommandError):
        GitChangeProvider(git_bin="definitely-not-git").list_changed_files(str(tmp_path))


@requires_git
def test_non_utf8_diff_is_decoded_with_replacement(repo) -> None:
    (repo / "legacy.txt").write_bytes(b"caf\xe9\n")
    _git(repo, "add", "legacy.txt")
    _git(repo, "commit", "-q", "-m", "latin-1")
    (repo / "legacy.txt").write_bytes(b"caf\xe9 cr\xe8me\n")

    provider = GitChangeProvider()
    assert provider.list_changed_files(str(repo)) == ["legacy.txt"]
    diff = provider.get_file_diff(str(repo), "legacy.txt")
    assert "+caf\ufffd cr\ufffdme" in diff


@requires_git
def test_non_utf8_change_produces_report(repo, tmp_path) -> None:
    (repo / "legacy.txt").write_bytes(b"caf\xe9\n")
    _git(repo, "add", "legacy.txt")
    _git(repo, "commit", "-q", "-m", "latin-1")
    (repo / "legacy.txt").write_bytes(b"caf\xe9 cr\xe8me\n")
    orchestrator = build_review_orchestrator(
        provider=GitChangeProvider(),
        writer=FileReportWriter(),
        settings=ReviewSettings(),
    )
    output_path = str(tmp_path / "out" / "review.md")

    async def run():
        return await generate_markdown_file(orchestrator, str(repo), output_path, ReportConfig())

    outcome = anyio.run(run)
    assert isinstance(outcome, AnalysisSuccess)
    assert "### legacy.txt" in outcome.content
