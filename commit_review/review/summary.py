"""
Summary（确定性文本生成）。

- 变更概要：按文件数量选择不同措辞
- 提交信息：Conventional Commits 格式 `type(scope): summary` + 逐文件 +/- 明细
- Review：Markdown 汇总 + 逐文件统计与复杂度评级

这里不依赖 LLM，输出稳定，方便直接写进报告/回显给 Agent。
"""

from __future__ import annotations

from collections.abc import Sequence

from commit_review.review.classifier import classify
from commit_review.review.diff_stats import compute_stats
from commit_review.review.diff_stats import total_stats
from commit_review.review.models import DEFAULT_KEYWORD_CATALOG
from commit_review.review.models import ChangeType
from commit_review.review.models import CommitMessage
from commit_review.review.models import FileDiff
from commit_review.review.models import KeywordCatalog

NO_CHANGES = "No changes detected"
NO_REVIEW = "No changes to review."
DEFAULT_MAX_CHANGES_FOR_SUMMARY = 5

# 复杂度评级只看 diff 原始字符长度
LOW_COMPLEXITY_MAX_CHARS = 300
MEDIUM_COMPLEXITY_MAX_CHARS = 1000


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def extension(path: str) -> str:
    """最后一个 `.` 之后的部分；没有 `.` 时返回空串（单独算一种类型）。"""
    if "." not in path:
        return ""
    return path.rsplit(".", 1)[-1]


def complexity_rating(diff_text: str) -> str:
    size = len(diff_text)
    if size < LOW_COMPLEXITY_MAX_CHARS:
        return "low"
    if size < MEDIUM_COMPLEXITY_MAX_CHARS:
        return "medium"
    return "high"


def summarize_change_set(
    diffs: Sequence[FileDiff],
    max_changes_for_summary: int = DEFAULT_MAX_CHANGES_FOR_SUMMARY,
) -> str:
    if not diffs:
        return NO_CHANGES
    if len(diffs) == 1:
        return f"Update {diffs[0].path}"
    if len(diffs) <= max_changes_for_summary:
        return "Update " + ", ".join(basename(d.path) for d in diffs)

    # 文件太多时只给数量 + 类型
    file_types = {extension(d.path) for d in diffs}
    if len(file_types) == 1:
        return f"Update {len(diffs)} {next(iter(file_types))} files"
    return f"Update {len(diffs)} files across {len(file_types)} file types"


def compose_commit_message(
    diffs: Sequence[FileDiff],
    change_type: ChangeType | None = None,
    scope: str | None = None,
    *,
    catalog: KeywordCatalog = DEFAULT_KEYWORD_CATALOG,
    max_changes_for_summary: int = DEFAULT_MAX_CHANGES_FOR_SUMMARY,
) -> CommitMessage:
    """
    生成提交信息。

    - change_type：调用方显式指定时直接使用，否则走关键词分类
    - scope：空串视为未提供
    """
    commit_type = change_type or classify(diffs=diffs, catalog=catalog)
    scope_suffix = f"({scope})" if scope else ""
    summary = summarize_change_set(diffs=diffs, max_changes_for_summary=max_changes_for_summary)
    return CommitMessage(
        message=f"{commit_type}{scope_suffix}: {summary}",
        details=_commit_details(diffs=diffs),
    )


def _commit_details(diffs: Sequence[FileDiff]) -> str:
    if not diffs:
        return NO_CHANGES
    lines: list[str] = []
    for d in diffs:
        stats = compute_stats(d.diff_text)
        lines.append(f"{d.path}: +{stats.added} -{stats.removed}")
    return "\n".join(lines)


def compose_review(diffs: Sequence[FileDiff]) -> str:
    """
    生成 Markdown review 正文（会被嵌进报告的 `## Code Review` 下）。

    Overview 和逐文件小节都用 `####`：报告里的 `###` 标题只属于 File Changes 区块（和固定的 Details）。
    """
    if not diffs:
        return NO_REVIEW

    per_file = [(d, compute_stats(d.diff_text)) for d in diffs]
    totals = total_stats(stats for _, stats in per_file)
    file_types = {extension(d.path) for d in diffs}

    lines: list[str] = []
    lines.append("#### Overview")
    lines.append("")
    lines.append(f"- Files changed: **{len(diffs)}**")
    lines.append(f"- File types: **{len(file_types)}**")
    lines.append(f"- Total additions: **+{totals.added}**")
    lines.append(f"- Total deletions: **-{totals.removed}**")
    lines.append(f"- Net change: **{totals.net:+d}** lines")

    for d, stats in per_file:
        lines.append("")
        lines.append(f"#### {d.path}")
        lines.append("")
        lines.append(f"- Added: {stats.added}")
        lines.append(f"- Removed: {stats.removed}")
        lines.append(f"- Net change: {stats.net:+d}")
        lines.append(f"- Complexity: {complexity_rating(d.diff_text)}")

    return "\n".join(lines)
