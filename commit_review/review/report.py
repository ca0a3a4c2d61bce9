"""
Report 组装（纯函数，不做 I/O）。

固定顺序（下游人工 review 依赖这个顺序）：
title -> 生成时间 -> Code Review -> Commit Message -> File Changes

落盘由 orchestrator 调用 writer 完成，这里只返回字符串。
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime, timezone

from commit_review.review.models import DEFAULT_KEYWORD_CATALOG
from commit_review.review.models import AnalysisOutcome
from commit_review.review.models import AnalysisSuccess
from commit_review.review.models import AnalysisWarning
from commit_review.review.models import FileDiff
from commit_review.review.models import KeywordCatalog
from commit_review.review.models import ReportConfig
from commit_review.review.summary import DEFAULT_MAX_CHANGES_FOR_SUMMARY
from commit_review.review.summary import compose_commit_message
from commit_review.review.summary import compose_review

NO_CHANGES_REASON = "No changes detected in the target directory"

_BACKTICK_RUN = re.compile(r"`+")


def assemble(
    diffs: Sequence[FileDiff],
    config: ReportConfig,
    *,
    now: datetime | None = None,
    catalog: KeywordCatalog = DEFAULT_KEYWORD_CATALOG,
    max_changes_for_summary: int = DEFAULT_MAX_CHANGES_FOR_SUMMARY,
) -> AnalysisOutcome:
    """
    组装完整 Markdown 报告。

    - 没有 diff：返回 warning，不生成任何区块
    - now：生成时间，默认当前 UTC（测试里固定它以比较输出）
    """
    if not diffs:
        return AnalysisWarning(reason=NO_CHANGES_REASON)

    generated_at = (now or datetime.now(timezone.utc)).isoformat()
    parts: list[str] = [f"# {config.title}\n", f"_Generated at {generated_at}_\n"]

    if config.include_review:
        parts.append(_review_section(diffs=diffs, review_comments=config.review_comments))
    if config.include_commit_message:
        parts.append(
            _commit_message_section(
                diffs=diffs,
                config=config,
                catalog=catalog,
                max_changes_for_summary=max_changes_for_summary,
            )
        )
    if config.include_changes:
        parts.append(_file_changes_section(diffs=diffs))

    return AnalysisSuccess(content="\n".join(parts))


def _review_section(diffs: Sequence[FileDiff], review_comments: str | None) -> str:
    body = review_comments if review_comments else compose_review(diffs=diffs)
    return f"## Code Review\n\n{body}\n"


def _commit_message_section(
    diffs: Sequence[FileDiff],
    config: ReportConfig,
    catalog: KeywordCatalog,
    max_changes_for_summary: int,
) -> str:
    commit = compose_commit_message(
        diffs=diffs,
        change_type=config.change_type,
        scope=config.scope,
        catalog=catalog,
        max_changes_for_summary=max_changes_for_summary,
    )
    return (
        "## Commit Message\n\n"
        f"```\n{commit.message}\n```\n\n"
        "### Details\n\n"
        f"```\n{commit.details}\n```\n"
    )


def _file_changes_section(diffs: Sequence[FileDiff]) -> str:
    lines: list[str] = ["## File Changes", ""]
    for d in diffs:
        lines.append(f"### {d.path}")
        lines.append("")
        fence = _fence_for(d.diff_text)
        lines.append(f"{fence}diff")
        lines.append(d.diff_text.rstrip("\n"))
        lines.append(fence)
        lines.append("")
    return "\n".join(lines)


def _fence_for(text: str) -> str:
    # 围栏必须长于内容里任何反引号串（至少 3 个）
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    return "`" * max(3, longest + 1)
