from __future__ import annotations

from collections.abc import Iterable

from commit_review.review.models import DiffStats


def compute_stats(diff_text: str) -> DiffStats:
    added = 0
    removed = 0
    for line in diff_text.splitlines():
        # `+++ b/x` / `--- a/x` 是文件头，不算内容变更
        if line.startswith("+") and not line.startswith("+++"):
            added += 1
            continue
        if line.startswith("-") and not line.startswith("---"):
            removed += 1
            continue
    return DiffStats(added=added, removed=removed)


def total_stats(stats: Iterable[DiffStats]) -> DiffStats:
    added = 0
    removed = 0
    for s in stats:
        added += s.added
        removed += s.removed
    return DiffStats(added=added, removed=removed)
