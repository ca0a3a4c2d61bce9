"""
变更类型分类器（关键词启发式，非 AI）。

特点：
- 确定性：只做小写后的子串包含匹配（不做词边界，"latest" 也会命中 "test"）
- 无状态：关键词表由调用方传入，默认值是不可变常量
- 与顺序无关：平局一律回落到 fallback，而不是按插入顺序取第一个

注意：这是“建议性”的分类，可能误判。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from commit_review.review.models import CHANGE_TYPES
from commit_review.review.models import DEFAULT_KEYWORD_CATALOG
from commit_review.review.models import ChangeType
from commit_review.review.models import FileDiff
from commit_review.review.models import KeywordCatalog

logger = logging.getLogger(__name__)


def score(diffs: Sequence[FileDiff], catalog: KeywordCatalog = DEFAULT_KEYWORD_CATALOG) -> dict[ChangeType, int]:
    """统计每个 label 的命中数：每个 diff 里每命中一个触发词 +1，跨 diff 累加。"""
    counts: dict[ChangeType, int] = {label: 0 for label in CHANGE_TYPES}
    for d in diffs:
        lowered = d.diff_text.lower()
        for label, keywords in catalog.triggers.items():
            for keyword in keywords:
                if keyword in lowered:
                    counts[label] += 1
    return counts


def classify(diffs: Sequence[FileDiff], catalog: KeywordCatalog = DEFAULT_KEYWORD_CATALOG) -> ChangeType:
    """
    返回得分严格最高的 label。

    - 空序列 / 全零 / 最高分并列：返回 `catalog.fallback`
    """
    counts = score(diffs=diffs, catalog=catalog)
    top = max(counts.values())
    if top == 0:
        return catalog.fallback

    leaders = [label for label, count in counts.items() if count == top]
    if len(leaders) != 1:
        logger.debug(f"Change type tie between {leaders}, falling back to {catalog.fallback}")
        return catalog.fallback
    return leaders[0]
