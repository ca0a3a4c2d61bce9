from __future__ import annotations

import pytest

from commit_review.review.classifier import classify
from commit_review.review.classifier import score
from commit_review.review.models import FileDiff
from commit_review.review.models import KeywordCatalog


def _diffs(*texts: str) -> list[FileDiff]:
    return [FileDiff(path=f"f{i}.py", diff_text=t) for i, t in enumerate(texts)]


def test_classify_empty_is_fallback() -> None:
    assert classify([]) == "chore"


def test_classify_fix_keywords() -> None:
    assert classify(_diffs("fix the bug")) == "fix"


def test_classify_tie_resolves_to_fallback() -> None:
    # feat(add) 与 fix(fix) 各 1 分
    assert classify(_diffs("add a fix")) == "chore"


def test_classify_no_evidence_is_fallback() -> None:
    assert classify(_diffs("+x = 1")) == "chore"


def test_classify_is_order_independent() -> None:
    a = "implement new feature"
    b = "fix typo"
    assert classify(_diffs(a, b)) == "feat"
    assert classify(_diffs(b, a)) == "feat"


def test_classify_is_case_insensitive() -> None:
    assert classify(_diffs("README updated")) == "docs"


def test_classify_matches_substrings_inside_words() -> None:
    assert classify(_diffs("use the latest version")) == "test"


def test_score_counts_each_trigger_once_per_diff() -> None:
    assert score(_diffs("bug bug bug"))["fix"] == 1
    assert score(_diffs("bug", "bug"))["fix"] == 2


def test_classify_with_injected_catalog() -> None:
    catalog = KeywordCatalog(triggers={"style": ("LINT",)}, fallback="refactor")
    assert catalog.triggers["style"] == ("lint",)
    assert catalog.triggers["feat"] == ()
    assert classify(_diffs("run lint"), catalog=catalog) == "style"
    assert classify(_diffs("fix the bug"), catalog=catalog) == "refactor"


def test_catalog_rejects_empty_trigger() -> None:
    with pytest.raises(ValueError):
        KeywordCatalog(triggers={"fix": ("",)})
