"""
Review 领域模型（Pydantic）。

用途：
- 明确 pipeline 各阶段的输入/输出结构（FileDiff -> DiffStats -> 文本 -> 报告）
- 关键词表、报告配置都是显式传入的不可变值，不依赖模块级可变状态
- 最终结果用 tagged union（success/warning/error）表达，调用方按 `status` 分支
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ChangeType = Literal["feat", "fix", "docs", "style", "refactor", "test", "chore"]

# 固定顺序：日志/评分输出都按这个顺序排列
CHANGE_TYPES: tuple[ChangeType, ...] = ("feat", "fix", "docs", "style", "refactor", "test", "chore")


class FileDiff(BaseModel):
    """单个文件的 diff（由版本控制 provider 产出，构造后不可变）。"""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    diff_text: str = ""


class DiffStats(BaseModel):
    """单个 diff 的行数统计；`net` 是派生值，不存储。"""

    model_config = ConfigDict(frozen=True)

    added: int = Field(default=0, ge=0)
    removed: int = Field(default=0, ge=0)

    @property
    def net(self) -> int:
        return self.added - self.removed


class KeywordCatalog(BaseModel):
    """
    分类策略：label -> 触发子串列表。

    - 闭集中的每个 label 都必须有一项（缺失的补成空元组）
    - 触发词统一转小写（分类时对 diff 也做小写后再做子串包含匹配）
    - `fallback` 是平局/全零时的兜底 label
    """

    model_config = ConfigDict(frozen=True)

    triggers: dict[ChangeType, tuple[str, ...]] = Field(default_factory=dict)
    fallback: ChangeType = "chore"

    @field_validator("triggers")
    @classmethod
    def _fill_closed_set(cls, value: dict[ChangeType, tuple[str, ...]]) -> dict[ChangeType, tuple[str, ...]]:
        normalized: dict[ChangeType, tuple[str, ...]] = {}
        for label in CHANGE_TYPES:
            keywords = value.get(label, ())
            if any(not k for k in keywords):
                raise ValueError(f"empty trigger for label: {label}")
            normalized[label] = tuple(k.lower() for k in keywords)
        return normalized


DEFAULT_KEYWORD_CATALOG = KeywordCatalog(
    triggers={
        "feat": ("add", "implement", "create", "feature"),
        "fix": ("fix", "resolve", "bug", "issue"),
        "docs": ("document", "comment", "readme"),
        "style": ("format", "style", "css"),
        "refactor": ("refactor", "restructure", "reorganize"),
        "test": ("test", "spec", "coverage"),
        "chore": ("config", "setup", "dependency"),
    },
    fallback="chore",
)


class ReportConfig(BaseModel):
    """一次报告生成的配置（每次调用新建，不持久化）。"""

    title: str = "Code Review Results"
    include_changes: bool = True
    include_commit_message: bool = True
    include_review: bool = False
    review_comments: str | None = None
    change_type: ChangeType | None = None
    scope: str | None = None


class CommitMessage(BaseModel):
    """Conventional Commits 风格的提交信息 + 逐文件明细。"""

    message: str
    details: str


class AnalysisSuccess(BaseModel):
    status: Literal["success"] = "success"
    content: str
    output_path: str | None = None
    message: str = ""


class AnalysisWarning(BaseModel):
    status: Literal["warning"] = "warning"
    reason: str


class AnalysisFailure(BaseModel):
    status: Literal["error"] = "error"
    reason: str


AnalysisOutcome = Annotated[
    Union[AnalysisSuccess, AnalysisWarning, AnalysisFailure],
    Field(discriminator="status"),
]
