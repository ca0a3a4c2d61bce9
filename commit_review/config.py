"""
应用配置加载。

设计目标：
- **严格**：LLM 相关变量缺失就直接报错（避免“看起来跑了其实没配置好”）
- **类型安全**：使用 Pydantic 校验 URL/整数范围等，减少运行时踩坑
- **可测试**：加载函数接收 `environ` 显式输入，便于单元测试

两层：
- `load_review_settings_from_env`：只读分析相关的可选变量（CLI 的确定性命令只需要它）
- `load_config_from_env`：再加上 Agent 需要的 LLM 配置（全部必填）
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field, HttpUrl


class LLMConfig(BaseModel):
    """OpenAI-compatible LLM 网关配置（全部必填）。"""

    base_url: HttpUrl
    api_key: str
    model: str


class ReviewSettings(BaseModel):
    """diff 收集 / 文案生成的可调参数（都有默认值）。"""

    exclude_files: tuple[str, ...] = ("dist", "bun.lock")
    max_changes_for_summary: int = Field(default=5, ge=1)
    max_workers: int = Field(default=4, ge=1)
    git_bin: str = "git"
    agent_max_steps: int = Field(default=10, ge=1)


class AppConfig(BaseModel):
    llm: LLMConfig
    review: ReviewSettings


def load_review_settings_from_env(environ: Mapping[str, str]) -> ReviewSettings:
    """
    读取可选变量；未设置（或为空）的字段用默认值。

    - REVIEW_EXCLUDE_FILES：逗号分隔，例如 `dist,bun.lock,package-lock.json`
    - 非法值（例如非数字）由 Pydantic 抛 `ValidationError`（也是 ValueError）
    """
    values: dict[str, object] = {}
    if environ.get("REVIEW_EXCLUDE_FILES"):
        values["exclude_files"] = tuple(
            item.strip() for item in environ["REVIEW_EXCLUDE_FILES"].split(",") if item.strip()
        )
    if environ.get("REVIEW_MAX_CHANGES_FOR_SUMMARY"):
        values["max_changes_for_summary"] = environ["REVIEW_MAX_CHANGES_FOR_SUMMARY"]
    if environ.get("REVIEW_MAX_WORKERS"):
        values["max_workers"] = environ["REVIEW_MAX_WORKERS"]
    if environ.get("GIT_BIN"):
        values["git_bin"] = environ["GIT_BIN"]
    if environ.get("AGENT_MAX_STEPS"):
        values["agent_max_steps"] = environ["AGENT_MAX_STEPS"]
    return ReviewSettings.model_validate(values)


def load_config_from_env(environ: Mapping[str, str]) -> AppConfig:
    """
    从环境变量加载并校验完整配置。

    - **输入**：`environ`（例如 `os.environ`）
    - **输出**：`AppConfig`
    - **失败**：LLM 变量缺失/为空则抛 `ValueError`
    """

    required_keys: tuple[str, ...] = ("LLM_BASE_URL", "LLM_API_KEY", "LLM_MODEL")

    missing: list[str] = [key for key in required_keys if key not in environ or not environ[key]]
    if missing:
        raise ValueError(f"Missing required env vars: {', '.join(missing)}")

    # 交给 Pydantic 做类型校验（例如 URL 合法性）
    llm = LLMConfig(
        base_url=environ["LLM_BASE_URL"],
        api_key=environ["LLM_API_KEY"],
        model=environ["LLM_MODEL"],
    )
    return AppConfig(llm=llm, review=load_review_settings_from_env(environ))
