"""
FastAPI 服务入口。

这里做三件事：
- 加载配置（严格校验环境变量）
- 组装外部依赖（HTTP Client / LLM Client / git provider / 文件 writer）
- 装配路由（health + 确定性分析 + agent）

注意：
- 业务流程不写在这里（由 `review/orchestrator.py` 负责）
- `httpx.AsyncClient` 会被复用（避免每个请求新建连接）
"""

from __future__ import annotations

import os

import httpx
from fastapi import FastAPI

from commit_review.api.routes import build_agent_router
from commit_review.api.routes import build_review_router
from commit_review.config import load_config_from_env
from commit_review.llm.client import OpenAICompatLLMClient
from commit_review.review.orchestrator import build_review_orchestrator
from commit_review.storage.writer import FileReportWriter
from commit_review.vcs.git_provider import GitChangeProvider


def build_app() -> FastAPI:
    """创建并返回 FastAPI app（便于测试/复用）。"""

    # 1) 配置：缺失会直接抛错，启动失败（这是期望行为）
    config = load_config_from_env(os.environ)

    # 2) 可复用的 HTTP client：供 LLM 调用使用
    http_client = httpx.AsyncClient(timeout=httpx.Timeout(30.0))

    # 3) LLM client：OpenAI-compatible
    llm_client = OpenAICompatLLMClient(
        api_key=config.llm.api_key,
        base_url=str(config.llm.base_url).rstrip("/"),
        http_client=http_client,
        model=config.llm.model,
    )

    # 4) orchestrator：git 收集 + 纯函数分析 + 文件落盘
    orchestrator = build_review_orchestrator(
        provider=GitChangeProvider(git_bin=config.review.git_bin),
        writer=FileReportWriter(),
        settings=config.review,
    )

    app = FastAPI(title="Commit Review", version="0.1.0")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """健康检查：用于 k8s / LB 探活。"""
        return {"status": "ok"}

    app.include_router(build_review_router(orchestrator=orchestrator))
    app.include_router(
        build_agent_router(
            llm_client=llm_client,
            orchestrator=orchestrator,
            max_steps=config.review.agent_max_steps,
        )
    )
    return app


# Uvicorn 默认会从模块级变量 `app` 读取 ASGI 应用
app = build_app()
