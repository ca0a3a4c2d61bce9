"""
HTTP 接入层。

职责：
- 解析请求 body -> Pydantic schema（与 Agent 工具参数共用同一套 schema）
- 调用 orchestrator 的三个操作 / 运行 Agent
- 把结果序列化为 JSON（报告结果保持 success/warning/error 三态）

业务流程不写在这里。
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import HTTPException
from pydantic import BaseModel, Field

from commit_review.agent.runtime import run_react_agent
from commit_review.agent.schemas import GenerateCommitMessageArgs
from commit_review.agent.schemas import GenerateMarkdownFileArgs
from commit_review.agent.schemas import GetFileChangesArgs
from commit_review.agent.tools.registry import build_tool_executor
from commit_review.llm.client import OpenAICompatLLMClient
from commit_review.review.orchestrator import ReviewOrchestrator
from commit_review.review.orchestrator import generate_commit_message
from commit_review.review.orchestrator import generate_markdown_file
from commit_review.review.orchestrator import get_file_changes
from commit_review.vcs.git_provider import GitCommandError


class AgentRequest(BaseModel):
    prompt: str = Field(min_length=1)


def build_review_router(orchestrator: ReviewOrchestrator) -> APIRouter:
    """创建确定性分析路由（不需要 LLM）。"""
    router = APIRouter()

    @router.post("/changes")
    async def changes(req: GetFileChangesArgs) -> list[dict[str, str]]:
        try:
            diffs = await get_file_changes(orchestrator=orchestrator, root_dir=req.rootDir)
        except GitCommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return [{"file": d.path, "diff": d.diff_text} for d in diffs]

    @router.post("/commit-message")
    async def commit_message(req: GenerateCommitMessageArgs) -> dict[str, str]:
        try:
            commit = await generate_commit_message(
                orchestrator=orchestrator,
                root_dir=req.rootDir,
                change_type=req.type,
                scope=req.scope,
            )
        except GitCommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"commitMessage": commit.message, "details": commit.details}

    @router.post("/report")
    async def report(req: GenerateMarkdownFileArgs) -> dict[str, object]:
        outcome = await generate_markdown_file(
            orchestrator=orchestrator,
            root_dir=req.rootDir,
            output_path=req.outputPath,
            config=req.to_report_config(),
        )
        return outcome.model_dump()

    return router


def build_agent_router(
    llm_client: OpenAICompatLLMClient,
    orchestrator: ReviewOrchestrator,
    max_steps: int,
) -> APIRouter:
    """创建 Agent 路由：自然语言指令 -> 受控 ReAct -> 最终回答。"""
    router = APIRouter()
    tool_executor = build_tool_executor(orchestrator=orchestrator)

    @router.post("/agent")
    async def agent(req: AgentRequest) -> dict[str, str]:
        answer = await run_react_agent(
            llm_client=llm_client,
            user_prompt=req.prompt,
            tool_executor=tool_executor,
            max_steps=max_steps,
        )
        return {"answer": answer}

    return router
