from __future__ import annotations

"""
工具注册/路由。

为什么需要 registry：
- 把“模型输出的 tool name”映射到 orchestrator 的对应操作
- 统一把结果转成可 JSON 序列化的 observation
- 统一做未知工具名的错误处理
"""

from collections.abc import Awaitable, Callable

from commit_review.agent.schemas import AgentAction
from commit_review.review.orchestrator import ReviewOrchestrator
from commit_review.review.orchestrator import generate_commit_message
from commit_review.review.orchestrator import generate_markdown_file
from commit_review.review.orchestrator import get_file_changes
from commit_review.vcs.git_provider import GitCommandError


def build_tool_executor(orchestrator: ReviewOrchestrator) -> Callable[[AgentAction], Awaitable[object]]:
    """把 orchestrator 绑定进 executor，交给 runtime 调用。"""

    async def execute(action: AgentAction) -> object:
        return await execute_tool(action=action, orchestrator=orchestrator)

    return execute


async def execute_tool(action: AgentAction, orchestrator: ReviewOrchestrator) -> object:
    """
    执行一个工具调用，并返回 observation（必须可 JSON 序列化）。

    git 失败（例如 rootDir 不是仓库）作为 observation 回给模型，让它修正参数；
    其他异常照常抛出。
    """
    try:
        return await _dispatch(action=action, orchestrator=orchestrator)
    except GitCommandError as exc:
        return {"error": str(exc)}


async def _dispatch(action: AgentAction, orchestrator: ReviewOrchestrator) -> object:
    call = action.call
    if call.name == "get_file_changes":
        diffs = await get_file_changes(orchestrator=orchestrator, root_dir=call.args.rootDir)
        return [{"file": d.path, "diff": d.diff_text} for d in diffs]
    if call.name == "generate_commit_message":
        commit = await generate_commit_message(
            orchestrator=orchestrator,
            root_dir=call.args.rootDir,
            change_type=call.args.type,
            scope=call.args.scope,
        )
        return {"commitMessage": commit.message, "details": commit.details}
    if call.name == "generate_markdown_file":
        outcome = await generate_markdown_file(
            orchestrator=orchestrator,
            root_dir=call.args.rootDir,
            output_path=call.args.outputPath,
            config=call.args.to_report_config(),
        )
        # 正文已经落盘，不回填给模型（避免占满上下文）
        return outcome.model_dump(exclude={"content"})
    raise ValueError(f"Unknown tool: {call.name}")
