from __future__ import annotations

"""
最小 ReAct runtime（受控）。

设计目标：
- **你写流程**：外部决定 max_steps、提供 tool_executor
- **模型只输出结构化指令**：JSON-only（action 或 final）
- **工具是确定性的**：分析都在 orchestrator 的纯函数里，模型只决定“何时调用哪个”
"""

import json
import logging
from collections.abc import Awaitable, Callable

from pydantic import TypeAdapter, ValidationError

from commit_review.agent.prompt import build_react_instructions
from commit_review.agent.schemas import AgentAction
from commit_review.agent.schemas import AgentFinal
from commit_review.agent.schemas import AgentStep
from commit_review.llm.client import ChatMessage
from commit_review.llm.client import OpenAICompatLLMClient

logger = logging.getLogger(__name__)

ToolExecutor = Callable[[AgentAction], Awaitable[object]]

STEP_LIMIT_ANSWER = "Review incomplete (step limit reached)"

_agent_step_adapter: TypeAdapter[AgentStep] = TypeAdapter(AgentStep)


async def run_react_agent(
    llm_client: OpenAICompatLLMClient,
    user_prompt: str,
    tool_executor: ToolExecutor,
    max_steps: int,
) -> str:
    """
    运行受控 ReAct loop。

    - 输入：用户提示、工具执行器、最大步数
    - 输出：最终的自然语言结论（由模型在 final.answer 给出）
    - 失败：模型输出非 JSON/不符合 schema 会直接抛错（不要继续执行）
    """
    if max_steps <= 0:
        raise ValueError("max_steps must be > 0")

    messages: list[ChatMessage] = [
        ChatMessage(role="system", content=build_react_instructions()),
        ChatMessage(role="user", content=user_prompt),
    ]

    for step_no in range(1, max_steps + 1):
        # 1) 让模型给出下一步：action 或 final（必须 JSON-only）
        raw = await llm_client.complete_text(messages=messages, json_mode=True)
        step = parse_agent_step(raw=raw)

        if isinstance(step, AgentFinal):
            logger.info(f"Agent finished at step {step_no}")
            return step.answer

        # 2) 执行工具
        logger.info(f"Agent step {step_no}: calling {step.call.name}")
        observation = await tool_executor(step)

        # 3) 把模型的 action 原文和 observation 回填给模型，进入下一轮
        messages.append(ChatMessage(role="assistant", content=raw))
        messages.append(
            ChatMessage(
                role="user",
                content=f'{{"observation": {json.dumps(observation, ensure_ascii=False)}}}',
            )
        )

    logger.warning(f"Agent stopped after {max_steps} steps without a final answer")
    return STEP_LIMIT_ANSWER


def parse_agent_step(raw: str) -> AgentStep:
    """将模型输出的 JSON 解析为 `AgentStep`（action/final）。"""
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Agent output is not valid JSON. Raw: {raw}") from exc
    try:
        return _agent_step_adapter.validate_python(parsed)
    except ValidationError as exc:
        raise ValueError(f"Agent output does not match step schema: {exc}") from exc
