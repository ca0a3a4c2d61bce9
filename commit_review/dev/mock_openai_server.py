"""
本地 Mock OpenAI-compatible LLM server。

用途：
- 在没有真实 LLM 网关的情况下，本地跑通 Agent 闭环：
  prompt -> action(generate_commit_message) -> observation -> final

启动：
  python -m commit_review.dev.mock_openai_server
然后把 LLM_BASE_URL 指向 http://127.0.0.1:9001
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel, Field

from commit_review.llm.client import ChatMessage

_QUOTED = re.compile(r"'([^']+)'")


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[ChatMessage] = Field(default_factory=list)


def _extract_root_dir(prompt: str) -> str:
    """取 prompt 里第一个单引号包住的片段作为目录，例如 "changes in '.' directory"。"""
    match = _QUOTED.search(prompt)
    if match is None:
        return "."
    return match.group(1)


def _build_mock_action_json(root_dir: str) -> str:
    return json.dumps(
        {"kind": "action", "call": {"name": "generate_commit_message", "args": {"rootDir": root_dir}}}
    )


def _build_mock_final_json(observation: str) -> str:
    return json.dumps({"kind": "final", "answer": f"[MOCK] Tool result: {observation}"}, ensure_ascii=False)


def _decide_mock_response(messages: Sequence[ChatMessage]) -> str:
    user_texts = [m.content for m in messages if m.role == "user"]
    if not user_texts:
        raise ValueError("Mock server expects at least one user message")

    # 已经拿到过 observation：直接结束
    if user_texts[-1].startswith('{"observation"'):
        return _build_mock_final_json(observation=user_texts[-1])

    return _build_mock_action_json(root_dir=_extract_root_dir(prompt=user_texts[0]))


app = FastAPI(title="Mock OpenAI-compatible LLM", version="0.1.0")


@app.post("/v1/chat/completions")
async def chat_completions(req: ChatCompletionRequest) -> dict[str, object]:
    content = _decide_mock_response(messages=req.messages)
    return {"choices": [{"message": {"content": content}}]}


def main() -> None:
    uvicorn.run(app, host="127.0.0.1", port=9001)


if __name__ == "__main__":
    main()
