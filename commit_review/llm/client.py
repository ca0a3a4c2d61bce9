"""
LLM Client（基于 OpenAI SDK，对接任意 OpenAI-compatible 网关）。

目标：
- **尽量薄**：只做协议适配与错误处理
- **统一接口**：Agent 只依赖 `complete_text`
- **JSON mode**：Agent 每一步都要求纯 JSON，由 `json_mode=True` 打开 response_format
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx
from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):
    """OpenAI chat message 的最小结构。"""

    role: str
    content: str


def _normalize_base_url(base_url: str) -> str:
    normalized = base_url.rstrip("/")
    if normalized.endswith("/v1"):
        return normalized
    return f"{normalized}/v1"


class OpenAICompatLLMClient:
    """OpenAI-compatible chat completions 客户端。"""

    def __init__(self, api_key: str, base_url: str, http_client: httpx.AsyncClient, model: str) -> None:
        """
        - api_key: LLM API key
        - base_url: OpenAI-compatible base URL（会自动补 `/v1`）
        - http_client: 复用 httpx.AsyncClient 连接池
        - model: 模型名
        """
        self._base_url = _normalize_base_url(base_url=base_url)
        self._model = model
        self._client = AsyncOpenAI(api_key=api_key, base_url=self._base_url, http_client=http_client)

    async def complete_text(self, messages: Sequence[ChatMessage], json_mode: bool = False) -> str:
        """
        调用 chat completion 并返回纯文本 content。

        注意：
        - 出错直接抛异常，便于上游统一处理/告警
        - json_mode 只保证模型输出 JSON 文本，schema 校验由调用方做
        """
        extra: dict[str, object] = {}
        if json_mode:
            extra["response_format"] = {"type": "json_object"}
        try:
            logger.info(f"LLM request: model={self._model}, messages={len(messages)} msg(s), json_mode={json_mode}")
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[m.model_dump() for m in messages],
                **extra,
            )
        except OpenAIError as exc:
            logger.error(f"LLM API error: {exc}")
            raise
        except httpx.HTTPError as exc:
            logger.error(f"LLM HTTP error: {exc}")
            raise

        content = response.choices[0].message.content
        if content is None:
            logger.error("LLM returned None content")
            raise RuntimeError("LLM returned None content")

        logger.info(f"LLM response: {len(content)} chars")
        return str(content)
