"""
并发收集每个文件的 diff。

- provider 是同步的（subprocess），用 `anyio.to_thread.run_sync` 放到线程里跑
- `CapacityLimiter` 限制同时跑的 git 进程数
- 结果按 provider 报告的文件顺序还原（单文件/“Update a, b” 这类文案依赖顺序）
"""

from __future__ import annotations

import logging
from collections.abc import Collection

import anyio

from commit_review.review.models import FileDiff
from commit_review.vcs.git_provider import ChangeProvider

logger = logging.getLogger(__name__)


async def collect_file_diffs(
    provider: ChangeProvider,
    root_dir: str,
    exclude_files: Collection[str],
    max_workers: int,
) -> list[FileDiff]:
    if max_workers <= 0:
        raise ValueError("max_workers must be > 0")

    listed = await anyio.to_thread.run_sync(provider.list_changed_files, root_dir)
    paths = [p for p in listed if p not in exclude_files]
    logger.info(f"Collecting diffs: root={root_dir}, files={len(paths)}, excluded={len(listed) - len(paths)}")

    texts: list[str] = [""] * len(paths)
    errors: list[Exception] = []
    limiter = anyio.CapacityLimiter(max_workers)

    async def fetch(index: int, path: str) -> None:
        try:
            texts[index] = await anyio.to_thread.run_sync(provider.get_file_diff, root_dir, path, limiter=limiter)
        except Exception as exc:
            # 不让 task group 包成 ExceptionGroup：记下来，收集结束后原样抛出第一个
            errors.append(exc)

    async with anyio.create_task_group() as tg:
        for index, path in enumerate(paths):
            tg.start_soon(fetch, index, path)

    if errors:
        raise errors[0]
    return [FileDiff(path=path, diff_text=text) for path, text in zip(paths, texts)]
