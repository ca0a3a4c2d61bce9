"""
Review Orchestrator（边界层：I/O + 纯函数编排）。

关键思想：
- **分析全是纯函数**：classifier / diff_stats / summary / report 不碰 I/O
- **I/O 只在这里发生**：收集 diff（git）和写报告（文件系统）
- **失败只在这里转换**：git/文件系统异常在这一层被捕获，变成 `AnalysisFailure`

三个对外操作（HTTP 路由、CLI、Agent 工具共用）：
get_file_changes / generate_commit_message / generate_markdown_file
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anyio

from commit_review.config import ReviewSettings
from commit_review.review.models import DEFAULT_KEYWORD_CATALOG
from commit_review.review.models import AnalysisFailure
from commit_review.review.models import AnalysisOutcome
from commit_review.review.models import AnalysisSuccess
from commit_review.review.models import ChangeType
from commit_review.review.models import CommitMessage
from commit_review.review.models import FileDiff
from commit_review.review.models import KeywordCatalog
from commit_review.review.models import ReportConfig
from commit_review.review.report import assemble
from commit_review.review.summary import compose_commit_message
from commit_review.storage.writer import ReportWriter
from commit_review.vcs.collector import collect_file_diffs
from commit_review.vcs.git_provider import ChangeProvider
from commit_review.vcs.git_provider import GitCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewOrchestrator:
    """Orchestrator 运行时依赖集合。"""

    provider: ChangeProvider
    writer: ReportWriter
    settings: ReviewSettings
    catalog: KeywordCatalog = DEFAULT_KEYWORD_CATALOG


def build_review_orchestrator(
    provider: ChangeProvider,
    writer: ReportWriter,
    settings: ReviewSettings,
) -> ReviewOrchestrator:
    """创建 orchestrator（便于未来注入自定义关键词表等依赖）。"""
    return ReviewOrchestrator(provider=provider, writer=writer, settings=settings)


async def get_file_changes(orchestrator: ReviewOrchestrator, root_dir: str) -> list[FileDiff]:
    """收集 `root_dir` 下的变更（已排除配置里的文件，保持 git 报告的顺序）。"""
    return await collect_file_diffs(
        provider=orchestrator.provider,
        root_dir=root_dir,
        exclude_files=orchestrator.settings.exclude_files,
        max_workers=orchestrator.settings.max_workers,
    )


async def generate_commit_message(
    orchestrator: ReviewOrchestrator,
    root_dir: str,
    change_type: ChangeType | None = None,
    scope: str | None = None,
) -> CommitMessage:
    diffs = await get_file_changes(orchestrator=orchestrator, root_dir=root_dir)
    commit = compose_commit_message(
        diffs=diffs,
        change_type=change_type,
        scope=scope,
        catalog=orchestrator.catalog,
        max_changes_for_summary=orchestrator.settings.max_changes_for_summary,
    )
    logger.info(f"Commit message generated: {commit.message}")
    return commit


async def generate_markdown_file(
    orchestrator: ReviewOrchestrator,
    root_dir: str,
    output_path: str,
    config: ReportConfig,
) -> AnalysisOutcome:
    """
    收集 -> 组装 -> 落盘。

    - 没有变更：原样返回 warning，不写文件
    - git 失败 / 目录创建失败 / 写文件失败：返回 error（不向上抛原始异常）
    """
    try:
        diffs = await get_file_changes(orchestrator=orchestrator, root_dir=root_dir)
        outcome = assemble(
            diffs=diffs,
            config=config,
            catalog=orchestrator.catalog,
            max_changes_for_summary=orchestrator.settings.max_changes_for_summary,
        )
        if not isinstance(outcome, AnalysisSuccess):
            logger.warning(f"Report not generated for {root_dir}: {outcome}")
            return outcome

        await anyio.to_thread.run_sync(orchestrator.writer.write, output_path, outcome.content)
    except (GitCommandError, OSError) as exc:
        logger.error(f"Report generation failed: root={root_dir}, output={output_path}: {exc}")
        return AnalysisFailure(reason=f"Failed to generate markdown file: {exc}")

    logger.info(f"Report written: {output_path} ({len(outcome.content)} chars)")
    return AnalysisSuccess(
        content=outcome.content,
        output_path=output_path,
        message=f"Markdown file generated at {output_path}",
    )
