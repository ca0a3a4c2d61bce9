"""
命令行入口。

用法：
  commit-review changes .
  commit-review commit-message . --type feat --scope auth
  commit-review report . ./review.md --title "Sprint Review" --no-changes
  commit-review agent "Generate a markdown file with code review results for '.' and save it to 'review.md'"

只有 `agent` 子命令需要 LLM 配置；其余命令只读 REVIEW_* / GIT_BIN 等可选变量。
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence

import anyio
import httpx

from commit_review.agent.runtime import run_react_agent
from commit_review.agent.tools.registry import build_tool_executor
from commit_review.config import ReviewSettings
from commit_review.config import load_config_from_env
from commit_review.config import load_review_settings_from_env
from commit_review.llm.client import OpenAICompatLLMClient
from commit_review.review.models import CHANGE_TYPES
from commit_review.review.models import AnalysisFailure
from commit_review.review.models import AnalysisSuccess
from commit_review.review.models import ReportConfig
from commit_review.review.orchestrator import ReviewOrchestrator
from commit_review.review.orchestrator import build_review_orchestrator
from commit_review.review.orchestrator import generate_commit_message
from commit_review.review.orchestrator import generate_markdown_file
from commit_review.review.orchestrator import get_file_changes
from commit_review.storage.writer import FileReportWriter
from commit_review.vcs.git_provider import GitChangeProvider
from commit_review.vcs.git_provider import GitCommandError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="commit-review", description="Analyze uncommitted git changes.")
    sub = parser.add_subparsers(dest="command", required=True)

    changes = sub.add_parser("changes", help="print changed files and their diffs as JSON")
    changes.add_argument("root_dir")

    commit = sub.add_parser("commit-message", help="generate a conventional commit message")
    commit.add_argument("root_dir")
    commit.add_argument("--type", dest="change_type", choices=CHANGE_TYPES)
    commit.add_argument("--scope")

    report = sub.add_parser("report", help="generate a markdown review report")
    report.add_argument("root_dir")
    report.add_argument("output_path")
    report.add_argument("--title", default="Code Review Results")
    report.add_argument("--no-changes", dest="include_changes", action="store_false")
    report.add_argument("--no-commit-message", dest="include_commit_message", action="store_false")
    report.add_argument("--review", dest="include_review", action="store_true")
    report.add_argument("--review-comments")
    report.add_argument("--type", dest="change_type", choices=CHANGE_TYPES)
    report.add_argument("--scope")

    agent = sub.add_parser("agent", help="run the review agent with a natural-language instruction")
    agent.add_argument("prompt")
    return parser


def _build_orchestrator(settings: ReviewSettings) -> ReviewOrchestrator:
    return build_review_orchestrator(
        provider=GitChangeProvider(git_bin=settings.git_bin),
        writer=FileReportWriter(),
        settings=settings,
    )


async def _run_changes(args: argparse.Namespace) -> int:
    orchestrator = _build_orchestrator(load_review_settings_from_env(os.environ))
    diffs = await get_file_changes(orchestrator=orchestrator, root_dir=args.root_dir)
    print(json.dumps([{"file": d.path, "diff": d.diff_text} for d in diffs], ensure_ascii=False, indent=2))
    return 0


async def _run_commit_message(args: argparse.Namespace) -> int:
    orchestrator = _build_orchestrator(load_review_settings_from_env(os.environ))
    commit = await generate_commit_message(
        orchestrator=orchestrator,
        root_dir=args.root_dir,
        change_type=args.change_type,
        scope=args.scope,
    )
    print(commit.message)
    print()
    print(commit.details)
    return 0


async def _run_report(args: argparse.Namespace) -> int:
    orchestrator = _build_orchestrator(load_review_settings_from_env(os.environ))
    config = ReportConfig(
        title=args.title,
        include_changes=args.include_changes,
        include_commit_message=args.include_commit_message,
        include_review=args.include_review,
        review_comments=args.review_comments,
        change_type=args.change_type,
        scope=args.scope,
    )
    outcome = await generate_markdown_file(
        orchestrator=orchestrator,
        root_dir=args.root_dir,
        output_path=args.output_path,
        config=config,
    )
    if isinstance(outcome, AnalysisSuccess):
        print(outcome.message)
        return 0
    print(f"[{outcome.status}] {outcome.reason}", file=sys.stderr)
    return 1 if isinstance(outcome, AnalysisFailure) else 0


async def _run_agent(args: argparse.Namespace) -> int:
    config = load_config_from_env(os.environ)
    orchestrator = _build_orchestrator(config.review)
    async with httpx.AsyncClient(timeout=httpx.Timeout(30.0)) as http_client:
        llm_client = OpenAICompatLLMClient(
            api_key=config.llm.api_key,
            base_url=str(config.llm.base_url).rstrip("/"),
            http_client=http_client,
            model=config.llm.model,
        )
        answer = await run_react_agent(
            llm_client=llm_client,
            user_prompt=args.prompt,
            tool_executor=build_tool_executor(orchestrator=orchestrator),
            max_steps=config.review.agent_max_steps,
        )
    print(answer)
    return 0


_COMMANDS = {
    "changes": _run_changes,
    "commit-message": _run_commit_message,
    "report": _run_report,
    "agent": _run_agent,
}


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return anyio.run(_COMMANDS[args.command], args)
    except GitCommandError as exc:
        logger.error(f"{args.command} failed: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
