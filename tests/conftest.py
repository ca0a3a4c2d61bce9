from __future__ import annotations

from collections.abc import Callable

import pytest

from commit_review.config import ReviewSettings
from commit_review.review.orchestrator import ReviewOrchestrator
from commit_review.review.orchestrator import build_review_orchestrator
from tests.fakes import FakeChangeProvider
from tests.fakes import InMemoryReportWriter

OrchestratorFactory = Callable[..., ReviewOrchestrator]


@pytest.fixture
def make_orchestrator() -> OrchestratorFactory:
    def factory(
        files: dict[str, str],
        writer: InMemoryReportWriter | None = None,
        fail: bool = False,
        settings: ReviewSettings | None = None,
    ) -> ReviewOrchestrator:
        return build_review_orchestrator(
            provider=FakeChangeProvider(files=files, fail=fail),
            writer=writer if writer is not None else InMemoryReportWriter(),
            settings=settings if settings is not None else ReviewSettings(),
        )

    return factory
