from __future__ import annotations

import json

from fastapi import FastAPI
from fastapi.testclient import TestClient

from commit_review.api.routes import build_agent_router
from commit_review.api.routes import build_review_router
from tests.fakes import InMemoryReportWriter
from tests.fakes import ScriptedLLMClient

FILES = {"src/a.py": "+add feature\n"}


def _client(orchestrator, llm: ScriptedLLMClient | None = None) -> TestClient:
    app = FastAPI()
    app.include_router(build_review_router(orchestrator=orchestrator))
    if llm is not None:
        app.include_router(build_agent_router(llm_client=llm, orchestrator=orchestrator, max_steps=5))
    return TestClient(app)


def test_changes_endpoint(make_orchestrator) -> None:
    response = _client(make_orchestrator(files=FILES)).post("/changes", json={"rootDir": "."})
    assert response.status_code == 200
    assert response.json() == [{"file": "src/a.py", "diff": "+add feature\n"}]


def test_changes_endpoint_git_error_is_400(make_orchestrator) -> None:
    response = _client(make_orchestrator(files=FILES, fail=True)).post("/changes", json={"rootDir": "/tmp"})
    assert response.status_code == 400


def test_commit_message_endpoint(make_orchestrator) -> None:
    response = _client(make_orchestrator(files=FILES)).post(
        "/commit-message", json={"rootDir": ".", "type": "feat", "scope": "tools"}
    )
    assert response.status_code == 200
    assert response.json()["commitMessage"] == "feat(tools): Update src/a.py"


def test_commit_message_endpoint_rejects_unknown_type(make_orchestrator) -> None:
    response = _client(make_orchestrator(files=FILES)).post(
        "/commit-message", json={"rootDir": ".", "type": "perf"}
    )
    assert response.status_code == 422


def test_report_endpoint_success(make_orchestrator) -> None:
    writer = InMemoryReportWriter()
    response = _client(make_orchestrator(files=FILES, writer=writer)).post(
        "/report", json={"rootDir": ".", "outputPath": "out/review.md", "includeChanges": False}
    )
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "success"
    assert body["output_path"] == "out/review.md"
    assert "## File Changes" not in writer.files["out/review.md"]


def test_report_endpoint_warning_without_changes(make_orchestrator) -> None:
    response = _client(make_orchestrator(files={})).post("/report", json={"rootDir": ".", "outputPath": "r.md"})
    assert response.json() == {"status": "warning", "reason": "No changes detected in the target directory"}


def test_agent_endpoint(make_orchestrator) -> None:
    llm = ScriptedLLMClient(
        [
            json.dumps({"kind": "action", "call": {"name": "generate_commit_message", "args": {"rootDir": "."}}}),
            json.dumps({"kind": "final", "answer": "feat: Update src/a.py"}),
        ]
    )
    response = _client(make_orchestrator(files=FILES), llm=llm).post("/agent", json={"prompt": "commit message please"})
    assert response.status_code == 200
    assert response.json() == {"answer": "feat: Update src/a.py"}
    assert "feat: Update src/a.py" in llm.calls[1][-1]
