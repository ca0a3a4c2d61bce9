from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from commit_review.review.models import ChangeType
from commit_review.review.models import ReportConfig


class GetFileChangesArgs(BaseModel):
    rootDir: str = Field(min_length=1)


class GenerateCommitMessageArgs(BaseModel):
    rootDir: str = Field(min_length=1)
    type: ChangeType | None = None
    scope: str | None = None


class GenerateMarkdownFileArgs(BaseModel):
    rootDir: str = Field(min_length=1)
    outputPath: str = Field(min_length=1)
    title: str = "Code Review Results"
    includeChanges: bool = True
    includeCommitMessage: bool = True
    includeReview: bool = False
    reviewComments: str | None = None
    type: ChangeType | None = None
    scope: str | None = None

    def to_report_config(self) -> ReportConfig:
        return ReportConfig(
            title=self.title,
            include_changes=self.includeChanges,
            include_commit_message=self.includeCommitMessage,
            include_review=self.includeReview,
            review_comments=self.reviewComments,
            change_type=self.type,
            scope=self.scope,
        )


class GetFileChangesCall(BaseModel):
    name: Literal["get_file_changes"]
    args: GetFileChangesArgs


class GenerateCommitMessageCall(BaseModel):
    name: Literal["generate_commit_message"]
    args: GenerateCommitMessageArgs


class GenerateMarkdownFileCall(BaseModel):
    name: Literal["generate_markdown_file"]
    args: GenerateMarkdownFileArgs


ToolCall = Annotated[
    Union[GetFileChangesCall, GenerateCommitMessageCall, GenerateMarkdownFileCall],
    Field(discriminator="name"),
]


class AgentAction(BaseModel):
    kind: Literal["action"]
    call: ToolCall


class AgentFinal(BaseModel):
    kind: Literal["final"]
    answer: str


AgentStep = Annotated[Union[AgentAction, AgentFinal], Field(discriminator="kind")]
