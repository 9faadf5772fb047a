"""
Argument models for the MCP tools.

The JSON input schemas advertised to clients are generated from these
models, so validation and advertisement cannot drift apart.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EmptyArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")


class GetOpenIssuesArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    all: bool = Field(
        default=False,
        description="Fetch every page of open issues (bounded) instead of the first 100.",
    )


class GetIssueArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    issue_number: int = Field(alias="issueNumber", ge=1, description="The GitHub issue number.")


class GetReleaseByTagArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag: str = Field(min_length=1, description="The release tag, e.g. v5.96.0.")
    include_issues: bool = Field(
        default=False,
        description="Also fetch the issues referenced (#1234) in the release notes.",
    )


class GetLatestReleaseArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    include_issues: bool = Field(
        default=False,
        description="Also fetch the issues referenced (#1234) in the release notes.",
    )


class GetResourceDocArgs(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"anyOf": [{"required": ["aws_resource"]}, {"required": ["file_name"]}]},
    )

    aws_resource: Optional[str] = Field(
        default=None,
        description=(
            "The AWS resource name, e.g. accessanalyzer_analyzer, "
            "or any natural language/partial description."
        ),
    )
    file_name: Optional[str] = Field(
        default=None,
        description="The full file name, e.g. accessanalyzer_analyzer.html.markdown. Takes precedence.",
    )

    @model_validator(mode="after")
    def _require_name_or_file(self) -> "GetResourceDocArgs":
        if not self.aws_resource and not self.file_name:
            raise ValueError("Either aws_resource or file_name must be provided.")
        return self


class GetDatasourceDocArgs(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"anyOf": [{"required": ["aws_datasource"]}, {"required": ["file_name"]}]},
    )

    aws_datasource: Optional[str] = Field(
        default=None,
        description="The AWS datasource name, e.g. ami, or any natural language/partial description.",
    )
    file_name: Optional[str] = Field(
        default=None,
        description="The full file name, e.g. ami.html.markdown. Takes precedence.",
    )

    @model_validator(mode="after")
    def _require_name_or_file(self) -> "GetDatasourceDocArgs":
        if not self.aws_datasource and not self.file_name:
            raise ValueError("Either aws_datasource or file_name must be provided.")
        return self
