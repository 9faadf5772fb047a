"""
MCP server exposing Terraform AWS provider documentation, issues and releases.
"""
import argparse
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool
from pydantic import AnyUrl, BaseModel
from pydantic import ValidationError as ArgumentsError

from .config import DocsServerConfig
from .config_loader import load_config_from_env
from .config_validator import get_github_token, validate_github_token, validate_path
from .constants import MCP_SERVER_NAME, MCP_SERVER_VERSION
from .data_loader import GitHubDocsFetcher, LocalDocsLoader
from .exceptions import DocsServerError
from .github_client import GitHubClient
from .models import DocKind
from .resolution import create_document_resolver
from .resources import RESOURCES, get_resource_by_uri
from .security import ValidationError
from .tools import (
    DocumentTools,
    EmptyArgs,
    GetDatasourceDocArgs,
    GetIssueArgs,
    GetLatestReleaseArgs,
    GetOpenIssuesArgs,
    GetReleaseByTagArgs,
    GetResourceDocArgs,
    IssueTools,
    ReleaseTools,
)
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[List[str]]]


@dataclass(frozen=True)
class ToolSpec:
    """A tool definition together with its argument model and handler."""
    name: str
    description: str
    args_model: Type[BaseModel]
    handler: ToolHandler

    def definition(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(by_alias=True),
        )


def _text(items: List[str]) -> List[TextContent]:
    return [TextContent(type="text", text=item) for item in items]


class DocsServer:
    """
    Terraform AWS provider documentation MCP server.

    Usage:
        server = DocsServer(load_config_from_env())
        asyncio.run(server.run())
    """

    def __init__(
        self,
        config: DocsServerConfig,
        github_client_factory: Optional[Callable[[], GitHubClient]] = None,
    ):
        """
        :param config: Server configuration
        :param github_client_factory: Builds a GitHub client per call; defaults to a token-authenticated client
        """
        self.config = config
        self._github_client_factory = github_client_factory or self._create_github_client

        resolver = create_document_resolver(config)
        self.resource_tools = DocumentTools(
            DocKind.RESOURCE,
            LocalDocsLoader(config.resource_docs_dir, DocKind.RESOURCE),
            resolver,
            fetcher=self._remote_fetcher(DocKind.RESOURCE),
        )
        self.datasource_tools = DocumentTools(
            DocKind.DATASOURCE,
            LocalDocsLoader(config.datasource_docs_dir, DocKind.DATASOURCE),
            resolver,
            fetcher=self._remote_fetcher(DocKind.DATASOURCE),
        )
        self.issue_tools = IssueTools(self._github_client_factory, config.repository)
        self.release_tools = ReleaseTools(self._github_client_factory, config.repository)

        self.tools: Dict[str, ToolSpec] = {spec.name: spec for spec in self._tool_specs()}

        self.server = Server(MCP_SERVER_NAME, version=MCP_SERVER_VERSION)
        self._register_handlers()
        logger.info(
            "%s %s initialized (%d tools, docs source=%s, threshold=%d, scorer=%s)",
            MCP_SERVER_NAME,
            MCP_SERVER_VERSION,
            len(self.tools),
            config.docs_source,
            config.fuzzy_threshold,
            config.fuzzy_scorer,
        )

    def _create_github_client(self) -> GitHubClient:
        if self.config.github_token:
            token = validate_github_token(self.config.github_token)
        else:
            token = get_github_token()
        return GitHubClient(
            token,
            base_url=self.config.github_api_url,
            timeout=self.config.github_timeout,
        )

    def _remote_fetcher(self, kind: DocKind) -> Optional[GitHubDocsFetcher]:
        if self.config.docs_source != "github":
            return None
        return GitHubDocsFetcher(self._github_client_factory, kind, self.config.repository)

    def _tool_specs(self) -> List[ToolSpec]:
        return [
            ToolSpec(
                name="get-open-issues",
                description=(
                    "Lists open issues of the Terraform AWS Provider repository. "
                    "Returns the first 100 unless 'all' is true (bounded pagination). "
                    "Requires a GitHub token."
                ),
                args_model=GetOpenIssuesArgs,
                handler=lambda args: self.issue_tools.get_open_issues(args.all),
            ),
            ToolSpec(
                name="get-issue",
                description="Fetches one issue of the Terraform AWS Provider repository by number.",
                args_model=GetIssueArgs,
                handler=lambda args: self.issue_tools.get_issue(args.issue_number),
            ),
            ToolSpec(
                name="list-all-releases",
                description="Lists the latest 100 releases of the Terraform AWS Provider.",
                args_model=EmptyArgs,
                handler=lambda args: self.release_tools.list_all_releases(),
            ),
            ToolSpec(
                name="get-release-by-tag",
                description=(
                    "Fetches a release by tag (e.g. v5.96.0). With include_issues, also "
                    "fetches the issues referenced in the release notes."
                ),
                args_model=GetReleaseByTagArgs,
                handler=lambda args: self.release_tools.get_release_by_tag(args.tag, args.include_issues),
            ),
            ToolSpec(
                name="get-latest-release",
                description=(
                    "Fetches the most recent release. With include_issues, also fetches "
                    "the issues referenced in the release notes."
                ),
                args_model=GetLatestReleaseArgs,
                handler=lambda args: self.release_tools.get_latest_release(args.include_issues),
            ),
            ToolSpec(
                name="list-resources",
                description=(
                    "Lists every AWS resource documentation page with its identifier, "
                    "subcategory, title, file name and source link. Use it first when "
                    "the exact file name is not known."
                ),
                args_model=EmptyArgs,
                handler=self._list_resources,
            ),
            ToolSpec(
                name="get-resource-doc",
                description=(
                    "Fetches one AWS resource documentation page. 'file_name' is used as is "
                    "when given; otherwise 'aws_resource' (a name or partial description) is "
                    "fuzzy-matched against subcategories, file names, titles, descriptions, "
                    "headings and argument names."
                ),
                args_model=GetResourceDocArgs,
                handler=lambda args: self.resource_tools.get_document(args.aws_resource, args.file_name),
            ),
            ToolSpec(
                name="list-datasources",
                description=(
                    "Lists every AWS datasource documentation page with its identifier, "
                    "subcategory, title, file name and source link."
                ),
                args_model=EmptyArgs,
                handler=self._list_datasources,
            ),
            ToolSpec(
                name="get-datasource-doc",
                description=(
                    "Fetches one AWS datasource documentation page, by exact 'file_name' "
                    "or by fuzzy-matching 'aws_datasource'."
                ),
                args_model=GetDatasourceDocArgs,
                handler=lambda args: self.datasource_tools.get_document(args.aws_datasource, args.file_name),
            ),
        ]

    async def _list_resources(self, args: EmptyArgs) -> List[str]:
        return self.resource_tools.list_documents()

    async def _list_datasources(self, args: EmptyArgs) -> List[str]:
        return self.datasource_tools.list_documents()

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """
        Validate arguments and run one tool.

        Argument problems and known failures come back as text so the
        calling model can read them.
        """
        spec = self.tools.get(name)
        if spec is None:
            logger.warning("Unknown tool requested: %s", name)
            return _text([f"Error: Unknown tool '{name}'."])

        try:
            args = spec.args_model.model_validate(arguments or {})
        except ArgumentsError as exc:
            logger.info("Invalid arguments for %s: %s", name, exc)
            return _text([f"Invalid arguments: {exc}"])

        try:
            result = await spec.handler(args)
        except ValidationError as exc:
            logger.info("Rejected input for %s: %s", name, exc)
            return _text([f"Invalid arguments: {exc}"])
        except DocsServerError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return _text([f"Error handling {name}: {exc}"])

        return _text(result)

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            logger.debug("list_tools called")
            return [spec.definition() for spec in self.tools.values()]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
            logger.info("call_tool: %s", name)
            result = await self.dispatch(name, arguments)
            logger.debug("call_tool done: %s (%d items)", name, len(result))
            return result

        @self.server.list_resources()
        async def list_resources() -> List[Resource]:
            return [resource.to_mcp() for resource in RESOURCES]

        @self.server.read_resource()
        async def read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
            resource = get_resource_by_uri(str(uri))
            if resource is None:
                raise ValueError(f'Resource with URI "{uri}" not found in available resources')
            return [ReadResourceContents(content=resource.text, mime_type=resource.mime_type)]

    async def run(self) -> None:
        """Run the server over stdio."""
        logger.info("Starting %s (stdio transport)", MCP_SERVER_NAME)
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the documentation MCP server."""
    parser = argparse.ArgumentParser(description="Terraform AWS provider docs MCP server")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, ...)")
    parser.add_argument(
        "--docs-dir",
        default=None,
        help="Directory holding tf-aws-resources/ and tf-aws-datasources/",
    )
    args = parser.parse_args(argv)

    config = load_config_from_env()
    if args.docs_dir:
        validate_path(args.docs_dir, "--docs-dir", must_exist=True)
        config.resource_docs_dir = f"{args.docs_dir.rstrip('/')}/tf-aws-resources"
        config.datasource_docs_dir = f"{args.docs_dir.rstrip('/')}/tf-aws-datasources"
    if args.log_level:
        config.log_level = args.log_level.upper()

    configure_logging(config.log_level)
    asyncio.run(DocsServer(config).run())


if __name__ == "__main__":
    main()
