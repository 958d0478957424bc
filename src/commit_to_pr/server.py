"""MCP server exposing the get_pr tool over stdio."""

import argparse
import asyncio
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from commit_to_pr.config import ServerConfig, setup_environment
from commit_to_pr.logging_config import get_logger, setup_logging
from commit_to_pr.models import ToolDescriptor, ToolResponse
from commit_to_pr.platforms import GitCLIInspector, get_platform
from commit_to_pr.resolver import PRResolver
from commit_to_pr.tools import PRTools
from commit_to_pr.tracing_config import setup_tracing

logger = get_logger(__name__)

SERVER_NAME = "commit-to-pr-mcp"
READY_MESSAGE = f"{SERVER_NAME} server running on stdio"

try:
    __version__ = version(SERVER_NAME)
except PackageNotFoundError:
    __version__ = "0.0.0"


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def to_call_tool_result(response: ToolResponse) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in response.content],
        isError=response.is_error,
    )


class CommitToPRServer:
    """Binds a PRTools registry to the MCP low-level server."""

    def __init__(self, tools: PRTools):
        self.tools = tools
        self.server = Server(SERVER_NAME, version=__version__)
        self._register_handlers()

    def _register_handlers(self) -> None:
        # The low-level Server only wires RPC methods through its decorators
        self.server.list_tools()(self.handle_list_tools)
        self.server.call_tool()(self.handle_call_tool)

    async def handle_list_tools(self) -> List[types.Tool]:
        return [to_mcp_tool(descriptor) for descriptor in self.tools.list_tools()]

    async def handle_call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        logger.info("Tool call received", extra={"context": {"tool": name}})
        # Calls are served one at a time; the resolver blocks on each CLI call
        return to_call_tool_result(self.tools.call_tool(name, arguments))

    async def run(self) -> None:
        """Serve MCP requests on stdin/stdout until the host disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            capabilities = self.server.get_capabilities(
                NotificationOptions(),
                experimental_capabilities={},
            )
            print(READY_MESSAGE, file=sys.stderr, flush=True)
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=capabilities,
                ),
            )


def create_server(config: ServerConfig) -> CommitToPRServer:
    """Wire the production CLI-backed clients into a server.

    Raises:
        ValueError: If the configured provider is not supported
    """
    code_host = get_platform(config.provider, executable=config.gh_path, timeout=config.command_timeout)
    vcs = GitCLIInspector(config.git_path, timeout=config.command_timeout)
    resolver = PRResolver(code_host, vcs, host=config.gh_host)
    logger.info(
        "Platform selected",
        extra={"context": {"platform": code_host.get_platform_name(), "host": config.gh_host}},
    )
    return CommitToPRServer(PRTools(resolver))


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server that resolves pull request details from a commit or PR number",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  COMMIT_TO_PR_PROVIDER - Code-host provider (default: github)
  GH_PATH / GIT_PATH - CLI executables (default: gh / git)
  GH_HOST - Host accepted in git remotes (default: github.com)
  COMMIT_TO_PR_COMMAND_TIMEOUT - Timeout in seconds for each CLI call
  LOG_LEVEL - Log level (default: INFO)
  ENABLE_TRACING / TRACE_EXPORTER / GOOGLE_CLOUD_PROJECT - OpenTelemetry tracing
        """,
    )
    parser.add_argument("--provider", type=str, help="Code-host provider (overrides COMMIT_TO_PR_PROVIDER)")
    parser.add_argument("--log-level", type=str, help="Log level (overrides LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Run the MCP server on stdio."""
    args = parse_arguments(argv)
    try:
        setup_environment()
        config = ServerConfig.from_env().with_overrides(
            provider=args.provider,
            log_level=args.log_level.upper() if args.log_level else None,
        )
        setup_logging(config.log_level)

        if config.enable_tracing:
            setup_tracing(
                exporter=config.trace_exporter,
                project_id=config.google_cloud_project,
                service_name=SERVER_NAME,
            )

        server = create_server(config)
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Server interrupted")
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
