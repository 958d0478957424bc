"""MCP server that resolves pull request details from a commit or PR number."""
