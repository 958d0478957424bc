"""Platform abstraction for version control and code-hosting providers."""

from typing import Optional

from .base import CodeHostClient, VersionControlInspector
from .git import GitCLIInspector
from .github import GitHubCLIClient


def get_platform(
    provider: str,
    executable: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CodeHostClient:
    """Factory function to get the appropriate code-host client.

    Args:
        provider: The code-hosting provider name (currently only 'github')
        executable: Optional path of the provider's CLI executable
        timeout: Optional timeout in seconds for each CLI invocation

    Returns:
        An instance of the appropriate CodeHostClient subclass

    Raises:
        ValueError: If the provider is not supported
    """
    providers = {
        "github": GitHubCLIClient,
    }

    provider_lower = provider.lower()
    if provider_lower not in providers:
        supported = ", ".join(providers.keys())
        raise ValueError(
            f"Unsupported provider: '{provider}'. " f"Supported providers: {supported}"
        )

    client_class = providers[provider_lower]
    if executable:
        return client_class(executable, timeout=timeout)
    return client_class(timeout=timeout)


__all__ = [
    "CodeHostClient",
    "GitCLIInspector",
    "GitHubCLIClient",
    "VersionControlInspector",
    "get_platform",
]
