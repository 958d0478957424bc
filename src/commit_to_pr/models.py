"""Data model for the get_pr tool: descriptors, typed requests and PR records."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from commit_to_pr.errors import InvalidArgumentError

UNKNOWN_AUTHOR = "unknown"


@dataclass(frozen=True)
class ToolDescriptor:
    """A callable tool as advertised to the host."""

    name: str
    description: str
    input_schema: Dict[str, Any]


@dataclass(frozen=True)
class TextContent:
    """A single text item of a tool response."""

    text: str


@dataclass(frozen=True)
class ToolResponse:
    """Result envelope of a tool call."""

    content: List[TextContent]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResponse":
        return cls(content=[TextContent(text)], is_error=is_error)

    @classmethod
    def error(cls, text: str) -> "ToolResponse":
        return cls.text(text, is_error=True)


@dataclass(frozen=True)
class Review:
    """A single review left on a pull request."""

    author: str
    state: str
    submitted_at: Optional[str]

    @classmethod
    def from_gh_payload(cls, payload: Dict[str, Any]) -> "Review":
        return cls(
            author=_login(payload.get("author")),
            state=payload.get("state"),
            submitted_at=payload.get("submittedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "author": self.author,
            "state": self.state,
            "submittedAt": self.submitted_at,
        }


@dataclass(frozen=True)
class PRDetails:
    """Pull request metadata returned by the get_pr tool."""

    number: int
    title: str
    body: str
    state: str
    url: str
    author: str
    created_at: Optional[str]
    merged_at: Optional[str]
    base_ref: Optional[str]
    head_ref: Optional[str]
    labels: List[str] = field(default_factory=list)
    reviews: List[Review] = field(default_factory=list)

    @classmethod
    def from_gh_payload(cls, payload: Dict[str, Any]) -> "PRDetails":
        """Build PR details from the JSON emitted by `gh pr view --json`.

        Args:
            payload: Decoded JSON object with the fields number, title, body,
                     state, url, author, createdAt, mergedAt, baseRefName,
                     headRefName, labels and reviews

        Returns:
            PRDetails with defaults applied for missing body, author,
            labels and reviews
        """
        return cls(
            number=payload.get("number"),
            title=payload.get("title"),
            body=payload.get("body") or "",
            state=payload.get("state"),
            url=payload.get("url"),
            author=_login(payload.get("author")),
            created_at=payload.get("createdAt"),
            merged_at=payload.get("mergedAt"),
            base_ref=payload.get("baseRefName"),
            head_ref=payload.get("headRefName"),
            labels=[label.get("name") for label in payload.get("labels") or []],
            reviews=[Review.from_gh_payload(review) for review in payload.get("reviews") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the serializable form, keys in their published order."""
        return {
            "number": self.number,
            "title": self.title,
            "body": self.body,
            "state": self.state,
            "url": self.url,
            "author": self.author,
            "createdAt": self.created_at,
            "mergedAt": self.merged_at,
            "baseRef": self.base_ref,
            "headRef": self.head_ref,
            "labels": list(self.labels),
            "reviews": [review.to_dict() for review in self.reviews],
        }


def _login(author: Optional[Dict[str, Any]]) -> str:
    if not author:
        return UNKNOWN_AUTHOR
    return author.get("login") or UNKNOWN_AUTHOR


@dataclass(frozen=True)
class DirectLookup:
    """Look up a pull request by its number."""

    pr_number: int
    repo: Optional[str] = None
    cwd: Optional[str] = None


@dataclass(frozen=True)
class CommitLookup:
    """Look up the pull request that introduced a commit."""

    commit: str
    repo: Optional[str] = None
    cwd: Optional[str] = None


GetPRRequest = Union[DirectLookup, CommitLookup]


def _optional_str(arguments: Dict[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"Invalid type for {key}: expected string, got {type(value).__name__}"
        )
    return value or None


def _optional_pr_number(arguments: Dict[str, Any]) -> Optional[int]:
    value = arguments.get("pr_number")
    if value is None:
        return None
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(
            f"Invalid type for pr_number: expected number, got {type(value).__name__}"
        )
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidArgumentError(
                f"Invalid value for pr_number: expected a whole number, got {value}"
            )
        value = int(value)
    if value < 0:
        raise InvalidArgumentError(
            f"Invalid value for pr_number: must be positive, got {value}"
        )
    return value or None


def parse_get_pr_arguments(arguments: Optional[Dict[str, Any]]) -> Optional[GetPRRequest]:
    """Validate the loose get_pr argument bag into a typed request.

    An empty commit and a zero pr_number count as absent. pr_number wins
    when both are given.

    Args:
        arguments: Arguments as received from the host

    Returns:
        DirectLookup or CommitLookup, or None if neither commit nor
        pr_number was supplied

    Raises:
        InvalidArgumentError: If an argument has the wrong type or value
    """
    arguments = arguments or {}
    commit = _optional_str(arguments, "commit")
    pr_number = _optional_pr_number(arguments)
    repo = _optional_str(arguments, "repo")
    cwd = _optional_str(arguments, "cwd")

    if pr_number is not None:
        return DirectLookup(pr_number=pr_number, repo=repo, cwd=cwd)
    if commit is not None:
        return CommitLookup(commit=commit, repo=repo, cwd=cwd)
    return None
