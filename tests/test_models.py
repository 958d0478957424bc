"""Tests for argument validation and PR record normalization."""

import pytest

from conftest import make_pr_payload
from commit_to_pr.errors import InvalidArgumentError
from commit_to_pr.models import (
    CommitLookup,
    DirectLookup,
    PRDetails,
    parse_get_pr_arguments,
)


class TestParseGetPRArguments:
    """Test cases for parse_get_pr_arguments."""

    def test_commit_lookup(self):
        request = parse_get_pr_arguments({"commit": "abc123", "repo": "acme/widgets", "cwd": "/w"})
        assert request == CommitLookup(commit="abc123", repo="acme/widgets", cwd="/w")

    def test_direct_lookup(self):
        assert parse_get_pr_arguments({"pr_number": 7}) == DirectLookup(pr_number=7)

    def test_pr_number_wins_over_commit(self):
        request = parse_get_pr_arguments({"commit": "abc123", "pr_number": 7})
        assert request == DirectLookup(pr_number=7)

    def test_integral_float_accepted(self):
        """JSON numbers may arrive as floats."""
        assert parse_get_pr_arguments({"pr_number": 7.0}) == DirectLookup(pr_number=7)

    @pytest.mark.parametrize("arguments", [None, {}, {"commit": ""}, {"pr_number": 0}, {"repo": "acme/widgets"}])
    def test_no_target(self, arguments):
        assert parse_get_pr_arguments(arguments) is None

    def test_zero_pr_number_falls_back_to_commit(self):
        assert parse_get_pr_arguments({"pr_number": 0, "commit": "abc123"}) == CommitLookup(commit="abc123")

    def test_empty_repo_is_absent(self):
        assert parse_get_pr_arguments({"commit": "abc123", "repo": ""}).repo is None

    @pytest.mark.parametrize("value", [True, "42", 4.5, -3, [42]])
    def test_invalid_pr_number(self, value):
        with pytest.raises(InvalidArgumentError, match="pr_number"):
            parse_get_pr_arguments({"pr_number": value})

    @pytest.mark.parametrize("key", ["commit", "repo", "cwd"])
    def test_non_string_rejected(self, key):
        with pytest.raises(InvalidArgumentError, match=key):
            parse_get_pr_arguments({"pr_number": 1, key: 123})

    def test_extra_arguments_ignored(self):
        assert parse_get_pr_arguments({"pr_number": 3, "verbose": True}) == DirectLookup(pr_number=3)


class TestPRDetails:
    """Test cases for PRDetails.from_gh_payload and to_dict."""

    def test_full_payload(self):
        details = PRDetails.from_gh_payload(make_pr_payload())

        assert details.to_dict() == {
            "number": 42,
            "title": "Add widget caching",
            "body": "Caches widgets between requests.",
            "state": "MERGED",
            "url": "https://github.com/acme/widgets/pull/42",
            "author": "octocat",
            "createdAt": "2024-03-01T10:00:00Z",
            "mergedAt": "2024-03-02T12:30:00Z",
            "baseRef": "main",
            "headRef": "feature/cache",
            "labels": ["enhancement", "backend"],
            "reviews": [
                {"author": "hubot", "state": "COMMENTED", "submittedAt": "2024-03-01T11:00:00Z"},
                {"author": "monalisa", "state": "APPROVED", "submittedAt": "2024-03-02T09:00:00Z"},
            ],
        }

    def test_key_order(self):
        keys = list(PRDetails.from_gh_payload(make_pr_payload()).to_dict())
        assert keys == [
            "number", "title", "body", "state", "url", "author", "createdAt",
            "mergedAt", "baseRef", "headRef", "labels", "reviews",
        ]

    def test_missing_optional_fields_defaulted(self):
        payload = make_pr_payload(body=None, mergedAt=None, state="OPEN")
        for key in ("author", "labels", "reviews"):
            del payload[key]

        data = PRDetails.from_gh_payload(payload).to_dict()

        assert data["body"] == ""
        assert data["author"] == "unknown"
        assert data["labels"] == []
        assert data["reviews"] == []
        assert data["mergedAt"] is None

    def test_ghost_review_author(self):
        """Reviews by deleted accounts come back with a null author."""
        payload = make_pr_payload(reviews=[{"author": None, "state": "APPROVED", "submittedAt": "2024-03-02T09:00:00Z"}])

        review = PRDetails.from_gh_payload(payload).reviews[0]

        assert review.author == "unknown"
        assert review.state == "APPROVED"
