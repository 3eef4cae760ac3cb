"""Shared test fixtures and configuration."""

import pytest

from linear_linker.models import PullRequestRef, SourceRepository, TicketRef


@pytest.fixture
def eng_952():
    """Ticket with a project and a parent."""
    return TicketRef(
        identifier="ENG-952",
        title="Make PR titles autoupdate",
        url="https://linear.app/acme/issue/ENG-952/make-pr-titles-autoupdate",
        parent_title="Developer tooling",
        project_name="Platform",
    )


@pytest.fixture
def eng_123():
    """Ticket without project or parent."""
    return TicketRef(
        identifier="ENG-123",
        title="Fix login redirect",
        url="https://linear.app/acme/issue/ENG-123/fix-login-redirect",
    )


@pytest.fixture
def eng_454():
    """Second ticket without project or parent."""
    return TicketRef(
        identifier="ENG-454",
        title="Cache session tokens",
        url="https://linear.app/acme/issue/ENG-454/cache-session-tokens",
    )


@pytest.fixture
def pull_request():
    """PR whose branch references ENG-952."""
    return PullRequestRef(
        number=42,
        title="x",
        body="Some context.",
        source_branch="eng-952-make-pr-titles-autoupdate",
        source_repository=SourceRepository(name="api", owner_login="acme"),
    )


@pytest.fixture
def pr_payload():
    """GitHub REST payload for a pull request."""
    return {
        "number": 42,
        "title": "x",
        "body": None,
        "head": {
            "ref": "eng-952-make-pr-titles-autoupdate",
            "repo": {"name": "api", "owner": {"login": "acme"}},
        },
    }
