"""Link a pull request to the Linear issues it references."""

from collections.abc import Sequence
from typing import Protocol

import click

from linear_linker.github_utils import GitHubError
from linear_linker.linear_client import TicketClientError
from linear_linker.models import (
    PullRequestRef,
    SynthesizedContent,
    TicketId,
    TicketRef,
)
from linear_linker.pr_formatter import format_pr_body, format_pr_title
from linear_linker.references import extract_ticket_ids


class LinkerError(Exception):
    """Base class for errors while linking a pull request."""


class LinkSkipped(LinkerError):
    """Raised when there is nothing to link; not a failure."""


class MissingSourceRepository(LinkSkipped):
    """Raised when the PR's head repository is unknown."""


class NoReferencesFound(LinkSkipped):
    """Raised when the PR doesn't reference any Linear issue."""


class TicketLookupFailure(LinkerError):
    """Raised when a referenced issue can't be fetched."""


class PullRequestUpdateFailure(LinkerError):
    """Raised when writing the PR back fails."""


class TicketClient(Protocol):
    def lookup(self, ticket_id: TicketId) -> TicketRef: ...


class PullRequestHost(Protocol):
    def get_pull_request(
        self, owner: str, repo: str, pull_number: int
    ) -> PullRequestRef: ...

    def update_pull_request(
        self, owner: str, repo: str, pull_number: int, title: str, body: str
    ) -> None: ...


def fetch_tickets(
    client: TicketClient, ticket_ids: Sequence[TicketId]
) -> list[TicketRef]:
    """Look up each ticket, one at a time, in the given order.

    Raises:
        TicketLookupFailure: On the first lookup that fails
    """
    tickets = []
    for ticket_id in ticket_ids:
        try:
            tickets.append(client.lookup(ticket_id))
        except TicketClientError as e:
            raise TicketLookupFailure(f"Failed to fetch {ticket_id}: {e}") from e
    return tickets


def synthesize_content(
    pull_request: PullRequestRef, tickets: Sequence[TicketRef]
) -> SynthesizedContent:
    """Compute the new title and body; the first ticket drives the title."""
    primary_ticket = tickets[0] if tickets else None
    return SynthesizedContent(
        title=format_pr_title(pull_request.title, primary_ticket),
        body=format_pr_body(pull_request.body, tickets),
    )


def link_pull_request(
    pull_request: PullRequestRef,
    ticket_client: TicketClient,
    host: PullRequestHost,
    dry_run: bool = False,
) -> SynthesizedContent:
    """Update a PR's title and body with the Linear issues it references.

    Args:
        pull_request: PR to link
        ticket_client: Linear issue lookup
        host: Where to write the PR back
        dry_run: Compute the content without updating the PR

    Returns:
        The title and body written (or that would be written)

    Raises:
        MissingSourceRepository: If the head repository is unknown
        NoReferencesFound: If no issue is referenced
        TicketLookupFailure: If an issue can't be fetched; nothing is written
        PullRequestUpdateFailure: If the update call fails
    """
    repository = pull_request.source_repository
    if repository is None:
        # GitHub reports head.repo as null for deleted forks
        raise MissingSourceRepository('PR is sourced from an "unknown repository".')

    ticket_ids = extract_ticket_ids(pull_request.source_branch, pull_request.body)
    if not ticket_ids:
        raise NoReferencesFound("PR isn't linked to any Linear issues.")
    click.echo(f"PR linked to Linear issues: {', '.join(ticket_ids)}.")

    tickets = fetch_tickets(ticket_client, ticket_ids)
    content = synthesize_content(pull_request, tickets)

    if dry_run:
        return content

    try:
        host.update_pull_request(
            owner=repository.owner_login,
            repo=repository.name,
            pull_number=pull_request.number,
            title=content.title,
            body=content.body,
        )
    except GitHubError as e:
        raise PullRequestUpdateFailure(
            f"Failed to update PR #{pull_request.number}: {e}"
        ) from e

    return content
