"""Linear ticket references in branch names and PR descriptions."""

import re

from linear_linker.models import TicketId

# Only a ticket at the very start of the branch counts: eng-952-some-slug
BRANCH_TICKET_PATTERN = re.compile(r"^([a-z]+-[0-9]+)-", re.ASCII)

# "Fixes ENG-123" / "resolves eng-454", keyword case-insensitive
BODY_TICKET_PATTERN = re.compile(
    r"Fixes ([a-z]+-[0-9]+)|Resolves ([a-z]+-[0-9]+)",
    re.IGNORECASE | re.ASCII,
)


def canonical_ticket_id(raw: str) -> TicketId:
    """Normalize a ticket reference to its TEAM-NUMBER form."""
    return raw.upper()


def extract_branch_ticket_id(branch_name: str | None) -> TicketId | None:
    """Extract the ticket ID a branch name starts with.

    Expects branch names like:
    - eng-952-make-pr-titles-autoupdate
    - pro-397-something

    A ticket that appears after a prefix (``feature/eng-397-x``) is ignored.

    Args:
        branch_name: Git branch name

    Returns:
        Ticket ID (e.g., ENG-952) or None if the branch doesn't start with one
    """
    match = BRANCH_TICKET_PATTERN.match(branch_name or "")
    return canonical_ticket_id(match.group(1)) if match else None


def extract_body_ticket_ids(body: str | None) -> list[TicketId]:
    """Extract ticket IDs following "Fixes" or "Resolves" in a PR description.

    Args:
        body: PR description, may be None

    Returns:
        Ticket IDs in the order they appear, duplicates included
    """
    return [
        canonical_ticket_id(match.group(1) or match.group(2))
        for match in BODY_TICKET_PATTERN.finditer(body or "")
    ]


def extract_ticket_ids(branch_name: str | None, body: str | None) -> list[TicketId]:
    """Collect every ticket a pull request refers to.

    The branch ticket comes first, then body references left to right. Each
    ticket is listed once, at the position it was first seen.

    Args:
        branch_name: PR head branch name
        body: PR description, may be None

    Returns:
        Unique ticket IDs in discovery order (possibly empty)
    """
    candidates = []
    branch_ticket = extract_branch_ticket_id(branch_name)
    if branch_ticket:
        candidates.append(branch_ticket)
    candidates.extend(extract_body_ticket_ids(body))

    seen: set[TicketId] = set()
    ticket_ids = []
    for ticket_id in candidates:
        if ticket_id not in seen:
            seen.add(ticket_id)
            ticket_ids.append(ticket_id)
    return ticket_ids
