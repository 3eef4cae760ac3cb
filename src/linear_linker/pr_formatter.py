"""PR title and description formatter with Linear references."""

from collections.abc import Sequence

from linear_linker.models import TicketRef

# Authors set the PR title to this to have it filled in from the ticket
PR_TITLE_UPDATE_KEYWORD = "x"


def format_reference_line(ticket: TicketRef) -> str:
    """Format the markdown line linking a ticket."""
    return f"Linear: [{ticket.title}]({ticket.url})"


def format_pr_title(current_title: str, primary_ticket: TicketRef | None) -> str:
    """Format PR title from the primary ticket.

    Only a title set to the placeholder keyword is replaced; any other title
    is the author's and is returned as is.

    Args:
        current_title: Current PR title
        primary_ticket: Ticket of the first referenced ID

    Returns:
        Title like "Project | Ticket title < Parent title", or the current
        title when it isn't the placeholder
    """
    if current_title != PR_TITLE_UPDATE_KEYWORD or primary_ticket is None:
        return current_title

    title = f"{primary_ticket.project_name} | " if primary_ticket.project_name else ""
    title += primary_ticket.title
    if primary_ticket.parent_title:
        title += f" < {primary_ticket.parent_title}"
    return title


def format_pr_body(current_body: str | None, tickets: Sequence[TicketRef]) -> str:
    """Add a reference line for each ticket not yet linked in the PR body.

    New lines go right after the previous ticket's link so references stay
    grouped; the first one is prepended. Running it again with the same
    tickets changes nothing.

    Args:
        current_body: Current PR description, may be None
        tickets: Tickets in reference order

    Returns:
        Updated PR body markdown
    """
    body = current_body or ""
    previous_url: str | None = None

    for ticket in tickets:
        if ticket.url not in body:
            line = format_reference_line(ticket)
            anchor = f"]({previous_url})" if previous_url else None

            if anchor and anchor in body:
                body = body.replace(anchor, f"{anchor}\n{line}", 1)
            else:
                body = f"{line}\n{body}"

        previous_url = ticket.url

    return body
