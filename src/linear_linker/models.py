"""Pull request and ticket data types."""

from dataclasses import dataclass

# Canonical TEAM-NUMBER form, letters uppercased (e.g. ENG-952)
TicketId = str


@dataclass(frozen=True)
class SourceRepository:
    """Repository a pull request's head branch lives in."""

    name: str
    owner_login: str


@dataclass(frozen=True)
class PullRequestRef:
    """The pull request fields the linker reads."""

    number: int
    title: str
    body: str | None
    source_branch: str
    source_repository: SourceRepository | None = None

    @classmethod
    def from_api(cls, data: dict) -> "PullRequestRef":
        """Build from a GitHub REST pull request payload.

        Args:
            data: Decoded JSON of ``GET /repos/{owner}/{repo}/pulls/{number}``

        Returns:
            PullRequestRef with ``source_repository`` set to None when GitHub
            reports the head repository as unknown (e.g. a deleted fork)
        """
        head = data.get("head") or {}
        repo = head.get("repo")

        source_repository = None
        if repo:
            source_repository = SourceRepository(
                name=repo["name"],
                owner_login=repo["owner"]["login"],
            )

        return cls(
            number=data["number"],
            title=data.get("title") or "",
            body=data.get("body"),
            source_branch=head.get("ref") or "",
            source_repository=source_repository,
        )


@dataclass(frozen=True)
class TicketRef:
    """Snapshot of a Linear issue."""

    identifier: TicketId
    title: str
    url: str
    parent_title: str | None = None
    project_name: str | None = None


@dataclass(frozen=True)
class SynthesizedContent:
    """Title and body to write back to the pull request."""

    title: str
    body: str
