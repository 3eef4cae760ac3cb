"""GitHub CLI utilities."""

import json
import os
import shutil
import subprocess

from linear_linker.models import PullRequestRef


class GitHubError(Exception):
    """Raised when a GitHub CLI operation fails."""


def _run_command(
    args: list[str],
    check: bool = True,
    env: dict[str, str] | None = None,
    input: str | None = None,
) -> str:
    """Run a command and return its output.

    Args:
        args: Command and arguments
        check: Raise exception on non-zero exit
        env: Extra environment variables for the command
        input: Text sent to the command on stdin

    Returns:
        Command stdout

    Raises:
        GitHubError: If command fails and check is True
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=check,
            env={**os.environ, **env} if env else None,
            input=input,
        )
        return result.stdout.strip()
    except subprocess.CalledProcessError as e:
        raise GitHubError(f"Command failed: {' '.join(args[:3])}\n{e.stderr}") from e
    except FileNotFoundError as e:
        raise GitHubError(
            "GitHub CLI (gh) is not installed.\n"
            "Install it from: https://cli.github.com/"
        ) from e
    except OSError as e:
        raise GitHubError(f"Command failed: {' '.join(args[:3])}\n{e}") from e


def is_gh_installed() -> bool:
    """Check if GitHub CLI (gh) is installed."""
    return shutil.which("gh") is not None


def is_gh_authenticated() -> bool:
    """Check if GitHub CLI is authenticated."""
    if not is_gh_installed():
        return False
    try:
        _run_command(["gh", "auth", "status"])
        return True
    except GitHubError:
        return False


class GitHubCli:
    """Pull request access through ``gh api``.

    Args:
        token: GitHub token passed to gh as GH_TOKEN; when None, gh uses its
            own stored login
    """

    def __init__(self, token: str | None = None) -> None:
        self._env = {"GH_TOKEN": token} if token else None

    def _api(self, args: list[str], input: str | None = None) -> str:
        return _run_command(["gh", "api", *args], env=self._env, input=input)

    def get_pull_request(
        self, owner: str, repo: str, pull_number: int
    ) -> PullRequestRef:
        """Fetch a pull request.

        Raises:
            GitHubError: If the request fails or returns invalid JSON
        """
        output = self._api(
            [
                "-H",
                "Accept: application/vnd.github+json",
                f"repos/{owner}/{repo}/pulls/{pull_number}",
            ]
        )
        try:
            return PullRequestRef.from_api(json.loads(output))
        except (ValueError, KeyError, TypeError) as e:
            raise GitHubError(f"Unexpected response for PR #{pull_number}: {e}") from e

    def update_pull_request(
        self, owner: str, repo: str, pull_number: int, title: str, body: str
    ) -> None:
        """Update a pull request's title and body in a single call.

        Raises:
            GitHubError: If the update fails
        """
        self._api(
            [
                "-X",
                "PATCH",
                "-H",
                "Accept: application/vnd.github+json",
                f"repos/{owner}/{repo}/pulls/{pull_number}",
                "--input",
                "-",
            ],
            input=json.dumps({"title": title, "body": body}),
        )
