"""Command-line interface for linlink."""

import click

from linear_linker.actions import (
    get_input,
    in_github_actions,
    load_event_payload,
    set_failed,
    set_secret,
)
from linear_linker.github_utils import (
    GitHubCli,
    GitHubError,
    is_gh_authenticated,
    is_gh_installed,
)
from linear_linker.linear_client import LinearAuthError, LinearClient
from linear_linker.linker import LinkerError, LinkSkipped, link_pull_request
from linear_linker.models import SynthesizedContent
from linear_linker.references import extract_ticket_ids


@click.group()
@click.version_option(package_name="linear-pr-linker")
def main() -> None:
    """linlink - link GitHub pull requests to Linear issues."""


def _show_preview(content: SynthesizedContent) -> None:
    click.echo("=" * 60)
    click.echo("PR Preview (dry-run)")
    click.echo("=" * 60)
    click.echo()
    click.secho(f"Title: {content.title}", fg="cyan")
    click.echo()
    click.echo("Body:")
    click.echo("-" * 40)
    click.echo(content.body)
    click.echo("-" * 40)
    click.echo()
    click.secho("Dry-run complete. The PR was not updated.", fg="yellow")


@main.command()
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the new title and body without updating the PR",
)
def run(dry_run: bool) -> None:
    """Link the PR that triggered the workflow (GitHub Actions only).

    Reads the linearApiKey and ghToken action inputs and the event payload,
    then updates the PR's title and body with its Linear issues.
    """
    if not in_github_actions():
        click.echo("Not running in GitHub Actions, nothing to do.")
        return

    try:
        linear_api_key = get_input("linearApiKey", required=True)
        gh_token = get_input("ghToken", required=True)
        set_secret(linear_api_key)
        set_secret(gh_token)

        payload = load_event_payload()
        repository = payload.get("repository")
        pr_number = payload.get("number")
        if not repository or pr_number is None:
            click.echo("Event isn't about a pull request, nothing to do.")
            return

        host = GitHubCli(token=gh_token)
        pull_request = host.get_pull_request(
            owner=repository["owner"]["login"],
            repo=repository["name"],
            pull_number=pr_number,
        )
        content = link_pull_request(
            pull_request, LinearClient(linear_api_key), host, dry_run=dry_run
        )
    except LinkSkipped as e:
        click.echo(str(e))
        return
    except Exception as e:
        set_failed(str(e))
        raise SystemExit(1) from None

    if dry_run:
        _show_preview(content)
    else:
        click.echo(f"Updated PR #{pull_request.number}.")


@main.command()
@click.argument("repository")
@click.argument("number", type=int)
@click.option(
    "--linear-api-key",
    envvar="LINEAR_API_KEY",
    help="Linear API key (default: key stored by 'linlink login')",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the new title and body without updating the PR",
)
def link(
    repository: str, number: int, linear_api_key: str | None, dry_run: bool
) -> None:
    """Link pull request NUMBER of REPOSITORY (OWNER/NAME) to its Linear issues.

    Uses the gh CLI login, or GH_TOKEN when set, for GitHub access.
    """
    owner, _, repo = repository.partition("/")
    if not owner or not repo:
        click.secho(
            f"Error: Invalid repository '{repository}'. Expected OWNER/NAME.",
            fg="red",
            err=True,
        )
        raise SystemExit(1)

    client = LinearClient(linear_api_key)
    if not client.is_authenticated:
        click.secho(
            "Error: Not authenticated with Linear.\nRun 'linlink login' first.",
            fg="red",
            err=True,
        )
        raise SystemExit(1)

    host = GitHubCli()
    click.echo(f"Fetching PR #{number} from {owner}/{repo}...")
    try:
        pull_request = host.get_pull_request(owner, repo, number)
        content = link_pull_request(pull_request, client, host, dry_run=dry_run)
    except LinkSkipped as e:
        click.secho(str(e), fg="yellow")
        return
    except (LinkerError, GitHubError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1) from None

    if dry_run:
        _show_preview(content)
        return

    click.secho("Pull request updated!", fg="green")
    click.echo(f"  Title: {content.title}")


@main.command()
@click.option("--branch", "-b", default="", help="Branch name to scan")
@click.option("--body", default=None, help="PR description to scan")
def extract(branch: str, body: str | None) -> None:
    """Show the Linear issue IDs a branch name and description refer to."""
    ticket_ids = extract_ticket_ids(branch, body)
    if not ticket_ids:
        click.secho("No Linear issue referenced.", fg="yellow")
        return
    for ticket_id in ticket_ids:
        click.echo(ticket_id)


@main.command()
def login() -> None:
    """Authenticate with Linear and store the API key securely."""
    click.echo("Linear Authentication Setup")
    click.echo("=" * 40)
    click.echo()

    api_key = click.prompt("API key", hide_input=True)

    click.echo()
    click.echo("Validating API key...")

    try:
        LinearClient.login(api_key)
        click.secho("Successfully authenticated!", fg="green")
        click.echo("API key stored in system keyring.")
    except LinearAuthError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1) from None


@main.command()
def logout() -> None:
    """Remove the stored Linear API key."""
    LinearClient.logout()
    click.secho("Credentials removed from keyring.", fg="yellow")


@main.command()
def status() -> None:
    """Show Linear and GitHub CLI authentication status."""
    client = LinearClient()

    click.echo("Authentication Status")
    click.echo("-" * 30)
    if client.is_authenticated:
        click.echo("  Verifying API key...")
        if client.verify_credentials():
            click.secho("Linear: Authenticated (verified)", fg="green")
        else:
            click.secho("Linear: API key stored but invalid or revoked", fg="red")
            click.echo("  Run 'linlink login' to fix")
    else:
        click.secho("Linear: Not authenticated", fg="yellow")
        click.echo("  Run 'linlink login' to authenticate")

    click.echo()

    click.echo("GitHub CLI Status")
    click.echo("-" * 30)
    if is_gh_installed():
        click.secho("gh: Installed", fg="green")
        if is_gh_authenticated():
            click.secho("gh: Authenticated", fg="green")
        else:
            click.secho("gh: Not authenticated", fg="yellow")
            click.echo("  Run 'gh auth login' to authenticate")
    else:
        click.secho("gh: Not installed", fg="red")
        click.echo("  Install from: https://cli.github.com/")


if __name__ == "__main__":
    main()
