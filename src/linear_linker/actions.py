"""GitHub Actions runtime helpers."""

import json
import os

import click


class ActionInputError(Exception):
    """Raised when a required action input is missing."""


def in_github_actions() -> bool:
    """Check if running inside a GitHub Actions job."""
    return bool(os.environ.get("GITHUB_ACTIONS"))


def get_input(name: str, required: bool = False) -> str:
    """Read an action input the way the runner exposes it (INPUT_<NAME>).

    Args:
        name: Input name as declared in action.yml
        required: Raise if the input is empty

    Returns:
        Input value with surrounding whitespace removed

    Raises:
        ActionInputError: If required and not supplied
    """
    value = os.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    if required and not value:
        raise ActionInputError(f"Input required and not supplied: {name}")
    return value


def set_secret(value: str) -> None:
    """Mask a value in all further log output."""
    if value:
        click.echo(f"::add-mask::{value}")


def set_failed(message: str) -> None:
    """Report a failure as an error annotation."""
    click.echo(f"::error::{message}")


def load_event_payload(path: str | None = None) -> dict:
    """Load the webhook payload that triggered the workflow.

    Args:
        path: Event file, defaults to GITHUB_EVENT_PATH

    Returns:
        Decoded payload, empty if there is no event file
    """
    event_path = path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path or not os.path.exists(event_path):
        return {}

    with open(event_path, encoding="utf-8") as f:
        return json.load(f)
