"""Linear API client with keyring-based authentication."""

import contextlib

import keyring
import requests

from linear_linker.models import TicketId, TicketRef

SERVICE_NAME = "linlink"
KEYRING_API_KEY_KEY = "linear_api_key"

LINEAR_GRAPHQL_URL = "https://api.linear.app/graphql"
REQUEST_TIMEOUT = 30

VIEWER_QUERY = "query Viewer { viewer { id name } }"

ISSUE_QUERY = """
query Issue($id: String!) {
  issue(id: $id) {
    identifier
    title
    url
    parent {
      title
    }
    project {
      name
    }
  }
}
"""


class TicketClientError(Exception):
    """Raised when a Linear API call fails."""


class TicketNotFound(TicketClientError):
    """Raised when a Linear issue does not exist."""


class LinearAuthError(TicketClientError):
    """Raised when Linear authentication fails."""


class LinearClient:
    """Linear API wrapper with secure credential storage."""

    def __init__(self, api_key: str | None = None) -> None:
        """Initialize client, loading the API key from keyring if not given."""
        self._api_key = api_key or keyring.get_password(
            SERVICE_NAME, KEYRING_API_KEY_KEY
        )
        self._session: requests.Session | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if an API key is available."""
        return bool(self._api_key)

    def verify_credentials(self) -> bool:
        """Verify the API key is still valid by calling the Linear API.

        Returns:
            True if the API call succeeds, False otherwise.
        """
        if not self.is_authenticated:
            return False
        try:
            self._execute(VIEWER_QUERY)
            return True
        except TicketClientError:
            return False

    def _get_session(self) -> requests.Session:
        """Get or create the authenticated HTTP session."""
        if self._session is None:
            if not self.is_authenticated:
                raise LinearAuthError("Not authenticated. Run 'linlink login' first.")
            self._session = requests.Session()
            self._session.headers.update(
                {"Authorization": self._api_key, "Content-Type": "application/json"}
            )
        return self._session

    def _execute(self, query: str, variables: dict | None = None) -> dict:
        """Run a GraphQL query and return its ``data`` member.

        Raises:
            LinearAuthError: If the API key is rejected
            TicketNotFound: If the queried entity doesn't exist
            TicketClientError: On transport, HTTP or GraphQL errors
        """
        session = self._get_session()
        try:
            response = session.post(
                LINEAR_GRAPHQL_URL,
                json={"query": query, "variables": variables or {}},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise TicketClientError(f"Linear API request failed: {e}") from e

        if response.status_code in (401, 403):
            raise LinearAuthError(
                f"Linear rejected the API key ({response.status_code})"
            )

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        # GraphQL errors come back with 200 or 400 depending on their kind
        errors = payload.get("errors") or []
        if errors:
            messages = "; ".join(error.get("message", "") for error in errors)
            codes = {
                (error.get("extensions") or {}).get("code", "") for error in errors
            }
            if "AUTHENTICATION_ERROR" in codes:
                raise LinearAuthError(f"Authentication failed: {messages}")
            if "not found" in messages.lower():
                raise TicketNotFound(messages)
            raise TicketClientError(f"Linear API error: {messages}")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise TicketClientError(f"Linear API request failed: {e}") from e

        return payload.get("data") or {}

    @staticmethod
    def login(api_key: str) -> None:
        """Validate an API key and store it in keyring.

        Args:
            api_key: Linear personal API key

        Raises:
            LinearAuthError: If the key is invalid
        """
        api_key = api_key.strip()

        try:
            LinearClient(api_key)._execute(VIEWER_QUERY)
        except LinearAuthError:
            raise
        except TicketClientError as e:
            raise LinearAuthError(f"Connection failed: {e}") from e

        keyring.set_password(SERVICE_NAME, KEYRING_API_KEY_KEY, api_key)

    @staticmethod
    def logout() -> None:
        """Remove the stored API key from keyring."""
        with contextlib.suppress(keyring.errors.PasswordDeleteError):
            keyring.delete_password(SERVICE_NAME, KEYRING_API_KEY_KEY)

    def lookup(self, ticket_id: TicketId) -> TicketRef:
        """Fetch issue details from Linear.

        Args:
            ticket_id: Issue identifier (e.g., ENG-123)

        Returns:
            TicketRef with title, url, parent title and project name

        Raises:
            TicketNotFound: If the issue doesn't exist
            TicketClientError: If the API call fails
        """
        data = self._execute(ISSUE_QUERY, {"id": ticket_id})
        issue = data.get("issue")
        if not issue:
            raise TicketNotFound(f"Linear issue {ticket_id} not found")

        parent = issue.get("parent") or {}
        project = issue.get("project") or {}
        return TicketRef(
            identifier=issue.get("identifier") or ticket_id,
            title=issue["title"],
            url=issue["url"],
            parent_title=parent.get("title"),
            project_name=project.get("name"),
        )
