# payprocess/client.py
"""Transport boundary consumed by the payment processes."""

from typing import Optional, Protocol, TypeVar

T = TypeVar("T")


class ApiClient(Protocol):
    """Protocol for the client that runs payment API methods.

    The processes call it synchronously and never catch what it raises:
    transport and parse errors reach the caller unchanged.
    """

    def execute(self, request) -> T:
        """Run a typed request and return the parsed response.

        Args:
            request: One of the request models from :mod:`payprocess.payment.methods`

        Returns:
            Instance of ``request.response_type``
        """
        ...

    def is_authorized(self) -> bool:
        """Return True when the client holds a user access token."""
        ...

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Replace the user access token (None to log out)."""
        ...
