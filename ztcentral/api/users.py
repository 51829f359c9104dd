"""
Account status and API token operations.
"""
from typing import Optional

from ztcentral.api.base import ResourceOperations, path_segment
from ztcentral.models.user import APITokenRequest, RandomToken, Status, User
from ztcentral.network.cancel import CancellationToken
from ztcentral.network.errors import DecodeError

MIN_TOKEN_LENGTH = 32


class UserOperations(ResourceOperations):

    def status(self, *, cancel: Optional[CancellationToken] = None) -> Status:
        """
        Returns the full /status response, which describes the account the
        API token belongs to. See ``user()`` for just the user record.
        """
        return self._call("GET", "/status", Status, cancel=cancel)

    def user(self, *, cancel: Optional[CancellationToken] = None) -> Optional[User]:
        """Returns the user owning the API token, via the /status endpoint."""
        status = self.status(cancel=cancel)
        return status.user if status is not None else None

    def create_api_token(self, user_id: str, name: str, token: str, *,
                         cancel: Optional[CancellationToken] = None) -> None:
        """
        Registers ``token`` as an API token named ``name``.

        Args:
            user_id: ID of the user owning the token
            name: Token name, used later to delete it
            token: The secret; at least 32 characters (see ``random_token()``)
        """
        if len(token) < MIN_TOKEN_LENGTH:
            raise ValueError(f"token must be a minimum of {MIN_TOKEN_LENGTH} characters")
        body = APITokenRequest(token_name=name, token=token)
        self._call("POST", f"/user/{path_segment(user_id)}/token", body=body,
                   idempotent=True, cancel=cancel)

    def delete_api_token(self, user_id: str, name: str, *,
                         cancel: Optional[CancellationToken] = None) -> None:
        self._call("DELETE", f"/user/{path_segment(user_id)}/token/{path_segment(name)}", cancel=cancel)

    def random_token(self, *, cancel: Optional[CancellationToken] = None) -> str:
        """Fetches a server-generated token suitable for ``create_api_token()``."""
        res = self._call("GET", "/randomToken", RandomToken, cancel=cancel)
        if res is None or not res.token:
            raise DecodeError("random token response did not contain a token")
        return res.token
