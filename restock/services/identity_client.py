"""Identity (auth service) client: user authority for orders."""
import logging
from typing import Any, Dict, Optional

import requests
from flask import Flask, current_app

from restock.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class IdentityClient:
    """Cliente HTTP del servicio de autenticación."""

    def __init__(self, base_url: str, timeout: float = 10, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests.Session()

    def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        """
        Fetch a user profile.

        Returns:
            Profile dict, or None when the auth service does not answer with success

        Raises:
            UpstreamError: If the auth service cannot be reached
        """
        url = f"{self.base_url}/users/{user_id}"
        try:
            response = self.http.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"[AUTH] Error looking up user {user_id}: {e}")
            raise UpstreamError(f'Auth service unavailable: {e}')

        if not response.ok:
            logger.info(f"[AUTH] User {user_id} not resolved (HTTP {response.status_code})")
            return None

        try:
            body = response.json()
        except ValueError:
            logger.error(f"[AUTH] Unreadable response for user {user_id}")
            raise UpstreamError(f'Auth service returned an invalid response for user {user_id}')

        if not isinstance(body, dict):
            return None
        status = body.get('status')
        if isinstance(status, int) and not isinstance(status, bool) and status >= 400:
            return None
        user = body.get('user', body)
        return user if isinstance(user, dict) and user else None


def init_identity_client(app: Flask) -> None:
    """Register the identity client on the app."""
    if not hasattr(app, 'extensions'):
        app.extensions = {}
    app.extensions['identity_client'] = IdentityClient(
        app.config['AUTH_SERVICE_URL'],
        timeout=app.config.get('SERVICE_TIMEOUT', 10)
    )


def get_identity_client() -> IdentityClient:
    """Get the identity client for the current app."""
    client = current_app.extensions.get('identity_client')
    if client is None:
        raise RuntimeError("Identity client not initialized.")
    return client
