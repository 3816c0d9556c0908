# marketplace/services/auth_service.py

import logging
from typing import Optional

from marketplace.core.credential_store import CredentialStore
from marketplace.integrations.api_client import ApiClient, ApiError
from security.roles import OWNER, SELF_SERVICE_ROLES

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _store_token(credentials: CredentialStore, data) -> Optional[str]:
    token = data.get("token") if isinstance(data, dict) else None
    if not token:
        raise ApiError("The server did not return a credential")
    return credentials.login(token)


def login(api: ApiClient, credentials: CredentialStore, email: str, password: str) -> Optional[str]:
    """
    Sign in and persist the issued credential.

    Returns:
        The role carried by the new credential (None if it has none)

    Raises:
        ApiError: invalid input or rejected credentials
    """
    email = (email or "").strip().lower()
    if not email or not password:
        raise ApiError("Email and password are required")

    data = api.post("/api/auth/login", {"email": email, "password": password})
    return _store_token(credentials, data)


def register(
    api: ApiClient,
    credentials: CredentialStore,
    email: str,
    password: str,
    confirm: str,
    role: str,
    restaurant_id: str = "",
) -> Optional[str]:
    """
    Create an account and sign in with the returned credential.

    Owners may attach the restaurant they manage.
    """
    email = (email or "").strip().lower()
    if not email:
        raise ApiError("Email is required")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ApiError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if password != confirm:
        raise ApiError("Passwords do not match")
    if role not in SELF_SERVICE_ROLES:
        raise ApiError("Choose customer or owner")

    body = {"email": email, "password": password, "role": role}
    if role == OWNER and restaurant_id.strip():
        body["restaurantId"] = restaurant_id.strip()

    data = api.post("/api/auth/register", body)
    logger.info(f"Registered new {role} account")
    return _store_token(credentials, data)


def logout(credentials: CredentialStore) -> None:
    credentials.logout()
