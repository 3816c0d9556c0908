# marketplace/core/credential_store.py

import logging
from typing import Optional

from marketplace.storage.local_storage import LocalStorage
from security.token_decoder import role_from_token

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Holds the bearer token and the role derived from it.

    The role is decoded once per login (or rehydration) and cached here,
    so readers never re-parse the token.
    """

    def __init__(self, storage: LocalStorage, key: str):
        self._storage = storage
        self._key = key
        self.token: Optional[str] = None
        self.role: Optional[str] = None
        self._load()

    def _load(self) -> None:
        token = self._storage.get_item(self._key)
        if not token:
            return
        self.token = token
        self.role = role_from_token(token)
        if self.role is None:
            logger.warning("Stored credential carries no usable role")

    @property
    def is_authenticated(self) -> bool:
        # A token without a parseable role gates exactly like no token.
        return bool(self.token) and self.role is not None

    def login(self, token: str) -> Optional[str]:
        """Persist a freshly issued token and return its role."""
        self._storage.set_item(self._key, token)
        self.token = token
        self.role = role_from_token(token)
        logger.info(f"Signed in with role {self.role or 'none'}")
        return self.role

    def logout(self) -> None:
        self._storage.remove_item(self._key)
        self.token = None
        self.role = None
        logger.info("Signed out")
