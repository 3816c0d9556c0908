"""
APPLICATION CONTEXT

Built once per browser session at the application root and handed to
every page. Owns the process-wide pieces of client state so their
lifecycle can be exercised in isolation:

- credentials: CredentialStore (torn down on logout)
- cart: Cart (survives logout; cleared only by order placement)
- api: ApiClient wired to the credential store
"""

import logging
from typing import Optional

from marketplace import config
from marketplace.core.cart import Cart
from marketplace.core.credential_store import CredentialStore
from marketplace.integrations.api_client import ApiClient
from marketplace.storage.local_storage import LocalStorage

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(
        self,
        storage: Optional[LocalStorage] = None,
        api: Optional[ApiClient] = None,
        token_key: str = config.TOKEN_KEY,
        cart_key: str = config.CART_KEY,
    ):
        self.storage = storage or LocalStorage(config.LOCAL_STORAGE_PATH)
        self.credentials = CredentialStore(self.storage, token_key)
        self.cart = Cart(self.storage, cart_key)
        self.api = api or ApiClient()
        if self.api.token_provider is None:
            self.api.token_provider = lambda: self.credentials.token
        logger.info("Application context initialised")

    @property
    def role(self) -> Optional[str]:
        return self.credentials.role

    @property
    def is_authenticated(self) -> bool:
        return self.credentials.is_authenticated

    def sign_out(self) -> None:
        self.credentials.logout()
