import logging
from typing import Callable

logger = logging.getLogger(__name__)


class UserSession:
    """
    Identity of the user driving the storefront.

    One instance is created per client session and handed to the components
    that need it (CartStore, AddressSelector, AddressBook). Components that
    hold per-user state register a logout callback so that state is dropped
    together with the identity.
    """

    def __init__(self, user_id: str = "", user_name: str = "", is_admin: bool = False):
        self.user_id = user_id
        self.user_name = user_name
        self.is_admin = is_admin
        self._logout_callbacks: list[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def login(self, user_id: str, user_name: str = "", is_admin: bool = False) -> None:
        self.user_id = user_id
        self.user_name = user_name
        self.is_admin = is_admin
        logger.info(f"[Session] User {user_id} logged in")

    def on_logout(self, callback: Callable[[], None]) -> None:
        self._logout_callbacks.append(callback)

    def logout(self) -> None:
        previous_user = self.user_id
        self.user_id = ""
        self.user_name = ""
        self.is_admin = False
        for callback in self._logout_callbacks:
            callback()
        logger.info(f"[Session] User {previous_user} logged out")
