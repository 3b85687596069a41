import logging
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_commit, session_rollback
from enums.text_entity import TextEntity
from exceptions.address import AddressNotFoundException, AddressPersistenceException
from models.address import AddressDTO, AddressFormDTO
from models.session import UserSession
from repositories.address import AddressRepository
from services.address_selector import AddressSelector
from utils.address_rules import apply_submission, remove_address, make_default
from utils.address_validation import validate_address_form
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

EDITABLE_FORM_FIELDS = ("full_name", "phone_number", "street_address", "is_default")


class AddressBook:
    """
    Address management of the logged-in user.

    Holds the user's address collection, the address form being edited and
    the notice to show. Storage and location-service failures end up in
    `error` / `message`; the methods return False instead of raising.
    """

    def __init__(self, session: UserSession, selector: AddressSelector):
        self.session = session
        self.selector = selector
        self.addresses: list[AddressDTO] = []
        self.form = AddressFormDTO()
        self.editing_id: str | None = None
        self.errors: dict[str, str] = {}
        self.error = False
        self.message: str | None = None
        session.on_logout(self._reset)

    @property
    def default_address(self) -> AddressDTO | None:
        return next((address for address in self.addresses if address.is_default), None)

    def get(self, address_id: str) -> AddressDTO | None:
        return next((address for address in self.addresses if address.id == address_id), None)

    def _notice(self, key: str, error: bool = False):
        self.message = Localizator.get_text(TextEntity.USER, key)
        self.error = error

    def _clear_notice(self):
        self.message = None
        self.error = False

    def _require_login(self) -> bool:
        if self.session.is_authenticated:
            return True
        self._notice("login_required", error=True)
        return False

    def _reset(self):
        self.addresses = []
        self._close_form()
        self._clear_notice()

    def _close_form(self):
        self.form = AddressFormDTO()
        self.editing_id = None
        self.errors = {}
        self.selector.reset()

    async def _write(self, addresses: list[AddressDTO], db_session: AsyncSession | Session):
        """Write the complete collection in one transaction."""
        try:
            await AddressRepository.put_all(self.session.user_id, addresses, db_session)
            await session_commit(db_session)
        except SQLAlchemyError as e:
            await session_rollback(db_session)
            raise AddressPersistenceException(self.session.user_id, str(e)) from e

    async def load(self, db_session: AsyncSession | Session) -> bool:
        if not self._require_login():
            return False
        try:
            self.addresses = await AddressRepository.get_all(self.session.user_id, db_session)
        except SQLAlchemyError as e:
            logger.error(f"[Address] Failed to load addresses of user {self.session.user_id}: {e}")
            self.addresses = []
            self._notice("address_load_failed", error=True)
            return False
        self._clear_notice()
        logger.debug(f"[Address] Loaded {len(self.addresses)} addresses of user {self.session.user_id}")
        return True

    async def start_new(self):
        self._close_form()
        self._clear_notice()
        # First address of the user becomes the default anyway
        self.form = AddressFormDTO(is_default=not self.addresses)
        if not self.selector.province.options:
            await self.selector.load_provinces()

    async def start_edit(self, address_id: str) -> bool:
        address = self.get(address_id)
        if address is None:
            logger.warning(f"[Address] Edit requested for unknown address {address_id}")
            self._notice("address_not_found", error=True)
            return False
        self._close_form()
        self._clear_notice()
        self.editing_id = address_id
        self.form = AddressFormDTO.from_address(address)
        if not self.selector.province.options:
            await self.selector.load_provinces()
        await self.selector.begin_edit(address)
        return True

    def update_form(self, **fields):
        """Update the free-text fields of the form. Location fields come from the selector."""
        unknown = set(fields) - set(EDITABLE_FORM_FIELDS)
        if unknown:
            raise ValueError(f"Not editable form fields: {sorted(unknown)}")
        self.form = self.form.model_copy(update=fields)

    async def submit(self, db_session: AsyncSession | Session) -> bool:
        """
        Validate the form and save it into the collection.

        On validation errors nothing is written and `errors` holds one message
        per invalid field. On a storage failure the form and the previous
        collection stay as they were so the user can retry.
        """
        if not self._require_login():
            return False

        self.form = self.selector.apply_to(self.form)
        self.errors = validate_address_form(self.form)
        if self.errors:
            self._clear_notice()
            return False

        submitted = self.form.to_address(self.editing_id or uuid4().hex)
        try:
            addresses = apply_submission(self.addresses, submitted, self.editing_id)
            await self._write(addresses, db_session)
        except AddressNotFoundException as e:
            logger.warning(f"[Address] {e}")
            self._notice("address_not_found", error=True)
            return False
        except AddressPersistenceException as e:
            logger.error(f"[Address] {e}")
            self._notice("address_save_failed", error=True)
            return False

        self.addresses = addresses
        logger.info(f"[Address] Saved address {submitted.id} of user {self.session.user_id}")
        self._close_form()
        self._notice("address_saved")
        return True

    async def delete(self, address_id: str, db_session: AsyncSession | Session) -> bool:
        if not self._require_login():
            return False
        try:
            addresses = remove_address(self.addresses, address_id)
            await self._write(addresses, db_session)
        except AddressNotFoundException as e:
            logger.warning(f"[Address] {e}")
            self._notice("address_not_found", error=True)
            return False
        except AddressPersistenceException as e:
            logger.error(f"[Address] {e}")
            self._notice("address_save_failed", error=True)
            return False

        self.addresses = addresses
        if self.editing_id == address_id:
            self._close_form()
        logger.info(f"[Address] Deleted address {address_id} of user {self.session.user_id}")
        self._notice("address_deleted")
        return True

    async def set_default(self, address_id: str, db_session: AsyncSession | Session) -> bool:
        if not self._require_login():
            return False
        try:
            addresses = make_default(self.addresses, address_id)
            await self._write(addresses, db_session)
        except AddressNotFoundException as e:
            logger.warning(f"[Address] {e}")
            self._notice("address_not_found", error=True)
            return False
        except AddressPersistenceException as e:
            logger.error(f"[Address] {e}")
            self._notice("address_save_failed", error=True)
            return False

        self.addresses = addresses
        self._notice("address_default_set")
        return True
