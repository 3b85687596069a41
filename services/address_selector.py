"""
Cascading province -> district -> ward selector for the address form.

Rules:
- Changing a level clears the selection and option list of every level below
  it before any fetch for the new child list is started.
- Selecting the sentinel value ("" or "0") clears the level itself as well.
- Each child-list fetch is tagged with a request token and the parent code it
  was issued for. A result is applied only if both still match when it
  arrives; a superseded fetch is dropped instead of overwriting newer state.
- Fetch failures degrade to an empty option list. The failure is logged and
  exposed as LevelState.error, the rest of the form keeps working.
"""

import logging

from enums.location_level import LocationLevel
from enums.selector_status import SelectorStatus
from enums.text_entity import TextEntity
from exceptions.location import LocationException
from models.address import AddressDTO, AddressFormDTO
from models.location import LocationOption
from models.session import UserSession
from services.location import LocationClient
from utils.localizator import Localizator

logger = logging.getLogger(__name__)

NONE_SENTINELS = ("", "0")


class LevelState:
    """
    Selection and option list of one selector level.

    `status` is set by the selector on every transition: UNSELECTED when the
    level is cleared, LOADING while its list is fetched, READY once the fetch
    ended (an empty list after a failure included) and SELECTED on a choice.
    """

    def __init__(self, level: LocationLevel):
        self.level = level
        self.options: list[LocationOption] = []
        self.selected: LocationOption | None = None
        self.status = SelectorStatus.UNSELECTED
        self.error: str | None = None

    def select(self, option: LocationOption):
        self.selected = option
        self.status = SelectorStatus.SELECTED

    def deselect(self):
        """Drop the choice. A list fetch still in flight keeps the level LOADING."""
        self.selected = None
        if self.status != SelectorStatus.LOADING:
            self.status = SelectorStatus.UNSELECTED

    @property
    def list_unavailable(self) -> bool:
        return self.error is not None or not self.options

    @property
    def code(self) -> str:
        return self.selected.code if self.selected else ""

    @property
    def name(self) -> str:
        return self.selected.name if self.selected else ""

    def find(self, code: str) -> LocationOption | None:
        return next((option for option in self.options if option.code == code), None)

    def __repr__(self):
        return f"LevelState({self.level.value}, {self.status.value}, code={self.code!r}, options={len(self.options)})"


class AddressSelector:
    def __init__(self, session: UserSession, location_client: LocationClient):
        self.session = session
        self.location_client = location_client
        self.levels: dict[LocationLevel, LevelState] = {level: LevelState(level) for level in LocationLevel}
        self._tokens: dict[LocationLevel, int] = {level: 0 for level in LocationLevel}

    @property
    def province(self) -> LevelState:
        return self.levels[LocationLevel.PROVINCE]

    @property
    def district(self) -> LevelState:
        return self.levels[LocationLevel.DISTRICT]

    @property
    def ward(self) -> LevelState:
        return self.levels[LocationLevel.WARD]

    def _parent(self, level: LocationLevel) -> LevelState | None:
        for candidate in LocationLevel:
            if candidate.child == level:
                return self.levels[candidate]
        return None

    def _invalidate(self, level: LocationLevel):
        """Drop selection and options of `level`; any fetch in flight for it becomes stale."""
        self._tokens[level] += 1
        state = self.levels[level]
        state.selected = None
        state.options = []
        state.status = SelectorStatus.UNSELECTED
        state.error = None

    def reset(self):
        """Clear all selections for a fresh form. The province list is kept."""
        if self.province.status == SelectorStatus.SELECTED:
            self.province.selected = None
            self.province.status = SelectorStatus.READY
        for level in LocationLevel.PROVINCE.descendants:
            self._invalidate(level)

    async def _fetch(self, level: LocationLevel, parent_code: str | None) -> list[LocationOption]:
        if level == LocationLevel.PROVINCE:
            return await self.location_client.fetch_provinces()
        if level == LocationLevel.DISTRICT:
            return await self.location_client.fetch_districts(parent_code)
        return await self.location_client.fetch_wards(parent_code)

    async def _load_options(self, level: LocationLevel, parent_code: str | None) -> bool:
        """
        Fetch the option list of `level` and apply it unless superseded.

        Returns:
            True if the result (or the degraded empty list) was applied,
            False if it was discarded as stale
        """
        self._tokens[level] += 1
        token = self._tokens[level]
        state = self.levels[level]
        state.selected = None
        state.status = SelectorStatus.LOADING
        state.options = []
        state.error = None

        error = None
        try:
            options = await self._fetch(level, parent_code)
        except LocationException as e:
            logger.warning(f"[Location] {e}")
            options = []
            error = Localizator.get_text(TextEntity.USER, "location_options_unavailable")

        parent = self._parent(level)
        if token != self._tokens[level] or (parent is not None and parent.code != parent_code):
            logger.debug(f"[Location] Discarding stale {level.value} list for parent {parent_code}")
            return False

        state.options = options
        state.error = error
        state.status = SelectorStatus.READY
        return True

    async def load_provinces(self) -> bool:
        return await self._load_options(LocationLevel.PROVINCE, None)

    async def _select(self, level: LocationLevel, code: str | None, name: str | None = None):
        state = self.levels[level]

        # Descendants are cleared before anything is awaited
        for descendant in level.descendants:
            self._invalidate(descendant)

        if code is None or code in NONE_SENTINELS:
            state.deselect()
            return

        parent = self._parent(level)
        if parent is not None and parent.selected is None:
            logger.warning(f"[Address] Ignoring {level.value} {code}: no {parent.level.value} selected")
            state.deselect()
            return

        option = state.find(code)
        if option is None and name and state.list_unavailable:
            # Stored address replayed while the option list could not be loaded
            option = LocationOption(code=code, name=name)
        if option is None:
            logger.warning(f"[Address] Unknown {level.value} code {code}, selection cleared")
            state.deselect()
            return

        state.select(option)
        if level.child is not None:
            await self._load_options(level.child, option.code)

    async def select_province(self, code: str | None, name: str | None = None):
        await self._select(LocationLevel.PROVINCE, code, name)

    async def select_district(self, code: str | None, name: str | None = None):
        await self._select(LocationLevel.DISTRICT, code, name)

    async def select_ward(self, code: str | None, name: str | None = None):
        await self._select(LocationLevel.WARD, code, name)

    async def begin_edit(self, address: AddressDTO):
        """
        Pre-populate the selector from a stored address.

        Replays the cascade so that the district and ward lists are the ones
        belonging to the stored codes. Stops early if the user changes a
        level while the replay is waiting for a fetch.
        """
        await self.select_province(address.province_code, address.province_name)
        if self.province.code != address.province_code:
            return
        await self.select_district(address.district_code, address.district_name)
        if self.province.code != address.province_code or self.district.code != address.district_code:
            return
        await self.select_ward(address.ward_code, address.ward_name)

    def apply_to(self, form: AddressFormDTO) -> AddressFormDTO:
        """Return a copy of `form` carrying the current selection."""
        return form.model_copy(update={
            "province_code": self.province.code,
            "province_name": self.province.name,
            "district_code": self.district.code,
            "district_name": self.district.name,
            "ward_code": self.ward.code,
            "ward_name": self.ward.name,
        })
