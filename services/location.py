"""
Client for the location reference service (provinces, districts, wards).

Endpoints used:
    GET {base}/p/                -> [{code, name, ...}, ...]
    GET {base}/p/{code}?depth=2  -> {code, name, districts: [{code, name, ...}]}
    GET {base}/d/{code}?depth=2  -> {code, name, wards: [{code, name, ...}]}

Every response goes through a pydantic parse step; the client either returns
typed LocationOption lists or raises a LocationException. Degrading failures
to empty lists is the caller's decision (see AddressSelector).
"""

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

import config
from enums.location_level import LocationLevel
from exceptions.location import LocationFetchException, LocationParseException
from models.location import LocationOption

logger = logging.getLogger(__name__)

_options_adapter = TypeAdapter(list[LocationOption])


class _ProvinceDetail(BaseModel):
    districts: list[LocationOption]


class _DistrictDetail(BaseModel):
    wards: list[LocationOption]


def parse_options(payload: Any, level: LocationLevel) -> list[LocationOption]:
    """
    Parse a bare option list.

    Raises:
        LocationParseException: payload is not a list of {code, name} objects
    """
    try:
        return _options_adapter.validate_python(payload)
    except ValidationError as e:
        raise LocationParseException(level.value, f"{e.error_count()} validation error(s)") from e


def parse_children(payload: Any, level: LocationLevel) -> list[LocationOption]:
    """
    Parse the child list embedded in a parent detail response.

    Args:
        payload: Decoded JSON of /p/{code} (districts) or /d/{code} (wards)
        level: DISTRICT or WARD, the level of the embedded list

    Raises:
        LocationParseException: the embedded list is missing or malformed
    """
    model = _ProvinceDetail if level == LocationLevel.DISTRICT else _DistrictDetail
    try:
        detail = model.model_validate(payload)
    except ValidationError as e:
        raise LocationParseException(level.value, f"{e.error_count()} validation error(s)") from e
    return detail.districts if level == LocationLevel.DISTRICT else detail.wards


class LocationClient:
    def __init__(self, base_url: str | None = None, timeout_seconds: float | None = None):
        self.base_url = (base_url or config.LOCATION_API_URL).rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds or config.LOCATION_API_TIMEOUT_SECONDS)

    async def _get_json(self, path: str, level: LocationLevel, parent_code: str | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as http_session:
                async with http_session.get(url) as response:
                    if response.status != 200:
                        raise LocationFetchException(level.value, f"HTTP {response.status}", parent_code)
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise LocationFetchException(level.value, f"{type(e).__name__}: {e}", parent_code) from e
        except ValueError as e:
            # Body is not JSON
            raise LocationParseException(level.value, f"invalid JSON: {e}") from e

    async def fetch_provinces(self) -> list[LocationOption]:
        payload = await self._get_json("/p/", LocationLevel.PROVINCE)
        provinces = parse_options(payload, LocationLevel.PROVINCE)
        logger.debug(f"[Location] Loaded {len(provinces)} provinces")
        return provinces

    async def fetch_districts(self, province_code: str) -> list[LocationOption]:
        payload = await self._get_json(f"/p/{province_code}?depth=2", LocationLevel.DISTRICT, province_code)
        districts = parse_children(payload, LocationLevel.DISTRICT)
        logger.debug(f"[Location] Loaded {len(districts)} districts for province {province_code}")
        return districts

    async def fetch_wards(self, district_code: str) -> list[LocationOption]:
        payload = await self._get_json(f"/d/{district_code}?depth=2", LocationLevel.WARD, district_code)
        wards = parse_children(payload, LocationLevel.WARD)
        logger.debug(f"[Location] Loaded {len(wards)} wards for district {district_code}")
        return wards
