"""
Address Form Validation

Checks an AddressFormDTO before it may be saved:
- full name and street address are not blank
- phone number matches config.PHONE_NUMBER_PATTERN (10 digits by default)
- province, district and ward are selected

All checks run on every call so the form can show every field error at once.
"""

import logging
import re

import config
from enums.text_entity import TextEntity
from models.address import AddressFormDTO
from utils.localizator import Localizator

logger = logging.getLogger(__name__)


def is_valid_phone_number(phone_number: str) -> bool:
    """
    Check a phone number against the configured pattern.

    Example:
        >>> is_valid_phone_number("0912345678")
        True
        >>> is_valid_phone_number("091234567")
        False
    """
    return re.fullmatch(config.PHONE_NUMBER_PATTERN, phone_number) is not None


def validate_address_form(form: AddressFormDTO, lang: str | None = None) -> dict[str, str]:
    """
    Validate an address form.

    Args:
        form: Form to validate
        lang: Optional language for the error messages

    Returns:
        dict: field name -> localized error message; empty when the form is valid
    """
    errors: dict[str, str] = {}

    def fail(field: str, key: str):
        errors[field] = Localizator.get_text(TextEntity.USER, key, lang=lang)

    if not form.full_name.strip():
        fail("full_name", "address_full_name_required")

    phone_number = form.phone_number.strip()
    if not phone_number:
        fail("phone_number", "address_phone_required")
    elif not is_valid_phone_number(phone_number):
        fail("phone_number", "address_phone_invalid")

    if not form.province_code:
        fail("province", "address_province_required")
    if not form.district_code:
        fail("district", "address_district_required")
    if not form.ward_code:
        fail("ward", "address_ward_required")

    if not form.street_address.strip():
        fail("street_address", "address_street_required")

    if errors:
        logger.debug(f"[Address] Form rejected, invalid fields: {sorted(errors)}")

    return errors
