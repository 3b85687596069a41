"""
Unit Tests: address collection rules and form validation

Tests for utils/address_rules.py and utils/address_validation.py covering:
- exactly one default after every submission, deletion and default change
- first address auto-defaulted, deleting the default promotes another
- field-level validation errors
"""

import pytest

from exceptions.address import AddressNotFoundException
from models.address import AddressDTO, AddressFormDTO
from utils.address_rules import apply_submission, ensure_single_default, make_default, remove_address
from utils.address_validation import is_valid_phone_number, validate_address_form


def make_address(address_id: str, is_default: bool = False, **overrides) -> AddressDTO:
    values = dict(
        id=address_id, full_name="Tran Thi B", phone_number="0987654321",
        province_code="79", province_name="Ho Chi Minh",
        district_code="760", district_name="Quan 1",
        ward_code="26734", ward_name="Tan Dinh",
        street_address="45 Hai Ba Trung", is_default=is_default
    )
    values.update(overrides)
    return AddressDTO(**values)


def defaults(addresses: list[AddressDTO]) -> list[str]:
    return [address.id for address in addresses if address.is_default]


def valid_form(**overrides) -> AddressFormDTO:
    return AddressFormDTO.from_address(make_address("x")).model_copy(update=overrides)


class TestApplySubmission:

    def test_first_address_becomes_default(self):
        result = apply_submission([], make_address("a1", is_default=False))
        assert defaults(result) == ["a1"]

    def test_new_non_default_address_keeps_existing_default(self):
        existing = [make_address("a1", is_default=True)]

        result = apply_submission(existing, make_address("a2"))

        assert [address.id for address in result] == ["a1", "a2"]
        assert defaults(result) == ["a1"]

    @pytest.mark.parametrize("existing_count", [1, 2, 5])
    def test_new_default_demotes_all_others(self, existing_count):
        existing = [make_address(f"a{i}", is_default=(i == 0)) for i in range(existing_count)]

        result = apply_submission(existing, make_address("new", is_default=True))

        assert len(result) == existing_count + 1
        assert defaults(result) == ["new"]

    def test_editing_into_default_demotes_others(self):
        existing = [make_address("a1", is_default=True), make_address("a2"), make_address("a3")]

        result = apply_submission(existing, make_address("ignored", is_default=True, street_address="1 New St"),
                                  editing_id="a3")

        assert [address.id for address in result] == ["a1", "a2", "a3"]
        assert defaults(result) == ["a3"]
        assert result[2].street_address == "1 New St"

    def test_unchecking_the_only_default_promotes_first(self):
        existing = [make_address("a1"), make_address("a2", is_default=True)]

        result = apply_submission(existing, make_address("a2", is_default=False), editing_id="a2")

        assert defaults(result) == ["a1"]

    def test_editing_unknown_address(self):
        with pytest.raises(AddressNotFoundException):
            apply_submission([make_address("a1", is_default=True)], make_address("zz"), editing_id="zz")

    def test_input_not_mutated(self):
        existing = [make_address("a1", is_default=True)]
        apply_submission(existing, make_address("a2", is_default=True))
        assert existing[0].is_default


class TestRemoveAndDefault:

    def test_deleting_default_promotes_first_remaining(self):
        existing = [make_address("a1"), make_address("a2", is_default=True), make_address("a3")]

        result = remove_address(existing, "a2")

        assert [address.id for address in result] == ["a1", "a3"]
        assert defaults(result) == ["a1"]

    def test_deleting_last_address(self):
        assert remove_address([make_address("a1", is_default=True)], "a1") == []

    def test_deleting_unknown_address(self):
        with pytest.raises(AddressNotFoundException):
            remove_address([make_address("a1", is_default=True)], "nope")

    def test_make_default(self):
        existing = [make_address("a1", is_default=True), make_address("a2")]

        result = make_default(existing, "a2")

        assert defaults(result) == ["a2"]

    def test_ensure_single_default_repairs_multiple_flags(self):
        existing = [make_address("a1", is_default=True), make_address("a2", is_default=True)]
        assert defaults(ensure_single_default(existing)) == ["a1"]
        assert defaults(ensure_single_default(existing, preferred_id="a2")) == ["a2"]


class TestValidation:

    def test_valid_form(self):
        assert validate_address_form(valid_form()) == {}

    @pytest.mark.parametrize("phone_number,valid", [
        ("0912345678", True),
        ("091234567", False),
        ("09123456789", False),
        ("09123-45678", False),
        ("+84912345678", False),
        ("abcdefghij", False),
    ])
    def test_phone_pattern(self, phone_number, valid):
        assert is_valid_phone_number(phone_number) is valid

    def test_empty_form_reports_every_field(self):
        errors = validate_address_form(AddressFormDTO())

        assert set(errors) == {"full_name", "phone_number", "province", "district", "ward", "street_address"}
        assert errors["phone_number"] == "Please enter a phone number."
        assert errors["ward"] == "Please select a ward."

    def test_blank_text_fields_rejected(self):
        errors = validate_address_form(valid_form(full_name="   ", street_address="\t"))
        assert set(errors) == {"full_name", "street_address"}

    def test_invalid_phone_message(self):
        errors = validate_address_form(valid_form(phone_number="12345"))
        assert errors == {"phone_number": "Phone number must have exactly 10 digits."}

    def test_missing_district_and_ward(self):
        errors = validate_address_form(valid_form(district_code="", district_name="", ward_code="", ward_name=""))
        assert set(errors) == {"district", "ward"}
