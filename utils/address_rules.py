"""
Address collection rules.

Pure functions that compute a user's new address collection. They never
mutate their input; the result is written back as a whole by
AddressRepository.put_all.

Collection invariant: a non-empty collection has exactly one default address.
"""

from exceptions.address import AddressNotFoundException
from models.address import AddressDTO


def ensure_single_default(addresses: list[AddressDTO], preferred_id: str | None = None) -> list[AddressDTO]:
    """
    Return a copy of `addresses` with exactly one default (none if empty).

    The default kept is `preferred_id` when that address is flagged, otherwise
    the first flagged address, otherwise the first address.
    """
    if not addresses:
        return []

    flagged = [address.id for address in addresses if address.is_default]
    if preferred_id in flagged:
        default_id = preferred_id
    elif flagged:
        default_id = flagged[0]
    else:
        default_id = addresses[0].id

    return [address.model_copy(update={"is_default": address.id == default_id}) for address in addresses]


def apply_submission(
    addresses: list[AddressDTO],
    submitted: AddressDTO,
    editing_id: str | None = None
) -> list[AddressDTO]:
    """
    Compute the collection after saving the address form.

    Args:
        addresses: Current collection
        submitted: Validated address from the form (carries the final id)
        editing_id: Id of the address being edited, None when adding

    Returns:
        New collection; the submitted address is the default if it asked to be
        or if it is the first address of the user.

    Raises:
        AddressNotFoundException: editing_id is not part of the collection
    """
    if editing_id is not None:
        if not any(address.id == editing_id for address in addresses):
            raise AddressNotFoundException(editing_id)
        submitted = submitted.model_copy(update={"id": editing_id})
        result = [submitted if address.id == editing_id else address for address in addresses]
    else:
        if not addresses:
            submitted = submitted.model_copy(update={"is_default": True})
        result = [*addresses, submitted]

    if submitted.is_default:
        result = [
            address if address.id == submitted.id else address.model_copy(update={"is_default": False})
            for address in result
        ]

    return ensure_single_default(result, preferred_id=submitted.id if submitted.is_default else None)


def remove_address(addresses: list[AddressDTO], address_id: str) -> list[AddressDTO]:
    """
    Compute the collection after deleting one address.

    Deleting the default promotes the first remaining address.

    Raises:
        AddressNotFoundException: address_id is not part of the collection
    """
    if not any(address.id == address_id for address in addresses):
        raise AddressNotFoundException(address_id)
    remaining = [address for address in addresses if address.id != address_id]
    return ensure_single_default(remaining)


def make_default(addresses: list[AddressDTO], address_id: str) -> list[AddressDTO]:
    if not any(address.id == address_id for address in addresses):
        raise AddressNotFoundException(address_id)
    return [address.model_copy(update={"is_default": address.id == address_id}) for address in addresses]
