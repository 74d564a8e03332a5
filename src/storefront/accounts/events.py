"""Domain events for the AddressBook aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="AddressBook")
class AddressAdded:
    __version__ = "v1"

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    city: String(required=True)
    is_default: Boolean(default=False)


@storefront.event(part_of="AddressBook")
class DefaultAddressChanged:
    __version__ = "v1"

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_default_address_id: Identifier()


@storefront.event(part_of="AddressBook")
class AddressRemoved:
    __version__ = "v1"

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
