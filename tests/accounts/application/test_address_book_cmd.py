import pytest
from protean.utils.globals import current_domain

from storefront.accounts.addresses import AddAddress, RemoveAddress, SetDefaultAddress, list_addresses
from storefront.errors import ForbiddenError


def _add(user_id="user-1", city="Pune", is_default=False):
    return current_domain.process(
        AddAddress(
            user_id=user_id,
            name="Asha Rao",
            phone="9876543210",
            street="12 Park Street",
            city=city,
            state="MH",
            postal_code="411001",
            is_default=is_default,
        ),
        asynchronous=False,
    )


class TestAddressBookCommands:
    def test_add_returns_address_id(self):
        address_id = _add()
        [address] = list_addresses("user-1")
        assert str(address.id) == address_id
        assert address.postal_code == "411001"

    def test_set_default(self):
        _add(is_default=True)
        other = _add(city="Mumbai")
        current_domain.process(SetDefaultAddress(user_id="user-1", address_id=other), asynchronous=False)

        addresses = list_addresses("user-1")
        assert addresses[0].city == "Mumbai"
        assert [a.is_default for a in addresses] == [True, False]

    def test_remove(self):
        address_id = _add()
        current_domain.process(RemoveAddress(user_id="user-1", address_id=address_id), asynchronous=False)
        assert list_addresses("user-1") == []

    def test_cannot_touch_another_users_address(self):
        address_id = _add(user_id="user-1")
        _add(user_id="user-2")
        with pytest.raises(ForbiddenError):
            current_domain.process(RemoveAddress(user_id="user-2", address_id=address_id), asynchronous=False)
        assert len(list_addresses("user-1")) == 1

    def test_user_without_address_book(self):
        with pytest.raises(ForbiddenError):
            current_domain.process(SetDefaultAddress(user_id="user-3", address_id="x"), asynchronous=False)

    def test_listing_without_address_book(self):
        assert list_addresses("nobody") == []
