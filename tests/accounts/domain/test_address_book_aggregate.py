import pytest
from protean.exceptions import ValidationError

from storefront.accounts.address_book import MAX_ADDRESSES, AddressBook
from storefront.accounts.events import AddressAdded, AddressRemoved, DefaultAddressChanged
from storefront.errors import ForbiddenError


def _add(book, city="Pune", is_default=False):
    return book.add_address(
        name="Asha Rao", street="12 Park Street", city=city, postal_code="411001", is_default=is_default
    )


@pytest.fixture()
def book():
    return AddressBook.create(user_id="user-1")


class TestAddAddress:
    def test_tag_defaults_to_home(self, book):
        assert _add(book).tag == "HOME"

    def test_new_default_clears_previous_default(self, book):
        first = _add(book, is_default=True)
        second = _add(book, city="Mumbai", is_default=True)
        assert first.is_default is False
        assert second.is_default is True
        assert book.default_address.id == second.id

    def test_raises_address_added(self, book):
        address = _add(book, is_default=True)
        event = book._events[-1]
        assert isinstance(event, AddressAdded)
        assert event.address_id == str(address.id)
        assert event.is_default is True

    def test_address_limit(self, book):
        for _ in range(MAX_ADDRESSES):
            _add(book)
        with pytest.raises(ValidationError):
            _add(book)


class TestDefaultAddress:
    def test_set_default(self, book):
        first = _add(book, is_default=True)
        second = _add(book, city="Mumbai")
        book.set_default_address(second.id)

        assert book.default_address.id == second.id
        assert first.is_default is False
        event = book._events[-1]
        assert isinstance(event, DefaultAddressChanged)
        assert event.previous_default_address_id == str(first.id)

    def test_foreign_address(self, book):
        with pytest.raises(ForbiddenError):
            book.set_default_address("someone-elses")

    def test_default_listed_first(self, book):
        _add(book, city="Older")
        default = _add(book, city="Default", is_default=False)
        _add(book, city="Newest")
        book.set_default_address(default.id)

        assert [a.city for a in book.ordered_addresses()] == ["Default", "Newest", "Older"]


class TestRemoveAddress:
    def test_remove(self, book):
        address = _add(book)
        book.remove_address(address.id)
        assert book.addresses == []
        assert isinstance(book._events[-1], AddressRemoved)

    def test_remove_foreign_address(self, book):
        with pytest.raises(ForbiddenError):
            book.remove_address("someone-elses")
