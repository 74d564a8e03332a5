"""Address book commands, handler and lookups."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.accounts.address_book import AddressBook
from storefront.domain import storefront
from storefront.errors import ForbiddenError
from storefront.utils.query import first_or_none


@storefront.command(part_of="AddressBook")
class AddAddress:
    user_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    phone: String(max_length=20)
    tag: String(max_length=20)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    is_default: Boolean(default=False)


@storefront.command(part_of="AddressBook")
class SetDefaultAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command(part_of="AddressBook")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


def find_address_book(user_id) -> AddressBook | None:
    query = current_domain.repository_for(AddressBook)._dao.query.filter(user_id=str(user_id))
    return first_or_none(query)


def list_addresses(user_id) -> list:
    book = find_address_book(user_id)
    return book.ordered_addresses() if book else []


def _book_for_change(user_id) -> AddressBook:
    book = find_address_book(user_id)
    if book is None:
        # Nothing saved yet, so any address id is someone else's
        raise ForbiddenError("Address does not belong to this user")
    return book


@storefront.command_handler(part_of=AddressBook)
class AddressBookHandler:
    @handle(AddAddress)
    def add_address(self, command):
        book = find_address_book(command.user_id) or AddressBook.create(user_id=str(command.user_id))
        address = book.add_address(
            name=command.name,
            phone=command.phone,
            tag=command.tag,
            street=command.street,
            city=command.city,
            state=command.state,
            postal_code=command.postal_code,
            is_default=command.is_default,
        )
        current_domain.repository_for(AddressBook).add(book)
        return str(address.id)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        book = _book_for_change(command.user_id)
        book.set_default_address(command.address_id)
        current_domain.repository_for(AddressBook).add(book)

    @handle(RemoveAddress)
    def remove_address(self, command):
        book = _book_for_change(command.user_id)
        book.remove_address(command.address_id)
        current_domain.repository_for(AddressBook).add(book)
