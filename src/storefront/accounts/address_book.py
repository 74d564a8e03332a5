"""Address book aggregate: the saved shipping addresses of one user.

At most one address is the default. Setting a new default clears the
previous one inside the same atomic change.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String

from storefront.domain import storefront
from storefront.errors import ForbiddenError

MAX_ADDRESSES = 20


@storefront.entity(part_of="AddressBook")
class Address:
    name: String(required=True, max_length=255)
    phone: String(max_length=20)
    tag: String(max_length=20, default="HOME")
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    is_default: Boolean(default=False)
    created_at: DateTime()


@storefront.aggregate
class AddressBook:
    user_id: Identifier(required=True)
    addresses: HasMany(Address)

    @invariant.post
    def at_most_one_default_address(self):
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) > 1:
            raise ValidationError({"addresses": ["Only one address can be the default"]})

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id)

    @property
    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    def ordered_addresses(self) -> list:
        """Default first, then newest first."""
        newest = sorted(self.addresses, key=lambda a: a.created_at or datetime.min.replace(tzinfo=UTC), reverse=True)
        return sorted(newest, key=lambda a: not a.is_default)

    def _owned(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ForbiddenError("Address does not belong to this user")
        return address

    def add_address(self, name, street, city, postal_code, phone=None, state=None, tag=None, is_default=False):
        from storefront.accounts.events import AddressAdded

        with atomic_change(self):
            if is_default:
                for existing in self.addresses:
                    existing.is_default = False

            address = Address(
                name=name,
                phone=phone,
                tag=tag or "HOME",
                street=street,
                city=city,
                state=state,
                postal_code=postal_code,
                is_default=is_default,
                created_at=datetime.now(UTC),
            )
            self.add_addresses(address)

        self.raise_(
            AddressAdded(
                user_id=str(self.user_id),
                address_id=str(address.id),
                city=city,
                is_default=is_default,
            )
        )
        return address

    def set_default_address(self, address_id):
        from storefront.accounts.events import DefaultAddressChanged

        address = self._owned(address_id)
        previous = self.default_address

        with atomic_change(self):
            for existing in self.addresses:
                existing.is_default = False
            address.is_default = True

        self.raise_(
            DefaultAddressChanged(
                user_id=str(self.user_id),
                address_id=str(address.id),
                previous_default_address_id=str(previous.id) if previous else None,
            )
        )

    def remove_address(self, address_id):
        from storefront.accounts.events import AddressRemoved

        address = self._owned(address_id)
        self.remove_addresses(address)

        self.raise_(AddressRemoved(user_id=str(self.user_id), address_id=str(address_id)))
