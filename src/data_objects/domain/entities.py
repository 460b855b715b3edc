"""Example immutable entities.

``Customer`` holds an ordered collection of ``Purchase`` values.  Both
declare their requirements inside the constructor and commit them before
any field is assigned.
"""

from __future__ import annotations

from collections.abc import Iterable

from data_objects.validation import commit, not_empty, not_null, positive

from .base import ImmutableObject
from .collections import ImmutableList


class Purchase(ImmutableObject):
    """A single purchase, identified by a positive id."""

    def __init__(self, purchase_id: int) -> None:
        commit(positive(lambda: purchase_id))

        self.purchase_id = purchase_id

    def deep_clone(self) -> Purchase:
        return Purchase(self.purchase_id)

    def with_purchase_id(self, purchase_id: int) -> Purchase:
        return self._with(purchase_id=purchase_id)


class Customer(ImmutableObject):
    """A named customer with a positive number and a purchase history."""

    def __init__(
        self,
        name: str,
        customer_number: int,
        purchases: Iterable[Purchase],
    ) -> None:
        commit(
            not_null(lambda: name, lambda: purchases),
            not_empty(lambda: name),
            positive(lambda: customer_number),
        )

        self.name = name
        self.customer_number = customer_number
        self.purchases: ImmutableList[Purchase] = ImmutableList(purchases)

    def deep_clone(self) -> Customer:
        return Customer(self.name, self.customer_number, self.purchases)

    def with_name(self, name: str) -> Customer:
        return self._with(name=name)

    def with_customer_number(self, customer_number: int) -> Customer:
        return self._with(customer_number=customer_number)

    def with_purchases(self, purchases: Iterable[Purchase]) -> Customer:
        return self._with(purchases=ImmutableList(purchases))
