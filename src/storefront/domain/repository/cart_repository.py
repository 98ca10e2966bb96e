"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_owner(self, owner_id: str) -> Cart | None:
        """Return the owner's cart, or None if it was never saved."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart (one per owner)."""

    @abstractmethod
    def take(self, owner_id: str) -> Cart | None:
        """Atomically return the owner's cart and store it emptied.

        Returns None when the owner has no cart.  Two concurrent takes of
        the same cart never both receive its items.
        """
