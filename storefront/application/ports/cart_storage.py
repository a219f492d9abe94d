from abc import ABC, abstractmethod

from storefront.domain.entities.cart import CartState


class CartStoragePort(ABC):
    @abstractmethod
    def load(self) -> CartState:
        """Return the persisted cart, or an empty one if nothing usable is stored."""
        raise NotImplementedError

    @abstractmethod
    def save(self, state: CartState) -> None:
        raise NotImplementedError
