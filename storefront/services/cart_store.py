"""
Cart Store

Client-local shopping cart. Lines are kept in insertion order and the
whole sequence is written to local storage after every mutation.
"""

import logging
from decimal import Decimal
from typing import Optional

from ..core.storage import Storage, storage_slot
from ..errors import StorageError
from ..models.cart import CartItem, CartLine, dump_lines, load_lines

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "cart"


class CartStore:
    """Cart lines keyed by (product_id, size_variant), persisted on every change"""

    def __init__(self, storage: Storage, storage_key: str = DEFAULT_CART_KEY):
        self.storage = storage
        self.storage_key = storage_key
        self._lines: list[CartLine] = []
        self.last_storage_error: Optional[StorageError] = None
        self._hydrate()

    # ==================== Persistence ====================

    def _hydrate(self) -> None:
        """Load lines from storage, or start empty"""
        try:
            with storage_slot(self.storage, self.storage_key) as slot:
                raw = slot.read()
                lines = load_lines(raw) if raw else []
        except StorageError as e:
            self._reset_after_failure(e)
            return

        # Older writers may have left duplicate keys behind
        self._lines = []
        for line in lines:
            existing = self._find(line.product_id, line.size_variant)
            if existing is not None:
                existing.quantity += line.quantity
            else:
                self._lines.append(line)

        if self._lines:
            logger.info(f"Loaded cart with {len(self._lines)} line(s) from '{self.storage_key}'")

    def _persist(self) -> bool:
        """Write the full line sequence to storage; False if the cart was reset"""
        try:
            with storage_slot(self.storage, self.storage_key) as slot:
                slot.write(dump_lines(self._lines))
        except StorageError as e:
            self._reset_after_failure(e)
            return False
        return True

    def _reset_after_failure(self, error: StorageError) -> None:
        logger.warning(f"Cart storage failed, cart reset to empty: {error}")
        self._lines = []
        self.last_storage_error = error
        try:
            with storage_slot(self.storage, self.storage_key) as slot:
                slot.clear()
        except StorageError as e:
            logger.warning(f"Could not clear cart storage: {e}")

    @property
    def storage_reset(self) -> bool:
        """True if a storage failure emptied the cart"""
        return self.last_storage_error is not None

    def acknowledge_reset(self) -> None:
        self.last_storage_error = None

    # ==================== Mutations ====================

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(f"Quantity must be a positive integer, got {quantity!r}")

    def _find(self, product_id: str, size_variant: Optional[str]) -> Optional[CartLine]:
        return next(
            (
                line for line in self._lines
                if line.product_id == product_id and line.size_variant == size_variant
            ),
            None,
        )

    def add_item(self, item: CartItem, quantity: int = 1) -> Optional[CartLine]:
        """
        Add `quantity` of an item, merging with an existing line.

        Returns a copy of the resulting line, or None if storage failed and
        the cart was reset.
        """
        self._check_quantity(quantity)

        existing = self._find(item.product_id, item.size_variant)
        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartLine(**item.model_dump(include=set(CartItem.model_fields)), quantity=quantity)
            self._lines.append(line)

        logger.debug(f"Added {quantity}x {item.product_id} ({item.size_variant}) to cart")
        if not self._persist():
            return None
        return line.model_copy()

    def update_quantity(
        self,
        product_id: str,
        size_variant: Optional[str],
        new_quantity: int,
    ) -> Optional[CartLine]:
        """Set a line's quantity; below 1 removes the line"""
        if isinstance(new_quantity, bool) or new_quantity >= 1:
            self._check_quantity(new_quantity)

        line = self._find(product_id, size_variant)
        if line is None:
            return None

        if new_quantity < 1:
            self._lines.remove(line)
            self._persist()
            return None

        line.quantity = new_quantity
        if not self._persist():
            return None
        return line.model_copy()

    def remove_item(self, product_id: str, size_variant: Optional[str]) -> bool:
        """Remove a line; returns False if it was not in the cart"""
        line = self._find(product_id, size_variant)
        if line is None:
            return False

        self._lines.remove(line)
        self._persist()
        return True

    def clear_cart(self) -> None:
        """Remove all lines"""
        self._lines = []
        self._persist()

    def remove_ordered(self, ordered: list[CartLine]) -> None:
        """Take ordered quantities out of the cart, keeping anything added since"""
        for ordered_line in ordered:
            line = self._find(ordered_line.product_id, ordered_line.size_variant)
            if line is None:
                continue
            line.quantity -= ordered_line.quantity
            if line.quantity < 1:
                self._lines.remove(line)
        self._persist()

    # ==================== Derived values ====================

    @property
    def lines(self) -> list[CartLine]:
        """Copies of the current lines in insertion order"""
        return [line.model_copy() for line in self._lines]

    def snapshot(self) -> list[CartLine]:
        """Deep copy of the lines for an order request"""
        return [line.model_copy(deep=True) for line in self._lines]

    def get_total_price(self) -> Decimal:
        """Sum of unit price x quantity over all lines"""
        return sum((line.line_total for line in self._lines), Decimal("0"))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines
