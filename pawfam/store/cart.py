"""In-memory cart store"""

import threading
import time
from typing import Callable, Optional

from ..models.cart import CartLine, CartNotice, Product


class CartStore:
    """
    Shopping cart for a single storefront session.

    Lines are keyed by product id and kept in insertion order. A line never
    holds a quantity below one; dropping to zero removes it. Adding a product
    raises a short-lived notice that the front end shows as a toast.
    """

    def __init__(
        self,
        notice_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._lines: dict[str, CartLine] = {}
        self._notice: Optional[CartNotice] = None
        self._notice_seconds = notice_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def add_item(self, product: Product) -> CartLine:
        """Add one unit of a product to the cart"""
        with self._lock:
            existing = self._lines.get(product.id)
            if existing:
                existing.quantity += 1
                line = existing
            else:
                line = CartLine(
                    product_id=product.id,
                    name=product.name,
                    unit_price=product.price,
                    quantity=1,
                    image=product.image,
                )
                self._lines[product.id] = line

            # Replaces any visible notice and restarts its expiry
            self._notice = CartNotice(
                message=f"{product.name} added to cart",
                expires_at=self._clock() + self._notice_seconds,
            )
            return line.model_copy()

    def remove_item(self, product_id: str) -> None:
        """Remove a line; unknown ids are ignored"""
        with self._lock:
            self._lines.pop(product_id, None)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line quantity, removing the line when quantity <= 0"""
        with self._lock:
            if quantity <= 0:
                self._lines.pop(product_id, None)
                return
            line = self._lines.get(product_id)
            if line:
                line.quantity = quantity

    def clear(self) -> None:
        """Empty the cart"""
        with self._lock:
            self._lines.clear()

    def lines(self) -> list[CartLine]:
        """Snapshot of the cart lines"""
        with self._lock:
            return [line.model_copy() for line in self._lines.values()]

    def total(self) -> float:
        with self._lock:
            return sum(line.unit_price * line.quantity for line in self._lines.values())

    def item_count(self) -> int:
        with self._lock:
            return sum(line.quantity for line in self._lines.values())

    @property
    def notice(self) -> Optional[str]:
        """Message of the current notice, or None once it expired"""
        with self._lock:
            if self._notice and self._clock() >= self._notice.expires_at:
                self._notice = None
            return self._notice.message if self._notice else None

    def dismiss_notice(self) -> None:
        with self._lock:
            self._notice = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)
