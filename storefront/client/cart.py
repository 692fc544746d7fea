import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from storefront.client.storage import Storage
from storefront.schemas import CartLineItem

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "storefront-cart"
DEFAULT_ITEM_WEIGHT_KG = 0.5
MIN_CART_WEIGHT_KG = 0.5


class CartHolder:
    """The shopper's cart.

    Every mutation writes the whole line list back to ``storage``; there is
    no server-side cart. Totals are recomputed on each read.
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self.items: List[CartLineItem] = self._load()

    def _load(self) -> List[CartLineItem]:
        raw = self.storage.get_item(CART_STORAGE_KEY)
        if not raw:
            return []
        try:
            return [CartLineItem.model_validate(it) for it in json.loads(raw)]
        except (ValueError, TypeError, ValidationError):
            logger.error("Error parsing cart from storage, starting empty")
            return []

    def _save(self) -> None:
        self.storage.set_item(CART_STORAGE_KEY, json.dumps(self.to_storage()))

    def to_storage(self) -> List[dict]:
        return [it.to_storage() for it in self.items]

    def _find(self, product_id: str) -> Optional[CartLineItem]:
        return next((it for it in self.items if it.product_id == product_id), None)

    def add(self, product, quantity: int = 1) -> None:
        """Add ``quantity`` of ``product``, merging into an existing line.

        ``product`` is anything with ``id``, ``name`` and ``price``
        (optionally ``discount``, ``weight``, ``image_url``) such as a
        ``ProductRead``; price, discount and weight are snapshotted on the
        first add.
        """
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        existing = self._find(product.id)
        if existing is not None:
            existing.quantity += quantity
        else:
            self.items.append(CartLineItem(
                product_id=product.id,
                name=product.name,
                unit_price=product.price,
                quantity=quantity,
                discount_percent=getattr(product, "discount", None),
                weight_kg=getattr(product, "weight", None),
                image=getattr(product, "image_url", None),
            ))
        self._save()

    def remove(self, product_id: str) -> None:
        self.items = [it for it in self.items if it.product_id != product_id]
        self._save()

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if quantity < 1:
            return
        item = self._find(product_id)
        if item is not None:
            item.quantity = quantity
            self._save()

    def clear(self) -> None:
        self.items = []
        self._save()

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.items)

    @property
    def subtotal(self) -> float:
        return sum(it.unit_price * it.quantity for it in self.items)

    @property
    def total(self) -> float:
        return sum(it.line_price * it.quantity for it in self.items)

    def total_weight(self) -> float:
        weight = sum(
            (it.weight_kg if it.weight_kg is not None else DEFAULT_ITEM_WEIGHT_KG) * it.quantity
            for it in self.items
        )
        return max(weight, MIN_CART_WEIGHT_KG)

    def same_product_quantity(self) -> int:
        # Only a cart of one repeated product earns the shipping quantity discount
        if len(self.items) == 1:
            return self.items[0].quantity
        return 1

    def __len__(self) -> int:
        return len(self.items)
