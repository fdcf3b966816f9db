# module storefront.cart.line
from enum import Enum
from typing import Any, Dict, Optional

from storefront.cart.money import Money


class ItemKind(str, Enum):
    PRODUCT = "product"
    SERVICE = "service"


class CartLine:
    """
    Une ligne du panier: un article du catalogue (produit ou service) et sa quantité.
    - id: identifiant catalogue, unique dans un panier
    - unit_price: Money (>= 0)
    - quantity: entier; la validation (>= 1) est faite par CartAggregate.add_item
    """

    def __init__(
        self,
        id: str,
        kind: ItemKind,
        unit_price: Money,
        quantity: int = 1,
        display_name: str = "",
        image_ref: str = "",
        seller_name: str = "",
    ):
        self.id = str(id)
        self.kind = ItemKind(kind)
        self.unit_price = unit_price if isinstance(unit_price, Money) else Money(unit_price)
        self.quantity = quantity
        self.display_name = display_name or ""
        self.image_ref = image_ref or ""
        self.seller_name = seller_name or ""

    def subtotal(self) -> Money:
        return self.unit_price.multiply(self.quantity)

    def copy(self, quantity: Optional[int] = None) -> "CartLine":
        return CartLine(
            id=self.id,
            kind=self.kind,
            unit_price=self.unit_price,
            quantity=self.quantity if quantity is None else quantity,
            display_name=self.display_name,
            image_ref=self.image_ref,
            seller_name=self.seller_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Forme JSON de la ligne: le prix est une chaîne '50.00'."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "unit_price": self.unit_price.as_db(),
            "quantity": self.quantity,
            "display_name": self.display_name,
            "image_ref": self.image_ref,
            "seller_name": self.seller_name,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CartLine):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"CartLine({self.kind.value}:{self.id} x{self.quantity} @ {self.unit_price.as_db()})"
