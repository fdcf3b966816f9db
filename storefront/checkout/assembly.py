# module storefront.checkout.assembly
"""
Transforme un panier + coordonnées client en requête de commande prête pour la persistance.
Ne persiste rien: l'écriture est faite par storefront.orders.repository.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.cart.aggregate import CartAggregate
from storefront.cart.line import ItemKind
from storefront.cart.money import Money
from storefront.checkout.pricing import PaymentMethod, payable_amount
from storefront.errors import EmptyCart, MissingCustomerField

ORDER_STATUS_PENDING = "pending"
REQUIRED_CUSTOMER_FIELDS = ("name", "email", "phone")


class CustomerInfo(BaseModel):
    # Pas de min_length ici: la validation (et l'erreur nommée) est faite par build_order_request
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None


class OrderItemRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    product_id: Optional[str] = None
    service_id: Optional[str] = None
    quantity: int = Field(ge=1)
    unit_price: Money
    total_price: Money

    @model_validator(mode="after")
    def _one_target(self):
        if bool(self.product_id) == bool(self.service_id):
            raise ValueError("Une ligne de commande porte product_id OU service_id")
        return self

    def row(self, order_id: Optional[str] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "quantity": self.quantity,
            "unit_price": self.unit_price.as_db(),
            "total_price": self.total_price.as_db(),
        }
        # product_id XOR service_id: la colonne inutilisée n'est pas envoyée
        if self.product_id is not None:
            data["product_id"] = self.product_id
        else:
            data["service_id"] = self.service_id
        if order_id is not None:
            data["order_id"] = order_id
        return data


class OrderRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    customer_name: str
    customer_email: str
    customer_phone: str
    total_amount: Money
    status: str = ORDER_STATUS_PENDING
    payment_method: PaymentMethod
    items: List[OrderItemRequest]

    def order_row(self) -> Dict[str, Any]:
        """Ligne de la table 'orders' (le moyen de paiement n'est pas une colonne)."""
        return {
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "total_amount": self.total_amount.as_db(),
            "status": self.status,
        }

    def item_rows(self, order_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return [item.row(order_id) for item in self.items]

    def items_total(self) -> Money:
        return Money.sum(item.total_price for item in self.items)


def _require_customer_fields(customer: CustomerInfo) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for field in REQUIRED_CUSTOMER_FIELDS:
        value = (getattr(customer, field, None) or "").strip()
        if not value:
            raise MissingCustomerField(field)
        values[field] = value
    return values


def build_order_request(cart: CartAggregate, customer: CustomerInfo, method: PaymentMethod) -> OrderRequest:
    """
    Construit l'OrderRequest:
      1) name/email/phone non vides (dans cet ordre) -> MissingCustomerField(<champ>)
      2) panier vide -> EmptyCart
      3) une OrderItemRequest par ligne (product_id XOR service_id selon le type)
      4) total_amount = payable_amount(cart.total(), method)
      5) status = 'pending'
    """
    fields = _require_customer_fields(customer)
    if cart.is_empty():
        raise EmptyCart()

    items: List[OrderItemRequest] = []
    for line in cart.lines():
        is_product = line.kind == ItemKind.PRODUCT
        items.append(OrderItemRequest(
            product_id=line.id if is_product else None,
            service_id=None if is_product else line.id,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total_price=line.subtotal(),
        ))

    return OrderRequest(
        customer_name=fields["name"],
        customer_email=fields["email"],
        customer_phone=fields["phone"],
        total_amount=payable_amount(cart.total(), method),
        status=ORDER_STATUS_PENDING,
        payment_method=PaymentMethod(method),
        items=items,
    )
