import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from storefront.cart.aggregate import MAX_LINE_QUANTITY, CartAggregate
from storefront.cart.line import ItemKind
from storefront.cart.session import load_cart, save_cart
from storefront.catalog import service as catalog_service
from storefront.config import CURRENCY_LOCALE

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cart", tags=["Cart API"])


class AddItemRequest(BaseModel):
    id: str = Field(min_length=1)
    kind: ItemKind = ItemKind.PRODUCT
    quantity: int = Field(default=1, le=MAX_LINE_QUANTITY)


class UpdateQuantityRequest(BaseModel):
    quantity: int = Field(le=MAX_LINE_QUANTITY)


def cart_payload(cart: CartAggregate) -> Dict[str, Any]:
    """Surface de lecture du panier pour la couche de présentation."""
    total = cart.total()
    return {
        "items": [
            {
                **line.to_dict(),
                "unit_price": line.unit_price.as_float(),
                "subtotal": line.subtotal().as_float(),
            }
            for line in cart.lines()
        ],
        "item_count": cart.item_count(),
        "total": total.as_float(),
        "total_display": total.format(CURRENCY_LOCALE),
    }


# module storefront.cart.views
@router.get("")
def get_cart(cart: CartAggregate = Depends(load_cart)):
    return cart_payload(cart)


@router.post("/items")
def add_cart_item(payload: AddItemRequest, request: Request, cart: CartAggregate = Depends(load_cart)):
    """
    Ajoute un article au panier de la session.
    - Entrée JSON: { "id": "<uuid>", "kind": "product"|"service", "quantity": <int> }
    - Prix, nom, image et vendeur sont lus dans le catalogue
    - Même id déjà présent: quantités cumulées
    - Erreurs: 400 quantité invalide ou panier plein, 404 article introuvable (ou id mal formé),
      422 quantité > MAX_LINE_QUANTITY, 502 base indisponible
    """
    try:
        line = catalog_service.cart_line_for(payload.kind, payload.id, payload.quantity)
    except HTTPException:
        raise
    except Exception:
        logger.exception("cart.views.add_cart_item catalog lookup failed id=%s", payload.id)
        raise HTTPException(status_code=502, detail="Catalogue indisponible")
    cart.add_item(line)
    save_cart(request, cart)
    return cart_payload(cart)


@router.patch("/items/{item_id}")
def update_cart_item(item_id: str, payload: UpdateQuantityRequest, request: Request, cart: CartAggregate = Depends(load_cart)):
    """Remplace la quantité; quantity <= 0 retire la ligne; id inconnu: sans effet."""
    cart.update_quantity(item_id, payload.quantity)
    save_cart(request, cart)
    return cart_payload(cart)


@router.delete("/items/{item_id}")
def remove_cart_item(item_id: str, request: Request, cart: CartAggregate = Depends(load_cart)):
    cart.remove_item(item_id)
    save_cart(request, cart)
    return cart_payload(cart)


@router.delete("")
def clear_cart(request: Request, cart: CartAggregate = Depends(load_cart)):
    cart.clear()
    save_cart(request, cart)
    return cart_payload(cart)
