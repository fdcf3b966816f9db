import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storefront.cart.aggregate import CartAggregate
from storefront.cart.session import load_cart, save_cart
from storefront.checkout import pricing
from storefront.checkout.assembly import CustomerInfo
from storefront.checkout.pricing import PaymentMethod
from storefront.checkout.service import submit_order
from storefront.config import CURRENCY_LOCALE
from storefront.errors import StorefrontError
from storefront.orders import repository as orders_repository
from storefront.utils.rate_limit import optional_rate_limit

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["Checkout API"])


class CheckoutRequest(BaseModel):
    customer: CustomerInfo
    payment_method: PaymentMethod = PaymentMethod.PIX


# module storefront.checkout.views
@router.get("/checkout/quote")
def checkout_quote(payment_method: PaymentMethod = PaymentMethod.PIX, cart: CartAggregate = Depends(load_cart)):
    """
    Résumé du checkout pour le moyen de paiement choisi.
    - La remise Pix est calculée sur le total de la commande, pas par ligne.
    """
    q = pricing.quote(cart.total(), payment_method)
    return {
        "payment_method": payment_method.value,
        "item_count": cart.item_count(),
        **{k: v.as_float() for k, v in q.items()},
        "display": {k: v.format(CURRENCY_LOCALE) for k, v in q.items()},
    }


@router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def checkout(payload: CheckoutRequest, request: Request, cart: CartAggregate = Depends(load_cart)):
    """
    Crée la commande à partir du panier de la session.
    - Entrée JSON: { "customer": {name, email, phone, ...}, "payment_method": "pix"|"card"|"bank_slip" }
    - Succès: 201 {order_id, total_amount, status}; le panier de session est vidé
    - Erreurs: 422 champ client manquant, 400 panier vide, 502 échec base (panier conservé)
    """
    try:
        result = submit_order(cart, payload.customer, payload.payment_method)
    except StorefrontError:
        raise
    except Exception:
        logger.exception("checkout.views.checkout persistence failed")
        raise HTTPException(status_code=502, detail="Erreur lors de l'enregistrement de la commande. Réessayez.")
    save_cart(request, cart)
    return JSONResponse(
        status_code=201,
        content={
            "order_id": result["order_id"],
            "total_amount": result["total_amount"].as_float(),
            "total_display": result["total_amount"].format(CURRENCY_LOCALE),
            "status": result["status"],
        },
    )


@router.get("/orders/{order_id}")
def order_confirmation(order_id: str):
    try:
        order: Optional[dict] = orders_repository.get_order(order_id)
    except Exception:
        raise HTTPException(status_code=502, detail="Base de données indisponible")
    if not order:
        raise HTTPException(status_code=404, detail="Commande introuvable")
    return order
