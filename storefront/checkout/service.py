"""
Cas d'usage 'checkout': orchestre assembly, pricing et le repository des commandes.
"""
import logging
from typing import Any, Dict

from storefront.cart.aggregate import CartAggregate
from storefront.checkout.assembly import CustomerInfo, build_order_request
from storefront.checkout.pricing import PaymentMethod
from storefront.orders import repository as orders_repository

logger = logging.getLogger(__name__)

# module storefront.checkout.service
def submit_order(cart: CartAggregate, customer: CustomerInfo, method: PaymentMethod) -> Dict[str, Any]:
    """
    Construit puis persiste la commande.
    - Erreurs de validation (MissingCustomerField, EmptyCart): levées avant tout appel base
    - Erreur de persistance: relancée telle quelle, le panier n'est PAS vidé
    - Succès: le panier est vidé (une seule fois), retourne {order_id, total_amount, status}
    """
    order = build_order_request(cart, customer, method)
    created = orders_repository.create_order(order.order_row(), order.item_rows())
    cart.clear()
    logger.info(
        "checkout.submit_order created order_id=%s items=%s total=%s method=%s",
        created["id"], len(order.items), order.total_amount.as_db(), order.payment_method.value,
    )
    return {
        "order_id": created["id"],
        "total_amount": order.total_amount,
        "status": order.status,
    }
