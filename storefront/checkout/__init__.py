"""
Module 'checkout' (feature-first): point d'entrée public.
Réunit la tarification par moyen de paiement et l'assemblage des commandes.
"""

from .pricing import PaymentMethod, PIX_DISCOUNT, payable_amount, quote
from .assembly import (
    CustomerInfo,
    OrderItemRequest,
    OrderRequest,
    build_order_request,
)

__all__ = [
    # pricing
    "PaymentMethod",
    "PIX_DISCOUNT",
    "payable_amount",
    "quote",
    # assembly
    "CustomerInfo",
    "OrderItemRequest",
    "OrderRequest",
    "build_order_request",
]
