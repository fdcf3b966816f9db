# module storefront.checkout.pricing
"""
Montant à payer selon le moyen de paiement choisi (fonctions pures, sans I/O).
- Pix: remise fixe de 5% appliquée au total de la commande (jamais par ligne)
- Carte / Boleto: total inchangé
"""
from decimal import Decimal
from enum import Enum
from typing import Dict

from storefront.cart.money import Money

PIX_DISCOUNT = Decimal("0.05")


class PaymentMethod(str, Enum):
    PIX = "pix"
    CARD = "card"
    BANK_SLIP = "bank_slip"


_DISCOUNTS: Dict[PaymentMethod, Decimal] = {
    PaymentMethod.PIX: PIX_DISCOUNT,
}


def discount_rate(method: PaymentMethod) -> Decimal:
    return _DISCOUNTS.get(PaymentMethod(method), Decimal("0"))


def payable_amount(total: Money, method: PaymentMethod) -> Money:
    rate = discount_rate(method)
    if not rate:
        return total
    return total.apply_discount(rate)


def quote(total: Money, method: PaymentMethod) -> Dict[str, Money]:
    """Résumé du checkout: sous-total, remise et montant payable (remise = sous-total - payable)."""
    payable = payable_amount(total, method)
    discount = Money(total.amount - payable.amount)
    return {"subtotal": total, "discount": discount, "payable": payable}
