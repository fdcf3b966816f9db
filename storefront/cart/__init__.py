"""
Module 'cart' (feature-first): point d'entrée public.
Réunit montants, lignes et agrégat du panier (logique pure, sans DB).
"""

from .money import Money
from .line import CartLine, ItemKind
from .aggregate import CartAggregate

__all__ = [
    "Money",
    "CartLine",
    "ItemKind",
    "CartAggregate",
]
