# module storefront.cart.aggregate
"""
Panier d'une session de navigation.
- Mapping ordonné id -> CartLine (ordre d'insertion conservé pour l'affichage).
- total() et item_count() sont recalculés à chaque appel depuis le mapping: aucun état dérivé stocké.
- Les méthodes de mutation sont le seul chemin d'écriture.
"""
from typing import Dict, Iterator, List, Optional

from storefront.cart.line import CartLine
from storefront.cart.money import Money
from storefront.errors import CartFull, InvalidQuantity

MAX_LINE_QUANTITY = 9999
# Le panier voyage dans le cookie de session (limite navigateur ~4 Ko)
MAX_LINES = 30


def _check_max(item_id: str, quantity: int) -> None:
    if quantity > MAX_LINE_QUANTITY:
        raise InvalidQuantity(f"Quantité maximale ({MAX_LINE_QUANTITY}) dépassée pour {item_id}")


class CartAggregate:
    def __init__(self, lines: Optional[List[CartLine]] = None):
        self._lines: Dict[str, CartLine] = {}
        for line in lines or []:
            self.add_item(line)

    def add_item(self, candidate: CartLine) -> CartLine:
        """
        Ajoute une ligne au panier.
        - id déjà présent: la quantité est cumulée (pas de doublon)
        - sinon: insertion en fin d'ordre d'itération
        - InvalidQuantity si candidate.quantity < 1 ou si la quantité dépasse MAX_LINE_QUANTITY
        - CartFull au-delà de MAX_LINES lignes distinctes
        """
        qty = candidate.quantity
        if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
            raise InvalidQuantity(f"Quantité invalide pour {candidate.id}: {qty!r}")
        existing = self._lines.get(candidate.id)
        if existing is not None:
            _check_max(candidate.id, existing.quantity + qty)
            existing.quantity += qty
            return existing
        _check_max(candidate.id, qty)
        if len(self._lines) >= MAX_LINES:
            raise CartFull(f"Panier plein: {MAX_LINES} articles distincts au maximum")
        line = candidate.copy()
        self._lines[line.id] = line
        return line

    def remove_item(self, item_id: str) -> None:
        self._lines.pop(str(item_id), None)

    def update_quantity(self, item_id: str, new_quantity: int) -> None:
        item_id = str(item_id)
        line = self._lines.get(item_id)
        if line is None:
            return
        if new_quantity <= 0:
            self.remove_item(item_id)
            return
        _check_max(item_id, new_quantity)
        line.quantity = int(new_quantity)

    def clear(self) -> None:
        self._lines.clear()

    def total(self) -> Money:
        return Money.sum(line.subtotal() for line in self._lines.values())

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def get(self, item_id: str) -> Optional[CartLine]:
        return self._lines.get(str(item_id))

    def is_empty(self) -> bool:
        return not self._lines

    def to_list(self) -> List[dict]:
        return [line.to_dict() for line in self._lines.values()]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines())

    def __contains__(self, item_id: object) -> bool:
        return str(item_id) in self._lines

    def __repr__(self) -> str:
        return f"CartAggregate(lines={len(self._lines)}, items={self.item_count()}, total={self.total().as_db()})"
