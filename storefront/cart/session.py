# module storefront.cart.session
"""
Le panier appartient à la session de navigation (cookie de session signé, SessionMiddleware).
- Le cookie ne porte que {id, kind, quantity} par ligne sous CART_SESSION_KEY
- load_cart reconstruit prix, nom, image et vendeur depuis le catalogue à chaque requête:
  pas de panier global, et le cookie reste petit
"""
import logging
from typing import Any, Dict, List, Tuple

from fastapi import HTTPException, Request

from storefront.cart.aggregate import MAX_LINE_QUANTITY, MAX_LINES, CartAggregate
from storefront.cart.line import CartLine, ItemKind
from storefront.catalog import service as catalog_service
from storefront.config import CART_SESSION_KEY

logger = logging.getLogger(__name__)


def _entries_from_session(raw: Any) -> List[Tuple[str, ItemKind, int]]:
    entries: List[Tuple[str, ItemKind, int]] = []
    seen = set()
    for entry in raw if isinstance(raw, list) else []:
        try:
            item_id, kind, quantity = str(entry["id"]), ItemKind(entry["kind"]), int(entry["quantity"])
        except (KeyError, TypeError, ValueError):
            logger.warning("cart.session: ligne corrompue ignorée %r", entry)
            continue
        if not 1 <= quantity <= MAX_LINE_QUANTITY or item_id in seen:
            continue
        seen.add(item_id)
        entries.append((item_id, kind, quantity))
    return entries[:MAX_LINES]


def _session_entry(line: CartLine) -> Dict[str, Any]:
    return {"id": line.id, "kind": line.kind.value, "quantity": line.quantity}


def load_cart(request: Request) -> CartAggregate:
    """Panier de la session courante (utilisable comme dépendance FastAPI)."""
    entries = _entries_from_session(request.session.get(CART_SESSION_KEY))
    if not entries:
        return CartAggregate()
    try:
        lines = catalog_service.cart_lines_for(entries)
    except Exception:
        logger.exception("cart.session: reconstruction du panier impossible")
        raise HTTPException(status_code=502, detail="Catalogue indisponible")
    return CartAggregate(lines)


def save_cart(request: Request, cart: CartAggregate) -> None:
    if cart.is_empty():
        request.session.pop(CART_SESSION_KEY, None)
        return
    request.session[CART_SESSION_KEY] = [_session_entry(line) for line in cart.lines()]
