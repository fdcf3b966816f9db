# module storefront.catalog.service
"""
Cas d'usage catalogue: enrichissement des listes (notes moyennes) et
construction des lignes de panier à partir des fiches du catalogue.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fastapi import HTTPException
from postgrest.exceptions import APIError

from storefront.cart.line import CartLine, ItemKind
from storefront.cart.money import Money
from storefront.catalog import repository

logger = logging.getLogger(__name__)

PRICE_FIELDS = {
    ItemKind.PRODUCT: "price",
    ItemKind.SERVICE: "price_from",
}


def with_ratings(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Ajoute avg_rating et review_count calculés depuis reviews(rating) embarqués.
    - Sans avis: avg_rating = 0, review_count = 0
    """
    enriched: List[Dict[str, Any]] = []
    for record in records or []:
        ratings = [r.get("rating") for r in (record.get("reviews") or []) if isinstance(r.get("rating"), (int, float))]
        enriched.append({
            **record,
            "avg_rating": round(sum(ratings) / len(ratings), 2) if ratings else 0,
            "review_count": len(ratings),
        })
    return enriched


def list_products(category: Optional[str] = None) -> List[Dict[str, Any]]:
    return with_ratings(repository.list_products(category=category, active_only=True))


def list_services(category: Optional[str] = None) -> List[Dict[str, Any]]:
    return with_ratings(repository.list_services(category=category, active_only=True))


def get_item(kind: ItemKind, item_id: str) -> Optional[Dict[str, Any]]:
    if ItemKind(kind) == ItemKind.PRODUCT:
        return repository.get_product(item_id)
    return repository.get_service(item_id)


def _line_from_record(kind: ItemKind, record: Optional[Dict[str, Any]], quantity: int) -> Optional[CartLine]:
    """None si la fiche est absente, inactive ou sans prix (jamais vendue à 0 par défaut)."""
    if not record or record.get("is_active") is False:
        return None
    price = record.get(PRICE_FIELDS[kind])
    if price is None or price == "":
        return None
    seller = record.get("seller") or {}
    return CartLine(
        id=str(record["id"]),
        kind=kind,
        unit_price=Money(price),
        quantity=quantity,
        display_name=record.get("name") or "",
        image_ref=record.get("image_url") or "",
        seller_name=seller.get("name") or "",
    )


def cart_line_for(kind: ItemKind, item_id: str, quantity: int = 1) -> CartLine:
    """
    Construit une CartLine depuis la fiche catalogue (prix, nom, image, vendeur).
    Le prix ne vient jamais du client.
    - 404 si l'article est absent, inactif, sans prix ou si l'id est mal formé
    """
    kind = ItemKind(kind)
    try:
        record = get_item(kind, item_id)
    except APIError as e:
        if repository.is_malformed_id(e):
            raise HTTPException(status_code=404, detail="Article introuvable")
        raise
    line = _line_from_record(kind, {**record, "id": record.get("id") or item_id} if record else None, quantity)
    if line is None:
        raise HTTPException(status_code=404, detail="Article introuvable")
    return line


def cart_lines_for(entries: Iterable[Tuple[str, ItemKind, int]]) -> List[CartLine]:
    """
    Reconstruit les lignes du panier de session (id, type, quantité) depuis le catalogue,
    en une requête par type. Les articles devenus indisponibles sont retirés.
    """
    entries = list(entries)
    ids = {kind: [item_id for item_id, k, _ in entries if k == kind] for kind in ItemKind}
    records = {
        ItemKind.PRODUCT: repository.get_products_by_ids(ids[ItemKind.PRODUCT]),
        ItemKind.SERVICE: repository.get_services_by_ids(ids[ItemKind.SERVICE]),
    }
    by_key = {(kind, str(r.get("id"))): r for kind, rows in records.items() for r in rows}

    lines: List[CartLine] = []
    for item_id, kind, quantity in entries:
        line = _line_from_record(kind, by_key.get((kind, item_id)), quantity)
        if line is None:
            logger.info("catalog.service article retiré du panier (indisponible) %s:%s", kind.value, item_id)
            continue
        lines.append(line)
    return lines
