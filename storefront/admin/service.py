# module storefront.admin.service
"""
Cas d'usage du panneau admin (produits, services, statistiques).
- Valide les formulaires avant toute écriture (HTTPException 400).
- Chaque mutation retourne les collections devenues obsolètes (stale):
  l'appelant décide s'il recharge, au lieu de tout recharger après chaque édition.
"""
from datetime import date
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from fastapi import HTTPException

from storefront.admin import repository as admin_repository
from storefront.cart.money import Money
from storefront.config import ADMIN_LIST_LIMIT
from storefront.errors import InvalidAmount

SERVICE_PRICE_TYPES = ("fixed", "from", "hourly")


class AdminMutation(NamedTuple):
    item: Optional[dict]
    stale: Tuple[str, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {"ok": True, "item": self.item, "stale": list(self.stale)}


def _text(data: Dict[str, Any], key: str) -> str:
    return str(data.get(key) or "").strip()


def _require(data: Dict[str, Any], *keys: str) -> None:
    missing = [k for k in keys if not _text(data, k)]
    if missing:
        raise HTTPException(status_code=400, detail=f"Champs obligatoires manquants: {', '.join(missing)}")


def _price(raw: Any, field: str) -> str:
    try:
        return Money(raw).as_db()
    except InvalidAmount:
        raise HTTPException(status_code=400, detail=f"{field} invalide")


def _common_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": _text(data, "name"),
        "description": _text(data, "description"),
        "category_id": _text(data, "category_id"),
        "seller_id": _text(data, "seller_id"),
        "is_featured": bool(data.get("is_featured", False)),
        "is_active": bool(data.get("is_active", True)),
    }


def clean_product(data: Dict[str, Any]) -> Dict[str, Any]:
    """Nom, prix, catégorie et vendeur obligatoires; stock entier >= 0."""
    _require(data, "name", "price", "category_id", "seller_id")
    try:
        stock = int(str(data.get("stock_quantity") if data.get("stock_quantity") not in (None, "") else 0))
    except ValueError:
        raise HTTPException(status_code=400, detail="Stock invalide")
    if stock < 0:
        raise HTTPException(status_code=400, detail="Stock invalide")
    return {
        **_common_fields(data),
        "price": _price(data.get("price"), "Prix"),
        "image_url": _text(data, "image_url"),
        "stock_quantity": stock,
    }


def clean_service(data: Dict[str, Any]) -> Dict[str, Any]:
    _require(data, "name", "price_from", "category_id", "seller_id")
    price_type = _text(data, "price_type") or "from"
    if price_type not in SERVICE_PRICE_TYPES:
        raise HTTPException(status_code=400, detail="Type de prix invalide")
    return {
        **_common_fields(data),
        "price_from": _price(data.get("price_from"), "Prix"),
        "price_type": price_type,
    }


def stats() -> Dict[str, int]:
    today = date.today().isoformat()
    return {
        "total_products": admin_repository.count_table_rows("products"),
        "total_services": admin_repository.count_table_rows("services"),
        "total_sellers": admin_repository.count_table_rows("sellers", [("eq", "is_active", True)]),
        "total_orders": admin_repository.count_table_rows("orders"),
        "today_orders": admin_repository.count_table_rows("orders", [("gte", "created_at", today)]),
    }


def list_products() -> List[dict]:
    return admin_repository.list_products(limit=ADMIN_LIST_LIMIT)


def list_services() -> List[dict]:
    return admin_repository.list_services(limit=ADMIN_LIST_LIMIT)


def save_product(data: Dict[str, Any], product_id: Optional[str] = None) -> AdminMutation:
    item = admin_repository.upsert_product(clean_product(data), product_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    return AdminMutation(item=item, stale=("products", "stats"))


def save_service(data: Dict[str, Any], service_id: Optional[str] = None) -> AdminMutation:
    item = admin_repository.upsert_service(clean_service(data), service_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Service introuvable")
    return AdminMutation(item=item, stale=("services", "stats"))


def delete_product(product_id: str) -> AdminMutation:
    admin_repository.delete_product(product_id)
    return AdminMutation(item=None, stale=("products", "stats"))


def delete_service(service_id: str) -> AdminMutation:
    admin_repository.delete_service(service_id)
    return AdminMutation(item=None, stale=("services", "stats"))
