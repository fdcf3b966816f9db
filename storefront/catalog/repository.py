"""
Lectures catalogue (produits, services, vendeurs, catégories) et avis clients.
Les erreurs Supabase sont loggées puis relancées: la vue décide de la réponse (502).
"""
from typing import Any, Dict, List, Optional
import logging
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "Todos"
CATALOG_SELECT = "*, category:categories(*), seller:sellers(*), reviews(rating)"
# !inner: le filtre sur la catégorie embarquée exclut les lignes non correspondantes
CATALOG_SELECT_BY_CATEGORY = "*, category:categories!inner(*), seller:sellers(*), reviews(rating)"
DETAIL_SELECT = "*, category:categories(*), seller:sellers(*)"
# PostgREST: identifiant mal formé (ex: uuid invalide)
INVALID_TEXT_REPRESENTATION = "22P02"


def is_malformed_id(error: Exception) -> bool:
    return getattr(error, "code", None) == INVALID_TEXT_REPRESENTATION


# module storefront.catalog.repository
def _list_items(table: str, category: Optional[str], active_only: bool) -> List[dict]:
    filtered = bool(category) and category != ALL_CATEGORIES
    try:
        query = (
            supabase_client.get_supabase()
            .table(table)
            .select(CATALOG_SELECT_BY_CATEGORY if filtered else CATALOG_SELECT)
        )
        if active_only:
            query = query.eq("is_active", True)
        if filtered:
            query = query.eq("category.name", category)
        res = query.order("created_at", desc=True).execute()
        return res.data or []
    except Exception:
        logger.exception("catalog.repository.%s failed category=%s", table, category)
        raise

def list_products(category: Optional[str] = None, active_only: bool = True) -> List[dict]:
    return _list_items("products", category, active_only)

def list_services(category: Optional[str] = None, active_only: bool = True) -> List[dict]:
    return _list_items("services", category, active_only)

def list_sellers(active_only: bool = True) -> List[dict]:
    """Vendeurs, membres de la famille en premier."""
    try:
        query = supabase_client.get_supabase().table("sellers").select("*")
        if active_only:
            query = query.eq("is_active", True)
        res = query.order("is_family_member", desc=True).execute()
        return res.data or []
    except Exception:
        logger.exception("catalog.repository.list_sellers failed")
        raise

def list_categories() -> List[dict]:
    try:
        res = supabase_client.get_supabase().table("categories").select("*").order("name").execute()
        return res.data or []
    except Exception:
        logger.exception("catalog.repository.list_categories failed")
        raise

def _get_item(table: str, item_id: str) -> Optional[dict]:
    if not item_id:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table(table)
            .select(DETAIL_SELECT)
            .eq("id", item_id)
            .limit(1)
            .execute()
        )
    except Exception:
        logger.exception("catalog.repository.get %s failed id=%s", table, item_id)
        raise
    rows = res.data or []
    return rows[0] if rows else None

def get_product(product_id: str) -> Optional[dict]:
    return _get_item("products", product_id)

def get_service(service_id: str) -> Optional[dict]:
    return _get_item("services", service_id)

def _get_items(table: str, item_ids: List[str]) -> List[dict]:
    """Plusieurs fiches en une requête (reconstruction du panier de session)."""
    if not item_ids:
        return []
    try:
        res = (
            supabase_client.get_supabase()
            .table(table)
            .select(DETAIL_SELECT)
            .in_("id", item_ids)
            .execute()
        )
    except Exception:
        logger.exception("catalog.repository.get %s failed ids=%s", table, item_ids)
        raise
    return res.data or []

def get_products_by_ids(product_ids: List[str]) -> List[dict]:
    return _get_items("products", product_ids)

def get_services_by_ids(service_ids: List[str]) -> List[dict]:
    return _get_items("services", service_ids)

def add_review(review: Dict[str, Any]) -> Optional[dict]:
    """Insère un avis (product_id XOR service_id) et retourne la ligne créée."""
    try:
        res = supabase_client.get_supabase().table("reviews").insert(review).execute()
    except Exception:
        logger.exception("catalog.repository.add_review failed")
        raise
    rows = getattr(res, "data", None) or []
    if isinstance(rows, list) and rows:
        return rows[0]
    return {"status": "ok"}
