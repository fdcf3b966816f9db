from typing import Any, Dict, List, Optional, Tuple
from storefront.infra.supabase_client import get_service_supabase
import logging

logger = logging.getLogger(__name__)

ADMIN_SELECT = "*, category:categories(id, name), seller:sellers(id, name)"

# module storefront.admin.repository
def count_table_rows(table_name: str, filters: Optional[List[Tuple[str, str, Any]]] = None) -> int:
    """
    Compte les lignes d'une table via Supabase.
    - filters: [(operateur, colonne, valeur)], ex: [("eq", "is_active", True), ("gte", "created_at", "2024-01-01")]
    Utilise count='exact' si disponible, sinon fallback sur len(data).
    """
    try:
        query = get_service_supabase().table(table_name).select("id", count="exact")
        for op, column, value in filters or []:
            query = getattr(query, op)(column, value)
        res = query.execute()
        if getattr(res, "count", None) is not None:
            return int(res.count)
        return len(res.data or [])
    except Exception:
        logger.exception("admin.repository.count_table_rows failed table=%s", table_name)
        return 0

def _list_all(table: str, limit: int) -> List[dict]:
    try:
        res = (
            get_service_supabase()
            .table(table)
            .select(ADMIN_SELECT)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return res.data or []
    except Exception:
        logger.exception("admin.repository.list %s failed", table)
        raise

def list_products(limit: int = 200) -> List[dict]:
    """Tous les produits, actifs ou non."""
    return _list_all("products", limit)

def list_services(limit: int = 200) -> List[dict]:
    return _list_all("services", limit)

def _upsert(table: str, data: Dict[str, Any], item_id: Optional[str]) -> Optional[dict]:
    """
    Insert si item_id est None, sinon update de la ligne.
    Retourne la ligne écrite, {"status": "ok"} si la réponse ne contient pas la ligne,
    None si aucune ligne n'a été mise à jour.
    """
    try:
        table_ref = get_service_supabase().table(table)
        if item_id is None:
            res = table_ref.insert(data).execute()
        else:
            res = table_ref.update(data).eq("id", item_id).execute()
    except Exception:
        logger.exception("admin.repository.upsert %s failed id=%s data=%s", table, item_id, data)
        raise
    rows = getattr(res, "data", None)
    if isinstance(rows, list) and rows:
        return rows[0]
    if isinstance(rows, dict) and rows:
        return rows
    # update sans ligne correspondante
    if item_id is not None and isinstance(rows, list):
        return None
    return {"status": "ok"}

def upsert_product(data: Dict[str, Any], product_id: Optional[str] = None) -> Optional[dict]:
    return _upsert("products", data, product_id)

def upsert_service(data: Dict[str, Any], service_id: Optional[str] = None) -> Optional[dict]:
    return _upsert("services", data, service_id)

def _delete(table: str, item_id: str) -> None:
    try:
        get_service_supabase().table(table).delete().eq("id", item_id).execute()
    except Exception:
        logger.exception("admin.repository.delete %s failed id=%s", table, item_id)
        raise

def delete_product(product_id: str) -> None:
    _delete("products", product_id)

def delete_service(service_id: str) -> None:
    _delete("services", service_id)
