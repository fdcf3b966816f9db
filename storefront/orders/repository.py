"""
Accès données pour les commandes (tables 'orders' et 'order_items').
Contrairement aux lectures catalogue, les erreurs ne sont pas converties en valeur vide:
elles sont loggées puis relancées telles quelles vers l'appelant.
"""
from typing import Any, Dict, List, Optional
import logging
import storefront.infra.supabase_client as supabase_client

logger = logging.getLogger(__name__)

ORDER_DETAIL_SELECT = (
    "*, order_items(*, product:products(id, name, image_url), service:services(id, name))"
)

# module storefront.orders.repository
def create_order(order: Dict[str, Any], items: List[Dict[str, Any]]) -> Dict[str, str]:
    """
    Crée la commande puis ses lignes, en tout-ou-rien.
    - order: ligne 'orders' (sans id)
    - items: lignes 'order_items' sans order_id (ajouté ici)
    - Si l'insertion des lignes échoue, la commande est supprimée puis l'erreur d'origine est relancée.
    Retourne {"id": "<order_id>"}.
    """
    client = supabase_client.get_supabase()
    try:
        res = client.table("orders").insert(order).execute()
    except Exception:
        logger.exception("orders.repository.create_order insert order failed")
        raise
    rows = getattr(res, "data", None) or []
    if not isinstance(rows, list) or not rows or not rows[0].get("id"):
        raise RuntimeError("Insertion de la commande sans identifiant retourné")
    order_id = str(rows[0]["id"])

    try:
        if items:
            client.table("order_items").insert([{**item, "order_id": order_id} for item in items]).execute()
    except Exception:
        logger.exception("orders.repository.create_order insert items failed order_id=%s", order_id)
        _delete_order_quietly(order_id)
        raise
    return {"id": order_id}

def _delete_order_quietly(order_id: str) -> None:
    """Compensation: l'échec est loggé mais ne masque pas l'erreur d'origine."""
    try:
        supabase_client.get_supabase().table("orders").delete().eq("id", order_id).execute()
    except Exception:
        logger.exception("orders.repository compensation delete failed order_id=%s", order_id)

def get_order(order_id: str) -> Optional[dict]:
    """
    Commande et ses lignes (noms produits/services) pour la page de confirmation.
    Retourne None si absente.
    """
    if not order_id:
        return None
    try:
        res = (
            supabase_client.get_supabase()
            .table("orders")
            .select(ORDER_DETAIL_SELECT)
            .eq("id", order_id)
            .limit(1)
            .execute()
        )
    except Exception:
        logger.exception("orders.repository.get_order failed id=%s", order_id)
        raise
    rows = res.data or []
    return rows[0] if rows else None
