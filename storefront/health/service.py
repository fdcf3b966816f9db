# module storefront.health.service
import logging
from typing import Any, Dict

import storefront.infra.supabase_client as supabase_client
from storefront.config import SUPABASE_URL, SUPABASE_ANON_KEY

logger = logging.getLogger(__name__)

def health_supabase_info() -> Dict[str, Any]:
    """
    Sonde de connectivité Supabase (lecture d'une ligne de 'categories').
    - configured: URL et clé anon présentes
    - connect_ok: la requête a abouti
    """
    info: Dict[str, Any] = {
        "configured": bool(SUPABASE_URL and SUPABASE_ANON_KEY),
        "connect_ok": False,
    }
    if not info["configured"]:
        info["error"] = "SUPABASE_URL/SUPABASE_ANON_KEY manquants"
        return info
    try:
        supabase_client.get_supabase().table("categories").select("id").limit(1).execute()
        info["connect_ok"] = True
    except Exception as e:
        logger.warning("health.supabase probe failed: %s", e)
        info["error"] = str(e)
    return info
