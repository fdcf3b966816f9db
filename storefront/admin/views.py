import logging
from typing import Any, Callable, Dict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.admin import service as admin_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/api", tags=["Admin"])

# module storefront.admin.views
async def _json_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except Exception:
        raise HTTPException(status_code=400, detail="JSON invalide")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Objet JSON attendu")
    return body

def _run(action: str, fn: Callable[..., Any], *args) -> Any:
    try:
        return fn(*args)
    except HTTPException:
        raise
    except Exception:
        logger.exception("admin.views %s failed", action)
        raise HTTPException(status_code=502, detail="Base de données indisponible")

# API JSON: stats dashboard
@router.get("/stats")
def admin_stats():
    return JSONResponse(admin_service.stats())

# Produits
@router.get("/products")
def admin_list_products():
    return JSONResponse({"items": _run("list_products", admin_service.list_products)})

@router.post("/products", status_code=201)
async def admin_create_product(request: Request):
    body = await _json_body(request)
    mutation = _run("create_product", admin_service.save_product, body)
    return JSONResponse(mutation.as_dict(), status_code=201)

@router.put("/products/{product_id}")
async def admin_update_product(product_id: str, request: Request):
    body = await _json_body(request)
    mutation = _run("update_product", admin_service.save_product, body, product_id)
    return JSONResponse(mutation.as_dict())

@router.delete("/products/{product_id}")
def admin_delete_product(product_id: str):
    return JSONResponse(_run("delete_product", admin_service.delete_product, product_id).as_dict())

# Services
@router.get("/services")
def admin_list_services():
    return JSONResponse({"items": _run("list_services", admin_service.list_services)})

@router.post("/services", status_code=201)
async def admin_create_service(request: Request):
    body = await _json_body(request)
    mutation = _run("create_service", admin_service.save_service, body)
    return JSONResponse(mutation.as_dict(), status_code=201)

@router.put("/services/{service_id}")
async def admin_update_service(service_id: str, request: Request):
    body = await _json_body(request)
    mutation = _run("update_service", admin_service.save_service, body, service_id)
    return JSONResponse(mutation.as_dict())

@router.delete("/services/{service_id}")
def admin_delete_service(service_id: str):
    return JSONResponse(_run("delete_service", admin_service.delete_service, service_id).as_dict())
