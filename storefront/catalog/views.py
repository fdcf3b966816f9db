# module storefront.catalog.views

"""Vues JSON publiques du catalogue.
- Produits et services actifs (avec note moyenne), vendeurs actifs, catégories
- Fiche détaillée d'un produit ou d'un service
- Dépôt d'un avis client
Les échecs Supabase sont remontés en 502 (détail dans les logs).
"""
import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, HTTPException
from postgrest.exceptions import APIError
from pydantic import BaseModel, EmailStr, Field, model_validator

from storefront.catalog import repository as catalog_repository
from storefront.catalog import service as catalog_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/catalog", tags=["Catalog API"])


class ReviewRequest(BaseModel):
    product_id: Optional[str] = None
    service_id: Optional[str] = None
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    rating: int = Field(ge=1, le=5)
    comment: str = ""

    @model_validator(mode="after")
    def _one_target(self):
        if bool(self.product_id) == bool(self.service_id):
            raise ValueError("Renseigner product_id OU service_id")
        return self


def _fetch(what: str, fn: Callable[..., Any], *args, **kwargs) -> Any:
    try:
        return fn(*args, **kwargs)
    except HTTPException:
        raise
    except APIError as e:
        # identifiant mal formé (uuid): traité comme absent
        if catalog_repository.is_malformed_id(e):
            raise HTTPException(status_code=404, detail="Article introuvable")
        logger.exception("catalog.views %s failed", what)
        raise HTTPException(status_code=502, detail="Base de données indisponible")
    except Exception:
        logger.exception("catalog.views %s failed", what)
        raise HTTPException(status_code=502, detail="Base de données indisponible")


@router.get("/products")
def products(category: Optional[str] = None):
    return {"items": _fetch("products", catalog_service.list_products, category)}


@router.get("/services")
def services(category: Optional[str] = None):
    return {"items": _fetch("services", catalog_service.list_services, category)}


@router.get("/sellers")
def sellers():
    return {"items": _fetch("sellers", catalog_repository.list_sellers)}


@router.get("/categories")
def categories():
    return {"items": _fetch("categories", catalog_repository.list_categories)}


@router.get("/products/{product_id}")
def product_detail(product_id: str):
    item = _fetch("product_detail", catalog_repository.get_product, product_id)
    if not item:
        raise HTTPException(status_code=404, detail="Produit introuvable")
    return item


@router.get("/services/{service_id}")
def service_detail(service_id: str):
    item = _fetch("service_detail", catalog_repository.get_service, service_id)
    if not item:
        raise HTTPException(status_code=404, detail="Service introuvable")
    return item


@router.post("/reviews", status_code=201)
def add_review(payload: ReviewRequest):
    row = payload.model_dump(exclude_none=True)
    created = _fetch("add_review", catalog_repository.add_review, row)
    return {"ok": True, "item": created}
