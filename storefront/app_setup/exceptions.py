"""
Gestionnaires d'exceptions utilisés par la factory.
- StorefrontError (validation panier/checkout): 400 ou 422 avec un code machine.
- HTTPException: réponse JSON FastAPI standard.
"""
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.errors import MissingCustomerField, StorefrontError

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError):
        content: Dict[str, Any] = {"detail": exc.detail, "code": exc.__class__.__name__}
        if isinstance(exc, MissingCustomerField):
            content["field"] = exc.field
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))
