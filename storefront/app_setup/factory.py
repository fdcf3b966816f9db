"""
Factory d'application pour les entrypoints (storefront.app, python -m storefront).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from fastapi import FastAPI
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_no_cache_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base (session/panier, CORS, hosts), sécurité, no-cache
      - gestionnaires d'exceptions
      - tous les routers (catalogue, panier, checkout, admin, health)
    """
    app = FastAPI(title="Storefront", lifespan=lifespan)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_basic_middlewares(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
