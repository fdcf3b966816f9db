# module storefront.errors
"""
Erreurs de validation locales du panier et du checkout.
- Levées de manière synchrone vers l'appelant, jamais avalées.
- Converties en réponses JSON par storefront.app_setup.exceptions.
- Les erreurs de persistance (Supabase/réseau) ne passent PAS par ici: elles remontent telles quelles.
"""


class StorefrontError(Exception):
    status_code = 400

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.__class__.__name__)
        self.detail = detail or self.__class__.__name__


class InvalidAmount(StorefrontError):
    """Montant négatif ou non numérique."""


class InvalidQuantity(StorefrontError):
    """Quantité < 1 à l'ajout (ou négative pour une multiplication)."""


class MissingCustomerField(StorefrontError):
    status_code = 422

    def __init__(self, field: str):
        super().__init__(f"Champ client obligatoire manquant: {field}")
        self.field = field


class EmptyCart(StorefrontError):
    def __init__(self, detail: str = "Panier vide"):
        super().__init__(detail)


class CartFull(StorefrontError):
    """Nombre maximal de lignes distinctes atteint."""
