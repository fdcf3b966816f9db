# module storefront.cart.money
"""
Montants monétaires en virgule fixe (Decimal, unité mineure 0.01).
- Jamais négatif: InvalidAmount à la construction.
- Arrondi bancaire (ROUND_HALF_EVEN) sur l'unité mineure.
- Les floats passent par str() pour ne pas importer la dérive binaire.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Any, Iterable, Union

from storefront.errors import InvalidAmount, InvalidQuantity

MINOR_UNIT = Decimal("0.01")
DEFAULT_LOCALE = "pt-BR"

# locale -> (symbole, séparateur milliers, séparateur décimal, espace après symbole)
_LOCALES = {
    "pt-BR": ("R$", ".", ",", True),
    "en-US": ("$", ",", ".", False),
}

Numeric = Union["Money", Decimal, int, float, str]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, bool):
        raise InvalidAmount(f"Montant invalide: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        dec = Decimal(str(value).strip()) if isinstance(value, str) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(f"Montant invalide: {value!r}")
    if not dec.is_finite():
        raise InvalidAmount(f"Montant invalide: {value!r}")
    return dec


class Money:
    __slots__ = ("_amount",)

    def __init__(self, value: Numeric = 0):
        dec = _to_decimal(value)
        if dec < 0:
            raise InvalidAmount(f"Montant négatif interdit: {value!r}")
        try:
            self._amount = dec.quantize(MINOR_UNIT, rounding=ROUND_HALF_EVEN)
        except InvalidOperation:
            # plus de 28 chiffres significatifs après quantize
            raise InvalidAmount(f"Montant hors limites: {value!r}")

    @classmethod
    def zero(cls) -> "Money":
        return cls(0)

    @classmethod
    def sum(cls, amounts: Iterable["Money"]) -> "Money":
        total = cls.zero()
        for a in amounts:
            total = total.add(a)
        return total

    @property
    def amount(self) -> Decimal:
        return self._amount

    def add(self, other: "Money") -> "Money":
        return Money(self._amount + _to_decimal(other))

    def multiply(self, quantity: int) -> "Money":
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantity(f"Quantité entière attendue: {quantity!r}")
        if quantity < 0:
            raise InvalidQuantity(f"Quantité négative: {quantity}")
        return Money(self._amount * quantity)

    def apply_discount(self, fraction: Union[Decimal, float, str]) -> "Money":
        """Retourne self × (1 - fraction), arrondi half-even au centime (0 <= fraction < 1)."""
        f = Decimal(str(fraction)) if isinstance(fraction, float) else Decimal(fraction)
        if f < 0 or f >= 1:
            raise ValueError(f"Fraction de remise hors bornes [0, 1): {fraction!r}")
        return Money(self._amount * (Decimal(1) - f))

    def format(self, locale: str = DEFAULT_LOCALE) -> str:
        symbol, thousands, decimal_sep, spaced = _LOCALES.get(locale) or _LOCALES[DEFAULT_LOCALE]
        integer, _, cents = f"{self._amount:.2f}".partition(".")
        groups = []
        while len(integer) > 3:
            groups.insert(0, integer[-3:])
            integer = integer[:-3]
        groups.insert(0, integer)
        body = f"{thousands.join(groups)}{decimal_sep}{cents}"
        return f"{symbol} {body}" if spaced else f"{symbol}{body}"

    def as_db(self) -> str:
        # PostgREST accepte les numeric sous forme de chaîne ('60.00')
        return f"{self._amount:.2f}"

    def as_float(self) -> float:
        return float(self._amount)

    __add__ = add

    def __mul__(self, quantity: int) -> "Money":
        return self.multiply(quantity)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Money):
            return self._amount == other._amount
        if isinstance(other, (Decimal, int)) and not isinstance(other, bool):
            return self._amount == other
        return NotImplemented

    def __lt__(self, other: "Money") -> bool:
        return self._amount < _to_decimal(other)

    def __le__(self, other: "Money") -> bool:
        return self._amount <= _to_decimal(other)

    def __gt__(self, other: "Money") -> bool:
        return self._amount > _to_decimal(other)

    def __ge__(self, other: "Money") -> bool:
        return self._amount >= _to_decimal(other)

    def __hash__(self) -> int:
        return hash(self._amount)

    def __bool__(self) -> bool:
        return self._amount != 0

    def __repr__(self) -> str:
        return f"Money('{self._amount:.2f}')"

    def __str__(self) -> str:
        return self.as_db()
