"""Promo code registry.

The registry is built once from configuration and handed to both the
``POST /promo/validate`` preview and the enrollment service, so a preview
and the enrollment that follows it always agree on the discount.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from learnhub.core.config import settings
from learnhub.core.exceptions import InvalidPromoCodeError, MissingCodeError

CENT = Decimal("0.01")


def format_percent(fraction: Decimal) -> str:
    """Render a fraction as a percentage string: Decimal("0.5") -> "50%"."""
    percent = (fraction * 100).normalize()
    return f"{percent:f}%"


@dataclass(frozen=True)
class PromoCode:
    code: str
    discount: Decimal  # fraction, 0 < discount < 1
    description: str

    @property
    def discount_percent(self) -> str:
        return format_percent(self.discount)

    def apply(self, price: Decimal) -> Decimal:
        """Price after discount, rounded to cents."""
        return (price * (1 - self.discount)).quantize(CENT, rounding=ROUND_HALF_UP)


class PromoRegistry:
    """Read-only lookup of promo codes, keyed by normalized (uppercase) code."""

    def __init__(self, codes: Mapping[str, PromoCode]):
        self._codes = MappingProxyType({self.normalize(k): v for k, v in codes.items()})

    @classmethod
    def from_config(cls, raw: Mapping[str, Mapping[str, Any]]) -> "PromoRegistry":
        """Build a registry from ``{"CODE": {"discount": 0.5, "description": "..."}}``.

        Raises:
            ValueError: If a code is blank or a discount is outside (0, 1).
        """
        codes: dict[str, PromoCode] = {}
        for raw_code, entry in raw.items():
            code = cls.normalize(raw_code)
            if not code:
                raise ValueError("Promo code must not be blank")
            try:
                discount = Decimal(str(entry["discount"]))
            except (KeyError, InvalidOperation) as e:
                raise ValueError(f"Promo code {code} has no valid discount") from e
            if not Decimal("0") < discount < Decimal("1"):
                raise ValueError(f"Promo code {code} discount must be between 0 and 1")
            codes[code] = PromoCode(
                code=code,
                discount=discount,
                description=str(entry.get("description", "")),
            )
        return cls(codes)

    @staticmethod
    def normalize(code: str | None) -> str:
        return (code or "").strip().upper()

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.normalize(code) in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def lookup(self, code: str | None) -> PromoCode | None:
        return self._codes.get(self.normalize(code))

    def validate(self, code: str | None) -> PromoCode:
        """Resolve a user-supplied code or raise.

        Raises:
            MissingCodeError: If the code is empty or whitespace.
            InvalidPromoCodeError: If the code is not registered.
        """
        normalized = self.normalize(code)
        if not normalized:
            raise MissingCodeError()
        promo = self._codes.get(normalized)
        if promo is None:
            raise InvalidPromoCodeError()
        return promo


@lru_cache
def get_promo_registry() -> PromoRegistry:
    """Registry built from ``settings.PROMO_CODES``; override this dependency in tests."""
    return PromoRegistry.from_config(settings.promo_codes)
