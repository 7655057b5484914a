"""Compound price specifications and their components."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field

from .base import ValueObject

DEFAULT_CURRENCY = "JPY"


class QuantitativeValue(ValueObject):
    """Quantity with optional bounds (bundling unit or eligible quantity)."""

    value: int | None = None
    min_value: int | None = None
    max_value: int | None = None
    unit_code: str = "C62"


class UnitPriceSpecification(ValueObject):
    """Per-unit price; ``reference_quantity.value`` items share one ``price``."""

    type_of: Literal["UnitPriceSpecification"] = "UnitPriceSpecification"
    name: str | None = None
    price: int
    price_currency: str = DEFAULT_CURRENCY
    reference_quantity: QuantitativeValue = Field(
        default_factory=lambda: QuantitativeValue(value=1)
    )
    eligible_quantity: QuantitativeValue | None = None
    applies_to_add_on: list[str] = Field(default_factory=list)
    accounting: dict[str, Any] | None = None

    @property
    def bundle_size(self) -> int:
        value = self.reference_quantity.value
        return value if value is not None and value > 0 else 1


class CategoryChargeSpecification(ValueObject):
    """Surcharge tied to a seat or screening category, e.g. premium seat."""

    type_of: Literal["CategoryChargeSpecification"] = "CategoryChargeSpecification"
    name: str | None = None
    price: int
    price_currency: str = DEFAULT_CURRENCY
    category_code: str | None = None
    accounting: dict[str, Any] | None = None


class VideoFormatChargeSpecification(ValueObject):
    """Surcharge for a projection format (3D, IMAX ...)."""

    type_of: Literal["VideoFormatChargeSpecification"] = (
        "VideoFormatChargeSpecification"
    )
    name: str | None = None
    price: int
    price_currency: str = DEFAULT_CURRENCY
    video_format: str | None = None
    accounting: dict[str, Any] | None = None


class VoucherChargeSpecification(ValueObject):
    """Charge for redeeming a pre-purchased voucher.

    Offers carrying this component must present a redemption credential,
    which is verified before the offer is accepted.
    """

    type_of: Literal["VoucherChargeSpecification"] = "VoucherChargeSpecification"
    name: str | None = None
    price: int
    price_currency: str = DEFAULT_CURRENCY
    voucher_type: str
    video_format: str | None = None
    accounting: dict[str, Any] | None = None


PriceComponent = Annotated[
    UnitPriceSpecification
    | CategoryChargeSpecification
    | VideoFormatChargeSpecification
    | VoucherChargeSpecification,
    Field(discriminator="type_of"),
]


class CompoundPriceSpecification(ValueObject):
    """Ordered list of price components whose sum is the offer's charge."""

    type_of: Literal["CompoundPriceSpecification"] = "CompoundPriceSpecification"
    price_currency: str = DEFAULT_CURRENCY
    price_component: list[PriceComponent] = Field(default_factory=list)
    valid_from: str | None = None
    valid_through: str | None = None

    @property
    def total(self) -> int:
        return sum(component.price for component in self.price_component)

    def unit_component(self) -> UnitPriceSpecification | None:
        """Return the bundling-bearing unit component, ignoring add-on units."""
        for component in self.price_component:
            if (
                isinstance(component, UnitPriceSpecification)
                and not component.applies_to_add_on
            ):
                return component
        return None

    def voucher_component(self) -> VoucherChargeSpecification | None:
        for component in self.price_component:
            if isinstance(component, VoucherChargeSpecification):
                return component
        return None

    def with_components(
        self, components: list[PriceComponent]
    ) -> CompoundPriceSpecification:
        return self.model_copy(update={"price_component": list(components)})

    def without_accounting(self) -> CompoundPriceSpecification:
        """Drop provider-internal accounting data from every component."""
        return self.with_components(
            [
                component.model_copy(update={"accounting": None})
                for component in self.price_component
            ]
        )
