"""Domain models for subscription plan tiers."""

from pydantic import BaseModel, ConfigDict, PositiveInt

from packages.metering.models.domain.enums import WindowKind


class PlanTier(BaseModel):
    """
    One subscription tier and its quota parameters.

    Immutable: tiers are looked up at runtime, never mutated. The display
    fields (name, price, features) are descriptive only and never take
    part in quota computation.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    window_kind: WindowKind
    limit: PositiveInt

    # Display metadata
    name: str
    description: str = ""
    price_cents: int = 0
    currency: str = "EUR"
    features: tuple[str, ...] = ()

    @property
    def is_free(self) -> bool:
        return self.price_cents == 0

    @property
    def price_formatted(self) -> str:
        if self.price_cents == 0:
            return "Free"
        amount = self.price_cents / 100
        symbol = "€" if self.currency == "EUR" else f"{self.currency} "
        if amount == int(amount):
            return f"{int(amount)}{symbol}"
        return f"{amount:.2f}{symbol}"

    @property
    def searches_label(self) -> str:
        period = "week" if self.window_kind == WindowKind.WEEKLY else "month"
        return f"{self.limit:,} searches/{period}"
