"""Provider factory and exports."""

from .base import BaseProvider, ProviderRate, RateSeries
from .frankfurter import FrankfurterClient


def get_provider(provider_name: str = "frankfurter") -> BaseProvider:
    """Get provider by canonical name.

    Canonical names:
    - "frankfurter"
    """
    if provider_name == "frankfurter":
        return FrankfurterClient()
    raise ValueError(f"Unknown provider: {provider_name}")


__all__ = [
    "BaseProvider",
    "ProviderRate",
    "RateSeries",
    "FrankfurterClient",
    "get_provider",
]
