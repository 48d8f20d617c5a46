from __future__ import annotations

from typing import Callable, Dict, List

from pydantic import BaseModel, Field

from notifier_backend.core.errors import ProviderNotFoundError

from .base import Provider

ProviderFactory = Callable[[], Provider]


class ProviderInfo(BaseModel):
    id: str = Field(..., description="Provider type")
    name: str = Field(..., description="Provider name")


class ProviderRegistry:
    """In-memory registry of available notification providers."""

    def __init__(self):
        self._providers: Dict[str, Dict[str, object]] = {}

    # PUBLIC_INTERFACE
    def register(self, provider_type: str, name: str, factory: ProviderFactory):
        """Register a provider type with the factory building its instances."""
        self._providers[provider_type] = {
            "id": provider_type,
            "name": name,
            "factory": factory,
        }

    # PUBLIC_INTERFACE
    def get(self, provider_type: str) -> Provider:
        """Build a provider instance for a registered type."""
        item = self._providers.get(provider_type)
        if not item:
            raise ProviderNotFoundError(provider_type)
        return item["factory"]()  # type: ignore[operator]

    # PUBLIC_INTERFACE
    def list_public(self) -> List[ProviderInfo]:
        """List public info about registered providers."""
        return [ProviderInfo(id=v["id"], name=v["name"]) for v in self._providers.values()]  # type: ignore[arg-type]
