from .base import Provider
from .registry import ProviderInfo, ProviderRegistry

__all__ = ["Provider", "ProviderInfo", "ProviderRegistry"]
