from .provider import PROVIDER_TYPE, JiraProvider, factory

__all__ = ["PROVIDER_TYPE", "JiraProvider", "factory"]
