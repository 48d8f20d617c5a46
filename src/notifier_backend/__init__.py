"""Notification provider backend: Jira issue creation and option discovery."""

__all__ = ["__version__"]

__version__ = "0.1.0"
