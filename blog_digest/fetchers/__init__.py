"""Page fetching layer."""

from .http import fetch_page, validate_url

__all__ = ["fetch_page", "validate_url"]
