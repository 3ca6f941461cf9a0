"""
Async client for the item endpoint: fetch one item and decode it
"""
from .errors import ItemClientError, RequestError, DecodeError, ConfigError
from .models import ItemDetail
from .config import Config, EndpointConfig
from .fetcher import FetchResult, ItemFetcher, create_fetcher, fetch_item

__all__ = [
    "ItemClientError",
    "RequestError",
    "DecodeError",
    "ConfigError",
    "ItemDetail",
    "Config",
    "EndpointConfig",
    "FetchResult",
    "ItemFetcher",
    "create_fetcher",
    "fetch_item",
]
