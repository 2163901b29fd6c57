"""
Remote data fetchers package
"""
from fetchers.base_fetcher import BaseFetcher
from fetchers.pets_api import PetsAPIFetcher

__all__ = [
  "BaseFetcher",
  "PetsAPIFetcher",
]
