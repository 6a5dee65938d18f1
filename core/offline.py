"""Named response caches for static assets, filled at install and read cache-first."""

from __future__ import annotations

import logging
from typing import Iterable

import httpx

logger = logging.getLogger(__name__)

CACHE_NAME = "ai-physiognomy-v1"

FONT_STYLESHEET_URL = (
    "https://fonts.googleapis.com/css2?family=Noto+Sans+KR:wght@300;400;500;700&display=swap"
)

PRECACHE_URLS: tuple[str, ...] = (
    "/",
    "/index.html",
    "https://cdn.tailwindcss.com",
    FONT_STYLESHEET_URL,
)


class CacheStorage:
    """In-process map of cache name -> {url: response}."""

    def __init__(self) -> None:
        self._caches: dict[str, dict[str, httpx.Response]] = {}

    def open(self, name: str) -> dict[str, httpx.Response]:
        return self._caches.setdefault(name, {})

    def keys(self) -> list[str]:
        return list(self._caches)

    def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    def match(self, url: str) -> httpx.Response | None:
        for cache in self._caches.values():
            if url in cache:
                return cache[url]
        return None


class OfflineCache:
    """Cache-first fetcher for GET requests with network fallback."""

    def __init__(
        self,
        cache_name: str = CACHE_NAME,
        urls: Iterable[str] = PRECACHE_URLS,
        http: httpx.Client | None = None,
        storage: CacheStorage | None = None,
    ) -> None:
        self.cache_name = cache_name
        self.urls = list(urls)
        self.http = http or httpx.Client(timeout=30, follow_redirects=True)
        self.storage = storage or CacheStorage()
        relative = [url for url in self.urls if not httpx.URL(url).is_absolute_url]
        if relative and not str(self.http.base_url):
            raise ValueError(f"Relative manifest URLs need an http client with base_url: {relative}")

    def _key(self, url: str) -> str:
        if not str(self.http.base_url):
            return url
        return str(self.http.base_url.join(url))

    def install(self) -> None:
        """Fetch every manifest URL into the cache; any failure aborts the install."""
        fetched: dict[str, httpx.Response] = {}
        for url in self.urls:
            resp = self.http.get(url)
            resp.raise_for_status()
            fetched[self._key(url)] = resp
        self.storage.open(self.cache_name).update(fetched)
        logger.info("Installed cache %s with %d entries", self.cache_name, len(fetched))

    def activate(self) -> list[str]:
        """Delete caches left by previous versions; returns their names."""
        stale = [name for name in self.storage.keys() if name != self.cache_name]
        for name in stale:
            self.storage.delete(name)
            logger.info("Deleted stale cache %s", name)
        return stale

    def fetch(self, method: str, url: str, **kwargs) -> httpx.Response:
        if method.upper() != "GET":
            return self.http.request(method, url, **kwargs)

        key = self._key(url)
        cached = self.storage.match(key)
        if cached is not None:
            return cached

        resp = self.http.get(url, **kwargs)
        if resp.status_code == 200:
            self.storage.open(self.cache_name)[key] = resp
        return resp

    def get_text(self, url: str) -> str:
        return self.fetch("GET", url).text
