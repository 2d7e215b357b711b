"""Thin Cosmic REST API client (no @cosmicjs/sdk equivalent needed).

Read-only access to a bucket's objects through the v3 REST API. All HTTP
calls use httpx.AsyncClient so they do not block the event loop.

Error mapping happens here, at the boundary: 404 ("No objects found") is
returned as None; every other failure (connection error, timeout, error
status, undecodable body) raises TransportFailure.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from wanderbites.domain.exceptions import TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.cosmicjs.com/v3"
DEFAULT_PROPS = ("id", "title", "slug", "metadata", "type", "created_at", "modified_at")
PAGE_SIZE = 100


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any],
) -> dict | None:
    """GET a Cosmic REST URL. 404 returns None."""
    try:
        resp = await client.get(url, params=params)
    except httpx.TimeoutException as e:
        logger.warning("Cosmic request timed out: %s", url)
        raise TransportFailure("Content store request timed out") from e
    except httpx.HTTPError as e:
        logger.warning("Cosmic request failed: %s (%s)", url, type(e).__name__)
        raise TransportFailure("Content store unreachable") from e
    if resp.status_code == 404:
        return None
    if resp.status_code != 200:
        logger.warning("Cosmic returned %s for %s", resp.status_code, url)
        raise TransportFailure(
            f"Content store returned HTTP {resp.status_code}",
            status_code=resp.status_code,
        )
    try:
        body = resp.json()
    except ValueError as e:
        raise TransportFailure(
            "Content store returned an invalid body", status_code=resp.status_code
        ) from e
    if not isinstance(body, dict):
        raise TransportFailure(
            "Content store returned an invalid body", status_code=resp.status_code
        )
    return body


class ObjectsQuery:
    """Fluent query over bucket objects; mirrors the SDK's find().props().depth()."""

    def __init__(self, client: "CosmicRESTClient", query: dict[str, Any]):
        self._client = client
        self._query = query
        self._props: tuple[str, ...] = DEFAULT_PROPS
        self._depth: int = 1
        self._limit: int | None = None
        self._sort: str | None = None

    def props(self, *props: str) -> "ObjectsQuery":
        self._props = props
        return self

    def depth(self, n: int) -> "ObjectsQuery":
        self._depth = n
        return self

    def limit(self, n: int) -> "ObjectsQuery":
        self._limit = n
        return self

    def sort(self, field: str) -> "ObjectsQuery":
        self._sort = field
        return self

    def _params(self, limit: int, skip: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "query": json.dumps(self._query, separators=(",", ":")),
            "props": ",".join(self._props),
            "depth": self._depth,
            "limit": limit,
            "read_key": self._client.read_key,
        }
        if skip:
            params["skip"] = skip
        if self._sort:
            params["sort"] = self._sort
        return params

    async def stream(self) -> AsyncIterator[dict[str, Any]]:
        """Yield matching objects in store order, paging with limit/skip.

        Yields nothing when Cosmic answers 404 (no objects found).
        """
        skip = 0
        remaining = self._limit
        while remaining is None or remaining > 0:
            page_size = PAGE_SIZE if remaining is None else min(PAGE_SIZE, remaining)
            out = await _request_async(
                self._client.http,
                self._client.objects_url,
                self._params(page_size, skip),
            )
            if not out:
                return
            objects = out.get("objects") or []
            for obj in objects:
                yield obj
            skip += len(objects)
            if remaining is not None:
                remaining -= len(objects)
            total = out.get("total")
            if len(objects) < page_size or (isinstance(total, int) and skip >= total):
                return

    async def all(self) -> list[dict[str, Any]]:
        return [obj async for obj in self.stream()]


class CosmicRESTClient:
    """Lightweight read-only Cosmic bucket client.

    Constructed explicitly (bucket slug and read key come from settings)
    and injected where needed; there is no process-wide instance.
    """

    def __init__(
        self,
        bucket_slug: str,
        read_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not bucket_slug:
            raise ValueError("bucket_slug is required")
        self.bucket_slug = bucket_slug
        self.read_key = read_key
        self.objects_url = (
            f"{base_url.rstrip('/')}/buckets/{quote(bucket_slug, safe='')}/objects"
        )
        self.http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self.http.aclose()

    def find(self, query: dict[str, Any]) -> ObjectsQuery:
        """Start a query; chain .props()/.depth()/.limit(), then .all() or .stream()."""
        return ObjectsQuery(self, query)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first matching object, or None when nothing matches."""
        objects = await self.find(query).limit(1).all()
        return objects[0] if objects else None
