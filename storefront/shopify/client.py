"""Shopify Storefront GraphQL client.

Thin HTTP client for the Storefront API. Every call returns a FetchResult:
transport failures, HTTP errors and GraphQL errors are normalized into
ApiError values instead of being raised.
"""

import copy
import json
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx
import structlog

from storefront.config import ShopifyConfig

logger = structlog.get_logger()

T = TypeVar("T")

ACCESS_TOKEN_HEADER = "X-Shopify-Storefront-Access-Token"
MISSING_CONFIG_MESSAGE = "Shopify configuration is missing."


@dataclass(frozen=True)
class ApiErrorLocation:
    """Position of a GraphQL error in the query document."""

    line: int
    column: int


@dataclass(frozen=True)
class ApiError:
    """Represents a GraphQL or transport error.

    Upstream errors are passed through verbatim; the client does not
    interpret error codes found in extensions.
    """

    message: str
    locations: list[ApiErrorLocation] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, raw: Any) -> "ApiError":
        """Build an error from one entry of the GraphQL `errors` array."""
        if not isinstance(raw, dict):
            return cls(message=str(raw))

        locations = None
        if isinstance(raw.get("locations"), list):
            locations = [
                ApiErrorLocation(line=loc.get("line", 0), column=loc.get("column", 0))
                for loc in raw["locations"]
                if isinstance(loc, dict)
            ]

        return cls(
            message=str(raw.get("message", "Unknown error")),
            locations=locations,
            path=raw.get("path"),
            extensions=raw.get("extensions"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the GraphQL error shape."""
        result: dict[str, Any] = {"message": self.message}
        if self.locations is not None:
            result["locations"] = [
                {"line": loc.line, "column": loc.column} for loc in self.locations
            ]
        if self.path is not None:
            result["path"] = self.path
        if self.extensions is not None:
            result["extensions"] = self.extensions
        return result


@dataclass
class FetchResult(Generic[T]):
    """Uniform result of a GraphQL call.

    Holds data, errors, or both (partial data). A result without data
    always carries at least one error.

    Attributes:
        data: The `data` member of the GraphQL envelope.
        errors: Errors reported upstream or produced by the client.
    """

    data: T | None = None
    errors: list[ApiError] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the data/errors invariant."""
        if self.data is None and not self.errors:
            raise ValueError("FetchResult without data must carry at least one error")

    @classmethod
    def failure(cls, message: str) -> "FetchResult[T]":
        """Create a result holding a single error.

        Args:
            message: Error message.

        Returns:
            FetchResult with no data.
        """
        return cls(data=None, errors=[ApiError(message=message)])

    @property
    def ok(self) -> bool:
        """True when data is present and no errors were reported."""
        return self.data is not None and not self.errors

    @property
    def has_errors(self) -> bool:
        """True when at least one error was reported."""
        return bool(self.errors)


class CachePolicy(str, Enum):
    """Cache directive for a single fetch.

    FORCE_CACHE serves any stored result. DEFAULT serves stored results
    younger than the configured TTL. RELOAD and NO_CACHE always go to the
    network but store the fresh result. NO_STORE neither reads nor writes.
    ONLY_IF_CACHED never goes to the network.
    """

    FORCE_CACHE = "force-cache"
    DEFAULT = "default"
    RELOAD = "reload"
    NO_CACHE = "no-cache"
    NO_STORE = "no-store"
    ONLY_IF_CACHED = "only-if-cached"


_SKIP_READ = {CachePolicy.RELOAD, CachePolicy.NO_CACHE, CachePolicy.NO_STORE}


@dataclass
class _CacheEntry:
    result: FetchResult[dict[str, Any]]
    stored_at: float
    expires: bool


class ShopifyClient:
    """HTTP client for the Shopify Storefront GraphQL API.

    Makes a single attempt per call. Callers always receive a FetchResult,
    never an exception.
    """

    def __init__(self, config: ShopifyConfig) -> None:
        """Initialize the client.

        Args:
            config: Store domain, access token and transport settings.
        """
        self.config = config
        self._client: httpx.AsyncClient | None = None
        self._cache: dict[str, _CacheEntry] = {}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def clear_cache(self) -> None:
        """Drop all cached results."""
        self._cache.clear()

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            ACCESS_TOKEN_HEADER: self.config.access_token or "",
        }

    @staticmethod
    def _cache_key(payload: dict[str, Any]) -> str:
        return json.dumps(payload, sort_keys=True, default=str)

    def _is_stale(self, entry: _CacheEntry, now: float) -> bool:
        return now - entry.stored_at >= self.config.cache_ttl_seconds

    def _read_cache(
        self, key: str, policy: CachePolicy
    ) -> FetchResult[dict[str, Any]] | None:
        if policy in _SKIP_READ:
            return None

        entry = self._cache.get(key)
        if entry is None:
            return None

        if policy is CachePolicy.DEFAULT and self._is_stale(entry, time.monotonic()):
            del self._cache[key]
            return None

        # Callers get their own copy so mutations never reach the cache
        return copy.deepcopy(entry.result)

    def _write_cache(
        self, key: str, policy: CachePolicy, result: FetchResult[dict[str, Any]]
    ) -> None:
        if policy is CachePolicy.NO_STORE or not result.ok:
            return

        now = time.monotonic()
        self._prune_expired(now)
        self._cache.pop(key, None)
        self._cache[key] = _CacheEntry(
            result=copy.deepcopy(result),
            stored_at=now,
            expires=policy is CachePolicy.DEFAULT,
        )
        if len(self._cache) > self.config.cache_max_items:
            self._evict_oldest()

    def _prune_expired(self, now: float) -> None:
        expired = [
            key
            for key, entry in self._cache.items()
            if entry.expires and self._is_stale(entry, now)
        ]
        for key in expired:
            del self._cache[key]

    def _evict_oldest(self) -> None:
        # Insertion order is write order, so the first keys are the oldest
        to_remove = len(self._cache) - self.config.cache_max_items
        for key in list(self._cache)[:max(to_remove, 0)]:
            del self._cache[key]

    @staticmethod
    def _parse_envelope(envelope: Any) -> FetchResult[dict[str, Any]]:
        """Convert a GraphQL response body into a FetchResult.

        Raises:
            ValueError: If the body is not a GraphQL envelope.
        """
        if not isinstance(envelope, dict):
            raise ValueError("Shopify API response is not a JSON object")

        data = envelope.get("data")
        if data is not None and not isinstance(data, dict):
            raise ValueError("Shopify API response data is not a JSON object")

        raw_errors = envelope.get("errors") or []
        if not isinstance(raw_errors, list):
            raw_errors = [raw_errors]
        errors = [ApiError.from_dict(raw) for raw in raw_errors]

        if errors:
            # Partial data is kept; the caller decides whether it is usable
            logger.error(
                "Shopify API GraphQL errors",
                errors=[error.to_dict() for error in errors],
                has_data=data is not None,
            )

        if data is None and not errors:
            errors = [ApiError(message="Shopify API response contained no data")]

        return FetchResult(data=data, errors=errors)

    async def fetch(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        cache: CachePolicy | str = CachePolicy.FORCE_CACHE,
    ) -> FetchResult[dict[str, Any]]:
        """Execute a GraphQL operation.

        Args:
            query: GraphQL query document.
            variables: Query variables. Omitted from the body when empty.
            cache: Cache directive for this call.

        Returns:
            FetchResult with data, errors, or both.
        """
        try:
            policy = CachePolicy(cache)
        except ValueError:
            logger.error("Unsupported cache directive", cache=str(cache))
            return FetchResult.failure(f"Unsupported cache directive: {cache}")

        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        if not self.config.is_complete:
            logger.error(
                "Shopify API call attempted without complete configuration",
                has_store_domain=bool(self.config.store_domain),
                has_access_token=bool(self.config.access_token),
            )
            return FetchResult.failure(MISSING_CONFIG_MESSAGE)

        cache_key = self._cache_key(payload)
        cached = self._read_cache(cache_key, policy)
        if cached is not None:
            logger.debug("Serving Shopify response from cache", policy=policy.value)
            return cached
        if policy is CachePolicy.ONLY_IF_CACHED:
            return FetchResult.failure("No cached Shopify response for this request")

        try:
            client = await self._get_client()

            logger.debug(
                "Making Shopify API request",
                endpoint=self.config.endpoint,
                has_variables="variables" in payload,
            )

            response = await client.post(
                self.config.endpoint,
                json=payload,
                headers=self._headers(),
            )

            if not 200 <= response.status_code < 300:
                logger.error(
                    "Shopify API HTTP error",
                    status_code=response.status_code,
                    body=response.text,
                )
                return FetchResult.failure(
                    f"Shopify API HTTP error! status: {response.status_code}"
                )

            result = self._parse_envelope(response.json())

        except httpx.TimeoutException as e:
            logger.error("Shopify API request timeout", error=str(e))
            return FetchResult.failure(_describe(e))
        except httpx.RequestError as e:
            logger.error("Shopify API request failed", error=str(e))
            return FetchResult.failure(_describe(e))
        except Exception as e:
            logger.exception("Error fetching from Shopify", error=str(e))
            return FetchResult.failure(_describe(e))

        self._write_cache(cache_key, policy, result)
        return result


def _describe(exc: BaseException) -> str:
    """Return the exception's message, or its type name when it has none."""
    return str(exc) or type(exc).__name__
