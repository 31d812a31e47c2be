"""FatSecret platform API client."""

import asyncio
from dataclasses import dataclass, field

import httpx

from meal_planner.services.cache import Cache
from meal_planner.services.recipes import RecipeSearchClient

_TOKEN_CACHE_KEY = "fatsecret:access_token"
_TOKEN_EXPIRY_MARGIN_SECONDS = 300


@dataclass
class HttpxFatSecretClient(RecipeSearchClient):
    """HTTPX-backed FatSecret client using OAuth 2.0 client credentials."""

    client_id: str
    client_secret: str
    auth_url: str
    api_url: str
    http_client: httpx.AsyncClient
    token_cache: Cache
    timeout_seconds: float = 5.0
    _token_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, init=False, repr=False
    )

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        client_id: str,
        client_secret: str,
        auth_url: str,
        api_url: str,
        token_cache: Cache,
        timeout_seconds: float = 5.0,
    ) -> "HttpxFatSecretClient":
        """Create a FatSecret client with a managed httpx session."""
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            auth_url=auth_url,
            api_url=api_url,
            http_client=httpx.AsyncClient(),
            token_cache=token_cache,
            timeout_seconds=timeout_seconds,
        )

    async def search_recipes(self, query: str, max_results: int) -> dict[str, object]:
        """Search recipes by free text."""
        return await self._call(
            "recipes.search.v3",
            {"search_expression": query, "max_results": str(max_results)},
        )

    async def get_recipe(self, recipe_id: str) -> dict[str, object]:
        """Fetch a recipe by FatSecret id."""
        return await self._call("recipe.get.v2", {"recipe_id": recipe_id})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _call(self, method: str, params: dict[str, str]) -> dict[str, object]:
        token = await self._access_token()
        response = await self.http_client.post(
            self.api_url,
            data={"method": method, "format": "json", **params},
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout_seconds,
        )
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self.token_cache.invalidate(_TOKEN_CACHE_KEY)
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, dict) and "error" in payload:
            raise RuntimeError(f"FatSecret {method} failed: {payload['error']}")
        return payload

    async def _access_token(self) -> str:
        cached = self.token_cache.get(_TOKEN_CACHE_KEY)
        if isinstance(cached, str):
            return cached
        async with self._token_lock:
            cached = self.token_cache.get(_TOKEN_CACHE_KEY)
            if isinstance(cached, str):
                return cached
            return await self._request_token()

    async def _request_token(self) -> str:
        response = await self.http_client.post(
            self.auth_url,
            data={"grant_type": "client_credentials", "scope": "basic"},
            auth=(self.client_id, self.client_secret),
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        token = payload.get("access_token")
        if not token:
            raise RuntimeError("FatSecret returned no access token")
        expires_in = int(payload.get("expires_in", 0))
        self.token_cache.set(
            _TOKEN_CACHE_KEY,
            token,
            ttl_seconds=expires_in - _TOKEN_EXPIRY_MARGIN_SECONDS,
        )
        return token
