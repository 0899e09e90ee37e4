"""Search backend speaking the Algolia REST API over httpx."""

import json
import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from indexsync.domain.index.model.document import OBJECT_ID_FIELD, SearchableDocument
from indexsync.domain.index.model.result import SearchHit, SearchResponse
from indexsync.domain.index.port.backend import RequestOptions
from indexsync.domain.shared.error import BackendError
from indexsync.infrastructure.algolia.config import AlgoliaConfig

logger = logging.getLogger(__name__)


class AlgoliaSearchBackend:
    """SearchBackend implementation for Algolia.

    Documents of one call are grouped per index and written with one
    ``batch`` request per index. Request options may carry ``headers`` and
    ``timeout``; any other key is sent as a query parameter (search
    parameters for queries, URL parameters otherwise).
    """

    def __init__(self, client: httpx.AsyncClient, config: AlgoliaConfig) -> None:
        self._client = client
        self._config = config

    async def save(
        self,
        documents: Sequence[SearchableDocument],
        request_options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        requests: dict[str, list[dict[str, Any]]] = {}
        for document in documents:
            payload = document.to_payload()
            if not payload:
                logger.debug(f"Skipping '{document.object_id}': no searchable fields")
                continue
            requests.setdefault(document.index_name, []).append(
                {"action": "updateObject", "body": payload}
            )
        return await self._batch(requests, request_options)

    async def remove(
        self,
        documents: Sequence[SearchableDocument],
        request_options: RequestOptions | None = None,
    ) -> dict[str, Any]:
        requests: dict[str, list[dict[str, Any]]] = {}
        for document in documents:
            requests.setdefault(document.index_name, []).append(
                {"action": "deleteObject", "body": {OBJECT_ID_FIELD: document.object_id}}
            )
        return await self._batch(requests, request_options)

    async def search(
        self,
        query: str,
        index_name: str,
        request_options: RequestOptions | None = None,
    ) -> SearchResponse:
        options = dict(request_options or {})
        headers = options.pop("headers", None)
        timeout = options.pop("timeout", None)
        params = {"query": query, **options}

        data = await self._request(
            "POST",
            f"/1/indexes/{_quote(index_name)}/query",
            index_name,
            json={"params": _encode_params(params)},
            headers=headers,
            timeout=timeout,
        )
        hits = [
            SearchHit(object_id=str(hit[OBJECT_ID_FIELD]), fields=hit)
            for hit in data.get("hits", [])
        ]
        return SearchResponse(
            hits=hits,
            total=data.get("nbHits", len(hits)),
            query=query,
            raw=data,
        )

    async def count(
        self,
        query: str,
        index_name: str,
        request_options: RequestOptions | None = None,
    ) -> int:
        response = await self.search(query, index_name, request_options)
        return response.total

    async def clear(self, index_name: str) -> dict[str, Any]:
        return await self._request("POST", f"/1/indexes/{_quote(index_name)}/clear", index_name)

    async def delete(self, index_name: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/1/indexes/{_quote(index_name)}", index_name)

    async def get_settings(self, index_name: str) -> dict[str, Any]:
        return await self._request("GET", f"/1/indexes/{_quote(index_name)}/settings", index_name)

    async def set_settings(self, index_name: str, settings: dict[str, Any]) -> dict[str, Any]:
        return await self._request(
            "PUT", f"/1/indexes/{_quote(index_name)}/settings", index_name, json=settings
        )

    async def _batch(
        self,
        requests: dict[str, list[dict[str, Any]]],
        request_options: RequestOptions | None,
    ) -> dict[str, Any]:
        options = dict(request_options or {})
        headers = options.pop("headers", None)
        timeout = options.pop("timeout", None)

        responses: dict[str, Any] = {}
        for index_name, index_requests in requests.items():
            logger.debug(f"Sending {len(index_requests)} operations to index '{index_name}'")
            responses[index_name] = await self._request(
                "POST",
                f"/1/indexes/{_quote(index_name)}/batch",
                index_name,
                json={"requests": index_requests},
                params=options or None,
                headers=headers,
                timeout=timeout,
            )
        return responses

    async def _request(
        self,
        method: str,
        path: str,
        index_name: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        request_headers = {
            "X-Algolia-Application-Id": self._config.app_id,
            "X-Algolia-API-Key": self._config.api_key,
            **(headers or {}),
        }
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=request_headers,
                timeout=timeout if timeout is not None else self._config.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"Algolia rejected {method} {path}: "
                f"{e.response.status_code} - {e.response.text}",
                index_name=index_name,
            ) from e
        except httpx.HTTPError as e:
            raise BackendError(
                f"Algolia request {method} {path} failed: {e}", index_name=index_name
            ) from e

        if not response.content:
            return {}
        return response.json()


def _quote(index_name: str) -> str:
    return quote(index_name, safe="")


def _encode_params(params: dict[str, Any]) -> str:
    """Encode search parameters the way Algolia expects them in ``params``."""
    return urlencode(
        {
            key: value if isinstance(value, str) else json.dumps(value)
            for key, value in params.items()
        }
    )
