"""Async client for the remote virtual filesystem."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import httpx

from vfsh.command_serializer import render_value
from vfsh.errors import RemoteError

logger = logging.getLogger(__name__)


@dataclass
class ResourceEntry:
    """One row of a directory listing."""
    path: str
    type: str = "file"
    open: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResourceEntry":
        return cls(
            path=str(data.get("path", "")),
            type=str(data.get("type", "file")),
            open=bool(data.get("open", False)),
        )


def query_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Turn an option map into query parameters."""
    if not params:
        return {}
    return {key: render_value(value) for key, value in params.items()}


class RemoteFileSystem:
    """Issues filesystem verbs (LIST, INFO, OPEN, GET, PUT, DELETE) over HTTP."""

    def __init__(self, client: httpx.AsyncClient):
        """Initialize remote filesystem client.

        Args:
            client: HTTP client; its base_url is the filesystem root
        """
        self.client = client

    @classmethod
    def connect(cls, base_url: str, timeout: float = 30.0) -> "RemoteFileSystem":
        """Create a client with its own connection pool."""
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self) -> "RemoteFileSystem":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        logger.debug("%s %s params=%s", method, path, params)
        response = await self.client.request(
            method,
            path,
            params=query_params(params),
            content=content,
        )
        if response.is_success:
            return response

        logger.info("%s %s failed with %s", method, path, response.status_code)
        raise RemoteError(response.status_code, response.text, path)

    async def list(self, path: str) -> List[ResourceEntry]:
        response = await self._request("LIST", path)
        return [ResourceEntry.from_dict(entry) for entry in response.json()]

    async def info(self, path: str) -> Any:
        response = await self._request("INFO", path)
        return response.json()

    async def open(self, path: str, params: Optional[Mapping[str, Any]] = None):
        await self._request("OPEN", path, params)

    async def read(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        response = await self._request("GET", path, params)
        return response.text

    async def write(self, path: str, content: str, params: Optional[Mapping[str, Any]] = None):
        await self._request("PUT", path, params, content=content)

    async def delete(self, path: str, params: Optional[Mapping[str, Any]] = None):
        await self._request("DELETE", path, params)
