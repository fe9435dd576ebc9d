from __future__ import annotations

# Thin async client for the Docker-Engine-compatible remote API.
#
# Only the endpoints the gateway needs for its single target container:
# - logs (batch / full stdout) and attach (live byte stream) for the log pipeline
# - json / start / stop as pass-through glue
#
# Response bodies are treated as opaque bytes; nothing here assumes the
# upstream flushes whole lines.

from typing import AsyncGenerator
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError


class EngineError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ContainerNotFound(EngineError):
    pass


class UpstreamUnavailable(EngineError):
    pass


class ContainerStateUnchanged(EngineError):
    pass


class ContainerState(BaseModel):
    Status: str


class ContainerSummary(BaseModel):
    Name: str
    State: ContainerState


def _raise_for_status(resp: httpx.Response) -> None:
    status = resp.status_code
    if 200 <= status < 300:
        return
    if 400 <= status < 500:
        raise ContainerNotFound("not_found", f"{status}: no such container")
    raise UpstreamUnavailable("upstream_unavailable", f"Upstream HTTP {status}")


def _transport_error(e: httpx.HTTPError) -> UpstreamUnavailable:
    return UpstreamUnavailable("upstream_unavailable", f"{type(e).__name__}: {e}")


class EngineClient:
    def __init__(
        self,
        *,
        base_url: str,
        container: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._container = container
        self._timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            trust_env=False,
        )

    @property
    def container(self) -> str:
        return self._container

    def _path(self, action: str) -> str:
        return f"/containers/{quote(self._container, safe='')}/{action}"

    async def _request(self, method: str, action: str, *, params: dict[str, str] | None = None) -> httpx.Response:
        try:
            return await self._client.request(method, self._path(action), params=params)
        except httpx.HTTPError as e:
            raise _transport_error(e) from e

    async def fetch_logs(self, *, tail: int | None = None) -> str:
        """
        Fetch container stdout in one request.

        Args:
            tail: Number of trailing lines; None fetches the full stdout to date.

        Returns:
            Response body decoded as UTF-8, invalid sequences replaced.
        """

        params = {"stdout": "true"}
        if tail is not None:
            params["tail"] = str(tail)
        resp = await self._request("GET", "logs", params=params)
        _raise_for_status(resp)
        return resp.content.decode("utf-8", errors="replace")

    async def attach_stream(self) -> AsyncGenerator[bytes, None]:
        """
        Attach to the container output and yield raw chunks as they arrive.

        The sequence ends when the upstream closes the connection. Status and
        transport failures are raised as `EngineError` subclasses.
        """

        params = {"stdout": "true", "logs": "true", "stream": "true"}
        # A quiet container may not write for a long time; only connecting is bounded.
        timeout = httpx.Timeout(self._timeout_seconds, read=None)
        try:
            async with self._client.stream("POST", self._path("attach"), params=params, timeout=timeout) as resp:
                _raise_for_status(resp)
                async for chunk in resp.aiter_bytes():
                    yield chunk
        except httpx.HTTPError as e:
            raise _transport_error(e) from e

    async def inspect(self) -> ContainerSummary:
        resp = await self._request("GET", "json")
        _raise_for_status(resp)
        try:
            return ContainerSummary.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamUnavailable("upstream_bad_response", f"Invalid container payload: {e}") from e

    async def _change_state(self, action: str, unchanged_message: str) -> None:
        resp = await self._request("POST", action)
        if 300 <= resp.status_code < 400:
            raise ContainerStateUnchanged("not_modified", f"{resp.status_code}: {unchanged_message}")
        _raise_for_status(resp)

    async def start(self) -> None:
        await self._change_state("start", "container already started")

    async def stop(self) -> None:
        await self._change_state("stop", "container already stopped")

    async def aclose(self) -> None:
        await self._client.aclose()
