"""Render engine client (design-template rendering service)."""

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator
from urllib.parse import quote

import requests

from ..engine.properties import (
    SNAPSHOT_PROPERTIES,
    TEXT_SNAPSHOT_PROPERTIES,
    decode_value,
    encode_value,
)
from ..models.region import RegionSnapshot

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """Render engine call failed."""
    pass


class RenderTimeoutError(RenderError):
    """Render engine did not answer within the configured timeout."""
    pass


class RenderClient:
    """Client for the template rendering service.

    Each template render owns one engine session. Sessions are expensive and
    not shared, so callers should use `session()` which always disposes it.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str = "",
        export_timeout: float = 120.0,
        request_timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.export_timeout = export_timeout
        self.request_timeout = request_timeout

    def _get_headers(self) -> dict:
        headers = {}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def _request_with_retry(
        self,
        method: str,
        url: str,
        timeout: float,
        max_retries: int = 5,
        **kwargs,
    ) -> requests.Response:
        """Make request with exponential backoff on 429 errors."""
        response = None
        for attempt in range(max_retries):
            response = requests.request(
                method, url, headers=self._get_headers(), timeout=timeout, **kwargs
            )

            if response.status_code == 429:
                wait_time = 2 ** attempt
                time.sleep(wait_time)
                continue

            return response

        return response

    def request(self, method: str, path: str, timeout: float | None = None, **kwargs) -> requests.Response:
        """Call the service and translate transport errors into RenderError."""
        url = f"{self.base_url}{path}"
        try:
            response = self._request_with_retry(
                method, url, timeout or self.request_timeout, **kwargs
            )
            response.raise_for_status()
            return response
        except requests.Timeout as e:
            raise RenderTimeoutError(f"{method} {path} timed out: {e}") from e
        except requests.RequestException as e:
            raise RenderError(f"{method} {path} failed: {e}") from e

    def request_json(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        """Call the service and return its JSON object body."""
        response = self.request(method, path, **kwargs)
        try:
            data = response.json()
        except ValueError as e:
            raise RenderError(f"{method} {path} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise RenderError(f"{method} {path} returned unexpected payload: {data!r}")
        return data

    def open_session(self, template_path: Path | str) -> "RenderSession":
        """Upload a template file and open an engine session on it."""
        path = Path(template_path)
        with path.open("rb") as fh:
            data = self.request_json(
                "POST",
                "/sessions",
                files={"template": (path.name, fh, "application/octet-stream")},
            )
        session_id = data.get("session_id")
        if not session_id:
            raise RenderError(f"Unexpected render response: {data}")
        logger.info(f"Render session {session_id} opened for {path.name}")
        return RenderSession(self, session_id)

    @contextmanager
    def session(self, template_path: Path | str) -> Iterator["RenderSession"]:
        """Open a session and guarantee it is closed on every exit path."""
        session = self.open_session(template_path)
        try:
            yield session
        finally:
            session.close()


class RenderSession:
    """An open template inside the render engine."""

    def __init__(self, client: RenderClient, session_id: str):
        self.client = client
        self.session_id = session_id
        self.closed = False

    @property
    def _prefix(self) -> str:
        return f"/sessions/{self.session_id}"

    def _region_path(self, region: str) -> str:
        return f"{self._prefix}/regions/{quote(region, safe='')}"

    def list_regions(self) -> list[dict[str, Any]]:
        """Enumerate named regions: [{"name": ..., "type": ...}]."""
        data = self.client.request_json("GET", f"{self._prefix}/regions")
        regions = data.get("regions") or []
        if not isinstance(regions, list) or not all(isinstance(r, dict) for r in regions):
            raise RenderError(f"Unexpected region listing: {regions!r}")
        return [r for r in regions if r.get("name")]

    def get_properties(self, region: str, paths: list[str]) -> dict[str, Any]:
        """Read typed property values for one region."""
        data = self.client.request_json(
            "POST",
            f"{self._region_path(region)}/properties/query",
            json={"paths": paths},
        )
        values = data.get("values") or {}
        if not isinstance(values, dict):
            raise RenderError(f"Unexpected property values for {region}: {values!r}")
        return {path: decode_value(path, values.get(path)) for path in paths}

    def snapshot(self) -> list[RegionSnapshot]:
        """Current position/font size of every named region."""
        snapshots = []
        for region in self.list_regions():
            name = region["name"]
            kind = region.get("type", "")
            bare = RegionSnapshot(name=name, kind=kind)
            paths = TEXT_SNAPSHOT_PROPERTIES if bare.is_text else SNAPSHOT_PROPERTIES
            values = self.get_properties(name, paths)
            snapshots.append(RegionSnapshot(
                name=name,
                kind=kind,
                x=values.get("position/x") or 0.0,
                y=values.get("position/y") or 0.0,
                font_size=values.get("text/fontSize"),
            ))
        return snapshots

    def apply(self, region: str, properties: list[tuple[str, Any]]) -> None:
        """Write properties to one region."""
        if not properties:
            return
        payload = {"properties": [encode_value(path, value) for path, value in properties]}
        self.client.request("PATCH", self._region_path(region), json=payload)

    def export(self, mime_type: str = "image/png") -> bytes:
        """Rasterize the composed page."""
        response = self.client.request(
            "POST",
            f"{self._prefix}/export",
            timeout=self.client.export_timeout,
            json={"mime_type": mime_type},
        )
        return response.content

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.client.request("DELETE", self._prefix)
            logger.info(f"Render session {self.session_id} disposed")
        except RenderError as e:
            logger.warning(f"Failed to dispose render session {self.session_id}: {e}")
