from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the noise map service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def list_readings(self, **params: Any) -> List[Dict[str, Any]]:
        return self._get("/readings", params)

    def list_hotspots(self, **params: Any) -> List[Dict[str, Any]]:
        return self._get("/hotspots", params)

    def get_analytics(self, **params: Any) -> Dict[str, Any]:
        return self._get("/analytics", params)

    def get_contacts(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._get("/contacts", {"latitude": latitude, "longitude": longitude})

    def submit_reading(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.post("/readings", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        body = response.json()
        if not isinstance(body, dict) or not isinstance(body.get("id"), str):
            raise typer.BadParameter("Unexpected response payload when submitting reading.")
        return body

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {key: value for key, value in (params or {}).items() if value is not None}
        try:
            response = self._client.get(path, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
