"""
A small HTTP client for the cocktail book JSON API.

Base URL comes from COCKTAIL_API_URL (default http://localhost:4000).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, List, Optional

import requests

from core.config import settings
from client.state import Cocktail

API_BASE = "/api/cocktails"


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class CocktailApiClient:
    base_url: str = settings.api_url
    timeout: float = 30

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, *, json: Any = None, files: Any = None) -> Any:
        try:
            resp = requests.request(
                method,
                self._url(path),
                json=json,
                files=files,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(message or f"{method} {path} failed ({resp.status_code})", resp.status_code)

        return resp.json()

    def list_cocktails(self) -> List[Cocktail]:
        return [Cocktail.from_json(item) for item in self._request("GET", API_BASE)]

    def get_cocktail(self, cocktail_id: str) -> Cocktail:
        return Cocktail.from_json(self._request("GET", f"{API_BASE}/{cocktail_id}"))

    def create_cocktail(self, payload: Dict[str, Optional[str]]) -> Cocktail:
        return Cocktail.from_json(self._request("POST", API_BASE, json=payload))

    def update_cocktail(self, cocktail_id: str, payload: Dict[str, Optional[str]]) -> Any:
        return self._request("PUT", f"{API_BASE}/{cocktail_id}", json=payload)

    def delete_cocktail(self, cocktail_id: str) -> Any:
        return self._request("DELETE", f"{API_BASE}/{cocktail_id}")

    def upload_image(self, fileobj: BinaryIO, filename: str, content_type: str) -> str:
        """Calls: POST /api/upload, returns the stored file's /uploads/... path"""
        data = self._request("POST", "/api/upload", files={"image": (filename, fileobj, content_type)})
        return data["filePath"]
