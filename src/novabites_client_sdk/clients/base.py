from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

from ..http_client import HttpClient

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)


def coerce_model(value: Any, model_type: type[ModelT]) -> ModelT:
    if isinstance(value, model_type):
        return value
    return model_type.model_validate(value)


def parse_object(data: Any, model_type: type[ModelT], what: str) -> ModelT:
    if not isinstance(data, dict):
        raise ValueError(f"Expected {what} to be a JSON object")
    return model_type.model_validate(data)


def parse_list(data: Any, model_type: type[ModelT], what: str) -> list[ModelT]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected {what} to be a JSON array")
    return [model_type.model_validate(item) for item in data]


def compact_params(**values: Any) -> dict[str, Any] | None:
    params = {key: value for key, value in values.items() if value is not None}
    return params or None
