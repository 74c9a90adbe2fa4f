from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Literal
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError

logger = logging.getLogger(__name__)

ResponseType = Literal["json", "blob", "text"]
UnauthorizedHook = Callable[[], None]
ResponseHook = Callable[[requests.Response], None]

UNKNOWN_REQUEST_ERROR = "Error desconocido al realizar la solicitud"


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    on_unauthorized: UnauthorizedHook | None = None
    after_response: ResponseHook | None = None
    cache_ttl_seconds: float = 3.0
    enable_get_cache: bool = True
    _cache: dict[str, tuple[float, Any]] | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        if self._cache is None:
            self._cache = {}

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        data: Any = None,
        files: Mapping[str, Any] | None = None,
        response_type: ResponseType = "json",
        module: str = "unknown",
        operation: str = "unknown",
        use_get_cache: bool = True,
        invalidate_paths: list[str] | None = None,
    ) -> Any:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        normalized_method = method.upper()
        is_form_data = files is not None or data is not None
        request_headers = {"Accept": "application/pdf" if response_type == "blob" else "application/json"}
        if not is_form_data:
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)

        url = self._build_url(path)
        # Bodies are never sent with GET.
        body = None if normalized_method == "GET" else json_body
        if is_form_data:
            body = None

        attempts = self.config.retries + 1 if normalized_method in {"GET", "HEAD"} else 1
        cache_key = self._cache_key(normalized_method, url, request_headers, params, response_type)
        should_use_get_cache = self.enable_get_cache and use_get_cache and cache_key is not None
        if should_use_get_cache and cache_key:
            cached = self._read_cache(cache_key)
            if cached is not None:
                self.last_operation = LastOperation(module, operation, 0, "success(cache)")
                return cached

        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=body,
                    params=params,
                    data=data if normalized_method != "GET" else None,
                    files=files if normalized_method != "GET" else None,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "transport_error")
                    logger.warning(
                        "http_transport_error",
                        extra={"method": normalized_method, "path": path, "error": type(exc).__name__},
                    )
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc) or UNKNOWN_REQUEST_ERROR,
                        details={"type": type(exc).__name__},
                        status_code=0,
                        raw_payload=None,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")

        if self.after_response:
            self.after_response(response)

        if response.ok:
            parsed = self._parse_body(response, response_type)
            if should_use_get_cache and cache_key:
                self._write_cache(cache_key, parsed)
            if normalized_method != "GET":
                self._invalidate_cache(invalidate_paths or [path])
            self._record_operation(module, operation, started, "success")
            return parsed

        payload: Any
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = {"message": response.text} if response.text else {}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        self._record_operation(module, operation, started, "error")
        error = map_error(response.status_code, payload, response.reason)
        logger.info(
            "http_error",
            extra={"method": normalized_method, "path": path, "status_code": response.status_code},
        )
        if response.status_code == 401 and "Authorization" in request_headers:
            self.clear_cache()
            if self.on_unauthorized:
                self.on_unauthorized()
        raise error

    @staticmethod
    def _parse_body(response: requests.Response, response_type: ResponseType) -> Any:
        if response_type == "blob":
            return response.content
        if response_type == "text":
            return response.text
        if not response.content:
            return None
        return response.json()

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def _record_operation(self, module: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
        )

    def _cache_key(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        params: dict[str, Any] | None,
        response_type: ResponseType,
    ) -> str | None:
        if method != "GET" or response_type != "json":
            return None
        safe_headers = {key: value for key, value in headers.items() if key == "Authorization"}
        return json.dumps({"url": url, "headers": safe_headers, "params": params or {}}, sort_keys=True, default=str)

    def _read_cache(self, key: str) -> Any:
        if self._cache is None:
            return None
        record = self._cache.get(key)
        if not record:
            return None
        expires_at, payload = record
        if time.monotonic() >= expires_at:
            self._cache.pop(key, None)
            return None
        return payload

    def _write_cache(self, key: str, payload: Any) -> None:
        if self._cache is None:
            self._cache = {}
        self._cache[key] = (time.monotonic() + self.cache_ttl_seconds, payload)

    def _invalidate_cache(self, paths: list[str]) -> None:
        if not self._cache or not paths:
            return
        # "/api/custom-order/42" invalidates every cached "/api/custom-order..." read.
        prefixes = ["/".join(path.lstrip("/").split("?")[0].split("/")[:2]) for path in paths]
        doomed = [key for key in self._cache if any(prefix in key for prefix in prefixes)]
        for key in doomed:
            self._cache.pop(key, None)
