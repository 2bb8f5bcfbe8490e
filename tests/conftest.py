"""Fixtures compartidas: respuestas en las tres formas y entorno aislado."""

from __future__ import annotations

import os
from typing import Any

import pytest

PRODUCT = {"id": "gid://shopify/Product/1", "title": "T"}


class FakeFetchResponse:
    """Respuesta tipo fetch: `json()` asíncrono que resuelve el envelope."""

    def __init__(self, payload: Any) -> None:
        self._payload = payload
        self.calls = 0

    async def json(self) -> Any:
        self.calls += 1
        return self._payload


class FailingFetchResponse:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def json(self) -> Any:
        raise self._exc


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for key in list(os.environ):
        if key.upper().startswith("SHOPIFY_UNWRAP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def product_create_data() -> dict[str, Any]:
    return {"productCreate": {"product": dict(PRODUCT), "userErrors": []}}


@pytest.fixture
def make_response():
    """Construye la misma respuesta lógica en cualquiera de las tres formas."""

    def _make(shape: str, data: Any, errors: Any = None) -> Any:
        if shape == "fetch":
            envelope: dict[str, Any] = {"data": data}
            if errors is not None:
                envelope["errors"] = errors
            return FakeFetchResponse(envelope)
        if shape == "object":
            envelope = {"data": data}
            if errors is not None:
                envelope["errors"] = errors
            return envelope
        if shape == "merged":
            merged = dict(data or {})
            if errors is not None:
                merged["errors"] = errors
            return merged
        raise ValueError(shape)

    return _make
