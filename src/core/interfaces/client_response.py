"""Contratos de respuestas de clientes GraphQL.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Cualquier respuesta tipo `fetch` (Shopify graphql-client, httpx, requests,
  aiohttp...) encaja sin adaptadores ni dependencias en el Core.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FetchResponse(Protocol):
    """Respuesta que expone el envelope a través de `json()`.

    Reglas de diseño:
    - `json` puede ser asíncrono (fetch, aiohttp) o síncrono (httpx, requests);
      el extractor espera el resultado solo si es awaitable.
    - El valor resuelto es el envelope `{data?, errors?}`.
    """

    def json(self) -> Any:
        """Devuelve el envelope (o un awaitable que lo resuelve)."""

        ...
