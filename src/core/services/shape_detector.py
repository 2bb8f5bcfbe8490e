"""Detección de forma y extracción del envelope.

Los clientes GraphQL devuelven tres formas distintas para el mismo contenido:
- fetch: un objeto con `json()` que resuelve `{data, errors}`.
- objeto: el propio `{data, errors}`.
- merged: los campos del payload y `errors` mezclados en la raíz.

El orden de detección es fijo (fetch -> objeto -> merged): un payload merged
con una operación llamada `data` sería indistinguible de un objeto.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping, Sequence
from typing import Any

from core.domain.models import Envelope, ResponseShape
from core.interfaces.client_response import FetchResponse


def classify_response(response: Any) -> ResponseShape:
    """Devuelve la variante de `response` sin leer ningún campo del payload."""

    if isinstance(response, FetchResponse) and callable(response.json):
        return ResponseShape.FETCH
    if isinstance(response, Mapping):
        if "data" in response:
            return ResponseShape.OBJECT
        if any(key != "errors" for key in response):
            return ResponseShape.MERGED
    return ResponseShape.UNKNOWN


def normalize_errors(errors: Any) -> list[Any] | None:
    """Normaliza `errors` a lista; vacío o ausente -> None.

    El graphql-client de Shopify envía un único objeto
    `{message, networkStatusCode, graphQLErrors}` en vez de una lista.
    """

    if errors is None:
        return None
    if isinstance(errors, (Mapping, str, bytes)):
        return [errors]
    if isinstance(errors, Sequence):
        return list(errors) or None
    return [errors]


def _envelope_from_payload(payload: Any) -> Envelope:
    if not isinstance(payload, Mapping):
        return Envelope()
    return Envelope(data=payload.get("data"), errors=normalize_errors(payload.get("errors")))


async def extract_envelope(response: Any) -> Envelope:
    """Extrae `{data, errors}` de cualquier variante; nunca muta `response`.

    Los fallos del accessor `json()` (red, JSON inválido) se propagan tal cual.
    """

    shape = classify_response(response)

    if shape is ResponseShape.FETCH:
        payload = response.json()
        if inspect.isawaitable(payload):
            payload = await payload
        return _envelope_from_payload(payload)

    if shape is ResponseShape.OBJECT:
        return _envelope_from_payload(response)

    if shape is ResponseShape.MERGED:
        rest = {key: value for key, value in response.items() if key != "errors"}
        return Envelope(data=rest or None, errors=normalize_errors(response.get("errors")))

    # Un mapping con solo `errors` sigue reportando sus errores.
    if isinstance(response, Mapping):
        return Envelope(errors=normalize_errors(response.get("errors")))
    return Envelope()
