"""Unwrap de respuestas GraphQL.

Devuelve los datos de la respuesta (o una operación, o un recurso dentro de
ella) y lanza `UnwrapError` en vez de incluir errores en los datos.

Precedencia (el primero que aplica gana):
1. errores GraphQL/transporte
2. sin datos
3. operación inexistente
4. `customerUserErrors` (más descriptivos que `userErrors` cuando ambos vienen)
5. `userErrors`
6. recurso inexistente
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.domain.errors import UnwrapError
from core.services.shape_detector import extract_envelope

USER_ERRORS_KEY = "userErrors"
CUSTOMER_USER_ERRORS_KEY = "customerUserErrors"

_ERROR_KEYS = frozenset({USER_ERRORS_KEY, CUSTOMER_USER_ERRORS_KEY})


def _lookup(container: Any, key: str) -> Any:
    if not isinstance(container, Mapping):
        return None
    return container.get(key)


def strip_user_errors(operation_result: Any) -> Any:
    """Copia de la operación sin `userErrors`/`customerUserErrors`."""

    if not isinstance(operation_result, Mapping):
        return operation_result
    return {key: value for key, value in operation_result.items() if key not in _ERROR_KEYS}


def raise_for_user_errors(operation_result: Any, *, operation: str | None = None) -> None:
    customer_user_errors = _lookup(operation_result, CUSTOMER_USER_ERRORS_KEY)
    if customer_user_errors:
        raise UnwrapError.customer_user_errors(customer_user_errors, operation=operation)

    user_errors = _lookup(operation_result, USER_ERRORS_KEY)
    if user_errors:
        raise UnwrapError.core_user_errors(user_errors, operation=operation)


async def unwrap(response: Any, operation: str | None = None, resource: str | None = None) -> Any:
    """Unwrap de la operación o recurso indicados.

    - Sin `operation`: devuelve `data` tal cual.
    - Sin `resource`: devuelve una copia de la operación sin errores de usuario.
    - Con ambos: devuelve el valor del recurso.

    La respuesta original nunca se modifica.
    """

    envelope = await extract_envelope(response)

    if envelope.errors:
        raise UnwrapError.graphql_errors(envelope.errors)

    data = envelope.data
    if data is None:
        raise UnwrapError.no_data()

    if operation is None:
        return data

    operation_result = _lookup(data, operation)
    if operation_result is None:
        raise UnwrapError.operation_not_found(operation)

    raise_for_user_errors(operation_result, operation=operation)

    rest = strip_user_errors(operation_result)
    if resource is None:
        return rest

    value = _lookup(rest, resource)
    if value is None:
        raise UnwrapError.resource_not_found(resource, operation=operation)
    return value


async def unwrap_data(response: Any) -> Any:
    return await unwrap(response)


async def unwrap_operation(response: Any, operation: str) -> Any:
    return await unwrap(response, operation)


async def unwrap_resource(response: Any, operation: str, resource: str) -> Any:
    return await unwrap(response, operation, resource)
