"""Formateo de errores (funciones puras).

Por qué funciones y no métodos:
- El mensaje depende solo de `(kind, payload)`; no hace falta una jerarquía
  de clases para decidirlo.
- Facilita testear el formato sin construir excepciones.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from core.domain.models import FormattedUserError, UnwrapErrorKind, UserError

DEFAULT_USER_ERROR_MESSAGE = "Error does not have a message."
DEFAULT_GRAPHQL_ERRORS_MESSAGE = "Shopify returned one or more GraphQL errors."


def coerce_user_error(raw: Any) -> UserError:
    """Convierte una entrada cruda de `userErrors` en `UserError`.

    Los valores escalares se convierten a texto campo a campo (ver
    `UserError`); solo una entrada que no es mapping queda sin campos.
    """

    if isinstance(raw, UserError):
        return raw
    if not isinstance(raw, Mapping):
        return UserError()
    return UserError.model_validate({str(key): value for key, value in raw.items()})


def join_field(field: str | Sequence[str] | None) -> str | None:
    if field is None:
        return None
    if isinstance(field, str):
        return field or None
    joined = ".".join(field)
    return joined or None


def format_user_error(raw: Any) -> str:
    """Formatea un error como `field: message (code)`.

    Ejemplo: `email: Unidentified customer. (UNIDENTIFIED_CUSTOMER)`.
    """

    user_error = coerce_user_error(raw)
    field = join_field(user_error.field)
    message = user_error.message if user_error.message is not None else DEFAULT_USER_ERROR_MESSAGE

    segments = [
        f"{field}:" if field else None,
        message,
        f"({user_error.code})" if user_error.code else None,
    ]
    return " ".join(segment for segment in segments if segment)


def user_error_record(raw: Any) -> FormattedUserError:
    """Vista estructurada del mismo error (conserva el original en `user_error`)."""

    user_error = coerce_user_error(raw)
    return FormattedUserError(
        message=user_error.message if user_error.message is not None else DEFAULT_USER_ERROR_MESSAGE,
        code=user_error.code or None,
        field=join_field(user_error.field),
        user_error=raw,
    )


def first_error_message(errors: Sequence[Any] | None) -> str | None:
    if not errors:
        return None
    first = errors[0]
    message = first.get("message") if isinstance(first, Mapping) else getattr(first, "message", None)
    if isinstance(message, str) and message:
        return message
    return None


def build_message(
    kind: UnwrapErrorKind,
    *,
    errors: Sequence[Any] | None = None,
    operation: str | None = None,
    resource: str | None = None,
) -> str:
    """Mensaje principal para cada tipo de error."""

    if kind is UnwrapErrorKind.GRAPHQL_ERRORS:
        return first_error_message(errors) or DEFAULT_GRAPHQL_ERRORS_MESSAGE
    if kind is UnwrapErrorKind.NO_DATA:
        return "No data returned in shopify response."
    if kind is UnwrapErrorKind.OPERATION_NOT_FOUND:
        return f'Operation "{operation}" does not exist in shopify response.'
    if kind is UnwrapErrorKind.CUSTOMER_USER_ERRORS:
        return "Customer user errors returned in shopify response."
    if kind is UnwrapErrorKind.CORE_USER_ERRORS:
        return "User errors returned in shopify response."
    if kind is UnwrapErrorKind.RESOURCE_NOT_FOUND:
        return f'Resource "{resource}" does not exist in shopify response.'
    raise ValueError(f"Unknown unwrap error kind: {kind!r}")
