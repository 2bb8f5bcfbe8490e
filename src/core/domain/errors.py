"""Taxonomía de errores del unwrap.

Por qué un único tipo con `kind`:
- Todos los fallos comparten los mismos datos (errores crudos, operación,
  recurso); solo cambia el discriminante.
- El llamador puede hacer `except UnwrapError` y despachar por `kind`, sin
  depender de una jerarquía de subclases.

El mensaje y las vistas formateadas se calculan con funciones puras de
`core.domain.formatting`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from core.domain.formatting import build_message, format_user_error, user_error_record
from core.domain.models import FormattedUserError, UnwrapErrorKind

__all__ = ["UnwrapError", "UnwrapErrorKind"]


class UnwrapError(Exception):
    """Fallo de `unwrap`, con los datos crudos para inspección programática."""

    def __init__(
        self,
        kind: UnwrapErrorKind,
        *,
        errors: Sequence[Any] | None = None,
        operation: str | None = None,
        resource: str | None = None,
    ) -> None:
        self.kind = kind
        self.errors: list[Any] = list(errors or [])
        self.operation = operation
        self.resource = resource
        self.message = build_message(
            kind,
            errors=self.errors,
            operation=operation,
            resource=resource,
        )
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"UnwrapError(kind={self.kind.value!r}, message={self.message!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        # `Exception.__reduce__` reusaría `args=(message,)`; el constructor es por keyword.
        return (
            _rebuild_unwrap_error,
            (self.__class__, self.kind, self.errors, self.operation, self.resource),
        )

    # Constructores con nombre (uno por tipo).

    @classmethod
    def graphql_errors(cls, errors: Sequence[Any]) -> UnwrapError:
        return cls(UnwrapErrorKind.GRAPHQL_ERRORS, errors=errors)

    @classmethod
    def no_data(cls) -> UnwrapError:
        return cls(UnwrapErrorKind.NO_DATA)

    @classmethod
    def operation_not_found(cls, operation: str) -> UnwrapError:
        return cls(UnwrapErrorKind.OPERATION_NOT_FOUND, operation=operation)

    @classmethod
    def customer_user_errors(cls, user_errors: Sequence[Any], *, operation: str | None = None) -> UnwrapError:
        return cls(UnwrapErrorKind.CUSTOMER_USER_ERRORS, errors=user_errors, operation=operation)

    @classmethod
    def core_user_errors(cls, user_errors: Sequence[Any], *, operation: str | None = None) -> UnwrapError:
        return cls(UnwrapErrorKind.CORE_USER_ERRORS, errors=user_errors, operation=operation)

    @classmethod
    def resource_not_found(cls, resource: str, *, operation: str | None = None) -> UnwrapError:
        return cls(UnwrapErrorKind.RESOURCE_NOT_FOUND, operation=operation, resource=resource)

    # Vistas.

    @property
    def is_user_error(self) -> bool:
        return self.kind.is_user_error

    @property
    def user_errors(self) -> list[Any]:
        """Errores de usuario crudos (vacío si el fallo no es de usuario)."""

        return self.errors if self.is_user_error else []

    @property
    def formatted_user_errors(self) -> list[str]:
        """Una línea `field: message (code)` por error de usuario."""

        return [format_user_error(user_error) for user_error in self.user_errors]

    @property
    def formatted_user_error_records(self) -> list[FormattedUserError]:
        return [user_error_record(user_error) for user_error in self.user_errors]


def _rebuild_unwrap_error(
    cls: type[UnwrapError],
    kind: UnwrapErrorKind,
    errors: list[Any],
    operation: str | None,
    resource: str | None,
) -> UnwrapError:
    return cls(kind, errors=errors, operation=operation, resource=resource)
