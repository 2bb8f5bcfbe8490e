"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a ningún cliente GraphQL concreto.
- Facilita normalizar respuestas heterogéneas (fetch, objeto, merged) a una
  única estructura.

Nota:
- Estos modelos describen *qué* es la respuesta, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ResponseShape(str, Enum):
    """Variantes de respuesta reconocidas por el detector.

    El orden de declaración es también el orden de detección.
    """

    FETCH = "fetch"
    OBJECT = "object"
    MERGED = "merged"
    UNKNOWN = "unknown"


class UnwrapErrorKind(str, Enum):
    """Tipos de fallo, en orden de precedencia de detección."""

    GRAPHQL_ERRORS = "graphql_errors"
    NO_DATA = "no_data"
    OPERATION_NOT_FOUND = "operation_not_found"
    CUSTOMER_USER_ERRORS = "customer_user_errors"
    CORE_USER_ERRORS = "core_user_errors"
    RESOURCE_NOT_FOUND = "resource_not_found"

    @property
    def is_user_error(self) -> bool:
        return self in (UnwrapErrorKind.CUSTOMER_USER_ERRORS, UnwrapErrorKind.CORE_USER_ERRORS)


class TransportError(BaseModel):
    """Error GraphQL a nivel de protocolo (entrada de `errors`).

    Por qué `extra="allow"`:
    - Cada servidor añade metadatos distintos (locations, path, extensions,
      networkStatusCode...). Se conservan para trazabilidad.
    """

    model_config = ConfigDict(extra="allow")

    message: str | None = Field(
        default=None,
        description="Mensaje legible del error, si el servidor lo envía.",
    )


class UserError(BaseModel):
    """Error de validación por campo devuelto dentro de una operación.

    Combina `userErrors` y `customerUserErrors`: ambos comparten forma.
    """

    model_config = ConfigDict(extra="allow")

    field: str | list[str] | None = Field(
        default=None,
        description="Ruta del campo; si es lista, el orden de segmentos importa.",
    )
    message: str | None = Field(
        default=None,
        description="Mensaje del servidor para el usuario final.",
    )
    code: str | None = Field(
        default=None,
        description="Código estable del error (p.ej. 'UNIDENTIFIED_CUSTOMER').",
    )

    @field_validator("field", mode="before")
    @classmethod
    def _coerce_field(cls, value: Any) -> Any:
        # Algunos servidores envían segmentos numéricos (índices de lista).
        if isinstance(value, (list, tuple)):
            return [str(segment) for segment in value]
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("message", "code", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class FormattedUserError(BaseModel):
    """Presentación estructurada de un `UserError`.

    No añade información: es otra vista de los mismos datos, con el error
    original adjunto sin modificar.
    """

    message: str = Field(..., description="Mensaje o texto por defecto.")
    code: str | None = Field(default=None, description="Código del error.")
    field: str | None = Field(default=None, description="Ruta unida con '.'.")
    user_error: Any = Field(default=None, description="Error original, tal cual.")


class Envelope(BaseModel):
    """Par `{data, errors}` extraído de cualquier variante de respuesta.

    Por qué `data: Any`:
    - El payload es del llamador; no se valida ni se copia aquí para poder
      devolverlo tal cual en modo "payload completo".
    """

    data: Any = Field(
        default=None,
        description="Payload por operación, o None si no hay datos.",
    )
    errors: list[Any] | None = Field(
        default=None,
        description="Errores de transporte normalizados a lista (None si vacío).",
    )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
