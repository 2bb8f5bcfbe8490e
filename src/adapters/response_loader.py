"""Carga de respuestas GraphQL guardadas (archivo o stdin).

Formatos soportados:
- Objeto: {"data": {...}, "errors": [...]}
- Merged: {"productCreate": {...}, "errors": [...]}

Nota:
- Este adaptador no ejecuta peticiones: solo lee respuestas ya obtenidas por
  el cliente GraphQL del llamador.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


class ResponseLoadError(ValueError):
    """La respuesta no se pudo leer o no es JSON válido."""


def parse_response_text(text: str, *, source: str = "<string>") -> Any:
    if not text.strip():
        raise ResponseLoadError(f"Empty response in {source}.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseLoadError(f"Invalid JSON in {source}: {exc.msg} (line {exc.lineno}).") from exc


def load_response(path: Path | str, *, stdin: TextIO | None = None) -> Any:
    """Lee y parsea una respuesta; `-` lee de stdin."""

    if str(path) == STDIN_MARKER:
        stream = stdin or sys.stdin
        logger.debug("Reading response from stdin")
        return parse_response_text(stream.read(), source="stdin")

    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResponseLoadError(f"Cannot read {file_path}: {exc.strerror or exc}.") from exc

    logger.debug("Read %d bytes from %s", len(raw), file_path)
    return parse_response_text(raw, source=str(file_path))
