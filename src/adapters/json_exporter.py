"""Exportación JSON de resultados del unwrap.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (jq, scripts).
- Formato estable: mismas opciones de indentación/orden para stdout y archivo.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from core.config import AppSettings

logger = logging.getLogger(__name__)


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return str(value)


def dump_result_json(result: Any, settings: AppSettings | None = None) -> str:
    """Serializa `result` con las opciones de `AppSettings`."""

    settings = settings or AppSettings()
    return json.dumps(
        result,
        ensure_ascii=False,
        indent=settings.json_indent or None,
        sort_keys=settings.sort_keys,
        default=_default,
    )


def export_result_json(*, result: Any, output_path: Path, settings: AppSettings | None = None) -> Path:
    """Exporta `result` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_result_json(result, settings) + "\n", encoding="utf-8")
    logger.info("Wrote unwrapped result to %s", output_path)
    return output_path
