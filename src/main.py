"""Script de ejecución.

Por qué existe:
- Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo.
- Mantiene un entrypoint simple además del script `shopify-unwrap`.
"""

from __future__ import annotations

import sys

# Terminales Windows con cp1252 fallan al imprimir JSON con caracteres no ASCII.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402


def main() -> None:
    run()


if __name__ == "__main__":
    main()
