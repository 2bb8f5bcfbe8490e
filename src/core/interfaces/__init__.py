"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que cumplen las respuestas de clientes externos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""
