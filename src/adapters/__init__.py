"""Adaptadores de borde: carga de respuestas y exportación JSON."""
