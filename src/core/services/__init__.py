"""Servicios del Core: detección de forma y unwrap."""
