"""Core: dominio, contratos y servicios del unwrap (sin I/O)."""
