"""Shared cross-cutting code: enums, telemetry, utilities."""
