"""Shared cross-cutting helpers (telemetry and logging)."""
