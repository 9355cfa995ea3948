"""Shared utilities: telemetry, messages, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""
