"""Konfiguration: Pydantic-Schema, Defaults und YAML-Manager."""
