"""Shared enums, constants and advertised text."""
