"""Helpers for logging, prompt rendering and image payloads."""
