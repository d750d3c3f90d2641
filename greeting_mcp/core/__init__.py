"""Capability registry and dispatch protocol."""

from .dispatcher import Dispatcher
from .envelope import build_envelope, error_envelope
from .registry import CapabilityRegistry, Handler, RegisteredCapability
from .validator import validate

__all__ = [
    "CapabilityRegistry",
    "Dispatcher",
    "Handler",
    "RegisteredCapability",
    "build_envelope",
    "error_envelope",
    "validate",
]
