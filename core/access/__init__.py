"""Caller authorization: operator and viewer role checks."""

from .gate import AccessGate, Role

__all__ = ["AccessGate", "Role"]
