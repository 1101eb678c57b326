"""Pydantic models shared across openapi-deref."""

from .diagnostics import Diagnostic, DiagnosticKind, ResolutionReport

__all__ = ["Diagnostic", "DiagnosticKind", "ResolutionReport"]
