"""Diagnostic sinks for fulfillkit."""

from fulfillkit.diagnostics.base import (
    BuildOutcome,
    Diagnostic,
    DiagnosticKind,
    DiagnosticSink,
)
from fulfillkit.diagnostics.console import LoggingDiagnosticSink
from fulfillkit.diagnostics.mock import MockDiagnosticSink
from fulfillkit.diagnostics.noop import NoopDiagnosticSink


def default_sink() -> DiagnosticSink:
    """Sink used by components constructed without one."""
    return LoggingDiagnosticSink()


__all__ = [
    "BuildOutcome",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "MockDiagnosticSink",
    "NoopDiagnosticSink",
    "default_sink",
]
