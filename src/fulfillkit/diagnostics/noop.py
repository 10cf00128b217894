"""No-op diagnostic sink."""

from __future__ import annotations

from fulfillkit.diagnostics.base import Diagnostic, DiagnosticSink


class NoopDiagnosticSink(DiagnosticSink):
    """Discards everything."""

    @property
    def name(self) -> str:
        return "noop"

    def report(self, diagnostic: Diagnostic) -> None:
        pass
