"""Mock diagnostic sink that records diagnostics for test assertions."""

from __future__ import annotations

from fulfillkit.diagnostics.base import Diagnostic, DiagnosticKind, DiagnosticSink


class MockDiagnosticSink(DiagnosticSink):
    """Records every diagnostic in a list.

    Example::

        sink = MockDiagnosticSink()
        RichResponse(diagnostics=sink).add_suggestions("x" * 26)
        assert sink.messages(DiagnosticKind.VALIDATION)
    """

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    @property
    def name(self) -> str:
        return "mock"

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def get(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]

    def messages(self, kind: DiagnosticKind | None = None) -> list[str]:
        return [d.message for d in self.diagnostics if kind is None or d.kind == kind]

    def reset(self) -> None:
        self.diagnostics.clear()
