"""Logging diagnostic sink, the default."""

from __future__ import annotations

import logging

from fulfillkit.diagnostics.base import Diagnostic, DiagnosticSink


class LoggingDiagnosticSink(DiagnosticSink):
    """Forwards diagnostics to ``fulfillkit.<component>`` loggers.

    Logging configuration stays with the host application::

        import logging
        logging.basicConfig(level=logging.DEBUG)

        app = FulfillmentApp(diagnostics=LoggingDiagnosticSink())
    """

    def __init__(self, *, root: str = "fulfillkit") -> None:
        self._root = root

    @property
    def name(self) -> str:
        return "logging"

    def report(self, diagnostic: Diagnostic) -> None:
        logger = logging.getLogger(f"{self._root}.{diagnostic.component}")
        if not logger.isEnabledFor(diagnostic.level):
            return
        logger.log(
            diagnostic.level,
            "[%s] %s",
            diagnostic.kind,
            diagnostic.message,
            extra={"diagnostic": diagnostic.attributes} if diagnostic.attributes else None,
        )
