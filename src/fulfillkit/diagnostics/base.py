"""Diagnostic sink ABC, Diagnostic dataclass, DiagnosticKind enum and BuildOutcome."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class DiagnosticKind(StrEnum):
    """Classification of a reported diagnostic."""

    VALIDATION = "validation"
    PROTOCOL = "protocol"
    HANDLER = "handler"
    TRACE = "trace"


@dataclass(frozen=True)
class Diagnostic:
    """One reported condition.

    Attributes:
        kind: What class of condition this is.
        component: Dotted component name, e.g. ``response.rich``.
        message: Human-readable description.
        level: A :mod:`logging` level used by sinks that log.
        attributes: Extra structured context.
    """

    kind: DiagnosticKind
    component: str
    message: str
    level: int = logging.ERROR
    attributes: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class BuildOutcome:
    """Result of one builder mutation.

    ``applied`` tells whether the receiver changed; ``diagnostic`` carries the
    reason when it did not (or a warning when it changed only partially).
    """

    applied: bool
    diagnostic: Diagnostic | None = None

    @classmethod
    def ok(cls) -> BuildOutcome:
        return _OK

    @classmethod
    def rejected(cls, component: str, message: str) -> BuildOutcome:
        return cls(
            applied=False,
            diagnostic=Diagnostic(DiagnosticKind.VALIDATION, component, message),
        )

    @classmethod
    def partial(cls, component: str, message: str) -> BuildOutcome:
        return cls(
            applied=True,
            diagnostic=Diagnostic(
                DiagnosticKind.VALIDATION, component, message, level=logging.WARNING
            ),
        )


_OK = BuildOutcome(applied=True)


class DiagnosticSink(ABC):
    """Abstract base class for diagnostic sinks.

    Every component receives a sink at construction instead of logging
    through a module-global logger. The default ``LoggingDiagnosticSink``
    forwards to :mod:`logging`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Sink name for identification."""
        ...

    @abstractmethod
    def report(self, diagnostic: Diagnostic) -> None:
        """Record one diagnostic."""
        ...

    def validation(self, component: str, message: str, **attributes: Any) -> None:
        self.report(Diagnostic(DiagnosticKind.VALIDATION, component, message, attributes=attributes))

    def protocol(self, component: str, message: str, **attributes: Any) -> None:
        self.report(
            Diagnostic(
                DiagnosticKind.PROTOCOL,
                component,
                message,
                level=logging.WARNING,
                attributes=attributes,
            )
        )

    def handler(self, component: str, message: str, **attributes: Any) -> None:
        self.report(Diagnostic(DiagnosticKind.HANDLER, component, message, attributes=attributes))

    def trace(self, component: str, message: str, **attributes: Any) -> None:
        self.report(
            Diagnostic(
                DiagnosticKind.TRACE,
                component,
                message,
                level=logging.DEBUG,
                attributes=attributes,
            )
        )

    def apply(self, outcome: BuildOutcome) -> bool:
        """Report the outcome's diagnostic, if any, and return ``applied``."""
        if outcome.diagnostic is not None:
            self.report(outcome.diagnostic)
        return outcome.applied
