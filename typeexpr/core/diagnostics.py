"""
Structured diagnostic produced from type parsing failures.

Errors are raised as exceptions; `Diagnostic` is what front-ends (the CLI,
`--json` output) render them into.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""A single error/warning with an optional code and source span."""

	message: str
	code: str | None = None
	# Which layer produced it: "parser" (surface syntax), "typeparse"
	# (evaluation), "typesys" (type construction), or "result".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()


__all__ = ["Diagnostic"]
