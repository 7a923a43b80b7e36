# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span attached to diagnostics.

Type expressions are single strings, so a span is just a line/column pair
plus the text it points into (when the caller still has it).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort location inside a type expression string."""

	line: Optional[int] = None
	column: Optional[int] = None
	text: Optional[str] = None

	@classmethod
	def from_loc(cls, loc: Any, text: Optional[str] = None) -> "Span":
		"""Build a Span from any object exposing `line`/`column` (or None)."""
		if loc is None:
			return cls(text=text)
		if isinstance(loc, cls):
			return loc
		return cls(
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			text=text,
		)


__all__ = ["Span"]
