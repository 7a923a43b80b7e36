# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command line front-end: parse type expressions and print the resulting values.

	python -m typeexpr "Array{Int,2}" "Vector{<:Number}"
	python -m typeexpr --json --expect type "NoSuchType"

Human-readable mode prints one value per line and errors to stderr; `--json`
prints a single object with the results, structured diagnostics and the exit
code.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from typeexpr.core.diagnostics import Diagnostic
from typeexpr.core.span import Span
from typeexpr.core.types_core import DataType, TypeSystemError, UnionAll, show_value
from typeexpr.errors import TypeParseError
from typeexpr.parse_type import ExpectedKind, ParseOptions, parse

logger = logging.getLogger(__name__)

_EXPECT_CHOICES: Dict[str, Any] = {
	"any": ExpectedKind.ANY,
	"type": ExpectedKind.TYPE,
	"datatype": DataType,
	"unionall": UnionAll,
}


def _diag_to_json(diag: Diagnostic) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase,
		"code": diag.code,
		"message": diag.message,
		"severity": diag.severity,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _format_diag(diag: Diagnostic) -> str:
	where = ""
	if diag.span.line is not None:
		where = f":{diag.span.line}:{diag.span.column}"
	text = f"{diag.severity}[{diag.code}]{where}: {diag.message}"
	for note in diag.notes:
		text += f"\n  note: {note}"
	return text


def _parse_one(source: str, expected: Any, options: ParseOptions) -> tuple[Optional[str], Optional[Diagnostic]]:
	try:
		value = parse(expected, source, options=options)
	except TypeParseError as exc:
		return None, exc.to_diagnostic()
	except TypeSystemError as exc:
		diag = Diagnostic(
			message=str(exc),
			code="E-TYPE-SYSTEM",
			phase="typesys",
			span=Span(text=source),
			notes=[f"in type expression: {source}"],
		)
		return None, diag
	return show_value(value), None


def main(argv: list[str] | None = None) -> int:
	"""
	Parse every expression given on the command line. Exit code is 1 when any
	of them fails, 0 otherwise.
	"""
	parser = argparse.ArgumentParser(description="Parse type expressions into type values")
	parser.add_argument("expr", nargs="+", help="Type expression(s), e.g. 'Array{Int,2}'")
	parser.add_argument(
		"--expect",
		choices=sorted(_EXPECT_CHOICES),
		default="any",
		help="Kind of value each expression must produce (default: any)",
	)
	parser.add_argument("--max-depth", type=int, default=None, help="Reject expressions nested deeper than this")
	parser.add_argument("--json", action="store_true", help="Emit results and diagnostics as JSON")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log evaluation details to stderr")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	expected = _EXPECT_CHOICES[args.expect]
	options = ParseOptions(max_depth=args.max_depth)
	results: List[Dict[str, Any]] = []
	diagnostics: List[Diagnostic] = []
	for source in args.expr:
		shown, diag = _parse_one(source, expected, options)
		results.append({"source": source, "value": shown, "ok": diag is None})
		if diag is not None:
			diagnostics.append(diag)

	exit_code = 1 if diagnostics else 0
	if args.json:
		payload = {
			"exit_code": exit_code,
			"results": results,
			"diagnostics": [_diag_to_json(d) for d in diagnostics],
		}
		print(json.dumps(payload))
		return exit_code

	for result in results:
		if result["ok"]:
			print(result["value"])
	for diag in diagnostics:
		print(_format_diag(diag), file=sys.stderr)
	return exit_code


__all__ = ["main"]
