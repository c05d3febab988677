"""Dialect-aware SQL expressions used by the search repositories.

Case-sensitive substring match: instr() on SQLite, strpos() on PostgreSQL,
POSITION(... IN ...) elsewhere. LIKE is avoided because SQLite's LIKE is
case-insensitive for ASCII and would need wildcard escaping.
"""

from typing import Any

from sqlalchemy import Integer
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement


class substring_position(FunctionElement):
    """1-based position of needle in haystack, 0 when absent."""

    type = Integer()
    inherit_cache = True
    name = "substring_position"


@compiles(substring_position)
def _compile_position(element: substring_position, compiler: Any, **kw: Any) -> str:
    haystack, needle = list(element.clauses)
    return "POSITION(%s IN %s)" % (
        compiler.process(needle, **kw),
        compiler.process(haystack, **kw),
    )


@compiles(substring_position, "sqlite")
def _compile_instr(element: substring_position, compiler: Any, **kw: Any) -> str:
    return "instr(%s)" % compiler.process(element.clauses, **kw)


@compiles(substring_position, "postgresql")
def _compile_strpos(element: substring_position, compiler: Any, **kw: Any) -> str:
    return "strpos(%s)" % compiler.process(element.clauses, **kw)


def contains_text(column: Any, term: str) -> ColumnElement[bool]:
    """Return `column contains term` (case-sensitive, term taken literally)."""
    return substring_position(column, term) > 0
