"""Static inspection of SELECT statements using sqlparse.

SQLite's Python binding does not expose the declared type of a result
column. When a SELECT reads from exactly one table, its output columns
can be traced back to that table's columns, and their declared types
read from the catalog. Anything more involved (joins, subqueries, CTEs,
compound selects, table-valued functions) is reported as not statically
determinable and left to value-based inference.

sqlparse splits the statements and classifies tokens. Its grouping is
not relied on: column names such as ``type`` or ``count`` lex as
keywords and would not be grouped as identifiers. The inspector walks
the flat token stream instead.

References:
    - sqlparse documentation: https://sqlparse.readthedocs.io/
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import sqlparse
from sqlparse import tokens as T
from sqlparse.exceptions import SQLParseError
from sqlparse.lexer import tokenize
from sqlparse.sql import Token


# Keywords that end a FROM table reference
_CLAUSE_KEYWORDS = frozenset({
    "WHERE",
    "GROUP BY",
    "ORDER BY",
    "LIMIT",
    "OFFSET",
    "HAVING",
    "WINDOW",
    "INDEXED",
    "NOT",
})

_SET_OPERATORS = frozenset({"UNION", "UNION ALL", "INTERSECT", "EXCEPT"})

# Keywords that can never be a column or alias name
_RESERVED = _CLAUSE_KEYWORDS | _SET_OPERATORS | frozenset({
    "AS", "FROM", "SELECT", "DISTINCT", "ALL", "ON", "USING", "CASE", "WHEN",
    "THEN", "ELSE", "END", "AND", "OR", "IN", "IS", "BETWEEN", "NULL",
})


@dataclass(frozen=True)
class SourceColumns:
    """Output columns of a single-table SELECT traced to their source.

    Attributes:
        table: The table the SELECT reads from.
        columns: Source column name per output column, None for expressions.
    """

    table: str
    columns: tuple[str | None, ...]


def _word(token: Token) -> str:
    return " ".join(token.normalized.split())


def _is_keyword(token: Token, *words: str) -> bool:
    return token.ttype in T.Keyword and _word(token) in words


def _is_punctuation(token: Token, value: str) -> bool:
    return token.match(T.Punctuation, value)


def _is_name(token: Token) -> bool:
    if token.ttype in T.Name.Placeholder:
        return False
    if token.ttype in T.Name or token.ttype in T.String.Symbol:
        return True
    return (
        token.ttype in T.Keyword
        and token.ttype not in T.Keyword.DML
        and token.ttype not in T.Keyword.DDL
        and token.ttype not in T.Keyword.CTE
        and _word(token) not in _RESERVED
    )


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] + value[-1] in ('""', "``", "[]"):
        return value[1:-1].replace(value[0] * 2, value[0]) if value[0] != "[" else value[1:-1]
    return value


def _dotted_name(tokens: Sequence[Token], start: int = 0) -> tuple[list[str] | None, int]:
    """Read ``name(.name)*`` starting at ``start``.

    Returns:
        The name parts (None if no name starts there) and the index after them.
    """
    if start >= len(tokens) or not _is_name(tokens[start]):
        return None, start

    parts = [_unquote(tokens[start].value)]
    index = start + 1
    while (
        index + 1 < len(tokens)
        and _is_punctuation(tokens[index], ".")
        and _is_name(tokens[index + 1])
    ):
        parts.append(_unquote(tokens[index + 1].value))
        index += 2
    return parts, index


class StatementInspector:
    """Traces SELECT output columns back to their source table.

    Example:
        >>> inspector = StatementInspector()
        >>> inspector.source_columns("SELECT id, v AS value FROM t", ["id", "value"])
        SourceColumns(table='t', columns=('id', 'v'))
    """

    def split_statements(self, script: str) -> list[str]:
        """Split a script into statements, dropping empty and comment-only ones.

        Statement text is kept as written, trailing semicolon included.
        """
        statements = []
        for statement in sqlparse.split(script):
            significant = [
                value
                for ttype, value in tokenize(statement)
                if ttype not in T.Whitespace
                and ttype not in T.Comment
                and not (ttype in T.Punctuation and value == ";")
            ]
            if significant:
                statements.append(statement)
        return statements

    def source_table(self, sql: str) -> str | None:
        """Return the table a single-table SELECT reads from, else None."""
        split = self._split_select(sql)
        if split is None:
            return None
        _, from_part = split
        return self._table_name(from_part)

    def source_columns(
        self, sql: str, column_names: Sequence[str]
    ) -> SourceColumns | None:
        """Map every output column of a SELECT to its source column.

        Args:
            sql: The statement text.
            column_names: Output column names reported by the engine.

        Returns:
            The source table and per-column source names, or None when the
            statement is not a single-table SELECT.
        """
        split = self._split_select(sql)
        if split is None:
            return None

        projection, from_part = split
        table = self._table_name(from_part)
        if table is None:
            return None

        sources, has_star = self._projection_sources(projection)

        columns: list[str | None] = []
        for name in column_names:
            key = name.lower()
            if key in sources:
                columns.append(sources[key])
            elif has_star:
                columns.append(name)
            else:
                columns.append(None)

        return SourceColumns(table=table, columns=tuple(columns))

    def _tokens(self, sql: str) -> list[Token] | None:
        """Lex a single statement into significant tokens."""
        try:
            statements = sqlparse.parse(sql)
        except SQLParseError:
            return None

        significant = []
        for statement in statements:
            tokens = [
                token
                for token in statement.flatten()
                if not token.is_whitespace and token.ttype not in T.Comment
            ]
            while tokens and _is_punctuation(tokens[-1], ";"):
                tokens.pop()
            if tokens:
                significant.append(tokens)

        if len(significant) != 1:
            return None
        return significant[0]

    def _split_select(self, sql: str) -> tuple[list[Token], list[Token]] | None:
        """Split a simple SELECT into its projection and FROM part."""
        tokens = self._tokens(sql)
        if not tokens or not (
            tokens[0].ttype in T.Keyword.DML and _word(tokens[0]) == "SELECT"
        ):
            return None

        depth = 0
        from_index = None
        for index, token in enumerate(tokens[1:], start=1):
            if token.ttype in T.Keyword.DML:
                return None
            if token.ttype in T.Keyword and (
                "JOIN" in _word(token) or _word(token) in _SET_OPERATORS
            ):
                return None
            if _is_punctuation(token, "("):
                depth += 1
            elif _is_punctuation(token, ")"):
                depth -= 1
            elif depth == 0 and from_index is None and _is_keyword(token, "FROM"):
                from_index = index

        if from_index is None:
            return None
        return tokens[1:from_index], tokens[from_index + 1:]

    def _table_name(self, tokens: list[Token]) -> str | None:
        """Read ``table [[AS] alias]`` and require a clause or the end after it."""
        parts, index = _dotted_name(tokens)
        if parts is None:
            return None

        if index < len(tokens) and _is_keyword(tokens[index], "AS"):
            if index + 1 >= len(tokens) or not _is_name(tokens[index + 1]):
                return None
            index += 2
        elif index < len(tokens) and _is_name(tokens[index]):
            index += 1

        if index < len(tokens) and not (
            tokens[index].ttype in T.Keyword and _word(tokens[index]) in _CLAUSE_KEYWORDS
        ):
            return None
        return parts[-1]

    def _projection_sources(
        self, tokens: list[Token]
    ) -> tuple[dict[str, str | None], bool]:
        """Map lower-cased output names to source columns.

        Returns:
            The mapping and whether the projection contains a star.
        """
        index = 0
        while index < len(tokens) and _is_keyword(tokens[index], "DISTINCT", "ALL"):
            index += 1

        items: list[list[Token]] = [[]]
        depth = 0
        for token in tokens[index:]:
            if _is_punctuation(token, "("):
                depth += 1
            elif _is_punctuation(token, ")"):
                depth -= 1
            elif depth == 0 and _is_punctuation(token, ","):
                items.append([])
                continue
            items[-1].append(token)

        sources: dict[str, str | None] = {}
        has_star = False

        for item in items:
            if not item:
                continue

            if item[-1].ttype in T.Wildcard and (
                len(item) == 1 or (len(item) == 3 and _is_punctuation(item[1], "."))
            ):
                has_star = True
                continue

            alias = None
            expression = item
            if len(item) >= 3 and _is_keyword(item[-2], "AS") and _is_name(item[-1]):
                alias, expression = _unquote(item[-1].value), item[:-2]
            elif len(item) >= 2 and _is_name(item[-1]) and _is_name(item[-2]):
                alias, expression = _unquote(item[-1].value), item[:-1]

            parts, end = _dotted_name(expression)
            column = parts[-1] if parts is not None and end == len(expression) else None

            output = alias or column
            if output:
                sources.setdefault(output.lower(), column)

        return sources, has_star
