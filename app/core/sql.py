"""
SQL fragment builders shared by the CRUD modules.

Statements use $1..$n positional placeholders; see app.core.database.run_query.
"""

from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from app.core.exceptions import BadRequestError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    column_map: Mapping[str, str]
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Keys missing from column_map are used as the column name unchanged.

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        => ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Args:
        data_to_update: Logical field name -> new value, in assignment order
        column_map: Logical field name -> database column name

    Returns:
        (set_cols, values) where values[i] binds to placeholder $i+1

    Raises:
        BadRequestError: If data_to_update is empty
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f'"{column_map.get(key, key)}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]

    return ", ".join(cols), [data_to_update[key] for key in keys]


class Predicate(NamedTuple):
    """One WHERE condition. A value of None means the condition takes no parameter."""
    column: str
    operator: str
    value: Optional[Any] = None


def build_where(predicates: Iterable[Predicate]) -> Tuple[str, List[Any]]:
    """
    Fold predicates into a WHERE clause and its positional values.

    The first predicate is prefixed with WHERE, every later one with AND.
    Returns ("", []) when there are no predicates.
    """
    clauses: List[str] = []
    values: List[Any] = []

    for predicate in predicates:
        prefix = "AND" if clauses else "WHERE"
        if predicate.value is None:
            clauses.append(f"{prefix} {predicate.column} {predicate.operator}")
        else:
            values.append(predicate.value)
            clauses.append(f"{prefix} {predicate.column} {predicate.operator} ${len(values)}")

    return " ".join(clauses), values


def contains_ci(column: str, fragment: str) -> Predicate:
    """Case-insensitive substring match on column."""
    return Predicate(f"LOWER({column})", "LIKE", f"%{fragment.lower()}%")


def check_columns(data: Dict[str, Any], column_map: Mapping[str, str]) -> None:
    """Reject fields that have no entry in column_map."""
    unknown = [key for key in data if key not in column_map]
    if unknown:
        raise BadRequestError(f"Cannot update field(s): {', '.join(unknown)}")
