"""
SQL fragment builders shared by the models.

Both builders return a SqlFragment: the SQL text with numbered named
placeholders (:p1, :p2, ...) and the values in placeholder order. Values
never appear in the SQL text; only column identifiers do.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Union

from jobly.core.errors import BadRequestError


def placeholder(index: int) -> str:
    return f":p{index}"


class SqlFragment(NamedTuple):
    sql: str
    values: List[Any]

    @property
    def params(self) -> Dict[str, Any]:
        """Bind parameters for sqlalchemy.text(), keyed p1, p2, ..."""
        return {f"p{idx}": value for idx, value in enumerate(self.values, start=1)}


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Optional[Mapping[str, str]] = None) -> SqlFragment:
    """
    Build the SET columns of a partial UPDATE.

    data:      {field: new value}, in the order the columns should appear
    js_to_sql: {field: column} for fields whose column name differs

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        SqlFragment(sql='"first_name"=:p1, "age"=:p2', values=['Aliya', 32])

    Raises BadRequestError when there is nothing to update.
    """
    if not data:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{js_to_sql.get(field, field)}"={placeholder(idx)}'
        for idx, field in enumerate(data, start=1)
    ]
    return SqlFragment(", ".join(cols), list(data.values()))


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class FilterPredicate:
    """
    One optional search filter.

    param:     key looked up in the filters mapping
    column:    SQL expression compared against the bound value
    operator:  comparison operator, or a callable choosing one from the value
    transform: maps the filter value to the bound value
    """

    param: str
    column: str
    operator: Union[str, Callable[[Any], str]]
    transform: Callable[[Any], Any] = _identity

    def operator_for(self, value: Any) -> str:
        if callable(self.operator):
            return self.operator(value)
        return self.operator


def sql_where_from_filters(filters: Mapping[str, Any], predicates: Sequence[FilterPredicate]) -> SqlFragment:
    """
    Fold a predicate table over the supplied filters into a WHERE clause.

    A filter is present when its value is not None. Present filters add one
    clause and one value each, numbered in predicate order starting at 1.
    No filters gives an empty SQL string.
    """
    clauses = []
    values = []

    for predicate in predicates:
        value = filters.get(predicate.param)
        if value is None:
            continue
        values.append(predicate.transform(value))
        clauses.append(f"{predicate.column} {predicate.operator_for(value)} {placeholder(len(values))}")

    if not clauses:
        return SqlFragment("", [])
    return SqlFragment("WHERE " + " AND ".join(clauses), values)
