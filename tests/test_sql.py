import itertools
import re

import pytest

from jobly.core.errors import BadRequestError
from jobly.models.company import COMPANY_FILTERS
from jobly.models.job import JOB_FILTERS
from jobly.utils.sql import FilterPredicate, SqlFragment, sql_for_partial_update, sql_where_from_filters


# ------------------------------------------------------------
# sql_for_partial_update
# ------------------------------------------------------------

def test_partial_update_single_field():
    result = sql_for_partial_update({"name": "New"}, {})
    assert result == SqlFragment('"name"=:p1', ["New"])


def test_partial_update_translates_column_names():
    result = sql_for_partial_update(
        {"firstName": "Aliya", "age": 32},
        {"firstName": "first_name"},
    )
    assert result.sql == '"first_name"=:p1, "age"=:p2'
    assert result.values == ["Aliya", 32]
    assert result.params == {"p1": "Aliya", "p2": 32}


def test_partial_update_without_translation_table():
    result = sql_for_partial_update({"title": "t", "salary": 1})
    assert result.sql == '"title"=:p1, "salary"=:p2'


def test_partial_update_never_puts_values_in_sql():
    hostile = "x'; DROP TABLE users; --"
    result = sql_for_partial_update({"name": hostile}, {})
    assert hostile not in result.sql
    assert result.values == [hostile]


def test_partial_update_empty_data_is_bad_request():
    with pytest.raises(BadRequestError) as exc_info:
        sql_for_partial_update({}, {"numEmployees": "num_employees"})
    assert exc_info.value.message == "No data"
    assert exc_info.value.status_code == 400


# ------------------------------------------------------------
# sql_where_from_filters
# ------------------------------------------------------------

def test_no_filters_gives_empty_clause():
    assert sql_where_from_filters({}, COMPANY_FILTERS) == SqlFragment("", [])


def test_none_values_are_absent():
    result = sql_where_from_filters({"minEmployees": None, "nameLike": None}, COMPANY_FILTERS)
    assert result.sql == ""


def test_company_filters_in_predicate_order():
    result = sql_where_from_filters(
        {"nameLike": "Net", "maxEmployees": 300, "minEmployees": 10},
        COMPANY_FILTERS,
    )
    assert result.sql == (
        "WHERE num_employees >= :p1 AND num_employees <= :p2 AND LOWER(name) LIKE :p3"
    )
    assert result.values == [10, 300, "%net%"]


def test_zero_is_a_present_filter():
    result = sql_where_from_filters({"minSalary": 0}, JOB_FILTERS)
    assert result == SqlFragment("WHERE salary >= :p1", [0])


@pytest.mark.parametrize("has_equity, clause", [(True, "equity > :p1"), (False, "equity = :p1")])
def test_has_equity_picks_operator(has_equity, clause):
    result = sql_where_from_filters({"hasEquity": has_equity}, JOB_FILTERS)
    assert result == SqlFragment(f"WHERE {clause}", [0])


def test_callable_operator():
    predicates = [FilterPredicate("flag", "col", lambda v: "<>" if v else "=")]
    assert sql_where_from_filters({"flag": 1}, predicates).sql == "WHERE col <> :p1"


JOB_VALUES = {"title": "herd", "minSalary": 0, "hasEquity": False}
COMPANY_VALUES = {"minEmployees": 1, "maxEmployees": 5, "nameLike": "c"}


@pytest.mark.parametrize("predicates, values", [(JOB_FILTERS, JOB_VALUES), (COMPANY_FILTERS, COMPANY_VALUES)])
def test_placeholders_match_values_for_every_combination(predicates, values):
    for size in range(len(values) + 1):
        for keys in itertools.combinations(values, size):
            result = sql_where_from_filters({k: values[k] for k in keys}, predicates)
            indices = [int(n) for n in re.findall(r":p(\d+)", result.sql)]
            assert indices == list(range(1, len(result.values) + 1))
            assert len(result.values) == size
