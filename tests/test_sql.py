"""
Tests for the SQL fragment builders in app.core.sql.
"""

import pytest

from app.core.exceptions import BadRequestError
from app.core.sql import Predicate, build_where, check_columns, contains_ci, sql_for_partial_update


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_translates_mapped_columns(self):
        """Test camelCase keys become column names"""
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"}
        )

        assert set_cols == '"first_name"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_empty_column_map_keeps_names(self):
        """Test the identity fallback for unmapped keys"""
        set_cols, values = sql_for_partial_update({"firstName": "Aliya", "age": 32}, {})

        assert set_cols == '"firstName"=$1, "age"=$2'
        assert values == ["Aliya", 32]

    def test_follows_input_order(self):
        data = {"c": 3, "a": 1, "b": 2, "d": None}
        set_cols, values = sql_for_partial_update(data, {"a": "col_a"})

        assert set_cols == '"c"=$1, "col_a"=$2, "b"=$3, "d"=$4'
        assert values == [3, 1, 2, None]

    @pytest.mark.parametrize("column_map", [{}, {"firstName": "first_name"}])
    def test_empty_data_is_bad_request(self, column_map):
        """Test that an empty update is rejected"""
        with pytest.raises(BadRequestError):
            sql_for_partial_update({}, column_map)


class TestBuildWhere:
    """Tests for the predicate accumulator"""

    def test_no_predicates(self):
        assert build_where([]) == ("", [])

    def test_first_predicate_uses_where(self):
        clause, values = build_where([Predicate("salary", ">=", 100)])

        assert clause == "WHERE salary >= $1"
        assert values == [100]

    def test_later_predicates_use_and(self):
        """Test that placeholders are numbered across predicates"""
        clause, values = build_where([
            Predicate("num_employees", ">=", 1),
            Predicate("num_employees", "<=", 5),
            contains_ci("name", "Net"),
        ])

        assert clause == (
            "WHERE num_employees >= $1 "
            "AND num_employees <= $2 "
            "AND LOWER(name) LIKE $3"
        )
        assert values == [1, 5, "%net%"]

    def test_parameterless_predicate_does_not_consume_index(self):
        """Test that IS NULL style predicates take no placeholder"""
        clause, values = build_where([
            Predicate("equity", "> 0"),
            Predicate("salary", ">=", 200),
        ])

        assert clause == "WHERE equity > 0 AND salary >= $1"
        assert values == [200]


class TestCheckColumns:
    """Tests for rejecting fields outside a column map"""

    def test_known_fields_pass(self):
        check_columns({"name": "x", "numEmployees": 3}, {"name": "name", "numEmployees": "num_employees"})

    def test_unknown_field_is_bad_request(self):
        """Test that a field with no column is rejected"""
        with pytest.raises(BadRequestError, match="handle"):
            check_columns({"handle": "new"}, {"name": "name"})
