"""
Unit Tests for the SQL statement builders

Validates that QueryBuilder and InsertBuilder produce parameterized SQL for
the catalog tables and refuse identifiers that could smuggle SQL text.

Test Categories:
- SELECT construction (columns, WHERE)
- INSERT construction (values, RETURNING, ON CONFLICT DO NOTHING)
- Identifier validation
- Parameter isolation
"""

import pytest

from hubcatalog.utils.mutation_builders import InsertBuilder
from hubcatalog.utils.query_builder import QueryBuilder


@pytest.mark.unit
class TestSelectQueries:
    """Test SELECT construction"""

    def test_simple_select(self) -> None:
        query, params = QueryBuilder("plugins").build()

        assert query == "SELECT * FROM plugins"
        assert params == {}

    def test_select_specific_columns(self) -> None:
        query, _ = QueryBuilder("tags").select("id", "name").build()

        assert query == "SELECT id, name FROM tags"

    def test_where_binds_parameter(self) -> None:
        query, params = QueryBuilder("tags").select("id").where("name = :name", "ui", "name").build()

        assert query == "SELECT id FROM tags WHERE name = :name"
        assert params == {"name": "ui"}

    def test_multiple_where_conditions(self) -> None:
        query, params = (
            QueryBuilder("issues")
            .where("severity = :severity", "high", "severity")
            .where("status = :status", "open", "status")
            .build()
        )

        assert "WHERE severity = :severity AND status = :status" in query
        assert params == {"severity": "high", "status": "open"}

    def test_where_without_parameters(self) -> None:
        query, params = QueryBuilder("plugins").where("rating IS NOT NULL").build()

        assert query.endswith("WHERE rating IS NOT NULL")
        assert params == {}

    def test_auto_parameter_naming(self) -> None:
        _, params = QueryBuilder("plugins").where("author = :param_0", "ada").build()

        assert params == {"param_0": "ada"}


@pytest.mark.unit
class TestInsertQueries:
    """Test INSERT construction"""

    def test_single_row_insert(self) -> None:
        query, params = InsertBuilder("faqs").columns("question", "answer").values("Q?", "A.").build()

        assert query == "INSERT INTO faqs (question, answer) VALUES (:question, :answer)"
        assert params == {"question": "Q?", "answer": "A."}

    def test_values_dict_infers_columns(self) -> None:
        query, params = (
            InsertBuilder("plugins")
            .values_dict({"name": "Dark Mode", "author": "ada", "version": "1.0", "rating": 4.5})
            .returning("id")
            .build()
        )

        assert query.startswith("INSERT INTO plugins (name, author, version, rating)")
        assert query.endswith("RETURNING id")
        assert params["rating"] == 4.5

    def test_on_conflict_do_nothing(self) -> None:
        query, _ = InsertBuilder("tags").columns("name").values("ui").on_conflict_do_nothing("name").build()

        assert query == "INSERT INTO tags (name) VALUES (:name) ON CONFLICT (name) DO NOTHING"

    def test_conflict_clause_precedes_returning(self) -> None:
        query, _ = (
            InsertBuilder("tags").columns("name").values("ui").on_conflict_do_nothing("name").returning("id").build()
        )

        assert query.index("ON CONFLICT") < query.index("RETURNING")

    def test_missing_columns_raises_error(self) -> None:
        with pytest.raises(ValueError, match="requires columns"):
            InsertBuilder("tags").build()

    def test_missing_values_raises_error(self) -> None:
        with pytest.raises(ValueError, match="requires a row of values"):
            InsertBuilder("tags").columns("name").build()

    def test_row_length_mismatch_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Got 1 values but 2 columns"):
            InsertBuilder("faqs").columns("question", "answer").values("Q?").build()


@pytest.mark.unit
class TestSQLInjectionPrevention:
    """Values are bound; identifiers are checked"""

    def test_malicious_value_stays_in_params(self) -> None:
        malicious = "x'); DROP TABLE plugins; --"
        query, params = InsertBuilder("tags").columns("name").values(malicious).build()

        assert "DROP TABLE" not in query
        assert params["name"] == malicious

    @pytest.mark.parametrize("identifier", ["plugins; DROP TABLE tags", "name--", "1abc", "na me", ""])
    def test_invalid_table_rejected(self, identifier: str) -> None:
        with pytest.raises(ValueError, match="Invalid SQL identifier"):
            QueryBuilder(identifier)

    def test_invalid_column_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid SQL identifier"):
            InsertBuilder("tags").columns("name) VALUES ('x')--")

    def test_invalid_conflict_column_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid SQL identifier"):
            InsertBuilder("tags").on_conflict_do_nothing("name OR 1=1")


@pytest.mark.unit
class TestParameterIsolation:
    """Built parameter dicts are copies"""

    def test_params_are_copied(self) -> None:
        builder = QueryBuilder("tags").where("name = :name", "ui", "name")

        _, params = builder.build()
        params["name"] = "mutated"

        _, fresh = builder.build()
        assert fresh == {"name": "ui"}
