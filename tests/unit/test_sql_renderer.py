from adapters.sql_renderer import (
    build_delete,
    build_insert,
    build_select,
    build_update,
    get_sql_dialect,
    prepare_values,
)


def test_select_with_all_clauses():
    sql = build_select("t", conditions="id=5", order="name DESC", limit=10, offset=5)
    assert sql == "SELECT * FROM t WHERE id=5 ORDER BY name DESC LIMIT 10 OFFSET 5;"


def test_select_omits_offset_without_limit():
    sql = build_select("t", conditions="id=5", offset=5)
    assert sql == "SELECT * FROM t WHERE id=5;"
    assert "OFFSET" not in sql


def test_select_field_list():
    assert build_select("t", fields="id, brand") == "SELECT id, brand FROM t;"
    assert build_select("t", fields=["id", "brand"]) == "SELECT id, brand FROM t;"


def test_prepare_values_numbers_placeholders_in_order():
    prepared = prepare_values({"a": 1, "b": "x", "c": None, "d": True})
    assert list(prepared.items()) == [(":value1", "1"), (":value2", "x"), (":value3", None), (":value4", "1")]


def test_prepare_values_can_keep_native_types():
    prepared = prepare_values({"a": 1, "b": 2.5}, stringify=False)
    assert prepared == {":value1": 1, ":value2": 2.5}


def test_insert_statement():
    sql, prepared = build_insert("t", {"a": 1, "b": "x"})
    assert sql == "INSERT INTO t (a, b) VALUES (:value1, :value2);"
    assert prepared == {":value1": "1", ":value2": "x"}


def test_update_statement():
    sql, prepared = build_update("t", {"a": 1, "b": "x"}, "id = 3")
    assert sql == "UPDATE t SET a = :value1, b = :value2 WHERE id = 3;"
    assert prepared == {":value1": "1", ":value2": "x"}


def test_delete_statement():
    assert build_delete("t", "id = 3") == "DELETE FROM t WHERE id = 3;"


def test_pyformat_dialect_rewrites_only_bound_names():
    dialect = get_sql_dialect("mysql")
    sql, bound = dialect.render(
        "SELECT '10:30' AS t FROM x WHERE a = :value1 AND b = :value10 AND c LIKE 'a%'",
        {":value1": "1", ":value10": "10"},
    )
    assert sql == "SELECT '10:30' AS t FROM x WHERE a = %(value1)s AND b = %(value10)s AND c LIKE 'a%%'"
    assert bound == {"value1": "1", "value10": "10"}


def test_named_dialect_keeps_placeholders():
    dialect = get_sql_dialect("sqlite")
    sql, bound = dialect.render("SELECT * FROM x WHERE a = :value1", {":value1": "1"})
    assert sql == "SELECT * FROM x WHERE a = :value1"
    assert bound == {"value1": "1"}
    assert dialect.paramstyle == "named"


def test_render_without_params_leaves_sql_untouched():
    dialect = get_sql_dialect("pgsql")
    assert dialect.engine == "postgres"
    assert dialect.render("SELECT '100%' AS pct", {}) == ("SELECT '100%' AS pct", None)
