from offermap.db.migrate import SCHEMA_PATH, _load_statements


def test_load_statements_splits_on_semicolons():
    sql = """
    -- offers
    CREATE TABLE a (id INT);

    CREATE INDEX a_idx
        ON a (id);
    SELECT 1
    """
    statements = list(_load_statements(sql))
    assert len(statements) == 3
    assert statements[0].strip() == "CREATE TABLE a (id INT);"
    assert "ON a (id);" in statements[1]
    assert statements[2].strip() == "SELECT 1"


def test_schema_defines_offers_table():
    statements = list(_load_statements(SCHEMA_PATH.read_text()))
    assert statements[0].lstrip().startswith("CREATE TABLE IF NOT EXISTS offers")
    assert all(stmt.rstrip().endswith(";") for stmt in statements)


def test_semicolons_inside_literals_do_not_split():
    sql = "INSERT INTO offers (mpn) VALUES ('a;b');\n;\nINSERT INTO offers (mpn) VALUES ('it''s');"
    assert list(_load_statements(sql)) == [
        "INSERT INTO offers (mpn) VALUES ('a;b');",
        "INSERT INTO offers (mpn) VALUES ('it''s');",
    ]


def test_schema_index_uses_lower_then_strip():
    index = [stmt for stmt in _load_statements(SCHEMA_PATH.read_text()) if "offers_mpn_norm_idx" in stmt][0]
    assert "regexp_replace(lower(coalesce(mpn, '')), '[^a-z0-9]', '', 'g')" in index
