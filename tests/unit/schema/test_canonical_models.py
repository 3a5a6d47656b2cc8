import pytest
from pydantic import ValidationError

from schema import CascadeAction, Column, DatabaseInfo, Reference, Table


def test_primary_key_forces_not_null_and_unique():
    col = Column(name="id", type="int", is_primary_key=True, is_nullable=True, is_unique=False)

    assert col.is_nullable is False
    assert col.is_unique is True


def test_column_defaults():
    col = Column(name="note", type="text")

    assert col.is_nullable is True
    assert col.is_unique is False
    assert col.is_primary_key is False
    assert col.is_foreign_key is False
    assert col.references is None
    assert col.default_value is None


def test_foreign_key_requires_reference():
    with pytest.raises(ValidationError):
        Column(name="user_id", type="int", is_foreign_key=True)


def test_reference_requires_foreign_key_flag():
    with pytest.raises(ValidationError):
        Column(name="user_id", type="int", references=Reference(table="users", column="id"))


def test_camel_case_keys_accepted():
    col = Column.model_validate(
        {
            "name": "user_id",
            "type": "integer",
            "isNullable": False,
            "isForeignKey": True,
            "defaultValue": "1",
            "references": {"table": "users", "column": "id", "onDelete": "set null"},
        }
    )

    assert col.is_nullable is False
    assert col.default_value == "1"
    assert col.references.on_delete is CascadeAction.SET_NULL
    assert col.references.on_update is None


def test_camel_case_dump():
    col = Column(name="id", type="int", is_primary_key=True)
    dumped = col.model_dump(by_alias=True)

    assert dumped["isPrimaryKey"] is True
    assert dumped["isNullable"] is False
    assert "is_primary_key" not in dumped


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("CASCADE", CascadeAction.CASCADE),
        ("set null", CascadeAction.SET_NULL),
        ("SET_DEFAULT", CascadeAction.SET_DEFAULT),
        (" no   action ", CascadeAction.NO_ACTION),
        (CascadeAction.RESTRICT, CascadeAction.RESTRICT),
    ],
)
def test_cascade_action_parse(raw, expected):
    assert CascadeAction.parse(raw) is expected


@pytest.mark.parametrize("raw", ["EXPLODE", 3, None])
def test_cascade_action_parse_rejects_unknown(raw):
    with pytest.raises(ValueError):
        CascadeAction.parse(raw)


def test_cascade_action_values_are_sql_keywords():
    assert CascadeAction.SET_NULL.value == "SET NULL"
    assert CascadeAction.NO_ACTION.value == "NO ACTION"


def test_reference_empty_action_is_none():
    ref = Reference(table="users", column="id", on_delete="", on_update="CASCADE")

    assert ref.on_delete is None
    assert ref.on_update is CascadeAction.CASCADE


def test_models_are_immutable():
    col = Column(name="id", type="int")
    with pytest.raises(ValidationError):
        col.name = "other"


def test_table_rejects_duplicate_column_names():
    with pytest.raises(ValidationError, match="Duplicate column name"):
        Table(name="t", columns=(Column(name="a", type="int"), Column(name="a", type="text")))


def test_table_column_names_are_case_sensitive():
    table = Table(name="t", columns=(Column(name="a", type="int"), Column(name="A", type="int")))

    assert table.column("A").name == "A"
    assert table.column("missing") is None


def test_table_key_column_helpers():
    table = Table(
        name="orders",
        columns=(
            Column(name="id", type="int", is_primary_key=True),
            Column(
                name="user_id",
                type="int",
                is_foreign_key=True,
                references=Reference(table="users", column="id"),
            ),
        ),
    )

    assert [c.name for c in table.primary_key_columns] == ["id"]
    assert [c.name for c in table.foreign_key_columns] == ["user_id"]


def test_database_info():
    assert DatabaseInfo(name="shop").name == "shop"


@pytest.mark.parametrize("raw", ["false", "0", "no", "off", False])
def test_string_false_primary_key_is_not_coerced(raw):
    col = Column.model_validate({"name": "note", "type": "text", "isPrimaryKey": raw})

    assert col.is_primary_key is False
    assert col.is_nullable is True
    assert col.is_unique is False


@pytest.mark.parametrize("raw", ["true", "1", "yes", True])
def test_string_true_primary_key_is_coerced(raw):
    col = Column.model_validate(
        {"name": "id", "type": "int", "isPrimaryKey": raw, "isNullable": "true"}
    )

    assert col.is_primary_key is True
    assert col.is_nullable is False
    assert col.is_unique is True


def test_invalid_primary_key_flag_rejected():
    with pytest.raises(ValidationError):
        Column.model_validate({"name": "id", "type": "int", "isPrimaryKey": "perhaps"})
