"""Tests for the multi-row INSERT builder."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import msgspec
import pytest
import sqlglot

from sqlbulk.builder import build_multi_insert
from sqlbulk.config import BulkInsertConfig
from sqlbulk.dialects import (
    VENDOR_ORACLE,
    VENDOR_POSTGRES,
    VENDOR_SQLITE,
    VENDOR_SQLSERVER,
    VendorProfile,
    VendorProfileRegistry,
    get_vendor_profile,
)
from sqlbulk.exceptions import (
    InvalidArgumentError,
    ParameterError,
    RecordShapeError,
    SQLBuilderError,
    UnsupportedVendorError,
)
from sqlbulk.parameters import DB_NULL


@dataclass
class User:
    Id: int
    Name: str


@dataclass
class BatchRow:
    BatchId: int
    Id: int
    Name: Optional[str] = None


class Event(msgspec.Struct):
    id: int
    kind: str


SQLSERVER = get_vendor_profile(VENDOR_SQLSERVER)
ORACLE = get_vendor_profile(VENDOR_ORACLE)
SQLITE = get_vendor_profile(VENDOR_SQLITE)
POSTGRES = get_vendor_profile(VENDOR_POSTGRES)


class TestParameterized:
    def test_two_rows(self) -> None:
        statement = build_multi_insert("Users", [User(1, "A"), User(2, "B")], profile=SQLSERVER)

        assert statement.sql == "INSERT INTO [Users] ([Id],[Name]) SELECT @p0,@p1 UNION ALL SELECT @p2,@p3;"
        assert statement.parameters == {"p0": 1, "p1": "A", "p2": 2, "p3": "B"}
        assert statement.columns == ("Id", "Name")
        assert statement.row_count == 2
        assert statement.parameterized is True
        assert statement.vendor_id == VENDOR_SQLSERVER

    def test_mapping_records(self) -> None:
        records = [{"Id": 1, "Name": "A"}, {"Id": 2, "Name": "B"}]
        statement = build_multi_insert("Users", records, profile=SQLITE)

        assert statement.sql == 'INSERT INTO "Users" ("Id","Name") SELECT @p0,@p1 UNION ALL SELECT @p2,@p3;'

    @pytest.mark.parametrize(("rows", "columns"), [(1, 1), (3, 2), (25, 4)])
    def test_parameter_count(self, rows: int, columns: int) -> None:
        records = [{f"c{c}": r * columns + c for c in range(columns)} for r in range(rows)]
        statement = build_multi_insert("t", records, profile=SQLSERVER)

        assert len(statement.parameters) == rows * columns
        assert list(statement.parameters) == [f"p{i}" for i in range(rows * columns)]
        assert list(statement.parameters.values()) == list(range(rows * columns))
        assert statement.sql.count("UNION ALL SELECT") == rows - 1

    def test_vendor_placeholders(self) -> None:
        statement = build_multi_insert("users", [User(1, "A")], profile=POSTGRES)
        assert statement.sql == 'INSERT INTO "users" ("Id","Name") SELECT %(p0)s,%(p1)s;'

    def test_none_values_are_kept_as_none(self) -> None:
        statement = build_multi_insert("t", [BatchRow(1, 1)], profile=SQLSERVER)
        assert statement.parameters["p2"] is None
        assert statement.to_parameters()[2].bound_value is DB_NULL

    def test_custom_parameter_prefix(self) -> None:
        config = BulkInsertConfig(indexed_parameter_prefix="v")
        statement = build_multi_insert("Users", [User(1, "A")], profile=SQLSERVER, config=config)
        assert statement.sql == "INSERT INTO [Users] ([Id],[Name]) SELECT @v0,@v1;"


class TestLiterals:
    def test_two_rows(self) -> None:
        statement = build_multi_insert("Users", [User(1, "A"), User(2, "B")], profile=SQLSERVER, parameterized=False)

        assert statement.sql == "INSERT INTO [Users] ([Id],[Name]) SELECT 1,'A' UNION ALL SELECT 2,'B';"
        assert statement.parameters == {}
        assert statement.parameterized is False

    def test_escaping_and_null(self) -> None:
        statement = build_multi_insert(
            "t", [BatchRow(1, 2, "O'Brien"), BatchRow(1, 3)], profile=SQLSERVER, parameterized=False
        )
        assert statement.sql == (
            "INSERT INTO [t] ([BatchId],[Id],[Name]) SELECT 1,2,'O''Brien' UNION ALL SELECT 1,3,NULL;"
        )

    def test_unrenderable_value(self) -> None:
        with pytest.raises(SQLBuilderError):
            build_multi_insert("t", [{"a": object()}], profile=SQLSERVER, parameterized=False)


class TestSharedColumns:
    def test_shared_column_bound_once(self) -> None:
        records = [BatchRow(7, 1, "A"), BatchRow(7, 2, "B")]
        statement = build_multi_insert("Rows", records, profile=SQLSERVER, shared_columns={"BatchId"})

        assert statement.sql == (
            "INSERT INTO [Rows] ([BatchId],[Id],[Name]) SELECT @BatchId,@p0,@p1 UNION ALL SELECT @BatchId,@p2,@p3;"
        )
        assert statement.parameters == {"BatchId": 7, "p0": 1, "p1": "A", "p2": 2, "p3": "B"}
        assert statement.shared_columns == ("BatchId",)

    def test_shared_columns_come_first(self) -> None:
        records = [{"Id": 1, "Name": "A", "Tenant": 9}, {"Id": 2, "Name": "B", "Tenant": 9}]
        statement = build_multi_insert("t", records, profile=SQLSERVER, shared_columns=["Tenant"])

        assert statement.columns == ("Tenant", "Id", "Name")
        assert statement.sql.startswith("INSERT INTO [t] ([Tenant],[Id],[Name]) SELECT @Tenant,@p0,@p1")

    def test_shared_value_taken_from_first_record(self) -> None:
        records = [BatchRow(7, 1), BatchRow(8, 2)]
        statement = build_multi_insert("t", records, profile=SQLSERVER, shared_columns={"BatchId"}, parameterized=False)

        assert statement.sql == "INSERT INTO [t] ([BatchId],[Id],[Name]) SELECT 7,1,NULL UNION ALL SELECT 7,2,NULL;"

    def test_shared_column_uses_mapped_name(self) -> None:
        records = [BatchRow(7, 1), BatchRow(7, 2)]
        statement = build_multi_insert(
            "t", records, profile=SQLSERVER, shared_columns={"BatchId"}, name_map={"BatchId": "batch_id"}
        )

        assert statement.columns[0] == "batch_id"
        assert statement.parameters["batch_id"] == 7
        assert statement.sql.count("@batch_id") == 2

    def test_unknown_shared_column(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_multi_insert("t", [User(1, "A")], profile=SQLSERVER, shared_columns={"Missing"})
        assert exc_info.value.argument == "shared_columns"

    def test_shared_name_collides_with_sequence(self) -> None:
        records = [{"p0": 1, "x": 2}]
        with pytest.raises(ParameterError):
            build_multi_insert("t", records, profile=SQLSERVER, shared_columns={"p0"})

    def test_shared_name_must_be_identifier(self) -> None:
        records = [{"Batch Id": 1, "x": 2}]
        with pytest.raises(ParameterError):
            build_multi_insert("t", records, profile=SQLSERVER, shared_columns={"Batch Id"})


class TestNameMap:
    def test_columns_renamed(self) -> None:
        statement = build_multi_insert(
            "events", [Event(id=1, kind="a")], profile=SQLITE, name_map={"id": "event_id", "kind": "event_kind"}
        )
        assert statement.sql == 'INSERT INTO "events" ("event_id","event_kind") SELECT @p0,@p1;'

    def test_placeholders_do_not_depend_on_name_map(self) -> None:
        records = [User(1, "A"), User(2, "B")]
        plain = build_multi_insert("Users", records, profile=SQLSERVER)
        mapped = build_multi_insert("Users", records, profile=SQLSERVER, name_map={"Id": "UserId"})

        assert mapped.parameters == plain.parameters
        assert mapped.sql.split(" SELECT ", 1)[1] == plain.sql.split(" SELECT ", 1)[1]

    def test_duplicate_target_columns(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_multi_insert("t", [User(1, "A")], profile=SQLSERVER, name_map={"Name": "Id"})
        assert exc_info.value.argument == "name_map"


class TestRowTerminal:
    def test_oracle_terminal_on_following_rows(self) -> None:
        records = [User(1, "A"), User(2, "B"), User(3, "C")]
        statement = build_multi_insert("Users", records, profile=ORACLE)

        assert statement.sql == (
            'INSERT INTO "Users" ("Id","Name") SELECT :p0,:p1 '
            "UNION ALL SELECT :p2,:p3 FROM DUAL UNION ALL SELECT :p4,:p5 FROM DUAL;"
        )

    def test_single_row_has_no_terminal(self) -> None:
        statement = build_multi_insert("Users", [User(1, "A")], profile=ORACLE, parameterized=False)
        assert "DUAL" not in statement.sql

    def test_other_vendors_have_no_terminal(self) -> None:
        statement = build_multi_insert("Users", [User(1, "A"), User(2, "B")], profile=SQLITE)
        assert "DUAL" not in statement.sql


class TestEmptyAndInvalidInput:
    def test_empty_batch(self) -> None:
        statement = build_multi_insert("Users", [], profile=SQLSERVER)

        assert statement.is_empty
        assert statement.sql == ""
        assert statement.parameters == {}
        assert statement.row_count == 0

    def test_generator_records(self) -> None:
        statement = build_multi_insert("Users", (User(i, str(i)) for i in range(2)), profile=SQLSERVER)
        assert statement.row_count == 2

    @pytest.mark.parametrize("table_name", ["", "   "])
    def test_blank_table_name(self, table_name: str) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_multi_insert(table_name, [User(1, "A")], profile=SQLSERVER)
        assert exc_info.value.argument == "table_name"

    def test_none_records(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_multi_insert("Users", None, profile=SQLSERVER)
        assert exc_info.value.argument == "records"

    def test_mixed_record_shapes(self) -> None:
        with pytest.raises(RecordShapeError):
            build_multi_insert("t", [{"a": 1, "b": 2}, {"a": 1}], profile=SQLSERVER)

    def test_mixed_record_kinds(self) -> None:
        with pytest.raises(RecordShapeError):
            build_multi_insert("Users", [User(1, "A"), {"Id": 2, "Name": "B"}], profile=SQLSERVER)

    def test_shape_validation_can_be_disabled(self) -> None:
        config = BulkInsertConfig(validate_record_shapes=False)
        statement = build_multi_insert("t", [{"a": 1}, {"a": 2, "b": 3}], profile=SQLSERVER, config=config)
        assert statement.parameters == {"p0": 1, "p1": 2}

    def test_record_without_fields(self) -> None:
        with pytest.raises(RecordShapeError):
            build_multi_insert("t", [{}], profile=SQLSERVER)



class TestVendorResolution:
    def test_vendor_id_uses_registered_profile(self) -> None:
        statement = build_multi_insert("t", [{"a": 1}, {"a": 2}], vendor_id=VENDOR_ORACLE)

        assert statement.sql == 'INSERT INTO "t" ("a") SELECT :p0 UNION ALL SELECT :p1 FROM DUAL;'
        assert statement.vendor_id == VENDOR_ORACLE

    def test_vendor_id_uses_given_registry(self) -> None:
        registry = VendorProfileRegistry({"custom": lambda: VendorProfile("custom", "<", ">")})
        statement = build_multi_insert("t", [{"a": 1}], vendor_id="custom", registry=registry, parameterized=False)
        assert statement.sql == "INSERT INTO <t> (<a>) SELECT 1;"

    def test_unknown_vendor_id(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="sqlbulk"), pytest.raises(UnsupportedVendorError):
            build_multi_insert("t", [{"a": 1}], vendor_id="nope")
        assert not [r for r in caplog.records if r.getMessage() == "Built multi-row insert"]

    @pytest.mark.parametrize(
        "vendors", [{}, {"vendor_id": VENDOR_SQLITE, "profile": SQLITE}], ids=["neither", "both"]
    )
    def test_requires_exactly_one_of_vendor_id_and_profile(self, vendors: "dict[str, Any]") -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            build_multi_insert("t", [{"a": 1}], **vendors)
        assert exc_info.value.argument == "vendor_id"


@pytest.mark.parametrize("profile", [SQLSERVER, SQLITE, POSTGRES, ORACLE], ids=lambda p: p.vendor_id)
def test_literal_statement_parses(profile: VendorProfile) -> None:
    """Generated literal statements are valid SQL for the vendor's dialect."""
    records = [BatchRow(1, 1, "O'Brien"), BatchRow(1, 2, None)]
    statement = build_multi_insert("t", records, profile=profile, parameterized=False)

    parsed = sqlglot.parse_one(statement.sql.rstrip(";"), read=profile.sqlglot_dialect)
    assert isinstance(parsed, sqlglot.exp.Insert)
