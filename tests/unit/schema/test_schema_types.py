##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Tests for the `types.py` module of the `schema/` directory.
"""

from dataclasses import FrozenInstanceError

import pytest

from schemadao.exceptions import SchemaError, UnknownColumnError, UnknownTableError
from schemadao.schema import ChildTable, Column, Schema, Table
from tests.fixture_types import FixtureSchema


class TestChildTable:
    """
    Tests for the `ChildTable` relationship dataclass.
    """

    def test_single_column_join_pairs(self):
        """
        Test that a single-column relationship yields one join pair.
        """
        rel = ChildTable(local_column="PersonID", foreign_column="OwnerID")
        assert rel.join_pairs() == [("PersonID", "OwnerID")]

    def test_composite_join_pairs(self):
        """
        Test that a composite relationship yields its columns pairwise, in order.
        """
        rel = ChildTable(multi_key=True, local_columns=["A", "B"], foreign_columns=["X", "Y"])
        assert rel.join_pairs() == [("A", "X"), ("B", "Y")]
        assert rel.local_columns == ("A", "B")

    def test_composite_length_mismatch_raises(self):
        """
        Test that composite column lists of different lengths are rejected.
        """
        with pytest.raises(SchemaError, match="matching local and foreign"):
            ChildTable(multi_key=True, local_columns=["A", "B"], foreign_columns=["X"])

    def test_single_column_missing_foreign_raises(self):
        """
        Test that a single-column relationship needs both columns.
        """
        with pytest.raises(SchemaError, match="both a local and a foreign"):
            ChildTable(local_column="PersonID")


class TestTable:
    """
    Tests for the `Table` dataclass.
    """

    @pytest.fixture
    def table(self) -> Table:
        """
        A multi-key table with a column alias.

        Returns:
            The table.
        """
        return Table(
            primary="NoteNo",
            name="notes",
            multi_key=True,
            foreign_keys=["AddressID"],
            columns={"NoteNo": Column("NoteNo"), "AddressID": Column("AddressID"), "Body": Column("Body")},
            column_aliases={"text": "Body"},
        )

    def test_key_columns_multi_key(self, table: Table):
        """
        Test that a multi-key table is keyed by its primary plus its foreign keys.

        Args:
            table: A multi-key table.
        """
        assert table.key_columns() == ("NoteNo", "AddressID")

    def test_key_columns_single_key(self):
        """
        Test that a single-key table is keyed by its primary only.
        """
        table = Table(primary="ID", columns={"ID": Column("ID")}, foreign_keys=["Other"])
        assert table.key_columns() == ("ID",)

    def test_resolve_column(self, table: Table):
        """
        Test that aliases resolve to the real column and other names pass through.

        Args:
            table: A multi-key table.
        """
        assert table.resolve_column("text") == "Body"
        assert table.resolve_column("Body") == "Body"

    def test_column_unknown_raises(self, table: Table):
        """
        Test that looking up an unknown column raises `UnknownColumnError`.

        Args:
            table: A multi-key table.
        """
        with pytest.raises(UnknownColumnError, match="Nope"):
            table.column("Nope")

    def test_table_is_read_only(self, table: Table):
        """
        Test that neither the table nor its column mapping can be modified.

        Args:
            table: A multi-key table.
        """
        with pytest.raises(FrozenInstanceError):
            table.primary = "Body"
        with pytest.raises(TypeError):
            table.columns["New"] = Column("New")


class TestSchema:
    """
    Tests for the `Schema` dataclass.
    """

    def test_table_name_defaults_to_key(self, schemas_people_schema: FixtureSchema):
        """
        Test that a table without a name override is named after its key.

        Args:
            schemas_people_schema: The "people" schema.
        """
        assert schemas_people_schema.table_name("people") == "people"

    def test_table_name_override(self):
        """
        Test that a table's `name` override is used as its SQL name.
        """
        schema = Schema(name="s", tables={"person": Table(primary="ID", name="PERSON_T", columns={"ID": Column("ID")})})
        assert schema.table_name("person") == "PERSON_T"

    def test_relationship_parent_is_filled_in(self, schemas_people_schema: FixtureSchema):
        """
        Test that relationships learn their parent table key.

        Args:
            schemas_people_schema: The "people" schema.
        """
        assert schemas_people_schema.get_table("people").children["addresses"].parent_table == "people"

    def test_get_table_via_alias(self, schemas_people_schema: FixtureSchema):
        """
        Test that table aliases resolve to the aliased table.

        Args:
            schemas_people_schema: The "people" schema.
        """
        assert schemas_people_schema.get_table("persons") is schemas_people_schema.get_table("people")

    @pytest.mark.parametrize("key", ["", "nobody"])
    def test_get_table_unknown_raises(self, schemas_people_schema: FixtureSchema, key: str):
        """
        Test that empty and unknown table keys raise `UnknownTableError`.

        Args:
            schemas_people_schema: The "people" schema.
            key: The table key to look up.
        """
        with pytest.raises(UnknownTableError):
            schemas_people_schema.get_table(key)

    def test_columns_of(self, schemas_people_schema: FixtureSchema):
        """
        Test that `columns_of` returns every column name of a table.

        Args:
            schemas_people_schema: The "people" schema.
        """
        assert schemas_people_schema.columns_of("addresses") == frozenset({"AddressID", "PersonID", "Street"})

    def test_parents_of(self, schemas_people_schema: FixtureSchema):
        """
        Test that `parents_of` finds every relationship pointing at a table.

        Args:
            schemas_people_schema: The "people" schema.
        """
        parents = schemas_people_schema.parents_of("address_notes")
        assert [key for key, _ in parents] == ["addresses"]
        assert parents[0][1].multi_key is True
        assert schemas_people_schema.parents_of("people") == []

    def test_unknown_key_column_raises(self):
        """
        Test that a primary key that isn't a column is rejected.
        """
        with pytest.raises(SchemaError, match="Key column 'ID'"):
            Schema(name="s", tables={"t": Table(primary="ID", columns={"Other": Column("Other")})})

    def test_unknown_child_table_raises(self):
        """
        Test that a relationship to an undefined table is rejected.
        """
        table = Table(
            primary="ID",
            columns={"ID": Column("ID")},
            children={"ghosts": ChildTable(local_column="ID", foreign_column="ParentID")},
        )
        with pytest.raises(SchemaError, match="unknown child table 'ghosts'"):
            Schema(name="s", tables={"t": table})

    def test_unknown_foreign_column_raises(self):
        """
        Test that a relationship naming a column the child lacks is rejected.
        """
        parent = Table(
            primary="ID",
            columns={"ID": Column("ID")},
            children={"kids": ChildTable(local_column="ID", foreign_column="ParentID")},
        )
        kids = Table(primary="KidID", columns={"KidID": Column("KidID")})
        with pytest.raises(SchemaError, match="unknown foreign column 'ParentID'"):
            Schema(name="s", tables={"t": parent, "kids": kids})

    def test_bad_table_alias_raises(self):
        """
        Test that a table alias pointing nowhere is rejected.
        """
        with pytest.raises(SchemaError, match="Table alias 'x'"):
            Schema(name="s", tables={"t": Table(primary="ID", columns={"ID": Column("ID")})}, table_aliases={"x": "y"})

    def test_generated_multi_key_raises(self):
        """
        Test that a composite key the database would have to generate is rejected.
        """
        notes = Table(
            primary="NoteNo",
            multi_key=True,
            foreign_keys=["PersonID"],
            columns={"NoteNo": Column("NoteNo", is_number=True), "PersonID": Column("PersonID", is_number=True)},
        )
        with pytest.raises(SchemaError, match="Multi-key table 'notes' must set 'caller_supplies_pk'"):
            Schema(name="s", tables={"notes": notes})
