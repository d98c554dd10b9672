"""
Tests for Output — schema-driven table rendering

These tests validate:
- Human-readable grid layout, truncation and folding
- Machine formats (json, yaml, csv) carry exactly the row data
- Transposed single-record views
- Raw object dumps
- Ranked, stable sorting
"""

import csv
import io
import json

import pytest
import yaml

from metalcloud_cli.client.models import NetworkProfile, NetworkProfileVLAN, SubnetPool
from metalcloud_cli.errors import InvalidArgument
from metalcloud_cli.output import (
    FieldType, SchemaField, Table, TableSorter, VALID_FORMATS, check_format, format_cell,
    render_raw_object,
)
from metalcloud_cli.presentation.symbols import ASCII, UNICODE


SCHEMA = [
    SchemaField("ID", FieldType.INT, 2),
    SchemaField("LABEL", FieldType.STRING, 5),
]


def sample_table():
    schema = [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("NAME", FieldType.STRING, 10),
        SchemaField("ENABLED", FieldType.BOOL, 3),
    ]
    data = [
        [2, "beta", False],
        [1, "alpha", True],
        [3, "gamma, with comma", True],
    ]
    return Table(schema, data)


class TestTable:
    """Table envelope invariants."""

    def test_row_length_checked(self):
        """Rows must have one cell per field."""
        with pytest.raises(ValueError):
            Table(SCHEMA, [[1]])

    def test_empty_table_allowed(self):
        """A table may have no rows."""
        assert Table(SCHEMA, []).data == []


class TestFormatCell:
    """Human cell formatting."""

    def test_none_is_empty(self):
        assert format_cell(None) == ""

    def test_bools_lowercase(self):
        assert format_cell(True) == "true"
        assert format_cell(False) == "false"

    def test_numbers(self):
        assert format_cell(42) == "42"


class TestHumanGrid:
    """Boxed grid rendering."""

    def test_layout(self):
        """Title, header, rows and footer."""
        out = Table(SCHEMA, [[1, "a"]]).render_table("Things", "", "")
        assert out.split("\n") == [
            "Things",
            "+----+-------+",
            "| ID | LABEL |",
            "+----+-------+",
            "| 1  | a     |",
            "+----+-------+",
            "Total: 1 Things",
        ]

    def test_subtitle(self):
        """Subtitle goes under the title."""
        out = Table(SCHEMA, [[1, "a"]]).render_table("Drives", "Drive Array #4 has the following drives:", "")
        lines = out.split("\n")
        assert lines[0] == "Drives"
        assert lines[1] == "Drive Array #4 has the following drives:"

    def test_untitled_footer(self):
        """Untitled tables count records."""
        out = Table(SCHEMA, [[1, "a"], [2, "b"]]).render_table("", "", "")
        assert out.split("\n")[-1] == "Total: 2 records"

    def test_columns_fit_content(self):
        """Columns widen to the longest value."""
        out = Table(SCHEMA, [[1, "a much longer label"]]).render_table("", "", "")
        assert "| a much longer label |" in out

    def test_unicode_borders(self):
        """Unicode symbol set draws box characters."""
        out = Table(SCHEMA, [[1, "a"]]).render_table("", "", "", symbols=UNICODE)
        assert out.split("\n")[0] == "┌────┬───────┐"

    def test_bools_rendered(self):
        """Bool cells print as true/false."""
        out = sample_table().render_table("Items", "", "")
        assert "| true " in out
        assert "| false " in out

    def test_truncates_to_width(self):
        """Over-wide cells are cut with an ellipsis."""
        table = Table([SchemaField("NAME", FieldType.STRING, 4)], [["abcdefghijkl"]])
        out = table.render_table("", "", "", width=12)
        assert "| abcde... |" in out
        assert all(len(line) <= 12 for line in out.split("\n")[:-1])

    def test_width_never_below_hint(self):
        """Columns do not shrink below their width hint."""
        table = Table([SchemaField("NAME", FieldType.STRING, 8)], [["abcdefghijkl"]])
        out = table.render_table("", "", "", width=5)
        assert "| abcde... |" in out

    def test_multiline_cells(self):
        """Embedded newlines spread over display lines."""
        table = Table(SCHEMA, [[1, "first\nsecond"], [2, "x"]])
        lines = table.render_table("", "", "").split("\n")
        assert "| 1  | first  |" in lines
        assert "|    | second |" in lines
        # Rows are separated when any of them spans several lines
        assert lines.count("+----+--------+") == 4


class TestFolding:
    """Foldable rendering."""

    def test_wraps_instead_of_truncating(self):
        """Folded cells wrap over several lines."""
        table = Table([SchemaField("NAME", FieldType.STRING, 4)], [["abcdefghijkl"]])
        lines = table.render_table_foldable("", "", "", width=12).split("\n")
        assert "| abcdefgh |" in lines
        assert "| ijkl     |" in lines

    def test_no_width_no_wrap(self):
        """Without a width, folding changes nothing."""
        table = Table(SCHEMA, [[1, "short"]])
        assert table.render_table_foldable("", "", "") == table.render_table("", "", "")

    def test_whitespace_preserved(self):
        """Folding wraps cells without rewriting tabs or runs of spaces."""
        text = "a\tb   cdefghij"
        table = Table([SchemaField("NAME", FieldType.STRING, 4)], [[text]])

        lines = table.render_table_foldable("", "", "", width=12).split("\n")

        first, second = "a\tb   ".ljust(8), "cdefghij"
        assert f"| {first} |" in lines
        assert f"| {second} |" in lines

    def test_machine_formats_unaffected(self):
        """Folding only applies to the human-readable grid."""
        table = sample_table()
        for fmt in ("json", "yaml", "csv"):
            assert table.render_table_foldable("", "", fmt, width=10) == table.render_table("", "", fmt)


class TestMachineFormats:
    """json, yaml and csv output."""

    def test_json_records(self):
        """JSON is an array of objects keyed by field name."""
        records = json.loads(sample_table().render_table("Items", "", "json"))
        assert records == [
            {"ID": 2, "NAME": "beta", "ENABLED": False},
            {"ID": 1, "NAME": "alpha", "ENABLED": True},
            {"ID": 3, "NAME": "gamma, with comma", "ENABLED": True},
        ]

    def test_json_has_no_title(self):
        """Titles are not part of machine output."""
        assert "Items" not in sample_table().render_table("Items", "", "json")

    def test_yaml_records(self):
        """YAML parses back to the same records."""
        table = sample_table()
        assert yaml.safe_load(table.render_table("", "", "yaml")) == json.loads(
            table.render_table("", "", "json")
        )

    def test_yaml_keeps_field_order(self):
        """Mappings list fields in schema order."""
        out = sample_table().render_table("", "", "yaml")
        first = out.split("\n")[:3]
        assert [line.strip(" -").split(":")[0] for line in first] == ["ID", "NAME", "ENABLED"]

    def test_csv_rows(self):
        """CSV has a header and one line per row."""
        out = sample_table().render_table("", "", "csv")
        rows = list(csv.reader(io.StringIO(out)))
        assert rows[0] == ["ID", "NAME", "ENABLED"]
        assert rows[1:] == [
            ["2", "beta", "false"],
            ["1", "alpha", "true"],
            ["3", "gamma, with comma", "true"],
        ]

    def test_record_count_preserved(self):
        """Every format carries every row."""
        table = sample_table()
        assert len(json.loads(table.render_table("", "", "json"))) == 3
        assert len(yaml.safe_load(table.render_table("", "", "yaml"))) == 3
        assert len(list(csv.reader(io.StringIO(table.render_table("", "", "csv"))))) == 4

    def test_invalid_format(self):
        """Unknown formats are rejected."""
        with pytest.raises(InvalidArgument):
            sample_table().render_table("", "", "xml")

    def test_check_format(self):
        """All documented formats validate."""
        for fmt in VALID_FORMATS:
            assert check_format(fmt) == fmt


class TestTransposed:
    """Vertical single-record views."""

    def test_listing(self):
        """Each field on its own line."""
        schema = [SchemaField("ID", FieldType.INT, 6), SchemaField("DATACENTER", FieldType.STRING, 6)]
        out = Table(schema, [[100, "es-madrid"]]).render_transposed_table("subnet pool", "", "")
        assert out.split("\n") == [
            "subnet pool",
            f"  {'ID:'.ljust(11)}  100",
            f"  {'DATACENTER:'.ljust(11)}  es-madrid",
        ]

    def test_multiline_value(self):
        """Continuation lines are indented under the value."""
        schema = [SchemaField("DETAILS")]
        out = Table(schema, [["one\ntwo"]]).render_transposed_table("", "", "")
        assert out.split("\n") == ["  DETAILS:  one", "            two"]

    def test_empty(self):
        """No rows gives a short notice."""
        out = Table(SCHEMA, []).render_transposed_table("", "", "")
        assert out == "No data to display."

    def test_machine_formats_same_as_grid(self):
        """Transposition only affects the human-readable view."""
        table = sample_table()
        assert table.render_transposed_table("", "", "json") == table.render_table("", "", "json")


class TestRawObject:
    """Full object dumps."""

    def test_json(self):
        """Models dump every field."""
        pool = SubnetPool(subnet_pool_id=10, subnet_pool_prefix_human_readable="10.0.0.0")
        data = json.loads(render_raw_object(pool, "json", "SubnetPool"))
        assert data["subnet_pool_id"] == 10
        assert data["subnet_pool_prefix_human_readable"] == "10.0.0.0"

    def test_yaml(self):
        """YAML dumps parse back to the model's dict."""
        pool = SubnetPool(subnet_pool_id=10)
        assert yaml.safe_load(render_raw_object(pool, "yaml", "SubnetPool")) == pool.to_dict()

    def test_csv_flattens(self):
        """Nested keys are dotted in CSV."""
        out = render_raw_object({"a": {"b": 1}, "c": 2}, "csv", "Thing")
        assert out == "a.b,c\n1,2"

    def test_csv_nested_lists_are_json(self):
        """List cells parse back as JSON."""
        profile = NetworkProfile(
            network_profile_id=1,
            network_profile_vlans=[NetworkProfileVLAN(vlan_id=5, external_connection_ids=[3])],
        )

        out = render_raw_object(profile, "csv", "NetworkProfile")

        record = next(csv.DictReader(io.StringIO(out)))
        vlans = json.loads(record["vlans"])
        assert vlans[0]["vlanID"] == 5
        assert vlans[0]["provisionSubnetGateways"] is False
        assert vlans[0]["extConnectionIDs"] == [3]
        assert record["id"] == "1"

    def test_human_format_rejected(self):
        """Raw dumps need a machine format."""
        with pytest.raises(InvalidArgument):
            render_raw_object({"a": 1}, "", "Thing")

    def test_unknown_format_rejected(self):
        with pytest.raises(InvalidArgument):
            render_raw_object({"a": 1}, "xml", "Thing")


class TestTableSorter:
    """Ranked stable sorting."""

    def test_numeric_sort(self):
        """INT fields compare numerically."""
        rows = [[10, "a"], [9, "b"], [100, "c"]]
        TableSorter(SCHEMA).order_by("ID").sort(rows)
        assert [r[0] for r in rows] == [9, 10, 100]

    def test_ranked_keys(self):
        """Ties on the first key are broken by the next."""
        rows = [[1, "b"], [0, "z"], [1, "a"]]
        TableSorter(SCHEMA).order_by("ID", "LABEL").sort(rows)
        assert rows == [[0, "z"], [1, "a"], [1, "b"]]

    def test_stable(self):
        """Equal rows keep their relative order."""
        rows = [[1, "second"], [1, "first"]]
        TableSorter(SCHEMA).order_by("ID").sort(rows)
        assert rows == [[1, "second"], [1, "first"]]

    def test_none_first(self):
        """Missing values sort first."""
        rows = [[2, "x"], [None, "y"]]
        TableSorter(SCHEMA).order_by("ID").sort(rows)
        assert rows[0][0] is None

    def test_bool_sort(self):
        """false sorts before true."""
        schema = [SchemaField("ON", FieldType.BOOL)]
        rows = [[True], [False]]
        TableSorter(schema).order_by("ON").sort(rows)
        assert rows == [[False], [True]]

    def test_idempotent(self):
        """Sorting a sorted table changes nothing."""
        table = sample_table()
        sorter = TableSorter(table.schema).order_by("NAME")
        once = [list(r) for r in sorter.sort(table.data)]
        assert sorter.sort(table.data) == once

    def test_unknown_field(self):
        """Sorting by a missing field is an error."""
        with pytest.raises(ValueError):
            TableSorter(SCHEMA).order_by("NOPE")
