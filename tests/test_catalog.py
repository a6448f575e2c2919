"""Catalog loader: header, row parsing, and all-or-nothing failure."""

import asyncio

import pytest

from startopology.catalog import FormatError, load_catalog, parse_catalog, read_catalog
from startopology.models import StarRecord

from conftest import SAMPLE_CATALOG


def test_parses_mixed_tab_and_space_delimiters():
    catalog = parse_catalog(SAMPLE_CATALOG)

    assert len(catalog) == 3
    assert catalog[1].record == StarRecord(
        name="Vega",
        number=2,
        ra_hours=18,
        ra_minutes=36,
        ra_seconds=56.3,
        dec_degrees=38,
        dec_minutes=47,
        dec_seconds=1.3,
        distance_ly=25,
    )
    assert catalog[0].record.dec_degrees == -16
    assert [s.name for s in catalog] == ["Sirius", "Vega", "Altair"]


def test_trailing_whitespace_and_extra_lines_are_ignored():
    text = "1\nSol\t0 0 0.0 0 0 0.0 1 7 \t\nnot a star\n"
    catalog = parse_catalog(text)
    assert len(catalog) == 1
    assert catalog[0].number == 7


@pytest.mark.parametrize("header", ["three", "", "2.5", "0", "-1"])
def test_bad_header_is_format_error(header):
    with pytest.raises(FormatError) as excinfo:
        parse_catalog(f"{header}\nSol\t0 0 0.0 0 0 0.0 1 1\n")
    assert excinfo.value.field == "count"
    assert excinfo.value.line == 1


def test_empty_text_is_format_error():
    with pytest.raises(FormatError):
        parse_catalog("")


@pytest.mark.parametrize(
    "row,field",
    [
        ("Sol\tx 0 0.0 0 0 0.0 1 1", "ra_hours"),
        ("Sol\t0 1.5 0.0 0 0 0.0 1 1", "ra_minutes"),
        ("Sol\t0 0 abc 0 0 0.0 1 1", "ra_seconds"),
        ("Sol\t0 0 0.0 0 0 nan 1 1", "dec_seconds"),
        ("Sol\t0 0 0.0 0 0 0.0 4.2 1", "distance_ly"),
        ("Sol\t0 0 0.0 0 0 0.0 1 #1", "number"),
    ],
)
def test_invalid_field_names_the_field(row, field):
    with pytest.raises(FormatError) as excinfo:
        parse_catalog(f"1\n{row}\n")
    assert excinfo.value.field == field
    assert excinfo.value.line == 2
    assert field in str(excinfo.value)


def test_missing_column_names_first_missing_field():
    with pytest.raises(FormatError) as excinfo:
        parse_catalog("1\nSol\t0 0 0.0 0 0 0.0 1\n")
    assert excinfo.value.field == "number"
    assert excinfo.value.value is None


def test_one_bad_row_fails_whole_catalog():
    text = "2\nSol\t0 0 0.0 0 0 0.0 1 1\nBad\t0 0 0.0 0 zero 0.0 1 2\n"
    with pytest.raises(FormatError) as excinfo:
        parse_catalog(text)
    assert excinfo.value.line == 3


def test_fewer_rows_than_declared():
    with pytest.raises(FormatError) as excinfo:
        parse_catalog("3\nSol\t0 0 0.0 0 0 0.0 1 1\n")
    assert excinfo.value.field == "record"


def test_read_catalog_is_awaitable(sample_path):
    catalog = asyncio.run(read_catalog(sample_path))
    assert len(catalog) == 3


def test_load_catalog_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_catalog(tmp_path / "nope.txt")


@pytest.mark.parametrize(
    "row,field",
    [
        ("Sol\t1_0 0 0.0 0 0 0.0 1 1", "ra_hours"),
        ("Sol\t0 0 0.0 0 ٣ 0.0 1 1", "dec_minutes"),
        ("Sol\t0 0 1_0.5 0 0 0.0 1 1", "ra_seconds"),
        ("Sol\t0 0 0.0 0 0 infinity 1 1", "dec_seconds"),
    ],
)
def test_rejects_non_ascii_and_underscore_numbers(row, field):
    with pytest.raises(FormatError) as excinfo:
        parse_catalog(f"1\n{row}\n")
    assert excinfo.value.field == field


def test_accepts_signed_and_exponent_numbers():
    catalog = parse_catalog("1\nSol\t+1 0 .5 -2 0 1e1 1 1\n")
    record = catalog[0].record
    assert record.ra_hours == 1
    assert record.ra_seconds == 0.5
    assert record.dec_degrees == -2
    assert record.dec_seconds == 10.0


def test_header_rejects_underscore_count():
    with pytest.raises(FormatError) as excinfo:
        parse_catalog("1_0\nSol\t0 0 0.0 0 0 0.0 1 1\n")
    assert excinfo.value.field == "count"


def test_name_ends_at_first_space():
    with pytest.raises(FormatError) as excinfo:
        parse_catalog("1\nAlpha Centauri\t14 39 36.5 -60 50 2.3 4 1\n")
    assert excinfo.value.field == "ra_hours"
    assert excinfo.value.value == "Centauri"

    catalog = parse_catalog("1\nAlpha_Centauri\t14 39 36.5 -60 50 2.3 4 1\n")
    assert catalog[0].name == "Alpha_Centauri"


def test_utf8_byte_order_mark_is_skipped(tmp_path):
    path = tmp_path / "bom.txt"
    path.write_bytes(b"\xef\xbb\xbf1\nSol\t0 0 0.0 0 0 0.0 1 1\n")
    catalog = load_catalog(path)
    assert len(catalog) == 1
    assert catalog[0].name == "Sol"


def test_invalid_utf8_is_format_error(tmp_path):
    path = tmp_path / "cp1251.txt"
    path.write_bytes("1\nСолнце\t0 0 0.0 0 0 0.0 1 1\n".encode("cp1251"))
    with pytest.raises(FormatError) as excinfo:
        load_catalog(path)
    assert excinfo.value.field == "encoding"
    assert excinfo.value.line == 2
