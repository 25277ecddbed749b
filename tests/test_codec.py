# tests/test_codec.py
"""
Tests for the primitive type codecs (hl7_field_tool.codec).
"""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from hl7_field_tool.codec import decode, encode
from hl7_field_tool.codec.handlers.text import escape, unescape


# ------------------------------------------------------------------------------
# empty values
# ------------------------------------------------------------------------------


@pytest.mark.parametrize("type_code", ["ST", "NM", "SI", "DT", "TM", "DTM", "ZZZ"])
def test_empty_text_decodes_to_none(type_code):
    assert decode("", type_code) is None


@pytest.mark.parametrize("type_code", ["ST", "NM", "SI", "DT", "TM", "DTM"])
def test_none_encodes_to_empty_text(type_code):
    assert encode(None, type_code) == ""


def test_decode_rejects_non_string():
    with pytest.raises(TypeError, match=r"^text must be str"):
        decode(12, "ST")


# ------------------------------------------------------------------------------
# text
# ------------------------------------------------------------------------------


def test_text_escapes_delimiters():
    assert encode("a|b^c&d~e\\f", "ST") == r"a\F\b\S\c\T\d\R\e\E\f"


def test_text_unescapes_delimiters():
    assert decode(r"a\F\b\S\c\T\d\R\e\E\f", "TX") == "a|b^c&d~e\\f"


def test_text_leaves_formatting_escapes_alone():
    assert unescape(r"\H\bold\N\ text") == r"\H\bold\N\ text"


def test_escape_plain_text_unchanged():
    assert escape("Doe, John") == "Doe, John"


def test_unregistered_type_is_text():
    assert decode(r"x\S\y", "ZZZ") == "x^y"
    assert encode("x^y", "ZZZ") == r"x\S\y"


def test_text_encodes_non_strings_via_str():
    assert encode(42, "ST") == "42"


# ------------------------------------------------------------------------------
# numeric
# ------------------------------------------------------------------------------


def test_nm_decodes_to_decimal():
    assert decode("-12.50", "NM") == Decimal("-12.50")


def test_nm_rejects_garbage():
    with pytest.raises(ValueError, match=r"^Invalid NM value"):
        decode("abc", "NM")


def test_nm_rejects_nan():
    with pytest.raises(ValueError, match=r"^Invalid NM value"):
        decode("NaN", "NM")


@pytest.mark.parametrize(
    "value, expected",
    [(Decimal("1.50"), "1.50"), (3, "3"), (2.5, "2.5"), (Decimal("1E+2"), "100")],
)
def test_nm_encodes_numbers(value, expected):
    assert encode(value, "NM") == expected


def test_nm_rejects_bool():
    with pytest.raises(TypeError, match=r"^NM value must be a number"):
        encode(True, "NM")


def test_si_round_trip():
    assert decode("7", "SI") == 7
    assert encode(7, "SI") == "7"


def test_si_rejects_negative_text():
    with pytest.raises(ValueError, match=r"^Invalid SI value"):
        decode("-1", "SI")


def test_si_rejects_negative_value():
    with pytest.raises(ValueError, match=r"^SI value must be non-negative"):
        encode(-1, "SI")


# ------------------------------------------------------------------------------
# date / time
# ------------------------------------------------------------------------------


def test_dt_decodes_full_date():
    assert decode("20200131", "DT") == date(2020, 1, 31)


def test_dt_decodes_partial_date():
    assert decode("202002", "DT") == date(2020, 2, 1)


@pytest.mark.parametrize("text", ["2020013", "20201301", "2020-01-01"])
def test_dt_rejects_invalid(text):
    with pytest.raises(ValueError):
        decode(text, "DT")


def test_dt_encodes_date():
    assert encode(date(1970, 1, 1), "DT") == "19700101"


def test_dt_rejects_wrong_type():
    with pytest.raises(TypeError, match=r"^DT value must be a date"):
        encode(5, "DT")


def test_tm_decodes_partial_time():
    assert decode("1230", "TM") == time(12, 30)


def test_tm_encodes_full_precision():
    assert encode(time(12, 30), "TM") == "123000"


def test_dtm_decodes_seconds():
    assert decode("20200101123045", "DTM") == datetime(2020, 1, 1, 12, 30, 45)


def test_dtm_decodes_fraction_and_offset():
    value = decode("20200101120000.1234+0130", "DTM")
    assert value.microsecond == 123400
    assert value.utcoffset() == timedelta(hours=1, minutes=30)


def test_dtm_encodes_fraction_and_offset():
    tz = timezone(-timedelta(hours=5))
    value = datetime(2020, 1, 1, 12, 0, 0, 500000, tzinfo=tz)
    assert encode(value, "DTM") == "20200101120000.5-0500"


def test_dtm_round_trip_full_precision():
    text = "20231231235959.1234+0000"
    assert encode(decode(text, "DTM"), "DTM") == text


def test_dtm_rejects_garbage():
    with pytest.raises(ValueError, match=r"^Invalid DTM value"):
        decode("yesterday", "DTM")


def test_dtm_rejects_bad_offset():
    with pytest.raises(ValueError, match=r"^Invalid UTC offset"):
        decode("20200101+2500", "DTM")


def test_dtm_encodes_plain_date():
    assert encode(date(2020, 5, 6), "DTM") == "20200506"


def test_non_text_codecs_pass_strings_through():
    # raw text kept by tolerant parsing must serialize unchanged
    assert encode("not-a-date", "DTM") == "not-a-date"
    assert encode("abc", "NM") == "abc"


@pytest.mark.parametrize(
    "type_code, text",
    [
        ("DTM", "2020"),
        ("DTM", "202001"),
        ("DTM", "202001011230"),
        ("DTM", "202001011230-0500"),
        ("DTM", "20200101123000.10"),
        ("TS", "2020010112"),
        ("DT", "2020"),
        ("DT", "202001"),
        ("TM", "12"),
        ("TM", "1230"),
        ("TM", "123000.5+0100"),
    ],
)
def test_reduced_precision_round_trip(type_code, text):
    assert encode(decode(text, type_code), type_code) == text


def test_decoded_values_record_precision():
    value = decode("202001", "DT")
    assert value == date(2020, 1, 1)
    assert value.precision == 6
    stamp = decode("202001011230.12", "DTM")
    assert stamp == datetime(2020, 1, 1, 12, 30, 0, 120000)
    assert (stamp.precision, stamp.fraction_digits) == (12, 2)


def test_plain_datetime_encodes_to_seconds():
    assert encode(datetime(2020, 1, 1, 12, 30), "DTM") == "20200101123000"


@pytest.mark.parametrize(
    "text",
    [r"A\H\B", r"x\N\y", r"line\.br\next", "\\.sp2\\", "\\X0D0A\\", "\\Zsite\\"],
)
def test_formatting_escapes_survive_round_trip(text):
    assert encode(decode(text, "FT"), "FT") == text


def test_escape_keeps_formatting_but_escapes_stray_backslash():
    assert escape(r"\H\a\b") == r"\H\a\E\b"


@pytest.mark.parametrize(
    "text, expected", [("+5", "5"), ("1e3", "1000"), (" 7 ", "7"), ("2.50", "2.50")]
)
def test_nm_normalizes_sign_and_exponent(text, expected):
    assert encode(decode(text, "NM"), "NM") == expected
