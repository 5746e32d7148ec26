from decimal import Decimal

import pytest

from passbook.quality import QualityDetail, has_usable_rate, parse_quality_spec, resolve_rate


def test_list_of_objects_uses_first_rate():
    details = parse_quality_spec(
        [
            {"quality_name": "Poplin", "rate": 5, "grey_mtr": 60},
            {"quality_name": "Cambric", "rate": 9, "grey_mtr": 40},
        ]
    )
    assert details == [
        QualityDetail(quality_name="Poplin", rate=Decimal("5")),
        QualityDetail(quality_name="Cambric", rate=Decimal("9")),
    ]
    assert resolve_rate(details) == Decimal("5")
    assert has_usable_rate(details)


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "not json",
        [],
        {"quality_name": "Poplin", "rate": 5},  # bare object, not a list
        42,
    ],
)
def test_unusable_specs_resolve_to_zero(raw):
    details = parse_quality_spec(raw)
    assert resolve_rate(details) == Decimal("0")
    assert not has_usable_rate(details)


def test_json_string_is_decoded_without_float_rounding():
    details = parse_quality_spec('[{"qualityName": "Rayon", "rate": 12.35}]')
    assert details == [QualityDetail(quality_name="Rayon", rate=Decimal("12.35"))]


def test_bytes_are_decoded():
    assert resolve_rate(parse_quality_spec(b'[{"rate": "7.5"}]')) == Decimal("7.5")


@pytest.mark.parametrize("rate", [None, "abc", "", -3, float("nan"), True])
def test_first_rate_not_numeric_resolves_to_zero(rate):
    details = parse_quality_spec([{"quality_name": "X", "rate": rate}, {"rate": 8}])
    assert details[0].rate is None
    assert resolve_rate(details) == Decimal("0")


def test_non_object_elements_keep_position():
    details = parse_quality_spec(["junk", {"rate": 4}])
    assert details == [QualityDetail(), QualityDetail(rate=Decimal("4"))]
    # Only the first element prices a challan.
    assert resolve_rate(details) == Decimal("0")


def test_numeric_string_rate_with_thousands_separator():
    assert resolve_rate(parse_quality_spec([{"rate": "1,250.50"}])) == Decimal("1250.50")
