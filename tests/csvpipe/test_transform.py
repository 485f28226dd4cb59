import copy

import pytest

from swimport.csvpipe.transform import (
    DEFAULT_CUSTOMER,
    CustomerTransformer,
    join_columns,
    resolve_country,
)


MAPPING = {
    "email": ["Email"],
    "billing.name": ["FirstName", "LastName"],
    "billing.country": ["Country"],
}


def _transformer(**kw):
    return CustomerTransformer(MAPPING, {"Germany": 3, "Austria": 23}, **kw)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", 42),
        (" 42 ", 42),
        ("7.0", 7),
        ("9007199254740993", 9007199254740993),
        ("1e400", None),
        ("-1e-400", 0),
        ("Germany", 3),
        (" Germany ", 3),
        ("germany", None),
        ("Atlantis", None),
        (None, None),
    ],
)
def test_resolve_country(value, expected):
    assert resolve_country(value, {"Germany": 3, "42": 99}) == expected


def test_join_columns_drops_empty_and_missing():
    row = {"First": "Jo", "Middle": "", "Last": "Doe"}
    assert join_columns(row, ["First", "Middle", "Nope", "Last"]) == "Jo Doe"
    assert join_columns(row, ["Middle", "Nope"]) == ""
    assert join_columns(row, []) == ""


def test_transform_full_row():
    row = {"Email": "a@b.com", "FirstName": "Jo", "LastName": "Doe", "Country": "Germany"}
    rec = _transformer().transform(row)
    assert rec == {
        "email": "a@b.com",
        "salutation": "mr",
        "billing": {"name": "Jo Doe", "country": 3, "salutation": "mr"},
    }


def test_numeric_country_is_used_as_id():
    row = {"Email": "a@b.com", "Country": "42"}
    assert _transformer().transform(row)["billing"]["country"] == 42


def test_unknown_country_resolves_to_none():
    row = {"Email": "a@b.com", "Country": "Atlantis"}
    rec = _transformer().transform(row)
    assert "country" in rec["billing"]
    assert rec["billing"]["country"] is None


def test_empty_targets_are_left_out():
    row = {"Email": "a@b.com", "FirstName": "", "LastName": "", "Country": ""}
    rec = _transformer().transform(row)
    assert rec == {"email": "a@b.com", "salutation": "mr", "billing": {"salutation": "mr"}}


def test_missing_email_column_gives_record_without_email():
    rec = _transformer().transform({"FirstName": "Jo"})
    assert "email" not in rec
    assert rec["billing"]["name"] == "Jo"


def test_defaults_do_not_clobber_country():
    t = CustomerTransformer({"billing.country": ["Country"]}, {"Germany": 3})
    rec = t.transform({"Country": "Germany"})
    assert rec == {"salutation": "mr", "billing": {"salutation": "mr", "country": 3}}


def test_custom_defaults():
    t = _transformer(defaults={"salutation": "ms", "billing": {"salutation": "ms"}, "active": True})
    rec = t.transform({"Email": "a@b.com"})
    assert rec["salutation"] == "ms"
    assert rec["billing"] == {"salutation": "ms"}
    assert rec["active"] is True


def test_group_key_overrides_mapped_value():
    t = CustomerTransformer({"email": ["Email"], "groupKey": ["Group"]})
    row = {"Email": "a@b.com", "Group": "EK"}
    assert t.transform(row)["groupKey"] == "EK"
    assert t.transform(row, group_key="H")["groupKey"] == "H"
    assert t.transform(row, group_key="")["groupKey"] == "EK"


def test_transform_is_repeatable_and_does_not_mutate():
    t = _transformer()
    row = {"Email": "a@b.com", "FirstName": "Jo", "LastName": "Doe", "Country": "Austria"}
    row_before = copy.deepcopy(row)
    defaults_before = copy.deepcopy(DEFAULT_CUSTOMER)

    first = t.transform(row, group_key="EK")
    second = t.transform(row, group_key="EK")

    assert first == second
    assert first is not second
    first["billing"]["salutation"] = "changed"
    assert second["billing"]["salutation"] == "mr"
    assert row == row_before
    assert DEFAULT_CUSTOMER == defaults_before


def test_huge_numeric_token_falls_back_to_name_lookup():
    assert resolve_country("1e400", {"1e400": 5}) == 5
    assert resolve_country("1" * 40, {}) is None


def test_zero_cells_count_as_empty():
    row = {"Email": "a@b.com", "FirstName": "0", "LastName": "Doe", "Country": "0"}
    rec = _transformer().transform(row)
    assert rec["billing"] == {"name": "Doe", "salutation": "mr"}
