from __future__ import annotations

from cms_management.domain.schema import extract_field_validations


def test_string_validations_are_grouped() -> None:
    result = extract_field_validations(
        {
            "type": "STRING",
            "validations": {
                "characters": {"min": 2},
                "notMatches": {"regex": "admin", "errorMessage": "reserved"},
                "listItemCount": None,
            },
        }
    )

    assert result == {
        "String": {
            "characters": {"min": 2},
            "notMatches": {"regex": "admin", "errorMessage": "reserved"},
        }
    }


def test_number_validations_keep_only_number_rules() -> None:
    result = extract_field_validations(
        {
            "type": "FLOAT",
            "validations": {"range": {"min": 0.5}, "characters": {"max": 3}},
        }
    )

    assert result == {"Float": {"range": {"min": 0.5}}}


def test_lowercase_type_is_accepted() -> None:
    result = extract_field_validations({"type": "int", "validations": {"range": {"max": 9}}})

    assert result == {"Int": {"range": {"max": 9}}}


def test_canonical_validations_pass_through() -> None:
    canonical = {"Int": {"range": {"min": 1}}}

    result = extract_field_validations({"type": "STRING", "validations": canonical})

    assert result == canonical
    assert result is not canonical


def test_validations_without_category_pass_through() -> None:
    shorthand = {"range": {"min": 1}}

    assert extract_field_validations({"validations": shorthand}) == shorthand
    assert extract_field_validations({"type": "BOOLEAN", "validations": shorthand}) == shorthand
