import logging
from datetime import datetime

import pytest

from common.models import (
    Gender,
    GenderProfileField,
    NumberProfileField,
    TextProfileField,
    UnknownProfileField,
    User,
)
from common.profile_fields import (
    ProfileFieldType,
    UnknownVariantError,
    count_field_names,
    filter_fields_by_name,
    log_field_names,
    resolve_field,
    validate_field_names,
)


def make_user(user_id, fields):
    now = datetime.now()
    return User(
        id=user_id,
        name=f"user-{user_id}",
        email=f"user-{user_id}@example.com",
        created_at=now,
        updated_at=now,
        profile_fields=fields,
    )


def test_resolve_field_known_variants():
    assert resolve_field(TextProfileField(name="趣味", value="読書")) == (
        ProfileFieldType.TEXT,
        "趣味",
    )
    assert resolve_field(NumberProfileField(name="年齢", value=30)) == (
        ProfileFieldType.NUMBER,
        "年齢",
    )
    assert resolve_field(GenderProfileField(name="性別", value=Gender.OTHER)) == (
        ProfileFieldType.GENDER,
        "性別",
    )


def test_resolve_field_unknown_variant():
    with pytest.raises(UnknownVariantError) as exc_info:
        resolve_field(UnknownProfileField(field_type="date"))
    assert exc_info.value.field_type == "date"

    with pytest.raises(UnknownVariantError):
        resolve_field({"field_type": "text", "name": "raw dict"})


def test_validate_empty_list():
    assert validate_field_names([]) == []


def test_validate_unique_names():
    fields = [
        TextProfileField(name="Hobby", value="reading"),
        NumberProfileField(name="Age", value=30),
    ]
    assert validate_field_names(fields) == []


def test_validate_duplicate_after_normalization():
    fields = [
        TextProfileField(name="Hobby", value="reading"),
        TextProfileField(name=" hobby ", value="chess"),
    ]
    errors = validate_field_names(fields)
    assert len(errors) == 1
    assert errors[0].startswith("field[1]:")
    assert "duplicated" in errors[0]


def test_validate_blank_name():
    errors = validate_field_names([TextProfileField(name="   ", value="x")])
    assert errors == ["field[0]: name is empty"]


def test_validate_collects_every_error():
    fields = [
        TextProfileField(name="Job", value="engineer"),
        UnknownProfileField(field_type="date"),
        TextProfileField(name="", value="x"),
        NumberProfileField(name="JOB", value=1),
        GenderProfileField(name="Gender", value=Gender.MALE),
    ]
    errors = validate_field_names(fields)
    assert [error.split(":")[0] for error in errors] == [
        "field[1]",
        "field[2]",
        "field[3]",
    ]


def test_validate_has_no_state_between_calls():
    fields = [TextProfileField(name="Hobby", value="reading")]
    assert validate_field_names(fields) == []
    assert validate_field_names(fields) == []


def test_filter_by_name_is_exact_and_ordered():
    first = TextProfileField(name="趣味", value="読書")
    second = NumberProfileField(name="趣味", value=2)
    fields = [
        first,
        TextProfileField(name="職業", value="エンジニア"),
        UnknownProfileField(field_type="date"),
        second,
        TextProfileField(name=" 趣味", value="映画"),
    ]
    assert filter_fields_by_name(fields, "趣味") == [first, second]


def test_filter_by_name_is_case_sensitive():
    fields = [TextProfileField(name="Hobby", value="reading")]
    assert filter_fields_by_name(fields, "hobby") == []


def test_count_field_names():
    users = [
        make_user(1, [TextProfileField(name="趣味", value="読書"), NumberProfileField(name="年齢", value=30)]),
        make_user(2, [TextProfileField(name="趣味", value="映画"), UnknownProfileField(field_type="date")]),
        make_user(3, None),
    ]
    assert count_field_names(users) == {"趣味": 2, "年齢": 1}


def test_log_field_names(caplog):
    fields = [
        TextProfileField(name="Hobby", value="reading"),
        UnknownProfileField(field_type="date"),
    ]
    with caplog.at_level(logging.INFO, logger="common.profile_fields"):
        log_field_names(fields)
    assert "field[0]: type=text, name=Hobby" in caplog.text
    assert "field[1]: error" in caplog.text
