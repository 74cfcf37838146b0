"""Tests for the customer intake field schema."""

import pytest

from booking_admin.schemas.customer_schema import FieldType
from booking_admin.service.customer_fields import (
    FieldStatus,
    add_field,
    default_customer_fields,
    move_field,
    remove_field,
    toggle_setting,
    update_field,
    visible_fields,
)


class TestDefaults:
    def test_four_builtin_fields(self, fields):
        assert [f.name for f in fields] == ["firstName", "lastName", "phone", "email"]
        assert [f.id for f in fields] == [1, 2, 3, 4]

    def test_builtins_required_and_visible(self, fields):
        assert all(f.required and f.visible for f in fields)

    def test_builtin_types(self, fields):
        assert fields[2].type == FieldType.TEL
        assert fields[3].type == FieldType.EMAIL

    def test_fresh_list_each_call(self):
        assert default_customer_fields() is not default_customer_fields()


class TestAddField:
    def test_adds_optional_visible_field(self, fields):
        result = add_field(fields, "Company Name")
        assert result.ok
        assert result.field.name == "company_name"
        assert result.field.id == 5
        assert result.field.required is False
        assert result.field.visible is True
        assert len(result.fields) == 5

    def test_original_list_untouched(self, fields):
        add_field(fields, "Company")
        assert len(fields) == 4

    def test_type_is_kept(self, fields):
        result = add_field(fields, "Date of birth", "date")
        assert result.field.type == FieldType.DATE

    def test_blank_label_rejected(self, fields):
        result = add_field(fields, "   ")
        assert result.status == FieldStatus.REJECTED
        assert result.error.code == "empty_label"
        assert result.fields == fields

    def test_invalid_type_rejected(self, fields):
        result = add_field(fields, "Shoe size", "slider")
        assert result.status == FieldStatus.REJECTED
        assert result.error.code == "invalid_type"
        assert result.fields == fields

    def test_label_collision_case_insensitive(self, fields):
        result = add_field(fields, "first NAME")
        assert result.status == FieldStatus.COLLISION
        assert result.existing.id == 1
        assert result.fields == fields

    def test_name_clash_gets_suffix(self, fields):
        first = add_field(fields, "Notes").fields
        renamed = update_field(first, 5, "Old notes", "textarea").fields
        result = add_field(renamed, "notes")
        assert result.ok
        assert result.field.name == "notes_2"

    def test_ids_never_reused_after_middle_removal(self, fields):
        trimmed = remove_field(fields, 2)
        result = add_field(trimmed, "Company")
        assert result.field.id == 5


class TestUpdateField:
    def test_changes_label_and_type(self, fields):
        result = update_field(fields, 3, "Mobile", "tel")
        assert result.ok
        assert result.field.label == "Mobile"
        assert result.fields[2].label == "Mobile"

    def test_name_is_stable(self, fields):
        result = update_field(fields, 3, "Mobile", "tel")
        assert result.field.name == "phone"

    def test_same_label_on_same_field_allowed(self, fields):
        assert update_field(fields, 1, "First Name", "text").ok

    def test_collision_with_other_field(self, fields):
        result = update_field(fields, 1, "email", "text")
        assert result.status == FieldStatus.COLLISION
        assert result.existing.id == 4

    def test_unknown_id_is_noop(self, fields):
        result = update_field(fields, 99, "Anything", "text")
        assert result.ok
        assert result.field is None
        assert result.fields == fields

    def test_blank_label_rejected(self, fields):
        assert update_field(fields, 1, "", "text").status == FieldStatus.REJECTED


class TestToggleSetting:
    def test_toggle_visible_twice_is_identity(self, fields):
        once = toggle_setting(fields, 1, "visible")
        assert once[0].visible is False
        assert toggle_setting(once, 1, "visible") == fields

    def test_toggle_required(self, fields):
        toggled = toggle_setting(fields, 4, "required")
        assert toggled[3].required is False
        assert toggled[0].required is True

    def test_unknown_setting(self, fields):
        with pytest.raises(ValueError, match="Unknown field setting"):
            toggle_setting(fields, 1, "label")


class TestRemoveAndMove:
    def test_remove_builtin(self, fields):
        assert [f.id for f in remove_field(fields, 1)] == [2, 3, 4]

    def test_remove_unknown_id(self, fields):
        assert remove_field(fields, 42) == fields

    def test_move_to_front(self, fields):
        assert [f.id for f in move_field(fields, 4, 0)] == [4, 1, 2, 3]

    def test_move_index_clamped(self, fields):
        assert [f.id for f in move_field(fields, 1, 99)] == [2, 3, 4, 1]
        assert [f.id for f in move_field(fields, 4, -5)] == [4, 1, 2, 3]

    def test_move_unknown_id(self, fields):
        assert move_field(fields, 42, 0) == fields

    def test_visible_fields(self, fields):
        hidden = toggle_setting(fields, 2, "visible")
        assert [f.id for f in visible_fields(hidden)] == [1, 3, 4]
