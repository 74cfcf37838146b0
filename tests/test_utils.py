"""Tests for shared utility functions."""

from booking_admin.utils import normalize_email, slugify_label, split_emails


class TestSlugifyLabel:
    def test_lowercases(self):
        assert slugify_label("Company") == "company"

    def test_replaces_spaces(self):
        assert slugify_label("Date of Birth") == "date_of_birth"

    def test_collapses_whitespace_runs(self):
        assert slugify_label("Company   name") == "company_name"

    def test_strips_outer_whitespace(self):
        assert slugify_label("  Notes  ") == "notes"

    def test_tabs_and_newlines(self):
        assert slugify_label("Pet\tname\nhere") == "pet_name_here"


class TestEmails:
    def test_normalize_email(self):
        assert normalize_email("  Owner@Shop.COM ") == "owner@shop.com"

    def test_split_commas_and_semicolons(self):
        assert split_emails("a@x.com, b@x.com; c@x.com") == ["a@x.com", "b@x.com", "c@x.com"]

    def test_split_drops_blanks(self):
        assert split_emails(" , ;") == []
