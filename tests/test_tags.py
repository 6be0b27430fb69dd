"""
Tests for models/tags.py.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from vault_notes.models.tags import Tags, clean_tag


class TestCleanTag:
    def test_strips_hash_and_whitespace(self):
        assert clean_tag("  #work ") == "work"

    def test_only_one_hash_removed(self):
        assert clean_tag("##work") == "#work"

    def test_plain(self):
        assert clean_tag("work") == "work"


class TestTags:
    def test_comma_separated_string(self):
        assert Tags("work, urgent").to_list() == ["work", "urgent"]

    def test_hash_separated_string(self):
        assert Tags("#work #urgent").to_list() == ["work", "urgent"]

    def test_list_input_is_cleaned(self):
        assert Tags(["#work", "  urgent "]).to_list() == ["work", "urgent"]

    def test_none_and_empty(self):
        assert Tags().is_empty()
        assert Tags("").is_empty()
        assert Tags([]).is_empty()

    def test_number_becomes_tag(self):
        assert Tags(2025).to_list() == ["2025"]

    def test_no_duplicates(self):
        tags = Tags(["work", "#work"])
        tags.add(" work")
        assert tags.to_list() == ["work"]

    def test_insertion_order_kept(self):
        tags = Tags("b")
        tags.add("a")
        tags.add("c")
        assert tags.to_list() == ["b", "a", "c"]

    def test_remove_normalizes(self):
        tags = Tags("work, urgent")
        tags.remove("#work")
        assert tags.to_list() == ["urgent"]

    def test_remove_missing_is_noop(self):
        tags = Tags("work")
        tags.remove("other")
        assert tags.to_list() == ["work"]

    def test_has_and_contains(self):
        tags = Tags("work")
        assert tags.has("#work")
        assert "work" in tags
        assert "home" not in tags
        assert 3 not in tags

    def test_inline_string(self):
        assert Tags("work, urgent").to_inline_string() == "#work #urgent"
        assert Tags("a b").to_inline_string(", ") == "#a, #b"
        assert Tags().to_inline_string() == ""

    def test_to_list_is_a_copy(self):
        tags = Tags("work")
        tags.to_list().append("other")
        assert len(tags) == 1

    def test_equality(self):
        assert Tags("a, b") == Tags(["#a", "b"])
        assert Tags("a, b") != Tags("b, a")

    def test_list_items_split_on_separators(self):
        assert Tags(["a b", "c,d", '"e"']).to_list() == ["a", "b", "c", "d", "e"]

    def test_add_rejects_separators(self):
        tags = Tags()
        for bad in ("a b", "a,b", 'a"b'):
            with pytest.raises(ValueError):
                tags.add(bad)
        assert tags.is_empty()
