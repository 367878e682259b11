"""Tests for message key -> Python identifier sanitization."""

from __future__ import annotations

import keyword

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from typedmessage.codegen.identifiers import (
    RESERVED_WORDS,
    IdentifierAllocator,
    allocate_identifier,
    ensure_unique_identifier,
    sanitize_identifier,
)
from tests.strategies import message_keys


class TestSanitizeIdentifier:
    """Single-key normalization."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("WELCOME", "WELCOME"),
            ("HELLO-WORLD", "HELLO_WORLD"),
            ("page.title", "page_title"),
            ("price$", "price_"),
            ("with space", "with_space"),
            ("404", "_404"),
            ("1st.place", "_1st_place"),
            ("", "_"),
            ("-", "_"),
            ("class", "_class"),
            ("None", "_None"),
            ("get", "_get"),
            ("items", "_items"),
            ("find_by_key", "_find_by_key"),
            ("__init__", "_m__init__"),
            ("__slots__", "_m__slots__"),
            ("--x", "_m__x"),
            ("_private", "_private"),
            ("café", "caf_"),
        ],
    )
    def test_sanitize(self, key: str, expected: str) -> None:
        """Keys map to safe identifiers."""
        assert sanitize_identifier(key) == expected

    def test_all_keywords_reserved(self) -> None:
        """Every Python keyword is reserved."""
        assert set(keyword.kwlist) <= RESERVED_WORDS

    @given(message_keys())
    def test_result_is_valid_identifier(self, key: str) -> None:
        """Any key yields a non-keyword Python identifier."""
        result = sanitize_identifier(key)
        assert result.isidentifier()
        assert not keyword.iskeyword(result)
        assert result not in RESERVED_WORDS
        assert not result.startswith("__")

    @given(st.text(max_size=20))
    def test_arbitrary_text_is_safe(self, key: str) -> None:
        """Arbitrary Unicode input never produces an invalid identifier."""
        result = sanitize_identifier(key)
        assert result.isidentifier()
        assert result.isascii()


class TestUniqueness:
    """Collision handling within one generation pass."""

    def test_distinct_keys_same_base(self) -> None:
        """HELLO-WORLD and HELLO_WORLD get different identifiers."""
        used: set[str] = set()
        first = allocate_identifier("HELLO-WORLD", used)
        second = allocate_identifier("HELLO_WORLD", used)
        assert first == "HELLO_WORLD"
        assert second == "HELLO_WORLD_1"
        assert used == {"HELLO_WORLD", "HELLO_WORLD_1"}

    def test_suffix_skips_taken_names(self) -> None:
        """Suffixes continue past already used candidates."""
        used = {"A", "A_1", "A_2"}
        assert ensure_unique_identifier("A", used) == "A_3"
        assert "A_3" in used

    def test_unused_base_returned_unchanged(self) -> None:
        """A free identifier is registered as is."""
        used: set[str] = set()
        assert ensure_unique_identifier("B", used) == "B"
        assert used == {"B"}

    @given(st.lists(message_keys(), max_size=15))
    def test_assignment_reproducible(self, keys: list[str]) -> None:
        """The same key sequence always yields the same assignment."""
        allocator = IdentifierAllocator()
        second = [allocator.allocate(k) for k in keys]
        repeat_allocator = IdentifierAllocator()
        third = [repeat_allocator.allocate(k) for k in keys]
        assert second == third

    @given(st.lists(message_keys(), unique=True, max_size=15))
    def test_distinct_keys_distinct_identifiers(self, keys: list[str]) -> None:
        """Identifiers assigned in one pass never repeat."""
        allocator = IdentifierAllocator()
        identifiers = allocator.assign_all(keys)
        assert len(set(identifiers.values())) == len(keys)


class TestIdentifierAllocator:
    """Pass-scoped allocator."""

    def test_reserved_names(self) -> None:
        """Extra reserved identifiers are never assigned."""
        allocator = IdentifierAllocator(reserved=["Messages"])
        assert allocator.allocate("Messages") == "Messages_1"

    def test_assigned_and_contains(self) -> None:
        """The allocator tracks what it handed out."""
        allocator = IdentifierAllocator()
        allocator.assign_all(["a-b", "a_b"])
        assert allocator.assigned == {"a-b": "a_b", "a_b": "a_b_1"}
        assert "a_b_1" in allocator
        assert len(allocator) == 2

    def test_independent_passes(self) -> None:
        """Separate allocators share no state."""
        assert IdentifierAllocator().allocate("X") == "X"
        assert IdentifierAllocator().allocate("X") == "X"


@pytest.mark.fuzz
class TestIdentifierIntensive:
    """Large key sets with many collisions."""

    @given(
        st.lists(
            st.text(alphabet="aA_-. 1", min_size=1, max_size=4),
            unique=True,
            max_size=200,
        )
    )
    @settings(max_examples=500)
    def test_colliding_keys_stay_distinct(self, keys: list[str]) -> None:
        """Keys that sanitize to the same base still get distinct valid identifiers."""
        identifiers = IdentifierAllocator().assign_all(keys)
        assert len(set(identifiers.values())) == len(keys)
        for identifier in identifiers.values():
            assert identifier.isidentifier()
            assert not keyword.iskeyword(identifier)

    @given(st.lists(st.text(), max_size=100))
    @settings(max_examples=500)
    def test_arbitrary_text_keys(self, keys: list[str]) -> None:
        """Any text becomes a usable identifier."""
        allocator = IdentifierAllocator()
        for key in keys:
            assert allocator.allocate(key).isidentifier()
