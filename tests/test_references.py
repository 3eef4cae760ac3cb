"""Tests for linear_linker.references module."""

import pytest

from linear_linker.references import (
    canonical_ticket_id,
    extract_body_ticket_ids,
    extract_branch_ticket_id,
    extract_ticket_ids,
)


class TestExtractBranchTicketId:
    """Tests for extract_branch_ticket_id function."""

    @pytest.mark.parametrize(
        "branch, expected",
        [
            ("eng-952-wow-make-pr-titles-autoupdate-with", "ENG-952"),
            ("eng-952-234-wow234-make-pr-3746-2726", "ENG-952"),
            ("pro-397-something", "PRO-397"),
            ("a-1-x", "A-1"),
        ],
    )
    def test_ticket_at_start(self, branch, expected):
        """Test that a leading ticket is extracted and uppercased."""
        assert extract_branch_ticket_id(branch) == expected

    @pytest.mark.parametrize(
        "branch",
        [
            "something/eng-397-something",
            "feature-eng-397-something",
            "ENG-397-something",
            "eng-397",
            "eng397-something",
            "main",
            "",
        ],
    )
    def test_no_ticket_at_start(self, branch):
        """Test that only a lowercase ticket at the start followed by a hyphen counts."""
        assert extract_branch_ticket_id(branch) is None

    def test_none_branch(self):
        """Test that a missing branch name yields nothing."""
        assert extract_branch_ticket_id(None) is None


class TestExtractBodyTicketIds:
    """Tests for extract_body_ticket_ids function."""

    def test_keywords_any_case(self):
        """Test that Fixes/Resolves match regardless of case."""
        body = "Much wow\nHopefully fixes ENG-123, resolves ENG-454"
        assert extract_body_ticket_ids(body) == ["ENG-123", "ENG-454"]

    def test_ids_are_uppercased(self):
        """Test that lowercase IDs in the body are normalized."""
        assert extract_body_ticket_ids("FIXES eng-7 and Resolves Pro-8") == [
            "ENG-7",
            "PRO-8",
        ]

    def test_ignores_ids_without_keyword(self):
        """Test that bare IDs and numbers are not picked up."""
        body = "Related to ENG-123, see build 3746-2726 and fixes nothing"
        assert extract_body_ticket_ids(body) == []

    def test_non_ascii_letters_not_matched(self):
        """Test that letters outside ASCII never form a team key."""
        assert extract_body_ticket_ids("Fixes \u212aey-12") == []
        assert extract_body_ticket_ids("Resolves \u0131ssue-3") == []
        assert extract_branch_ticket_id("\u212aey-12-slug") is None

    def test_keeps_duplicates(self):
        """Test that each occurrence is reported."""
        assert extract_body_ticket_ids("Fixes ENG-1. Resolves ENG-1.") == [
            "ENG-1",
            "ENG-1",
        ]

    def test_empty_and_none(self):
        """Test that an absent body yields nothing."""
        assert extract_body_ticket_ids(None) == []
        assert extract_body_ticket_ids("") == []


class TestExtractTicketIds:
    """Tests for extract_ticket_ids function."""

    def test_branch_only(self):
        """Test branch reference with no body."""
        assert extract_ticket_ids("eng-952-wow-make-pr-titles-autoupdate-with", None) == [
            "ENG-952"
        ]

    def test_prefix_rule(self):
        """Test that a ticket after a slash is not extracted."""
        assert extract_ticket_ids("something/eng-397-something", None) == []

    def test_body_only(self):
        """Test body references when the branch has none."""
        body = "Much wow\nHopefully fixes ENG-123, resolves ENG-454"
        assert extract_ticket_ids("foo", body) == ["ENG-123", "ENG-454"]

    def test_no_references(self):
        """Test that a body without keywords yields nothing."""
        assert extract_ticket_ids("foo", "This is a story all about how...") == []

    def test_branch_first_then_body(self):
        """Test that the branch ticket comes before body tickets."""
        assert extract_ticket_ids("eng-1-x", "Fixes ENG-2") == ["ENG-1", "ENG-2"]

    def test_deduplicates_branch_and_body(self):
        """Test that a ticket named in branch and body appears once, first."""
        ticket_ids = extract_ticket_ids("eng-1-x", "Fixes ENG-2, resolves eng-1, fixes ENG-2")
        assert ticket_ids == ["ENG-1", "ENG-2"]


class TestCanonicalTicketId:
    """Tests for canonical_ticket_id function."""

    def test_uppercases_team(self):
        """Test team key normalization."""
        assert canonical_ticket_id("eng-12") == "ENG-12"
        assert canonical_ticket_id("ENG-12") == canonical_ticket_id("Eng-12")
