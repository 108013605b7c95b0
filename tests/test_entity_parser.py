"""Test entity extraction (emails, phones, handles, name candidates)."""

import pytest
from pydantic import ValidationError

from scout.core.normalize import only_digits, unique
from scout.parsers import extract_entities, extract_name_candidates
from scout.parsers.entity_parser import normalize_handle, normalize_phone
from scout.schemas import EntitySet


class TestNormalizeHelpers:
    """Test the shared normalization helpers."""

    def test_only_digits(self):
        """Test stripping non-digits, including from None."""
        assert only_digits("+1 (212) 555-1234") == "12125551234"
        assert only_digits("") == ""
        assert only_digits(None) == ""

    def test_unique_keeps_first_seen_order(self):
        """Test that unique drops blanks and repeats in order."""
        assert unique(["b", "a", "b", "", None, "c", "a"]) == ["b", "a", "c"]

    def test_unique_handles_none(self):
        """Test that unique accepts None."""
        assert unique(None) == []


class TestEmails:
    """Test email extraction."""

    def test_scenario_email_and_handle(self):
        """Emails and handles come out of the same sentence independently."""
        entities = extract_entities("Contact Jane at jane.doe@example.com or @janed")

        assert entities.emails == ("jane.doe@example.com",)
        assert entities.handles == ("@janed",)
        assert entities.phones == ()
        # A lone capitalized word is never a name, and this line holds an @-token
        assert "Jane" not in entities.names
        assert entities.names == ()

    def test_emails_are_lowercased_and_deduplicated(self):
        """Test that emails differing only in case collapse."""
        entities = extract_entities("a.b@Example.COM, A.B@example.com and a.b@example.com")
        assert entities.emails == ("a.b@example.com",)

    def test_domain_requires_a_dot(self):
        """Test that a bare host is not an email domain."""
        entities = extract_entities("mail root@localhost please")
        assert entities.emails == ()

    def test_multiple_emails_keep_order(self):
        """Test that emails keep their order of appearance."""
        entities = extract_entities("first z@b.org then a@c.net")
        assert entities.emails == ("z@b.org", "a@c.net")


class TestPhones:
    """Test phone extraction and normalization."""

    def test_scenario_international_phone(self):
        """Test that a leading + survives normalization."""
        entities = extract_entities("Call +1 212-555-1234 now")
        assert entities.phones == ("+12125551234",)

    def test_parenthesized_area_code(self):
        """Test a parenthesized area code."""
        entities = extract_entities("backup (212) 555 1234")
        assert entities.phones == ("2125551234",)

    def test_double_zero_prefix_keeps_digits_without_plus(self):
        """Test that a 00 prefix stays as digits."""
        entities = extract_entities("ring 0044 20 7946 0321")
        assert entities.phones == ("00442079460321",)

    def test_same_number_in_different_formats_is_deduplicated(self):
        """Test that separators do not create duplicates."""
        entities = extract_entities("212-555-1234 or 212.555.1234")
        assert entities.phones == ("2125551234",)

    def test_too_many_digits_rejected(self):
        """Test that runs over 16 digits are dropped."""
        entities = extract_entities("Account +999 (1234) 5678 9012345678")
        assert entities.phones == ()

    def test_short_numbers_ignored(self):
        """Test that short digit runs are not phones."""
        entities = extract_entities("Room 12345, floor 3")
        assert entities.phones == ()

    def test_normalize_phone_bounds(self):
        """Test the 7 to 16 digit bounds."""
        assert normalize_phone("123456") is None
        assert normalize_phone("1234567") == "1234567"
        assert normalize_phone("1" * 16) == "1" * 16
        assert normalize_phone("1" * 17) is None
        assert normalize_phone(" +44 20") is None
        assert normalize_phone(" +44 2079 4603") == "+4420794603"


class TestHandles:
    """Test social handle extraction."""

    def test_handle_at_start_of_text(self):
        """Test a handle at the very start of the text."""
        entities = extract_entities("@start_here is active")
        assert entities.handles == ("@start_here",)

    def test_email_local_part_is_not_a_handle(self):
        """Test that emails are removed before handles are matched."""
        entities = extract_entities("ping @janed@example.com")
        assert entities.emails == ("janed@example.com",)
        assert entities.handles == ()

    def test_trailing_dot_is_trimmed(self):
        """Test that sentence punctuation is not part of a handle."""
        entities = extract_entities("follow @jane_doe.")
        assert entities.handles == ("@jane_doe",)

    def test_short_handles_ignored(self):
        """Test the three character minimum."""
        entities = extract_entities("hi @ab and @abc")
        assert entities.handles == ("@abc",)

    def test_handle_needs_leading_whitespace(self):
        """Test that an @ inside a word is not a handle."""
        entities = extract_entities("price@home")
        assert entities.handles == ()

    def test_normalize_handle(self):
        """Test handle normalization directly."""
        assert normalize_handle("abc...") == "@abc"
        assert normalize_handle("ab.") is None
        assert normalize_handle("") is None


class TestNameCandidates:
    """Test the conservative name heuristic."""

    def test_two_capitalized_words(self):
        """Test the basic two-word name."""
        assert extract_name_candidates("Witness saw Jane Doe near the harbour") == ["Jane Doe"]

    def test_three_word_run_emits_both_candidates(self):
        """Test that a third word adds a second candidate."""
        assert extract_name_candidates("Maria Elena Costa arrived") == [
            "Maria Elena",
            "Maria Elena Costa",
        ]

    def test_lone_capitalized_word_is_not_a_name(self):
        """Test that one capitalized word is not enough."""
        assert extract_name_candidates("please ask Jane about it") == []

    def test_stop_words_break_runs(self):
        """Test that stop words never count as name tokens."""
        assert extract_name_candidates("wired to Bank Of America") == []
        assert extract_name_candidates("The Office") == []

    def test_lines_with_urls_or_handles_are_skipped(self):
        """Test that lines with links or @-tokens are skipped."""
        assert extract_name_candidates("See https://example.com John Smith") == []
        assert extract_name_candidates("John Smith is @jsmith") == []

    def test_unicode_letters(self):
        """Test accented capitalized words."""
        assert extract_name_candidates("le témoin José Álvarez a appelé") == ["José Álvarez"]

    def test_hyphen_and_apostrophe(self):
        """Test hyphenated and apostrophe names."""
        assert extract_name_candidates("met Anne-Marie O'Neil yesterday") == [
            "Anne-Marie O'Neil"
        ]

    def test_word_with_trailing_dot_is_not_capitalized_token(self):
        """Test that an abbreviation breaks a run."""
        assert extract_name_candidates("ask Dr. Watson") == []

    def test_name_ending_a_sentence_is_not_a_candidate(self):
        """The final word keeps its full stop, so it fails the capitalized-token check."""
        assert extract_name_candidates("she also goes by Elena Costa.") == []
        assert extract_name_candidates("she also goes by Elena Costa now.") == ["Elena Costa"]

    def test_carriage_returns_split_lines(self):
        """Test that a bare carriage return ends a line."""
        assert extract_name_candidates("Jane Doe\rJohn Smith") == ["Jane Doe", "John Smith"]

    def test_only_first_500_lines_are_scanned(self):
        """Test the line limit."""
        assert extract_name_candidates("\n" * 500 + "Jane Doe") == []
        assert extract_name_candidates("\n" * 499 + "Jane Doe") == ["Jane Doe"]

    def test_candidates_capped_at_20(self):
        """Test the candidate limit."""
        letters = "ABCDEFGHIJKLMNOPQRSTUVWXY"
        text = "\n".join(f"saw Name{c} Family{c} today" for c in letters)

        names = extract_name_candidates(text)

        assert len(names) == 20
        assert names[0] == "NameA FamilyA"
        assert names[-1] == "NameT FamilyT"

    def test_duplicates_removed(self):
        """Test that repeated names appear once."""
        assert extract_name_candidates("Jane Doe\nagain Jane Doe") == ["Jane Doe"]


class TestExtractEntities:
    """Test the combined extraction entry point."""

    def test_sample_tip(self, sample_tip_text):
        """Test every category on a realistic tip."""
        entities = extract_entities(sample_tip_text)

        assert entities.emails == ("maria.costa@example.org",)
        assert entities.handles == ("@mecosta_99",)
        assert entities.phones == ("+442079460321", "2125551234")
        assert entities.names == (
            "Maria Elena",
            "Maria Elena Costa",
            "Elena Costa",
            "Northwind Trading",
        )

    def test_empty_and_none_input(self):
        """Test that empty input yields an empty set."""
        assert extract_entities("") == EntitySet()
        assert extract_entities(None).is_empty

    def test_non_string_input_is_stringified(self):
        """Test that non-string input is converted to text."""
        entities = extract_entities(2125551234)
        assert entities.phones == ("2125551234",)

    def test_garbled_input_does_not_raise(self):
        """Test that odd input never raises."""
        entities = extract_entities("@@@ ... +++ (((( \x00� @ @. a@ @b")
        assert isinstance(entities, EntitySet)

    def test_no_category_has_repeats(self, sample_tip_text):
        """Test that repeated text adds no duplicates."""
        entities = extract_entities(sample_tip_text * 3)
        for values in entities.to_dict().values():
            assert len(values) == len(set(values))

    def test_result_is_immutable(self):
        """Test that the returned set cannot be modified."""
        entities = extract_entities("x@y.com")
        with pytest.raises(ValidationError):
            entities.emails = ()
