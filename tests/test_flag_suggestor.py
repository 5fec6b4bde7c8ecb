"""Unit tests for FlagCombinationSuggestor."""

import pytest

from cmdhints.hint import ConflictSeverity, FlagCombinationSuggestor


@pytest.fixture
def suggestor(resolver_en):
    return FlagCombinationSuggestor(resolver_en)


class TestRelatedFlags:
    def test_known_relation(self, suggestor):
        suggestions = suggestor.suggest_related_flags("--think")

        assert [s.flag for s in suggestions] == ["--seq", "--persona-analyzer"]
        seq = suggestions[0]
        assert seq.reason == "complex_analysis"
        assert seq.description == "Structured reasoning for complex analysis"
        assert seq.example == "/analyze src --think --seq"

    def test_untranslated_reason_falls_back_to_key(self, suggestor):
        analyzer = suggestor.suggest_related_flags("think")[1]
        assert analyzer.description == "root_cause_analysis"
        assert analyzer.example is None

    def test_unrelated_flag(self, suggestor):
        assert suggestor.suggest_related_flags("--plan") == []


class TestConflicts:
    def test_detects_pairs_in_table_order(self, suggestor):
        conflicts = suggestor.detect_conflicts(["--no-mcp", "--seq", "--uc", "--verbose"])

        assert [c.flags for c in conflicts] == [("--no-mcp", "--seq"), ("--uc", "--verbose")]
        assert conflicts[0].severity is ConflictSeverity.ERROR
        assert conflicts[0].message == "Conflict between --no-mcp and --seq"
        assert conflicts[1].severity is ConflictSeverity.WARNING
        assert conflicts[1].message == "--uc and --verbose work against each other"

    def test_no_conflicts(self, suggestor):
        assert suggestor.detect_conflicts(["--plan", "--think"]) == []

    def test_conflicts_with(self, suggestor):
        assert suggestor.conflicts_with("--no-mcp") == {"--seq", "--c7", "--magic", "--play"}
        assert suggestor.conflicts_with("plan") == {"--answer-only"}
        assert suggestor.conflicts_with("--think") == set()


class TestSuggestionWithExample:
    def test_translated_example(self, suggestor):
        example = suggestor.suggestion_with_example("--think", "--seq")

        assert example.suggestion == "--seq"
        assert example.example == "/analyze src --think --seq"
        assert example.description == "Structured reasoning for complex analysis"

    def test_generated_example(self, suggestor):
        example = suggestor.suggestion_with_example("--magic", "--c7")

        assert example.example == "--magic --c7"
        assert example.description == "component_patterns"

    def test_unrelated_pair(self, suggestor):
        example = suggestor.suggestion_with_example("--plan", "--seq")
        assert example.description == ""
        assert example.example == "--plan --seq"
