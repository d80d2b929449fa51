"""Tests for individual detection rules."""

from refinelab.analyzer import rules
from refinelab.analyzer.rules import SuggestionSink
from refinelab.config import AnalyzerConfig

CONFIG = AnalyzerConfig()


def _run(rule, text: str, config: AnalyzerConfig = CONFIG, limit: int = 20):
    sink = SuggestionSink(limit)
    rule(text, config, sink)
    return sink.items


class TestSuggestionSink:
    def test_add_until_full(self):
        sink = SuggestionSink(2)
        s = rules.WritingSuggestion(category="style", severity="low", message="x")
        assert sink.add(s) is True
        assert sink.add(s) is False  # now full
        assert sink.add(s) is False
        assert len(sink) == 2
        assert sink.full

    def test_zero_limit_is_full(self):
        assert SuggestionSink(0).full


class TestPassiveVoice:
    def test_detects_be_plus_ed(self):
        text = "The ball was kicked by John."
        found = _run(rules.passive_voice, text)
        assert len(found) == 1
        s = found[0]
        assert (s.category, s.severity) == ("style", "low")
        assert text[s.start:s.end] == "was kicked"

    def test_case_insensitive(self):
        assert len(_run(rules.passive_voice, "It Is Finished.")) == 1

    def test_no_match_without_ed(self):
        assert _run(rules.passive_voice, "The ball was red.") == []

    def test_huge_word_does_not_fail(self):
        assert _run(rules.passive_voice, "is " + "a" * 100_000) == []


class TestWeakQualifiers:
    def test_very_happy(self):
        text = "I am very happy today."
        found = _run(rules.weak_qualifiers, text)
        assert len(found) == 1
        assert (found[0].category, found[0].severity) == ("style", "medium")
        assert (found[0].start, found[0].end) == (5, 10)

    def test_requires_following_whitespace(self):
        assert _run(rules.weak_qualifiers, "It was just.") == []

    def test_word_boundary(self):
        assert _run(rules.weak_qualifiers, "Adjust the prettyness ") == []

    def test_injected_list(self):
        config = AnalyzerConfig(weak_qualifiers=("basically",))
        assert len(_run(rules.weak_qualifiers, "It is basically done, very done.", config)) == 1


class TestWordRepetition:
    def test_more_than_threshold(self):
        text = " ".join(["analysis is key."] * 6)
        found = _run(rules.word_repetition, text)
        assert len(found) == 1
        assert '"analysis"' in found[0].message
        assert (found[0].start, found[0].end) == (0, 0)

    def test_at_threshold_is_fine(self):
        assert _run(rules.word_repetition, " ".join(["analysis"] * 5)) == []

    def test_short_words_ignored(self):
        assert _run(rules.word_repetition, " ".join(["essay"] * 10)) == []

    def test_case_insensitive_and_first_occurrence_order(self):
        text = ("Writing " * 6) + ("EVIDENCE " * 6) + ("writing " * 1)
        found = _run(rules.word_repetition, text)
        assert len(found) == 2
        assert '"writing" appears 7 times' in found[0].message
        assert '"evidence" appears 6 times' in found[1].message


class TestLongSentences:
    def test_forty_words(self):
        text = " ".join(["word"] * 40) + "."
        found = _run(rules.long_sentences, text)
        assert len(found) == 1
        assert (found[0].category, found[0].severity) == ("clarity", "high")
        assert "40 words" in found[0].message
        assert (found[0].start, found[0].end) == (0, len(text) - 1)

    def test_thirty_five_is_fine(self):
        assert _run(rules.long_sentences, " ".join(["word"] * 35) + ".") == []

    def test_span_points_at_second_sentence(self):
        long = " ".join(["word"] * 36)
        text = f"Short one. {long}."
        found = _run(rules.long_sentences, text)
        assert text[found[0].start:found[0].end].strip() == long


class TestParagraphRules:
    def test_long_paragraph(self):
        text = "Intro.\n\n" + "One two. " * 9
        found = _run(rules.long_paragraphs, text)
        assert len(found) == 1
        assert (found[0].category, found[0].severity) == ("structure", "medium")
        assert "9 sentences" in found[0].message
        assert found[0].start == len("Intro.\n\n")

    def test_eight_sentences_fine(self):
        assert _run(rules.long_paragraphs, "One two. " * 8) == []

    def test_single_sentence_paragraph(self):
        text = "This lonely paragraph has exactly one sentence but it keeps going for a while."
        found = _run(rules.single_sentence_paragraphs, text)
        assert len(found) == 1
        assert (found[0].category, found[0].severity) == ("structure", "low")

    def test_short_single_sentence_paragraph_fine(self):
        assert _run(rules.single_sentence_paragraphs, "A short heading line.") == []


class TestMissingTransitions:
    def test_flags_body_paragraph_without_transition(self):
        text = (
            "The first paragraph sets things up.\n\n"
            "This one starts talking without a link.\n\n"
            "However, the third paragraph connects."
        )
        found = _run(rules.missing_transitions, text)
        assert len(found) == 1
        assert "Paragraph 2" in found[0].message
        assert (found[0].start, found[0].end) == (0, 0)

    def test_first_paragraph_never_flagged(self):
        assert _run(rules.missing_transitions, "Only one paragraph here.") == []

    def test_only_first_sentence_checked(self):
        text = "Intro.\n\nNo link here. Therefore, too late."
        assert len(_run(rules.missing_transitions, text)) == 1

    def test_multi_word_transition(self):
        text = "Intro.\n\nIn addition, this follows."
        assert _run(rules.missing_transitions, text) == []


class TestWordyPhrases:
    def test_suggestion_carries_replacement(self):
        text = "We met in order to talk."
        found = _run(rules.wordy_phrases, text)
        assert len(found) == 1
        s = found[0]
        assert (s.category, s.severity) == ("style", "medium")
        assert s.suggestion == "to"
        assert text[s.start:s.end] == "in order to"

    def test_case_insensitive(self):
        found = _run(rules.wordy_phrases, "Due to the fact that it rained, we left.")
        assert found[0].suggestion == "because"

    def test_invalid_pattern_skipped(self):
        config = AnalyzerConfig(cliches=(("(unclosed", "x"), (r"\bnow\b", "today")))
        found = _run(rules.wordy_phrases, "do it now", config)
        assert [s.suggestion for s in found] == ["today"]

    def test_other_rules_have_no_replacement(self):
        assert _run(rules.weak_qualifiers, "very good")[0].suggestion is None
