"""Tests for boardroom_session/signals.py."""

from boardroom_session.signals import analyze_message


class TestAnalyzeMessage:
    """Keyword sentiment heuristic."""

    def test_positive(self):
        """More positive words than negative ones."""
        signals = analyze_message("Great growth opportunity with one risk")
        assert signals.sentiment == "positive"
        assert signals.confidence == 0.7

    def test_negative(self):
        """Negative words dominate."""
        signals = analyze_message("This is a problem and a real concern")
        assert signals.sentiment == "negative"
        assert signals.confidence == 0.7

    def test_neutral_tie(self):
        """Equal counts are neutral at base confidence."""
        signals = analyze_message("good but bad")
        assert signals.sentiment == "neutral"
        assert signals.confidence == 0.5

    def test_confidence_capped(self):
        """Confidence never exceeds 0.9."""
        signals = analyze_message("good " * 10)
        assert signals.confidence == 0.9

    def test_keywords(self):
        """Keywords are the first five long words outside the stop list."""
        signals = analyze_message(
            "These numbers would improve revenue through better pricing discipline"
        )
        assert signals.keywords == (
            "these",
            "numbers",
            "would",
            "improve",
            "revenue",
        )

    def test_stop_words_and_punctuation(self):
        """Stop words are skipped and punctuation blocks a sentiment match."""
        signals = analyze_message("their growth, which they thought was from them")
        assert signals.sentiment == "neutral"
        assert signals.keywords == ("their", "growth,", "which", "thought")
