"""Tests for core/emotion.py: keyword emotion detection."""

import pytest

from reflectbuddy.core.emotion import EMOTION_KEYWORDS, EmotionLabel, classify_emotion


class TestClassifyEmotion:
    def test_frustration_keyword(self):
        assert classify_emotion("ik voelde me heel gefrustreerd") == EmotionLabel.FRUSTRATED

    def test_no_keyword_is_neutral(self):
        assert classify_emotion("We hebben vandaag rekenen gedaan") == EmotionLabel.NEUTRAL

    def test_empty_text_is_neutral(self):
        assert classify_emotion("") == EmotionLabel.NEUTRAL

    def test_case_insensitive(self):
        assert classify_emotion("Ik was ZENUWACHTIG voor de les") == EmotionLabel.ANXIOUS

    def test_multi_word_keyword(self):
        assert classify_emotion("Het was gewoon te veel tegelijk") == EmotionLabel.OVERWHELMED

    def test_first_category_wins(self):
        """Frustrated is declared before anxious, so it wins the tie."""
        assert classify_emotion("ik was bang en boos") == EmotionLabel.FRUSTRATED

    def test_sad_loses_to_confident(self):
        assert classify_emotion("ik ben trots maar ook teleurgesteld") == EmotionLabel.CONFIDENT

    def test_is_pure(self):
        text = "Ik voelde me somber na de les"
        results = {classify_emotion(text) for _ in range(5)}
        assert results == {EmotionLabel.SAD}

    @pytest.mark.parametrize("emotion", list(EMOTION_KEYWORDS))
    def test_each_category_reachable(self, emotion):
        keyword = EMOTION_KEYWORDS[emotion][0]
        assert classify_emotion(f"vandaag: {keyword}") == emotion

    def test_declaration_order(self):
        assert list(EMOTION_KEYWORDS) == [
            EmotionLabel.FRUSTRATED,
            EmotionLabel.ANXIOUS,
            EmotionLabel.CONFIDENT,
            EmotionLabel.OVERWHELMED,
            EmotionLabel.SAD,
        ]
