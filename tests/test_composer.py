"""Tests for llm/composer.py: generated replies and the deterministic fallback."""

from unittest.mock import MagicMock

import numpy as np
import pytest
import requests

from reflectbuddy.content.phases import PhaseId, get_phase
from reflectbuddy.content.templates import EMPATHY_PREFIXES
from reflectbuddy.core.emotion import EmotionLabel
from reflectbuddy.llm.client import GenerationAPIError
from reflectbuddy.llm.composer import ResponseComposer, empathy_prefix


@pytest.fixture
def client():
    mock = MagicMock()
    mock.generate.return_value = "Wat vervelend. Wat deed je op dat moment?"
    return mock


class TestPrimaryPath:
    def test_returns_generated_text(self, client):
        composer = ResponseComposer(client=client, seed=1)
        reply = composer.compose("De klas was onrustig", PhaseId.DESCRIPTION, EmotionLabel.NEUTRAL)
        assert reply == "Wat vervelend. Wat deed je op dat moment?"

    def test_prompt_names_phase_emotion_and_text(self, client):
        composer = ResponseComposer(client=client, seed=1)
        composer.compose("Ik was boos", PhaseId.FEELINGS, EmotionLabel.FRUSTRATED)

        prompt = client.generate.call_args.args[0]
        assert "Gevoelens" in prompt
        assert "frustrated" in prompt
        assert '"Ik was boos"' in prompt
        assert "maximaal 3 zinnen" in prompt
        assert client.generate.call_args.kwargs["model_hint"] == "smart"


class TestFallback:
    @pytest.mark.parametrize("failure", [
        GenerationAPIError(500, "server error"),
        GenerationAPIError(0, "Connection error"),
        requests.exceptions.ConnectionError("unreachable"),
        ValueError("bad json"),
    ])
    def test_failure_falls_back(self, client, failure):
        client.generate.side_effect = failure
        composer = ResponseComposer(client=client, seed=3)
        reply = composer.compose("Ik was boos", PhaseId.FEELINGS, EmotionLabel.FRUSTRATED)

        prefix = EMPATHY_PREFIXES["frustrated"]
        assert reply.startswith(prefix)
        assert reply[len(prefix):] in get_phase(PhaseId.FEELINGS).questions

    def test_blank_reply_is_malformed(self, client):
        client.generate.return_value = "   "
        composer = ResponseComposer(client=client, seed=3)
        reply = composer.compose("tekst", PhaseId.ANALYSIS, EmotionLabel.NEUTRAL)
        assert reply.startswith(EMPATHY_PREFIXES["neutral"])

    def test_no_client_uses_fallback(self):
        composer = ResponseComposer(client=None, seed=0)
        reply = composer.compose("tekst", PhaseId.ACTION, EmotionLabel.SAD)
        prefix = EMPATHY_PREFIXES["sad"]
        assert reply[len(prefix):] in get_phase(PhaseId.ACTION).questions

    def test_seeded_fallback_is_reproducible(self):
        a = ResponseComposer(seed=42)
        b = ResponseComposer(rng=np.random.default_rng(42))
        replies_a = [a.fallback_reply(PhaseId.EVALUATION, EmotionLabel.ANXIOUS) for _ in range(5)]
        replies_b = [b.fallback_reply(PhaseId.EVALUATION, EmotionLabel.ANXIOUS) for _ in range(5)]
        assert replies_a == replies_b

    def test_reseed_restarts_sequence(self):
        composer = ResponseComposer(seed=7)
        first = [composer.fallback_reply(PhaseId.CONCLUSION, None) for _ in range(4)]
        composer.reseed(7)
        assert [composer.fallback_reply(PhaseId.CONCLUSION, None) for _ in range(4)] == first

    def test_injected_rng_picks_question(self):
        rng = MagicMock()
        rng.integers.return_value = 2
        composer = ResponseComposer(rng=rng)
        reply = composer.fallback_reply(PhaseId.DESCRIPTION, EmotionLabel.CONFIDENT)
        assert reply == EMPATHY_PREFIXES["confident"] + get_phase(PhaseId.DESCRIPTION).questions[2]
        rng.integers.assert_called_once_with(3)


class TestEmpathyPrefix:
    def test_every_label_has_prefix(self):
        for label in EmotionLabel:
            assert label.value in EMPATHY_PREFIXES

    def test_unmapped_key_uses_neutral(self):
        assert empathy_prefix("euphoric") == EMPATHY_PREFIXES["neutral"]
        assert empathy_prefix(None) == EMPATHY_PREFIXES["neutral"]

    def test_enum_and_string_agree(self):
        assert empathy_prefix(EmotionLabel.SAD) == empathy_prefix("sad")
