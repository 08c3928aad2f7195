from unittest.mock import MagicMock

import pytest

from shopassist.application.services.sentiment_service import (
    SentimentService,
    label_for,
    lexicon_sentiment,
    sentiment_stats,
)


@pytest.mark.parametrize(
    "score, label",
    [(0.5, "positive"), (0.2, "neutral"), (0.0, "neutral"), (-0.2, "neutral"), (-0.21, "negative")],
)
def test_label_for(score, label):
    assert label_for(score) == label


def test_lexicon_positive_review():
    result = lexicon_sentiment("Great bass and amazing battery life")

    assert result.label == "positive"
    assert result.score == pytest.approx(0.6)
    assert result.confidence == pytest.approx(0.4)
    assert result.reasoning == "Fallback lexicon-based analysis"


def test_lexicon_negative_review():
    result = lexicon_sentiment("Terrible build, useless after a week")

    assert result.label == "negative"
    assert result.score == pytest.approx(-0.6)


def test_lexicon_no_signal_is_neutral():
    result = lexicon_sentiment("Does the job")

    assert result.label == "neutral"
    assert result.score == 0
    assert result.confidence == 0


def test_lexicon_score_is_clamped():
    result = lexicon_sentiment("good great excellent amazing love perfect best awesome")

    assert result.score == 1.0
    assert result.confidence == 0.7


def test_llm_result_is_used():
    llm = MagicMock()
    llm.extract_json.return_value = {
        "score": 0.8,
        "label": "positive",
        "confidence": 0.9,
        "reasoning": "Praises the sound",
        "key_phrases": ["great bass"],
    }

    result = SentimentService(llm).analyze_sentiment("Great bass")

    assert result.label == "positive"
    assert result.score == 0.8
    assert result.confidence == 0.9
    assert result.key_phrases == ["great bass"]


def test_llm_values_are_clamped_and_label_derived():
    llm = MagicMock()
    llm.extract_json.return_value = {"score": -3, "label": "angry", "confidence": 2}

    result = SentimentService(llm).analyze_sentiment("Awful")

    assert result.score == -1.0
    assert result.label == "negative"
    assert result.confidence == 1.0
    assert result.reasoning == "No reasoning provided"


def test_llm_failure_falls_back_to_lexicon(mock_llm):
    result = SentimentService(mock_llm).analyze_sentiment("Terrible build")

    assert result.label == "negative"
    assert result.reasoning == "Fallback lexicon-based analysis"


def test_llm_bad_payload_falls_back_to_lexicon():
    llm = MagicMock()
    llm.extract_json.return_value = {"score": "very good"}

    result = SentimentService(llm).analyze_sentiment("love it")

    assert result.reasoning == "Fallback lexicon-based analysis"
    assert result.label == "positive"


def test_analyze_batch_preserves_order(lexicon_sentiment_service, sample_reviews):
    results = lexicon_sentiment_service.analyze_batch([r["content"] for r in sample_reviews])

    assert [r.label for r in results] == ["positive", "negative", "neutral"]
    assert lexicon_sentiment_service.analyze_batch([]) == []


def test_sentiment_stats(lexicon_sentiment_service, sample_reviews):
    results = lexicon_sentiment_service.analyze_batch([r["content"] for r in sample_reviews])

    stats = sentiment_stats(results)

    assert (stats.positive, stats.negative, stats.neutral) == (1, 1, 1)
    assert stats.positive_percent == 33.3
    assert stats.avg_score == pytest.approx(0.0)


def test_sentiment_stats_empty():
    stats = sentiment_stats([])

    assert stats.positive == 0
    assert stats.positive_percent == 0.0
