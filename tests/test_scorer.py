"""Tests for BM25 scoring."""
import numpy as np
import pytest
from core.text_search.scorer import BM25Scorer


@pytest.fixture
def scorer():
    return BM25Scorer(k1=1.2, b=0.75)


def test_defaults_come_from_config():
    scorer = BM25Scorer()
    assert scorer.k1 == pytest.approx(1.2)
    assert scorer.b == pytest.approx(0.75)


@pytest.mark.parametrize("k1, b", [(-0.1, 0.75), (1.2, -0.1), (1.2, 1.5)])
def test_invalid_parameters_raise(k1, b):
    with pytest.raises(ValueError):
        BM25Scorer(k1=k1, b=b)


def test_score_is_positive_for_present_terms(scorer):
    assert scorer.score(1, 2, 10, 1, 2.0) > 0


@pytest.mark.parametrize("args", [
    (1, 2, 10, 0, 2.0),   # term absent from the corpus
    (1, 2, 10, 1, 0.0),   # zero average field length
    (1, 2, 0, 1, 2.0),    # empty corpus
    (0, 2, 10, 1, 2.0),   # term absent from the field
    (0, 0, 10, 1, 2.0),
])
def test_degenerate_cases_score_exactly_zero(scorer, args):
    assert scorer.score(*args) == 0.0


def test_zero_length_field_with_full_normalization_is_guarded():
    scorer = BM25Scorer(k1=1.2, b=1.0)
    assert scorer.score(0, 0, 10, 1, 2.0) == 0.0


def test_rarer_terms_weigh_more(scorer):
    assert scorer.score(1, 3, 100, 2, 3.0) > scorer.score(1, 3, 100, 50, 3.0)


def test_idf_stays_positive_for_ubiquitous_terms(scorer):
    assert scorer.idf(10, 10) > 0
    assert scorer.idf(10, 0) == 0.0


def test_term_frequency_has_diminishing_returns(scorer):
    one, two, three = (scorer.score(tf, 5, 100, 10, 5.0) for tf in (1, 2, 3))
    assert one < two < three
    assert three - two < two - one


def test_longer_fields_score_lower(scorer):
    assert scorer.score(1, 2, 100, 10, 4.0) > scorer.score(1, 8, 100, 10, 4.0)


def test_array_input_matches_scalar_scores(scorer):
    tf = np.array([1, 2, 0])
    dl = np.array([2, 4, 3])
    scores = scorer.score(tf, dl, 10, 3, 3.0)
    assert isinstance(scores, np.ndarray)
    expected = [scorer.score(int(t), int(d), 10, 3, 3.0) for t, d in zip(tf, dl)]
    assert scores.tolist() == pytest.approx(expected)
    assert scores[2] == 0.0


def test_array_input_with_absent_term_is_all_zero(scorer):
    scores = scorer.score(np.array([1, 2]), np.array([3, 3]), 10, 0, 3.0)
    assert scores.tolist() == [0.0, 0.0]


def test_fields_are_weighted_equally(scorer):
    assert {scorer.field_weight(f) for f in ("album", "artist", "title")} == {1.0}
