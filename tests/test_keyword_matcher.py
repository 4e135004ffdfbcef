# /tests/test_keyword_matcher.py

import pytest

from grading_app.services.grading_helpers.keyword_matcher import auto_score_open_answer, is_blank_answer


@pytest.fixture
def photosynthesis_keywords():
    return [
        {"keyword": "fotosintesi", "weight": 0.5, "isRequired": True},
        {"keyword": "clorofilla", "weight": 0.3, "isRequired": False},
        {"keyword": "ossigeno", "weight": 0.2, "isRequired": False},
    ]


def test_weighted_score(photosynthesis_keywords):
    score, matched, missed = auto_score_open_answer("La fotosintesi produce ossigeno", photosynthesis_keywords)
    assert matched == ["fotosintesi", "ossigeno"]
    assert missed == []
    assert score == pytest.approx(0.7)


def test_matching_is_case_insensitive():
    keywords = [{"keyword": "Fotosintesi"}, {"keyword": "GLUCOSIO"}]
    score, matched, _ = auto_score_open_answer("la FOTOSINTESI produce glucosio", keywords)
    assert matched == ["Fotosintesi", "GLUCOSIO"]
    assert score == 1.0


def test_required_keyword_missing_is_reported(photosynthesis_keywords):
    score, matched, missed = auto_score_open_answer("La clorofilla è verde", photosynthesis_keywords)
    assert matched == ["clorofilla"]
    assert missed == ["fotosintesi"]
    assert score == pytest.approx(0.3)


def test_partial_word_and_accented_text_match():
    _, matched, _ = auto_score_open_answer("La fotosintesi clorofilliana è necessaria", [{"keyword": "clorofill"}])
    assert matched == ["clorofill"]


def test_no_keywords_gives_no_score():
    assert auto_score_open_answer("Qualsiasi risposta", []) == (None, [], [])
    assert auto_score_open_answer("Qualsiasi risposta", None) == (None, [], [])


def test_empty_answer_matches_nothing(photosynthesis_keywords):
    score, matched, missed = auto_score_open_answer("", photosynthesis_keywords)
    assert score == 0.0
    assert matched == []
    assert missed == ["fotosintesi"]


@pytest.mark.parametrize("text, expected", [
    ("", True), ("   ", True), (None, True), ("\n\t", True), ("42", False),
])
def test_is_blank_answer(text, expected):
    assert is_blank_answer(text) is expected
