"""Tests for the six rubric dimension scorers."""

from __future__ import annotations

import pytest

from bdd_coach.scenario_rubric import (
    MAX_SCORE,
    has_concrete_value,
    levenshtein_distance,
    score_business_value,
    score_clarity,
    score_duplication,
    score_gherkin,
    score_specificity,
    score_testability,
    similarity,
)
from bdd_coach.scenario_steps import extract_steps


MINIMAL_SCENARIO = 'Given a user with balance 100\nWhen they withdraw "50"\nThen the balance should be 50'


def _steps(text: str):
    return extract_steps(text)


@pytest.mark.parametrize(
    "scorer",
    [
        score_clarity,
        score_business_value,
        score_gherkin,
        score_testability,
        score_specificity,
        score_duplication,
    ],
)
def test_minimal_scenario_scores_full_marks(scorer) -> None:
    assert scorer(_steps(MINIMAL_SCENARIO)) == pytest.approx(MAX_SCORE)


def test_levenshtein_and_similarity() -> None:
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert similarity("abcd", "abce") == pytest.approx(0.75)
    assert similarity("", "") == 1.0


def test_clarity_penalises_vague_and_technical_language() -> None:
    vague = _steps("Given a user\nWhen the user logs in properly\nThen the dashboard is shown")
    assert score_clarity(vague) == pytest.approx(96.0)

    technical = _steps("Given a user\nWhen the user calls submit_order\nThen the dashboard is shown")
    assert score_clarity(technical) == pytest.approx(96.0)

    camel = _steps("Given a user\nWhen the user calls submitOrder\nThen the dashboard is shown")
    assert score_clarity(camel) == pytest.approx(96.0)


def test_clarity_penalises_overlong_steps() -> None:
    long_step = "When " + " ".join(["word"] * 16)
    assert score_clarity(_steps(f"Given a user\n{long_step}\nThen it works")) == pytest.approx(94.0)


def test_clarity_rewards_structure() -> None:
    assert score_clarity(_steps("Given a user")) == pytest.approx(90.0)


def test_business_value_penalises_ui_vocabulary() -> None:
    steps = _steps("Given I am on the checkout page\nWhen I click the submit button\nThen the order is confirmed")
    assert score_business_value(steps) == pytest.approx(80.0)


def test_business_value_penalises_implementation_vocabulary() -> None:
    steps = _steps(
        "Given the database has 3 orders\nWhen a GET request hits the endpoint\nThen the response is 200"
    )
    assert score_business_value(steps) == pytest.approx(66.0)


def test_gherkin_requires_each_primary_keyword() -> None:
    assert score_gherkin(_steps("Given a user\nThen the user is greeted")) == pytest.approx(60.0)
    assert score_gherkin(_steps("And a user\nBut not a guest")) == pytest.approx(0.0)


def test_gherkin_ordering_bonus() -> None:
    out_of_order = _steps("Then the user is greeted\nWhen they log in\nGiven a user")
    assert score_gherkin(out_of_order) == pytest.approx(90.0)


def test_gherkin_penalises_malformed_lines() -> None:
    assert score_gherkin(_steps(MINIMAL_SCENARIO), malformed_lines=2) == pytest.approx(80.0)


def test_testability_requires_then_step() -> None:
    assert score_testability(_steps("Given a user\nWhen they log in")) == pytest.approx(60.0)


def test_testability_penalises_ambiguous_assertions() -> None:
    steps = _steps("Given a user\nWhen they search\nThen something appears\nAnd any result shows")
    assert score_testability(steps) == pytest.approx(60.0)


def test_specificity_penalises_generic_terms() -> None:
    steps = _steps("Given some users\nWhen they do something\nThen many results appear")
    assert score_specificity(steps) == pytest.approx(70.0)


def test_repeated_steps_score_lower_on_duplication() -> None:
    repeated = _steps("\n".join(["Given a user with balance 100"] * 3))
    distinct = _steps(MINIMAL_SCENARIO)

    assert score_duplication(repeated) == pytest.approx(62.0)
    assert score_duplication(repeated) < score_duplication(distinct)


def test_near_duplicate_steps_are_penalised() -> None:
    steps = _steps("Given a user with balance 100\nGiven a user with balance 200")
    assert score_duplication(steps) == pytest.approx(94.0)


def test_scores_never_drop_below_zero() -> None:
    noisy = "\n".join(["When I click the button and hover the menu icon link"] * 12)
    steps = _steps(noisy)
    assert score_business_value(steps) == 0.0
    assert score_duplication(steps) == 0.0


@pytest.mark.parametrize(
    "opening",
    [
        "Given the customer's account has 100",
        "Given I'm signed in with 100 credits",
    ],
)
def test_user_focus_survives_possessives_and_contractions(opening: str) -> None:
    steps = _steps(f"{opening}\nWhen they pay 50\nThen 50 remains")
    assert score_business_value(steps) == pytest.approx(100.0)


def test_ui_and_implementation_terms_match_possessive_forms() -> None:
    steps = _steps("Given an account with 100\nWhen the button's label reads 50\nThen the API's total is 50")
    assert score_business_value(steps) == pytest.approx(72.0)


def test_apostrophes_inside_words_are_not_quoted_values() -> None:
    possessive = _steps("Given the user's cart and the admin's page")[0]
    quoted = _steps("When they enter 'gold' as the tier")[0]

    assert has_concrete_value(possessive) is False
    assert has_concrete_value(quoted) is True
