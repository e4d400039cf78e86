"""
Tests for scheme eligibility matching
"""
import logging

import pytest
from pydantic import ValidationError

from schemeflow.models import CriteriaSubmission, EligibilityCriteria, EligibilityProfile, Scheme
from schemeflow.seed import default_schemes
from schemeflow.services.eligibility_service import EligibilityMatcher, match


def profile(age=45, income=30000, category="sc", gender="male"):
    return EligibilityProfile(age=age, income=income, category=category, gender=gender)


def scheme_ids(schemes):
    return [s.id for s in schemes]


def test_matches_every_satisfied_scheme_in_catalog_order(catalog):
    result = match(profile(), catalog)
    assert scheme_ids(result) == ["sc-st-care", "open-to-all"]


def test_female_senior_matches_gender_and_age_schemes(catalog):
    result = match(profile(age=65, income=500000, category="general", gender="female"), catalog)
    assert scheme_ids(result) == ["women-health", "open-to-all", "senior-care"]


def test_unconstrained_scheme_matches_any_patient(catalog):
    open_scheme = [s for s in catalog if s.id == "open-to-all"]
    for p in (profile(age=0, income=0), profile(age=120, income=10_000_000, category="obc", gender="other")):
        assert scheme_ids(match(p, open_scheme)) == ["open-to-all"]


def test_empty_catalog_matches_nothing():
    assert match(profile(), []) == []


def test_age_bounds_are_inclusive():
    scheme = Scheme(id="band", name="Band", eligibility_criteria={"age": {"min": 18, "max": 60}})
    assert match(profile(age=18), [scheme]) == [scheme]
    assert match(profile(age=60), [scheme]) == [scheme]
    assert match(profile(age=17), [scheme]) == []
    assert match(profile(age=61), [scheme]) == []


def test_zero_minimum_age_is_honoured():
    scheme = Scheme(id="infants", name="Infants", eligibility_criteria={"age": {"min": 0, "max": 1}})
    assert match(profile(age=0), [scheme]) == [scheme]
    assert match(profile(age=2), [scheme]) == []


def test_income_ceiling_is_inclusive():
    scheme = Scheme(id="low-income", name="Low Income", eligibility_criteria={"income": {"max": 50000}})
    assert match(profile(income=50000), [scheme]) == [scheme]
    assert match(profile(income=50000.01), [scheme]) == []


def test_empty_category_list_excludes_everyone():
    scheme = Scheme(id="closed", name="Closed", eligibility_criteria={"category": []})
    assert match(profile(), [scheme]) == []


def test_malformed_group_is_treated_as_absent(caplog):
    with caplog.at_level(logging.WARNING):
        criteria = EligibilityCriteria.model_validate({
            "age": "eighteen plus",
            "category": ["sc", "martian"],
            "income": {"max": 100000},
        })

    assert criteria.age is None
    assert criteria.category is None
    assert criteria.income is not None
    assert "Ignoring malformed 'age' criteria" in caplog.text

    scheme = Scheme(id="partly-broken", name="Partly Broken", eligibility_criteria=criteria)
    assert match(profile(age=3, category="general"), [scheme]) == [scheme]


def test_is_unconstrained():
    assert EligibilityCriteria().is_unconstrained()
    assert not EligibilityCriteria(gender=["female"]).is_unconstrained()


def test_failed_conditions_explain_each_failing_group(catalog):
    matcher = EligibilityMatcher()
    sc_st = catalog[0]

    failures = matcher.failed_conditions(profile(age=70, income=90000, category="general"), sc_st)

    assert failures == [
        "Age 70 is above the maximum of 60",
        "Income 90000 exceeds the limit of 50000",
        "Category 'general' is not one of: sc, st",
    ]
    assert matcher.failed_conditions(profile(), sc_st) == []


def test_check_reports_near_misses(catalog):
    matcher = EligibilityMatcher()

    result = matcher.check(profile(age=50, income=60000, category="general"), catalog)

    assert scheme_ids(result.eligible_schemes) == ["open-to-all"]
    near = {n.scheme_id: n for n in result.near_misses}
    # sc-st-care fails income and category; women-health and senior-care fail one group each
    assert set(near) == {"sc-st-care", "women-health", "senior-care"}
    assert len(near["sc-st-care"].failed_conditions) == 2
    assert near["senior-care"].failed_conditions == ["Age 50 is below the minimum of 60"]


def test_check_skips_schemes_failing_too_many_groups(catalog):
    result = EligibilityMatcher().check(profile(age=70, income=90000, category="general"), catalog)
    assert "sc-st-care" not in [n.scheme_id for n in result.near_misses]


@pytest.mark.parametrize(
    "attrs, expected",
    [
        (
            {"age": 30, "income": 20000, "category": "st", "gender": "female"},
            ["health-for-all", "universal-health-coverage", "maternal-health-support", "sc-st-critical-care"],
        ),
        (
            {"age": 70, "income": 280000, "category": "general", "gender": "male"},
            ["senior-care-plus", "universal-health-coverage"],
        ),
        (
            {"age": 10, "income": 100000, "category": "obc", "gender": "male"},
            ["health-for-all", "universal-health-coverage", "child-health-initiative"],
        ),
    ],
)
def test_default_catalog(attrs, expected):
    assert scheme_ids(match(profile(**attrs), default_schemes())) == expected


def test_profile_values_are_normalised_to_lowercase():
    p = EligibilityProfile(age=30, income=0, category="SC", gender="Female")
    assert p.category == "sc"
    assert p.gender == "female"


def test_inverted_age_range_in_stored_criteria_is_dropped():
    criteria = EligibilityCriteria.model_validate({"age": {"min": 60, "max": 18}, "gender": ["Female"]})

    assert criteria.age is None
    assert criteria.gender == ["female"]


def test_submitted_criteria_are_strict():
    with pytest.raises(ValidationError):
        CriteriaSubmission.model_validate({"age": {"min": 60, "max": 18}})
    with pytest.raises(ValidationError):
        CriteriaSubmission.model_validate({"income": {"max": -1}})

    criteria = CriteriaSubmission.model_validate({"category": ["SC", " st "], "age": {"min": 18, "max": 18}})
    assert criteria.category == ["sc", "st"]
    assert criteria.age.min == criteria.age.max == 18
