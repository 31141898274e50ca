import pytest

from matchscore.config.settings import get_settings
from matchscore.domain.errors import InvalidInput
from matchscore.domain.models import GeoPoint, Lifestyle, Preferences, Profile
from matchscore.features.pairwise import extract_features
from matchscore.scoring.explain import FALLBACK_REASON
from matchscore.scoring.heuristic import HeuristicStrategy, heuristic_terms
from matchscore.scoring.scorer import score_match

NYC = GeoPoint(lat=40.7128, lon=-74.0060)
NYC_NEARBY = GeoPoint(lat=40.7200, lon=-74.0000)
LA = GeoPoint(lat=34.0522, lon=-118.2437)


def _profile(pid: str, age: int, gender: str | None = None, **kwargs) -> Profile:
    return Profile(id=pid, age=age, gender=gender, **kwargs)


def _term(features, name: str) -> float:
    terms = heuristic_terms(features, settings=get_settings())
    return next(t.value for t in terms if t.name == name)


def test_score_is_always_within_unit_interval():
    settings = get_settings()
    viewer = _profile("v", 30, "male", location=NYC, interests=["music"])
    prefs = Preferences(age_range=[25, 35], genders=["female"])
    for age in (18, 25, 30, 35, 45, 60, 100):
        for gender in ("female", "male", "other", None):
            for location in (NYC, LA, None):
                candidate = _profile("c", age, gender, location=location, interests=["music", "art"])
                result = score_match(viewer, candidate, prefs, settings=settings)
                assert 0.0 <= result.score <= 1.0
                assert result.reason


def test_heuristic_is_deterministic():
    viewer = _profile("v", 28, "male", location=NYC, interests=["music", "travel"])
    candidate = _profile("c", 31, "female", location=NYC_NEARBY, interests=["travel"])
    prefs = Preferences(age_range=[25, 35], genders="female")

    first = score_match(viewer, candidate, prefs, strategy=HeuristicStrategy(get_settings()))
    second = score_match(viewer, candidate, prefs, strategy=HeuristicStrategy(get_settings()))
    assert first.score == second.score
    assert first.reason == second.reason


def test_age_inside_range_gets_full_age_term():
    settings = get_settings()
    viewer = _profile("v", 28)
    prefs = Preferences(age_range=[25, 35])
    features = extract_features(viewer, _profile("c", 30), prefs, settings=settings)

    assert features.age_credit == 1.0
    assert _term(features, "age") == pytest.approx(settings.scoring.age.bonus)


@pytest.mark.parametrize("age", [45, 46, 60, 15, 10])
def test_age_ten_years_past_boundary_is_at_floor(age):
    settings = get_settings()
    prefs = Preferences(age_range=[25, 35])
    features = extract_features(_profile("v", 28), _profile("c", age), prefs, settings=settings)

    assert features.age_credit == 0.0
    assert _term(features, "age") == pytest.approx(-settings.scoring.age.penalty)


def test_age_credit_decays_linearly_outside_range():
    prefs = Preferences(age_range=[25, 35])
    features = extract_features(_profile("v", 28), _profile("c", 40), prefs, settings=get_settings())
    assert features.age_credit == pytest.approx(0.5)


def test_degenerate_age_range_does_not_crash():
    prefs = Preferences(age_range=[35, 25])
    result = score_match(_profile("v", 28), _profile("c", 30), prefs, settings=get_settings())
    assert 0.0 <= result.score <= 1.0


def test_sharing_all_interests_beats_sharing_none():
    # Gender mismatch keeps both totals below 1.0 so the clamp cannot hide the difference.
    viewer = _profile("v", 28, "male", interests=["music", "travel", "food", "reading"])
    prefs = Preferences(age_range=[25, 35], genders=["female"])
    none_shared = _profile("a", 30, "male", interests=[])
    all_shared = _profile("b", 30, "male", interests=["music", "travel", "food", "reading"])

    low = score_match(viewer, none_shared, prefs, settings=get_settings())
    high = score_match(viewer, all_shared, prefs, settings=get_settings())
    assert high.score > low.score
    assert low.score == pytest.approx(0.65)
    assert high.score == pytest.approx(0.80)


def test_gender_mismatch_is_neutral_not_penalized():
    settings = get_settings()
    viewer = _profile("v", 28)
    prefs = Preferences(age_range=[25, 35], genders=["female"])
    matched = score_match(viewer, _profile("a", 30, "female"), prefs, settings=settings)
    mismatched = score_match(viewer, _profile("b", 30, "male"), prefs, settings=settings)

    assert mismatched.score == pytest.approx(settings.scoring.base_score + settings.scoring.age.bonus)
    assert matched.score - mismatched.score == pytest.approx(settings.scoring.gender.bonus)


def test_single_gender_and_gender_list_are_equivalent():
    viewer = _profile("v", 28)
    candidate = _profile("c", 30, "Female")
    single = score_match(viewer, candidate, Preferences(gender="female"), settings=get_settings())
    listed = score_match(viewer, candidate, Preferences(genders=["female", "other"]), settings=get_settings())
    assert single.score == listed.score
    assert single.features["gender_match"] is True


def test_missing_coordinates_are_neutral():
    settings = get_settings()
    prefs = Preferences(age_range=[25, 35])
    features = extract_features(_profile("v", 28, location=NYC), _profile("c", 30), prefs, settings=settings)

    assert features.distance_km is None
    assert features.location_credit is None
    assert _term(features, "location") == 0.0


def test_viewer_location_falls_back_to_preferences():
    prefs = Preferences(age_range=[25, 35], location=NYC)
    features = extract_features(_profile("v", 28), _profile("c", 30, location=NYC), prefs, settings=get_settings())
    assert features.distance_km == pytest.approx(0.0)
    assert features.location_credit == pytest.approx(1.0)


def test_preference_location_does_not_claim_same_area():
    prefs = Preferences(age_range=[25, 35], location=NYC)
    viewer = _profile("v", 28)
    candidate = _profile("c", 30, location=NYC)

    result = score_match(viewer, candidate, prefs, settings=get_settings())

    assert result.features["location_credit"] == pytest.approx(1.0)
    assert "same area" not in result.reason


def test_location_credit_reaches_zero_beyond_radius():
    prefs = Preferences(age_range=[25, 35])
    features = extract_features(
        _profile("v", 28, location=NYC), _profile("c", 30, location=LA), prefs, settings=get_settings()
    )
    assert features.distance_km > 3000
    assert features.location_credit == 0.0


def test_interests_compare_case_sensitively():
    prefs = Preferences()
    features = extract_features(
        _profile("v", 28, interests=["Music"]), _profile("c", 30, interests=["music"]), prefs, settings=get_settings()
    )
    assert features.shared_interests == ()
    assert features.interest_jaccard == 0.0


def test_lifestyle_prefers_stated_preference_over_own_lifestyle():
    settings = get_settings()
    viewer = _profile("v", 28, lifestyle=Lifestyle(smoking=True, drinking=True, exercise="never"))
    candidate = _profile("c", 30, lifestyle=Lifestyle(smoking=False, drinking=True, exercise="regularly"))

    own = extract_features(viewer, candidate, Preferences(), settings=settings)
    stated = extract_features(
        viewer,
        candidate,
        Preferences(lifestyle=Lifestyle(smoking=False, drinking=True, exercise="regularly")),
        settings=settings,
    )
    assert own.lifestyle_credit == pytest.approx(1 / 3)
    assert stated.lifestyle_credit == pytest.approx(1.0)
    assert _term(stated, "lifestyle") == pytest.approx(settings.scoring.lifestyle.cap)


def test_scenario_close_match_scores_high_with_reasons():
    viewer = _profile("v", 28, "male", location=NYC, interests=["music", "travel", "food", "reading"])
    candidate = _profile("c", 29, "female", location=NYC_NEARBY, interests=["music", "food", "art", "hiking"])
    prefs = Preferences(age_range=[25, 35], genders={"female"})

    result = score_match(viewer, candidate, prefs, settings=get_settings())

    assert result.score > 0.7
    assert "close in age" in result.reason
    assert "You both enjoy music, food" in result.reason
    assert "You live in the same area" in result.reason
    assert result.reason.endswith("!")


def test_scenario_poor_match_scores_low_with_fallback_reason():
    viewer = _profile("v", 25, "male", interests=["music"])
    candidate = _profile("c", 50, "male", interests=["golf"])
    prefs = Preferences(age_range=[20, 30], genders=["female"])

    result = score_match(viewer, candidate, prefs, settings=get_settings())

    assert result.score < 0.3
    assert result.reason == FALLBACK_REASON


def test_set_interests_give_sorted_shared_interests():
    viewer = _profile("v", 30, interests={"travel", "music", "food", "art"})
    candidate = _profile("c", 31, interests={"music", "art", "food"})
    prefs = Preferences(age_range=[25, 35])

    result = score_match(viewer, candidate, prefs, settings=get_settings())

    assert "You both enjoy art, food, music" in result.reason


def test_reason_clauses_keep_stable_order():
    viewer = _profile("v", 30, "male", location=NYC, interests=["art"])
    candidate = _profile("c", 31, "female", location=NYC, interests=["art"])
    prefs = Preferences(age_range=[25, 35], genders=["female"])

    result = score_match(viewer, candidate, prefs, settings=get_settings())
    assert result.reason == (
        "You are close in age and You share gender preferences and You both enjoy art"
        " and You live in the same area and You have a very high compatibility score!"
    )


def test_missing_candidate_raises_invalid_input():
    with pytest.raises(InvalidInput):
        score_match(_profile("v", 28), None, Preferences(), settings=get_settings())
    with pytest.raises(InvalidInput):
        score_match(_profile("v", 28), _profile("c", 30), None, settings=get_settings())


def test_scoring_does_not_mutate_inputs():
    viewer = _profile("v", 28, "male", location=NYC, interests=["music", "travel"])
    candidate = _profile("c", 29, "female", interests=["travel"])
    prefs = Preferences(age_range=[25, 35], genders=["female"])
    before = (viewer.model_dump(), candidate.model_dump(), prefs.model_dump())

    score_match(viewer, candidate, prefs, settings=get_settings())

    assert (viewer.model_dump(), candidate.model_dump(), prefs.model_dump()) == before
