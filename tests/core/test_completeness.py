"""Profile Completeness — verifies the weighted 0-100 score."""

from types import SimpleNamespace

from einfo.core.completeness import COMPLETENESS_WEIGHTS, compute_completeness


def _user(name="Jane", username="jane"):
    return SimpleNamespace(name=name, username=username)


def _profile(**fields):
    base = dict(bio="", job_title="", location="", profile_image_url="")
    base.update(fields)
    return SimpleNamespace(**base)


def test_weights_sum_to_100():
    assert sum(COMPLETENESS_WEIGHTS.values()) == 100


def test_name_and_username_only():
    assert compute_completeness(_user(), None, {}) == 20


def test_full_profile_scores_100():
    profile = _profile(
        bio="Engineer", job_title="Dev", location="Lisbon",
        profile_image_url="https://img/x.jpg",
    )
    counts = {"links": 1, "portfolio": 2, "experiences": 1, "education": 1}
    assert compute_completeness(_user(), profile, counts) == 100


def test_whitespace_does_not_count():
    profile = _profile(bio="   ", job_title="\n")
    assert compute_completeness(_user(), profile, {}) == 20


def test_achievements_do_not_score():
    assert compute_completeness(_user(), None, {"achievements": 5}) == 20
