"""Profile Completeness: a 0-100 score of how filled-in a profile is.

Invariants:
    - PURE: counts and rows in, int out
    - Weights sum to 100; each criterion is all-or-nothing
    - Whitespace-only text does not count as filled
"""

COMPLETENESS_WEIGHTS = {
    "name": 10,
    "username": 10,
    "bio": 15,
    "jobTitle": 10,
    "location": 5,
    "profileImage": 10,
    "links": 10,
    "portfolio": 10,
    "experiences": 10,
    "education": 10,
}


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def compute_completeness(user, profile, section_counts: dict[str, int]) -> int:
    """Score a profile from its user row, profile row and active section counts."""
    checks = {
        "name": _filled(user.name),
        "username": _filled(user.username),
        "bio": profile is not None and _filled(profile.bio),
        "jobTitle": profile is not None and _filled(profile.job_title),
        "location": profile is not None and _filled(profile.location),
        "profileImage": profile is not None and _filled(profile.profile_image_url),
        "links": section_counts.get("links", 0) > 0,
        "portfolio": section_counts.get("portfolio", 0) > 0,
        "experiences": section_counts.get("experiences", 0) > 0,
        "education": section_counts.get("education", 0) > 0,
    }
    return sum(COMPLETENESS_WEIGHTS[key] for key, ok in checks.items() if ok)
