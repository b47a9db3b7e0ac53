"""Education, Achievement and Extracurricular Routes — shared section contract.

Invariants:
    - Closed vocabularies (education type, achievement type...) are validated
    - Each section keeps its own ordering and soft delete
"""

import pytest


async def test_education_lifecycle(client, auth_headers):
    res = await client.post(
        "/api/education",
        json={
            "institution": "MIT", "degree": "BSc Computer Science",
            "educationType": "degree", "gpa": "3.9", "courses": ["Algorithms"],
            "websiteUrl": "mit.edu",
        },
        headers=auth_headers,
    )
    assert res.status_code == 201
    edu = res.json()["data"]["education"]
    assert edu["educationType"] == "degree"
    assert edu["iconName"] == "GraduationCap"
    assert edu["courses"] == ["Algorithms"]

    res = await client.put(
        f"/api/education/{edu['id']}",
        json={"educationType": "certification"},
        headers=auth_headers,
    )
    assert res.json()["data"]["education"]["educationType"] == "certification"
    assert res.json()["data"]["education"]["degree"] == "BSc Computer Science"

    res = await client.delete(f"/api/education/{edu['id']}", headers=auth_headers)
    assert res.status_code == 200
    res = await client.get("/api/education", headers=auth_headers)
    assert res.json()["data"]["educations"] == []


async def test_education_rejects_unknown_type(client, auth_headers):
    res = await client.post(
        "/api/education",
        json={"institution": "MIT", "degree": "BSc", "educationType": "bootcamp"},
        headers=auth_headers,
    )
    assert res.status_code == 400


async def test_achievement_requires_type(client, auth_headers):
    res = await client.post(
        "/api/achievements",
        json={"title": "Finalist", "organization": "ICPC"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert any(e["field"] == "type" for e in res.json()["errors"])


async def test_achievement_create_and_reorder(client, auth_headers):
    ids = []
    for title in ("First", "Second"):
        res = await client.post(
            "/api/achievements",
            json={
                "title": title, "organization": "ICPC", "type": "competition",
                "skillsInvolved": ["C++"], "keyPoints": ["Top 10"],
            },
            headers=auth_headers,
        )
        assert res.status_code == 201
        ids.append(res.json()["data"]["achievement"]["id"])

    res = await client.put(
        "/api/achievements/reorder",
        json={"achievementIds": list(reversed(ids))},
        headers=auth_headers,
    )
    rows = res.json()["data"]["achievements"]
    assert [r["title"] for r in rows] == ["Second", "First"]
    assert rows[0]["skillsInvolved"] == ["C++"]
    assert rows[0]["iconName"] == "Trophy"


@pytest.mark.parametrize("kind", ["leadership", "volunteering", "sports"])
async def test_extracurricular_types(client, auth_headers, kind):
    res = await client.post(
        "/api/extracurriculars",
        json={
            "activityName": "Robotics Club", "organization": "School",
            "type": kind, "role": "Captain",
        },
        headers=auth_headers,
    )
    assert res.status_code == 201
    item = res.json()["data"]["extracurricular"]
    assert item["type"] == kind
    assert item["role"] == "Captain"
    assert item["iconName"] == "Users"


async def test_extracurricular_batch(client, auth_headers):
    res = await client.post(
        "/api/extracurriculars/batch",
        json={"extracurriculars": [
            {"activityName": "Choir", "organization": "City", "type": "creative"},
            {"activityName": "Debate", "organization": "Uni", "type": "academic"},
        ]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    rows = res.json()["data"]["extracurriculars"]
    assert [(r["activityName"], r["order"]) for r in rows] == [
        ("Choir", 1), ("Debate", 2),
    ]
