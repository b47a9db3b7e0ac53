"""Profile Routes — owner aggregate, profile edits, bulk section replace.

Invariants:
    - GET /api/profile and /api/profile/me return the same private aggregate
    - PUT /me changes only the fields sent
    - PUT /visibility resets omitted flags to True
    - GET /api/profile/{username} applies visibility and does not count a view
"""

import pytest

from einfo.services import accounts


async def test_private_aggregate_shape(client, auth_headers, user):
    res = await client.get("/api/profile/me", headers=auth_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["user"]["username"] == user.username
    assert data["user"]["email"] == user.email
    assert set(data) >= {
        "profile", "visibilitySettings", "links", "portfolio", "experiences",
        "education", "achievements", "extracurriculars", "stats",
    }
    assert data["stats"] == {"stars": 0, "totalViews": 0, "totalClicks": 0}

    res = await client.get("/api/profile", headers=auth_headers)
    assert res.json()["data"]["user"]["id"] == data["user"]["id"]


async def test_update_me_is_partial(client, auth_headers):
    await client.put(
        "/api/profile/me",
        json={"bio": "Backend engineer", "location": "Porto"},
        headers=auth_headers,
    )
    res = await client.put(
        "/api/profile/me",
        json={"jobTitle": "Staff Engineer", "skills": ["Python", "SQL"], "name": "Jane D."},
        headers=auth_headers,
    )
    profile = res.json()["data"]["profile"]
    assert profile["bio"] == "Backend engineer"
    assert profile["location"] == "Porto"
    assert profile["jobTitle"] == "Staff Engineer"
    assert profile["skills"] == ["Python", "SQL"]
    assert profile["name"] == "Jane D."


async def test_update_me_rejects_long_bio(client, auth_headers):
    res = await client.put(
        "/api/profile/me", json={"bio": "x" * 501}, headers=auth_headers,
    )
    assert res.status_code == 400


async def test_basic_update_replaces_block(client, auth_headers):
    await client.put(
        "/api/profile/me", json={"bio": "Old bio", "location": "Porto"},
        headers=auth_headers,
    )
    res = await client.put(
        "/api/profile/basic", json={"jobTitle": "CTO"}, headers=auth_headers,
    )
    profile = res.json()["data"]["profile"]
    assert profile["jobTitle"] == "CTO"
    assert profile["bio"] == ""
    assert profile["location"] == ""


async def test_account_update_username(client, auth_headers):
    res = await client.put(
        "/api/profile/account", json={"username": "Jane-New"}, headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["user"]["username"] == "jane-new"


async def test_account_update_username_taken(client, auth_headers, user_factory):
    await user_factory("taken")
    res = await client.put(
        "/api/profile/account", json={"username": "Taken"}, headers=auth_headers,
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Username already taken"


async def test_account_update_username_claimed_concurrently(
    client, auth_headers, user_factory, monkeypatch,
):
    """The unique index still answers 409 when the pre-check misses a rival."""
    await user_factory("taken")

    async def never_taken(*args, **kwargs):
        return False

    monkeypatch.setattr(accounts, "username_taken", never_taken)
    res = await client.put(
        "/api/profile/account", json={"username": "taken"}, headers=auth_headers,
    )
    assert res.status_code == 409
    assert res.json()["message"] == "Username already taken"


async def test_account_update_invalid_username(client, auth_headers):
    res = await client.put(
        "/api/profile/account", json={"username": "bad name"}, headers=auth_headers,
    )
    assert res.status_code == 400


async def test_instant_message(client, auth_headers):
    res = await client.put(
        "/api/profile/instant-message",
        json={"instant_message_subject": "Hello", "instant_message_body": "Say hi!"},
        headers=auth_headers,
    )
    assert res.json()["data"] == {
        "instantMessageSubject": "Hello", "instantMessageBody": "Say hi!",
    }


async def test_visibility_resets_omitted_flags(client, auth_headers):
    await client.put(
        "/api/profile/visibility",
        json={"showLinks": False, "showTitles": False},
        headers=auth_headers,
    )
    res = await client.put(
        "/api/profile/visibility", json={"showPortfolio": False}, headers=auth_headers,
    )
    settings = res.json()["data"]["visibilitySettings"]
    assert settings["showPortfolio"] is False
    assert settings["showLinks"] is True
    assert settings["showTitles"] is True


async def test_bulk_links_replace_drops_blank_rows(client, auth_headers):
    res = await client.put(
        "/api/profile/links",
        json={"links": [
            {"title": "GitHub", "url": "https://github.com/jane"},
            {"title": "", "url": ""},
        ]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert [link["title"] for link in res.json()["data"]["links"]] == ["GitHub"]

    kept_id = res.json()["data"]["links"][0]["id"]
    res = await client.put(
        "/api/profile/links",
        json={"links": [
            {"id": kept_id, "title": "GitHub", "url": "https://github.com/jane-doe"},
        ]},
        headers=auth_headers,
    )
    assert res.json()["data"]["links"][0]["id"] == kept_id


async def test_bulk_experiences_replace(client, auth_headers):
    res = await client.put(
        "/api/profile/experiences",
        json={"experiences": [{"company": "Acme", "position": "Dev"}]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    res = await client.get("/api/profile/me", headers=auth_headers)
    assert [e["company"] for e in res.json()["data"]["experiences"]] == ["Acme"]


async def test_public_profile_by_username_applies_visibility(
    client, auth_headers, user,
):
    await client.post(
        "/api/links", json={"title": "GitHub", "url": "https://github.com"},
        headers=auth_headers,
    )
    await client.put(
        "/api/profile/visibility", json={"showLinks": False}, headers=auth_headers,
    )
    res = await client.get(f"/api/profile/{user.username}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["links"] == []
    assert "email" not in data["user"]

    res = await client.get("/api/analytics/simple", headers=auth_headers)
    assert res.json()["data"]["totalViews"] == 0


async def test_public_profile_unknown_user(client):
    res = await client.get("/api/profile/nobody-here")
    assert res.status_code == 404
    assert res.json()["message"] == "Profile not found"


async def test_bulk_portfolio_replace_keeps_project_and_image_ids(client, auth_headers):
    res = await client.put(
        "/api/profile/portfolio",
        json={"portfolio": [{
            "title": "Site",
            "images": [{"url": "https://img.example.com/a.png", "title": "Home"}],
        }]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    project = res.json()["data"]["portfolio"][0]
    image_id = project["images"][0]["id"]

    res = await client.put(
        "/api/profile/portfolio",
        json={"portfolio": [{
            "id": project["id"],
            "title": "Site v2",
            "images": [
                {"id": image_id, "url": "https://img.example.com/a.png", "title": "Landing"},
                {"url": "https://img.example.com/b.png"},
            ],
        }]},
        headers=auth_headers,
    )
    project_after = res.json()["data"]["portfolio"][0]
    assert project_after["id"] == project["id"]
    assert project_after["title"] == "Site v2"
    assert [i["id"] for i in project_after["images"]][0] == image_id
    assert [i["title"] for i in project_after["images"]] == ["Landing", ""]
    assert [i["order"] for i in project_after["images"]] == [1, 2]


@pytest.mark.parametrize("section, item, key", [
    ("education", {"institution": "MIT", "degree": "BSc"}, "institution"),
    (
        "achievements",
        {"title": "Hackathon", "organization": "ACM", "type": "competition"},
        "title",
    ),
    (
        "extracurriculars",
        {"activityName": "Chess Club", "organization": "Uni", "type": "leadership"},
        "activityName",
    ),
])
async def test_bulk_section_replace(client, auth_headers, section, item, key):
    res = await client.put(
        f"/api/profile/{section}", json={section: [item]}, headers=auth_headers,
    )
    assert res.status_code == 200
    rows = res.json()["data"][section]
    assert [r[key] for r in rows] == [item[key]]
    assert rows[0]["order"] == 1

    res = await client.put(
        f"/api/profile/{section}",
        json={section: [{**item, "id": rows[0]["id"]}, item]},
        headers=auth_headers,
    )
    rows_after = res.json()["data"][section]
    assert rows_after[0]["id"] == rows[0]["id"]
    assert len(rows_after) == 2

    res = await client.put(
        f"/api/profile/{section}", json={section: []}, headers=auth_headers,
    )
    assert res.json()["data"][section] == []
    me = await client.get("/api/profile/me", headers=auth_headers)
    assert me.json()["data"][section] == []
