"""Work Experience Routes — CRUD with nested projects, and project sub-routes.

Invariants:
    - Projects sent with an experience sync the set: referenced ids stay, the rest go
    - Project routes are scoped through the owning experience
    - Error titles name the entity ("Work experience not found")
"""

import uuid


async def _create(client, headers, **fields):
    body = {"company": "Acme", "position": "Engineer", **fields}
    res = await client.post("/api/experience", json=body, headers=headers)
    assert res.status_code == 201
    return res.json()["data"]["experience"]


async def test_create_with_projects(client, auth_headers):
    exp = await _create(
        client, auth_headers,
        startDate="2021-03-01T00:00:00",
        achievements=["Shipped v2"],
        projects=[
            {"title": "Billing", "technologies": ["Python", "Postgres"]},
            {"title": "Search"},
        ],
    )
    assert exp["iconName"] == "Building"
    assert exp["achievements"] == ["Shipped v2"]
    assert exp["startDate"].startswith("2021-03-01")
    assert [(p["title"], p["order"]) for p in exp["projects"]] == [
        ("Billing", 1), ("Search", 2),
    ]
    assert exp["projects"][0]["technologies"] == ["Python", "Postgres"]


async def test_missing_required_field(client, auth_headers):
    res = await client.post(
        "/api/experience", json={"company": "Acme"}, headers=auth_headers,
    )
    assert res.status_code == 400
    assert any(e["field"] == "position" for e in res.json()["errors"])


async def test_update_replaces_projects_when_sent(client, auth_headers):
    exp = await _create(client, auth_headers, projects=[{"title": "Old"}])
    res = await client.put(
        f"/api/experience/{exp['id']}",
        json={"projects": [{"title": "New A"}, {"title": "New B"}]},
        headers=auth_headers,
    )
    projects = res.json()["data"]["experience"]["projects"]
    assert [p["title"] for p in projects] == ["New A", "New B"]


async def test_update_without_projects_keeps_them(client, auth_headers):
    exp = await _create(client, auth_headers, projects=[{"title": "Stay"}])
    res = await client.put(
        f"/api/experience/{exp['id']}",
        json={"position": "Lead"},
        headers=auth_headers,
    )
    updated = res.json()["data"]["experience"]
    assert updated["position"] == "Lead"
    assert [p["title"] for p in updated["projects"]] == ["Stay"]


async def test_unknown_experience_is_404(client, auth_headers):
    res = await client.get(f"/api/experience/{uuid.uuid4()}", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Work experience not found"


async def test_project_sub_routes(client, auth_headers):
    exp = await _create(client, auth_headers, projects=[{"title": "First"}])
    base = f"/api/experience/{exp['id']}/projects"

    res = await client.post(base, json={"title": "Second"}, headers=auth_headers)
    assert res.status_code == 201
    second = res.json()["data"]["project"]
    assert second["order"] == 2

    res = await client.put(
        f"{base}/{second['id']}",
        json={"description": "Rewrote the indexer"},
        headers=auth_headers,
    )
    assert res.json()["data"]["project"]["description"] == "Rewrote the indexer"
    assert res.json()["data"]["project"]["title"] == "Second"

    first_id = exp["projects"][0]["id"]
    res = await client.put(
        f"{base}/reorder",
        json={"projectIds": [second["id"], first_id]},
        headers=auth_headers,
    )
    assert [p["title"] for p in res.json()["data"]["projects"]] == ["Second", "First"]

    res = await client.delete(f"{base}/{first_id}", headers=auth_headers)
    assert res.status_code == 200
    res = await client.get(f"/api/experience/{exp['id']}", headers=auth_headers)
    assert [p["title"] for p in res.json()["data"]["experience"]["projects"]] == ["Second"]


async def test_unknown_project_is_404(client, auth_headers):
    exp = await _create(client, auth_headers)
    res = await client.delete(
        f"/api/experience/{exp['id']}/projects/{uuid.uuid4()}", headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.json()["message"] == "Experience project not found"


async def test_batch_keeps_ids(client, auth_headers):
    exp = await _create(client, auth_headers)
    res = await client.post(
        "/api/experience/batch",
        json={"experiences": [
            {"company": "Newco", "position": "CTO"},
            {"id": exp["id"], "company": "Acme", "position": "Principal"},
        ]},
        headers=auth_headers,
    )
    rows = res.json()["data"]["experiences"]
    assert [r["company"] for r in rows] == ["Newco", "Acme"]
    assert rows[1]["id"] == exp["id"]
    assert rows[1]["position"] == "Principal"


async def test_update_keeps_referenced_project_ids(client, auth_headers):
    exp = await _create(
        client, auth_headers, projects=[{"title": "API"}, {"title": "Dropped"}],
    )
    api = exp["projects"][0]
    res = await client.put(
        f"/api/experience/{exp['id']}",
        json={"projects": [{"title": "Mobile"}, {"id": api["id"], "title": "API v2"}]},
        headers=auth_headers,
    )
    projects = res.json()["data"]["experience"]["projects"]
    assert [p["title"] for p in projects] == ["Mobile", "API v2"]
    assert projects[1]["id"] == api["id"]
    assert projects[1]["order"] == 2


async def test_update_rejects_null_required_fields(client, auth_headers):
    exp = await _create(client, auth_headers)
    res = await client.put(
        f"/api/experience/{exp['id']}",
        json={"company": None, "position": "Lead"},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert any(e["field"] == "company" for e in res.json()["errors"])
