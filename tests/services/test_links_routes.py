"""Link Routes — CRUD, reorder and batch over the caller's links.

Invariants:
    - New links append at max(order) + 1, starting from 1
    - Delete is soft: the row leaves every listing
    - Reorder and batch reject foreign or duplicate ids and write nothing
    - Batch keeps ids stable for items that carry one
"""

import uuid

from einfo.infrastructure.security import create_user_token


async def _create(client, headers, title, url="https://example.com"):
    res = await client.post(
        "/api/links", json={"title": title, "url": url}, headers=headers,
    )
    assert res.status_code == 201
    return res.json()["data"]["link"]


async def test_create_link_sets_defaults(client, auth_headers):
    link = await _create(client, auth_headers, "GitHub", "github.com/jane")
    assert link["title"] == "GitHub"
    assert link["url"] == "github.com/jane"
    assert link["iconName"] == "Link"
    assert link["order"] == 1


async def test_create_appends_order(client, auth_headers):
    await _create(client, auth_headers, "One")
    second = await _create(client, auth_headers, "Two")
    assert second["order"] == 2


async def test_create_rejects_bad_url(client, auth_headers):
    res = await client.post(
        "/api/links", json={"title": "x", "url": "not a url"}, headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "url"


async def test_list_in_display_order(client, auth_headers):
    await _create(client, auth_headers, "One")
    await _create(client, auth_headers, "Two")
    res = await client.get("/api/links", headers=auth_headers)
    assert [link["title"] for link in res.json()["data"]["links"]] == ["One", "Two"]


async def test_partial_update_keeps_other_fields(client, auth_headers):
    link = await _create(client, auth_headers, "GitHub", "https://github.com/jane")
    res = await client.put(
        f"/api/links/{link['id']}",
        json={"description": "My code"},
        headers=auth_headers,
    )
    updated = res.json()["data"]["link"]
    assert updated["description"] == "My code"
    assert updated["url"] == "https://github.com/jane"
    assert res.json()["message"] == "Link updated successfully"


async def test_soft_delete_hides_link(client, auth_headers):
    link = await _create(client, auth_headers, "Gone")
    res = await client.delete(f"/api/links/{link['id']}", headers=auth_headers)
    assert res.status_code == 200

    res = await client.get(f"/api/links/{link['id']}", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Link not found"
    res = await client.get("/api/links", headers=auth_headers)
    assert res.json()["data"]["links"] == []


async def test_other_users_link_is_404(client, auth_headers, user_factory):
    link = await _create(client, auth_headers, "Mine")
    other = await user_factory("intruder")
    headers = {"Authorization": f"Bearer {create_user_token(other)}"}
    res = await client.put(
        f"/api/links/{link['id']}", json={"title": "Stolen"}, headers=headers,
    )
    assert res.status_code == 404


async def test_reorder(client, auth_headers):
    a = await _create(client, auth_headers, "A")
    b = await _create(client, auth_headers, "B")
    c = await _create(client, auth_headers, "C")
    res = await client.put(
        "/api/links/reorder",
        json={"linkIds": [c["id"], a["id"]]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    links = res.json()["data"]["links"]
    assert [(link["title"], link["order"]) for link in links] == [
        ("C", 1), ("A", 2), ("B", 3),
    ]


async def test_reorder_rejects_foreign_id(client, auth_headers):
    a = await _create(client, auth_headers, "A")
    res = await client.put(
        "/api/links/reorder",
        json={"linkIds": [a["id"], str(uuid.uuid4())]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Some link IDs are invalid or don't belong to you"

    res = await client.get("/api/links", headers=auth_headers)
    assert res.json()["data"]["links"][0]["order"] == 1


async def test_reorder_rejects_duplicates(client, auth_headers):
    a = await _create(client, auth_headers, "A")
    res = await client.put(
        "/api/links/reorder",
        json={"linkIds": [a["id"], a["id"]]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Duplicate link IDs in request"


async def test_batch_updates_creates_and_retires(client, auth_headers):
    keep = await _create(client, auth_headers, "Keep")
    drop = await _create(client, auth_headers, "Drop")
    res = await client.post(
        "/api/links/batch",
        json={"links": [
            {"title": "New", "url": "https://new.example.com"},
            {"id": keep["id"], "title": "Kept", "url": "https://keep.example.com"},
        ]},
        headers=auth_headers,
    )
    assert res.status_code == 200
    links = res.json()["data"]["links"]
    assert [link["title"] for link in links] == ["New", "Kept"]
    assert links[1]["id"] == keep["id"]
    assert [link["order"] for link in links] == [1, 2]
    assert drop["id"] not in {link["id"] for link in links}


async def test_batch_with_foreign_id_writes_nothing(client, auth_headers):
    await _create(client, auth_headers, "Original")
    res = await client.post(
        "/api/links/batch",
        json={"links": [
            {"title": "New", "url": "https://new.example.com"},
            {"id": str(uuid.uuid4()), "title": "X", "url": "https://x.example.com"},
        ]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    res = await client.get("/api/links", headers=auth_headers)
    assert [link["title"] for link in res.json()["data"]["links"]] == ["Original"]


async def test_links_require_auth(client):
    res = await client.get("/api/links")
    assert res.status_code == 401
