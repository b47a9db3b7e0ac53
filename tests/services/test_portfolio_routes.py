"""Portfolio Routes — projects with images, image sub-routes, reorder."""

import uuid


async def _create(client, headers, title="Site", **fields):
    res = await client.post(
        "/api/portfolio", json={"title": title, **fields}, headers=headers,
    )
    assert res.status_code == 201
    return res.json()["data"]["project"]


async def test_create_with_images(client, auth_headers):
    project = await _create(
        client, auth_headers,
        category="Web",
        url="https://site.example.com",
        images=[{"url": "https://img.example.com/1.jpg", "title": "Home"}],
    )
    assert project["category"] == "Web"
    assert project["iconName"] == "FolderOpen"
    assert project["images"][0]["title"] == "Home"
    assert project["images"][0]["order"] == 1


async def test_image_sub_routes(client, auth_headers):
    project = await _create(client, auth_headers)
    base = f"/api/portfolio/{project['id']}/images"

    res = await client.post(
        base, json={"url": "https://img.example.com/a.jpg"}, headers=auth_headers,
    )
    assert res.status_code == 201
    a = res.json()["data"]["image"]
    res = await client.post(
        base, json={"url": "https://img.example.com/b.jpg"}, headers=auth_headers,
    )
    b = res.json()["data"]["image"]
    assert (a["order"], b["order"]) == (1, 2)

    res = await client.put(
        f"{base}/reorder", json={"imageIds": [b["id"], a["id"]]}, headers=auth_headers,
    )
    assert [i["id"] for i in res.json()["data"]["images"]] == [b["id"], a["id"]]

    res = await client.delete(f"{base}/{a['id']}", headers=auth_headers)
    assert res.status_code == 200
    res = await client.get(f"/api/portfolio/{project['id']}", headers=auth_headers)
    assert [i["id"] for i in res.json()["data"]["project"]["images"]] == [b["id"]]


async def test_image_requires_valid_url(client, auth_headers):
    project = await _create(client, auth_headers)
    res = await client.post(
        f"/api/portfolio/{project['id']}/images",
        json={"url": "no spaces allowed here"},
        headers=auth_headers,
    )
    assert res.status_code == 400


async def test_reorder_projects(client, auth_headers):
    a = await _create(client, auth_headers, "A")
    b = await _create(client, auth_headers, "B")
    res = await client.put(
        "/api/portfolio/reorder",
        json={"projectIds": [b["id"], a["id"]]},
        headers=auth_headers,
    )
    assert [p["title"] for p in res.json()["data"]["projects"]] == ["B", "A"]


async def test_unknown_project_is_404(client, auth_headers):
    res = await client.delete(f"/api/portfolio/{uuid.uuid4()}", headers=auth_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Portfolio project not found"


async def test_batch_resubmit_keeps_image_ids(client, auth_headers):
    payload = {"projects": [{
        "title": "Site",
        "images": [{"url": "https://img.example.com/1.jpg"}],
    }]}
    res = await client.post("/api/portfolio/batch", json=payload, headers=auth_headers)
    assert res.status_code == 200
    project = res.json()["data"]["projects"][0]
    image = project["images"][0]

    resubmit = {"projects": [{
        "id": project["id"],
        "title": "Site",
        "images": [{"id": image["id"], "url": image["url"]}],
    }]}
    res = await client.post("/api/portfolio/batch", json=resubmit, headers=auth_headers)
    again = res.json()["data"]["projects"][0]
    assert again["id"] == project["id"]
    assert [i["id"] for i in again["images"]] == [image["id"]]

    res = await client.delete(
        f"/api/portfolio/{project['id']}/images/{image['id']}", headers=auth_headers,
    )
    assert res.status_code == 200


async def test_batch_drops_unlisted_images(client, auth_headers):
    project = await _create(
        client, auth_headers,
        images=[
            {"url": "https://img.example.com/a.jpg"},
            {"url": "https://img.example.com/b.jpg"},
        ],
    )
    keep = project["images"][1]
    res = await client.post(
        "/api/portfolio/batch",
        json={"projects": [{
            "id": project["id"], "title": "Site",
            "images": [{"id": keep["id"], "url": keep["url"]}],
        }]},
        headers=auth_headers,
    )
    images = res.json()["data"]["projects"][0]["images"]
    assert [(i["id"], i["order"]) for i in images] == [(keep["id"], 1)]


async def test_batch_rejects_image_id_from_another_project(client, auth_headers):
    a = await _create(client, auth_headers, "A")
    b = await _create(
        client, auth_headers, "B", images=[{"url": "https://img.example.com/b.jpg"}],
    )
    stolen = b["images"][0]
    res = await client.post(
        "/api/portfolio/batch",
        json={"projects": [
            {"id": a["id"], "title": "A renamed",
             "images": [{"id": stolen["id"], "url": stolen["url"]}]},
            {"id": b["id"], "title": "B"},
        ]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Some image IDs are invalid or don't belong to you"

    res = await client.get("/api/portfolio", headers=auth_headers)
    projects = res.json()["data"]["projects"]
    assert [p["title"] for p in projects] == ["A", "B"]
    assert projects[0]["images"] == []
    assert [i["id"] for i in projects[1]["images"]] == [stolen["id"]]


async def test_create_rejects_image_ids(client, auth_headers):
    res = await client.post(
        "/api/portfolio",
        json={"title": "Site", "images": [
            {"id": str(uuid.uuid4()), "url": "https://img.example.com/1.jpg"},
        ]},
        headers=auth_headers,
    )
    assert res.status_code == 400
    res = await client.get("/api/portfolio", headers=auth_headers)
    assert res.json()["data"]["projects"] == []


async def test_image_reorder_rejects_foreign_and_duplicate_ids(client, auth_headers):
    a = await _create(
        client, auth_headers, "A",
        images=[
            {"url": "https://img.example.com/a1.jpg"},
            {"url": "https://img.example.com/a2.jpg"},
        ],
    )
    b = await _create(
        client, auth_headers, "B", images=[{"url": "https://img.example.com/b1.jpg"}],
    )
    a1, a2 = (i["id"] for i in a["images"])
    url = f"/api/portfolio/{a['id']}/images/reorder"

    res = await client.put(
        url, json={"imageIds": [a2, b["images"][0]["id"]]}, headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Some image IDs are invalid or don't belong to you"

    res = await client.put(url, json={"imageIds": [a2, a2]}, headers=auth_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Duplicate image IDs in request"

    res = await client.get(f"/api/portfolio/{a['id']}", headers=auth_headers)
    images = res.json()["data"]["project"]["images"]
    assert [(i["id"], i["order"]) for i in images] == [(a1, 1), (a2, 2)]


async def test_update_rejects_null_title(client, auth_headers):
    project = await _create(client, auth_headers, "Keep me")
    res = await client.put(
        f"/api/portfolio/{project['id']}", json={"title": None}, headers=auth_headers,
    )
    assert res.status_code == 400
    assert any(e["field"] == "title" for e in res.json()["errors"])

    res = await client.get(f"/api/portfolio/{project['id']}", headers=auth_headers)
    assert res.json()["data"]["project"]["title"] == "Keep me"
