"""Public Routes — profile views, mail, stars, clicks and directory search.

Invariants:
    - Viewing a public profile increments total_views by one
    - One star per visitor address; the second attempt is rejected
    - Deactivated profiles are invisible to every public route
    - Search orders by star count, then newest
"""

import smtplib

from einfo.api.dependencies import get_mailer
from einfo.infrastructure.mailer import SmtpMailer
from einfo.main import app


class DisconnectingMailer(SmtpMailer):
    def _send_blocking(self, msg):
        raise smtplib.SMTPServerDisconnected("Connection unexpectedly closed")


async def test_view_counts_once_per_request(client, user, auth_headers):
    for _ in range(2):
        res = await client.get(f"/api/public/profile/{user.username}")
        assert res.status_code == 200

    res = await client.get("/api/analytics/simple", headers=auth_headers)
    assert res.json()["data"] == {"totalViews": 2, "totalClicks": 0}


async def test_view_is_case_insensitive(client, user):
    res = await client.get(f"/api/public/profile/{user.username.upper()}")
    assert res.status_code == 200
    assert res.json()["data"]["user"]["username"] == user.username


async def test_deactivated_profile_is_404(client, user_factory):
    await user_factory("ghost", is_active=False)
    res = await client.get("/api/public/profile/ghost")
    assert res.status_code == 404
    assert res.json()["message"] == "Profile not found"


async def test_click_tracking(client, user, auth_headers):
    res = await client.post(f"/api/public/profile/{user.username}/click")
    assert res.json()["message"] == "Click tracked successfully"
    res = await client.get("/api/analytics/simple", headers=auth_headers)
    assert res.json()["data"]["totalClicks"] == 1


async def test_click_unknown_profile(client):
    res = await client.post("/api/public/profile/nobody-here/click")
    assert res.status_code == 404


async def test_star_once_per_visitor(client, user):
    url = f"/api/public/profile/{user.username}/star"
    res = await client.post(url)
    assert res.status_code == 200
    assert res.json()["data"] == {"starCount": 1}

    res = await client.post(url)
    assert res.status_code == 400
    assert res.json()["message"] == "You have already starred this profile"


async def test_star_with_explicit_visitor_ip(client, user):
    url = f"/api/public/profile/{user.username}/star"
    await client.post(url, json={"visitorIp": "10.0.0.1"})
    res = await client.post(url, json={"visitorIp": "10.0.0.2"})
    assert res.json()["data"] == {"starCount": 2}


async def test_send_message(client, user, mailer):
    res = await client.post(
        f"/api/public/profile/{user.username}/message",
        json={
            "message": "Loved your <b>portfolio</b>",
            "senderEmail": "visitor@example.com",
            "senderName": "Visitor",
        },
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Message sent successfully"

    (msg,) = mailer.sent
    assert msg["To"] == user.email
    assert msg["Subject"] == "New mail from visitor@example.com"
    assert msg["Reply-To"] == "visitor@example.com"
    html = msg.get_body(preferencelist=("html",)).get_content()
    assert "&lt;b&gt;portfolio&lt;/b&gt;" in html


async def test_send_message_validates_email(client, user, mailer):
    res = await client.post(
        f"/api/public/profile/{user.username}/message",
        json={"message": "Hi", "senderEmail": "not-an-email"},
    )
    assert res.status_code == 400
    assert mailer.sent == []


async def test_send_message_transport_failure(client, user):
    app.dependency_overrides[get_mailer] = lambda: DisconnectingMailer(
        "smtp.example.com", 587, "bot", "secret", "noreply@e-info.me", "E-Info.me",
    )
    res = await client.post(
        f"/api/public/profile/{user.username}/message",
        json={"message": "Hi", "senderEmail": "visitor@example.com"},
    )
    assert res.status_code == 502
    assert res.json()["success"] is False
    assert res.json()["message"] == "Failed to send message"


async def test_search_treats_wildcards_literally(client, user_factory):
    await user_factory("jane_doe", name="Jane")
    await user_factory("janexdoe", name="Janex", profile={"bio": "100% remote"})

    res = await client.get("/api/public/search", params={"q": "jane_"})
    assert [p["username"] for p in res.json()["data"]["profiles"]] == ["jane_doe"]

    res = await client.get("/api/public/search", params={"q": "%"})
    assert [p["username"] for p in res.json()["data"]["profiles"]] == ["janexdoe"]


async def test_search_by_skill_and_star_order(client, user_factory):
    await user_factory("alice", name="Alice", profile={"skills": ["Python", "Go"]})
    bob = await user_factory("bob", name="Bob", profile={"skills": ["python"]})
    await user_factory("carol", name="Carol", profile={"skills": ["Rust"]})
    await client.post(f"/api/public/profile/{bob.username}/star")

    res = await client.get("/api/public/search", params={"skills": "Python"})
    data = res.json()["data"]
    assert [p["username"] for p in data["profiles"]] == ["bob", "alice"]
    assert data["profiles"][0]["starCount"] == 1
    assert data["pagination"] == {"page": 1, "limit": 20, "total": 2, "pages": 1}


async def test_search_by_text_and_job_title(client, user_factory):
    await user_factory("dana", name="Dana", profile={"job_title": "Data Engineer"})
    await user_factory("eve", name="Eve", profile={"job_title": "Designer"})

    res = await client.get("/api/public/search", params={"q": "engineer"})
    assert [p["username"] for p in res.json()["data"]["profiles"]] == ["dana"]

    res = await client.get("/api/public/search", params={"jobTitle": "design"})
    assert [p["username"] for p in res.json()["data"]["profiles"]] == ["eve"]


async def test_search_skips_inactive_users(client, user_factory):
    await user_factory("frank", is_active=False, profile={"skills": ["Go"]})
    res = await client.get("/api/public/search", params={"skills": "go"})
    assert res.json()["data"]["profiles"] == []


async def test_search_pagination_bounds(client):
    res = await client.get("/api/public/search", params={"limit": 500})
    assert res.status_code == 400
