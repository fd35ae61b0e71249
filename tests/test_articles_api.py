from __future__ import annotations

import pytest

from sample_data import article

BAD_IDS = ["seven';-- yo", "eight", "1 OR 1=1", "-1", "1.5"]


def test_list_articles(client, fake_db):
    fake_db.on("FROM articles a", "fetch", [article(2, comment_count="0"), article(1)])

    resp = client.get("/api/articles")

    assert resp.status_code == 200
    articles = resp.json()["articles"]
    assert [a["article_id"] for a in articles] == [2, 1]
    for a in articles:
        assert {"article_id", "title", "topic", "author", "body", "created_at", "votes"} <= a.keys()
        assert isinstance(a["comment_count"], str)
        assert isinstance(a["created_at"], str)


def test_list_articles_query_params(client, fake_db):
    fake_db.on("FROM topics", "fetchval", 1)

    resp = client.get("/api/articles?sort_by=title&order=asc&topic=mitch")

    assert resp.status_code == 200
    assert resp.json() == {"articles": []}
    assert "ORDER BY a.title ASC, a.article_id ASC" in fake_db.sql("fetch")[0]


@pytest.mark.parametrize(
    "query",
    ["sort_by=not_a_column", "order=sideways", "sort_by=votes%3BDROP%20TABLE%20articles", "limit=ten"],
)
def test_list_articles_bad_query(client, fake_db, query):
    resp = client.get(f"/api/articles?{query}")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Invalid input"}
    assert fake_db.calls == []


def test_list_articles_unknown_topic(client):
    resp = client.get("/api/articles?topic=not-a-topic")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Topic not found"}


def test_get_article(client, fake_db):
    fake_db.on("FROM articles a", "fetchrow", article(1))

    resp = client.get("/api/articles/1")

    assert resp.status_code == 200
    body = resp.json()["article"]
    assert body["article_id"] == 1
    assert body["title"] == "Living in the shadow of a great man"
    assert body["votes"] == 100
    assert body["comment_count"] == "11"


@pytest.mark.parametrize("bad_id", BAD_IDS)
def test_get_article_invalid_id(client, bad_id):
    resp = client.get(f"/api/articles/{bad_id}")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Invalid input"}


def test_get_article_not_found(client):
    resp = client.get("/api/articles/1688")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article not found"}


def test_patch_article_votes(client, fake_db):
    row = article(1, votes=200)
    row.pop("comment_count")
    fake_db.on("UPDATE articles", "fetchrow", row)

    resp = client.patch("/api/articles/1", json={"inc_votes": 100})

    assert resp.status_code == 200
    body = resp.json()["article"]
    assert body["votes"] == 200
    assert body["article_id"] == 1
    assert "comment_count" not in body
    assert fake_db.calls[0][2] == (100, 1)


@pytest.mark.parametrize(
    "url, payload",
    [
        ("/api/articles/eight", {"inc_votes": 100}),
        ("/api/articles/1", {"inc_votes": "not-a-valid-value"}),
        ("/api/articles/1", {"not a valid key": 100}),
        ("/api/articles/1", {"inc_votes": 1.5}),
    ],
)
def test_patch_article_invalid(client, fake_db, url, payload):
    resp = client.patch(url, json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Invalid input"}
    assert fake_db.calls == []


def test_patch_article_malformed_json(client):
    resp = client.patch(
        "/api/articles/1",
        content=b"{inc_votes: 1",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "Invalid input"}


def test_patch_article_not_found(client):
    resp = client.patch("/api/articles/1688", json={"inc_votes": 100})
    assert resp.status_code == 404
    assert resp.json() == {"msg": "Article not found"}


def test_post_article_returns_read_shape(client, fake_db):
    inserted = article(13, title="New", topic="cats", author="rogersop", body="Text", votes=0)
    inserted.pop("comment_count")
    fake_db.on("INSERT INTO articles", "fetchrow", inserted)
    fake_db.on("FROM articles a", "fetchrow", dict(inserted, comment_count="0"))

    resp = client.post(
        "/api/articles",
        json={"title": "New", "topic": "cats", "author": "rogersop", "body": "Text"},
    )

    assert resp.status_code == 201
    body = resp.json()["article"]
    assert body["article_id"] == 13
    assert body["comment_count"] == "0"
    assert body["votes"] == 0
    # insert, then re-read
    assert [m for m, _, _ in fake_db.calls] == ["fetchrow", "fetchrow"]


def test_post_article_invalid_payloads(client):
    missing = client.post("/api/articles", json={"title": "New", "topic": "cats"})
    assert missing.status_code == 400
    assert missing.json() == {"msg": "Invalid post input"}

    wrong_type = client.post(
        "/api/articles",
        json={"title": "New", "topic": "cats", "author": 5, "body": "Text"},
    )
    assert wrong_type.status_code == 400
    assert wrong_type.json() == {"msg": "Invalid post data type"}


def test_get_article_patched_service(client, monkeypatch):
    async def fake_fetch_article(db, article_id):
        return article(int(article_id), votes=7)

    # Patch where used in the router
    monkeypatch.setattr("newsboard.api.articles.svc.fetch_article", fake_fetch_article)

    resp = client.get("/api/articles/5")
    assert resp.status_code == 200
    assert resp.json()["article"]["article_id"] == 5
    assert resp.json()["article"]["votes"] == 7
