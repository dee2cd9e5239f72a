"""API tests for blog post routes (public and admin)."""

from app.services.blog_service import blog_service

from conftest import make_post

NEW_POST = {
    "title": "Ten Regex Tricks",
    "content": "## Intro\n\nRegex can be fun.",
    "excerpt": "Regex tips.",
    "category": "programming",
    "tags": ["regex"],
    "readingTime": 3,
}


def _create(client, **overrides):
    payload = dict(NEW_POST, **overrides)
    response = client.post("/api/blog", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestAdminRoutes:

    def test_create_generates_slug_and_defaults_to_draft(self, client):
        post = _create(client)

        assert post["slug"] == "ten-regex-tricks"
        assert post["status"] == "draft"
        assert post["readingTime"] == 3
        assert post["aiGenerated"] is False
        assert post["publishedAt"] is None

    def test_create_published_sets_published_at(self, client):
        post = _create(client, status="published")
        assert post["publishedAt"] is not None

    def test_duplicate_titles_get_unique_slugs(self, client):
        first = _create(client)
        second = _create(client)
        assert (first["slug"], second["slug"]) == ("ten-regex-tricks", "ten-regex-tricks-2")

    def test_create_rejects_missing_content(self, client):
        response = client.post("/api/blog", json={"title": "No body"})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert "content" in response.json()["error"]

    def test_get_update_delete(self, client):
        post_id = _create(client)["id"]

        assert client.get(f"/api/blog/{post_id}").json()["data"]["title"] == "Ten Regex Tricks"

        updated = client.put(f"/api/blog/{post_id}", json={"title": "Eleven Regex Tricks"}).json()["data"]
        assert updated["title"] == "Eleven Regex Tricks"
        assert updated["excerpt"] == "Regex tips."

        assert client.delete(f"/api/blog/{post_id}").json() == {
            "success": True,
            "message": "Post deleted successfully",
        }
        assert client.get(f"/api/blog/{post_id}").status_code == 404

    def test_missing_post_is_404_with_error_body(self, client):
        response = client.get("/api/blog/9999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Post not found"}

    def test_publish_and_unpublish(self, client):
        post_id = _create(client)["id"]

        published = client.post(f"/api/blog/{post_id}/publish").json()
        assert published["data"]["status"] == "published"
        assert published["data"]["publishedAt"] is not None

        drafted = client.post(f"/api/blog/{post_id}/unpublish").json()
        assert drafted["data"]["status"] == "draft"

    def test_list_filters_by_status_and_reports_counts(self, client):
        _create(client, title="Draft One")
        _create(client, title="Live One", status="published")

        body = client.get("/api/blog", params={"status": "published"}).json()

        assert [p["title"] for p in body["data"]] == ["Live One"]
        assert body["counts"] == {"total": 2, "drafts": 1, "published": 1}

    def test_stats(self, client, db_session):
        _create(client, status="published")
        blog_service.save_generated_post(db_session, make_post())

        stats = client.get("/api/blog/stats").json()["data"]
        assert stats == {"total": 2, "drafts": 1, "published": 1}


class TestPublicRoutes:

    def test_lists_only_published_posts(self, client):
        _create(client, title="Hidden Draft")
        _create(client, title="Visible Post", status="published", category="design")

        body = client.get("/api/blog/public").json()

        assert body["count"] == 1
        assert body["data"][0]["title"] == "Visible Post"
        assert "content" not in body["data"][0]

    def test_filters_by_category_and_limit(self, client):
        _create(client, title="A", status="published", category="design")
        _create(client, title="B", status="published", category="seo")
        _create(client, title="C", status="published", category="design")

        assert client.get("/api/blog/public", params={"category": "seo"}).json()["count"] == 1
        assert client.get("/api/blog/public", params={"limit": 2}).json()["count"] == 2

    def test_get_by_slug_increments_views(self, client):
        _create(client, status="published")

        first = client.get("/api/blog/public/ten-regex-tricks").json()["data"]
        second = client.get("/api/blog/public/ten-regex-tricks").json()["data"]

        assert first["views"] == 1
        assert second["views"] == 2

    def test_drafts_are_not_visible_by_slug(self, client):
        _create(client)
        assert client.get("/api/blog/public/ten-regex-tricks").status_code == 404


def test_unknown_route_returns_json_404(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}
