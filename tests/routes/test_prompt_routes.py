from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import DataError

ROUTES = "app.api.routes.prompt_routes"


def test_list_prompts_is_public(client):
    with patch(f"{ROUTES}.list_prompts", new_callable=AsyncMock, return_value=[]) as mock:
        response = client.get("/api/prompts?category=Coding")

    assert response.status_code == 200
    assert mock.await_args.kwargs["viewer_email"] is None


def test_like_unknown_prompt_is_404(client, authenticated):
    with patch(f"{ROUTES}.toggle_like", new_callable=AsyncMock, return_value=None):
        response = client.post("/api/prompts/99/like")

    assert response.status_code == 404


def test_like_returns_state_and_count(client, authenticated):
    with patch(f"{ROUTES}.toggle_like", new_callable=AsyncMock, return_value=(True, 12)):
        response = client.post("/api/prompts/1/like")

    assert response.json() == {"liked": True, "likeCount": 12}


def test_delete_someone_elses_prompt_is_403(client, authenticated):
    prompt = SimpleNamespace(id=1, author_email="bob@example.com", image_key="prompts/a.png")
    with patch(f"{ROUTES}.get_prompt", new_callable=AsyncMock, return_value=prompt), \
            patch(f"{ROUTES}.delete_prompt", new_callable=AsyncMock) as delete:
        response = client.delete("/api/prompts/1")

    assert response.status_code == 403
    delete.assert_not_awaited()


def test_delete_own_prompt_survives_storage_failure(client, authenticated):
    prompt = SimpleNamespace(id=1, author_email=authenticated.email, image_key="prompts/a.png")
    with patch(f"{ROUTES}.get_prompt", new_callable=AsyncMock, return_value=prompt), \
            patch(f"{ROUTES}.delete_prompt", new_callable=AsyncMock), \
            patch(f"{ROUTES}.delete_image", new_callable=AsyncMock, side_effect=RuntimeError("s3")):
        response = client.delete("/api/prompts/1")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_create_prompt_requires_image(client, authenticated):
    response = client.post("/api/prompts", data={"title": "Neon", "content": "A neon city"})

    assert response.status_code == 400
    assert response.json()["detail"] == "image file is required"


def test_create_prompt_rejects_unknown_category(client, authenticated):
    response = client.post(
        "/api/prompts",
        data={"title": "Neon", "content": "A neon city", "category": "Cooking"},
        files={"image": ("a.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 400


def test_create_prompt(client, authenticated):
    created = {"id": 1, "title": "Neon"}
    with patch(f"{ROUTES}.upload_image", new_callable=AsyncMock, return_value=("https://cdn/x.png", "x.png")), \
            patch(f"{ROUTES}.create_prompt", new_callable=AsyncMock, return_value=created):
        response = client.post(
            "/api/prompts",
            data={"title": "Neon", "content": "A neon city"},
            files={"image": ("a.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 201
    assert response.json() == created


def test_comment_on_unknown_prompt_is_404(client, authenticated):
    with patch(f"{ROUTES}.add_comment", new_callable=AsyncMock, return_value=None):
        response = client.post("/api/prompts/99/comments", json={"content": "nice"})

    assert response.status_code == 404


def test_create_prompt_rejects_long_title_before_upload(client, authenticated):
    with patch(f"{ROUTES}.upload_image", new_callable=AsyncMock) as upload:
        response = client.post(
            "/api/prompts",
            data={"title": "x" * 201, "content": "A neon city"},
            files={"image": ("a.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 400
    upload.assert_not_awaited()


def test_failed_insert_removes_stored_image(client, authenticated):
    with patch(f"{ROUTES}.upload_image", new_callable=AsyncMock, return_value=("https://cdn/x.png", "prompts/x.png")), \
            patch(f"{ROUTES}.create_prompt", new_callable=AsyncMock, side_effect=DataError("INSERT", {}, Exception("too long"))), \
            patch(f"{ROUTES}.delete_image", new_callable=AsyncMock) as delete:
        response = client.post(
            "/api/prompts",
            data={"title": "Neon", "content": "A neon city"},
            files={"image": ("a.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 500
    delete.assert_awaited_once_with("prompts/x.png")


def test_failed_insert_still_500_when_image_cleanup_fails(client, authenticated):
    with patch(f"{ROUTES}.upload_image", new_callable=AsyncMock, return_value=("https://cdn/x.png", "prompts/x.png")), \
            patch(f"{ROUTES}.create_prompt", new_callable=AsyncMock, side_effect=RuntimeError("db down")), \
            patch(f"{ROUTES}.delete_image", new_callable=AsyncMock, side_effect=RuntimeError("s3 down")):
        response = client.post(
            "/api/prompts",
            data={"title": "Neon", "content": "A neon city"},
            files={"image": ("a.png", b"\x89PNG", "image/png")},
        )

    assert response.status_code == 500
    assert response.json() == {"detail": "Server error"}
