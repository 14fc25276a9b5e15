import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_admin_uploads_event_image(client: AsyncClient, main_admin_headers):
    response = await client.post(
        "/storage/upload/event_images",
        files={"file": ("poster.png", b"\x89PNG fake image", "image/png")},
        headers=main_admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["public_url"] == f"http://test/uploads/event_images/{data['path']}"

    served = await client.get(f"/uploads/event_images/{data['path']}")
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake image"


@pytest.mark.asyncio
async def test_unknown_bucket(client: AsyncClient, main_admin_headers):
    response = await client.post(
        "/storage/upload/avatars",
        files={"file": ("me.png", b"img", "image/png")},
        headers=main_admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_requires_admin(client: AsyncClient, auth_headers):
    response = await client.post(
        "/storage/upload/qr_codes",
        files={"file": ("pay.png", b"img", "image/png")},
        headers=auth_headers,
    )
    assert response.status_code == 403
