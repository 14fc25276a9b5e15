import pytest
from httpx import AsyncClient

from sanchalana.models.admin_model import Admin, AdminRole


@pytest.mark.asyncio
async def test_main_admin_creates_department_admin(client: AsyncClient, db_session, department, test_user,
                                                   main_admin_headers):
    response = await client.post("/admin/add", json={
        "user_id": test_user.id,
        "role": "department_admin",
        "department_id": department.id,
    }, headers=main_admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["role"] == "department_admin"
    assert data["department_id"] == department.id
    assert data["event_id"] is None
    assert data["username"] == test_user.email


@pytest.mark.asyncio
async def test_department_admin_requires_department(client: AsyncClient, test_user, main_admin_headers):
    response = await client.post("/admin/add", json={"user_id": test_user.id, "role": "department_admin"},
                                 headers=main_admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_event_admin_department_is_derived(client: AsyncClient, event, test_user, department_admin_headers):
    response = await client.post("/admin/add", json={
        "user_id": test_user.id,
        "role": "event_admin",
        "event_id": event.id,
    }, headers=department_admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["event_id"] == event.id
    assert data["department_id"] == event.department_id


@pytest.mark.asyncio
async def test_event_admin_department_mismatch(client: AsyncClient, event, other_department, test_user,
                                               main_admin_headers):
    response = await client.post("/admin/add", json={
        "user_id": test_user.id,
        "role": "event_admin",
        "event_id": event.id,
        "department_id": other_department.id,
    }, headers=main_admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_department_admin_limited_to_own_event_admins(client: AsyncClient, db_session, department,
                                                            other_department, make_event, test_user,
                                                            department_admin_headers):
    foreign_event = make_event(other_department, "Lathe Masters")

    response = await client.post("/admin/add", json={
        "user_id": test_user.id, "role": "event_admin", "event_id": foreign_event.id,
    }, headers=department_admin_headers)
    assert response.status_code == 403

    response = await client.post("/admin/add", json={
        "user_id": test_user.id, "role": "department_admin", "department_id": department.id,
    }, headers=department_admin_headers)
    assert response.status_code == 403

    db_session.expire_all()
    assert db_session.get(Admin, test_user.id) is None


@pytest.mark.asyncio
async def test_event_admin_creates_no_admins(client: AsyncClient, event, test_user, event_admin_headers):
    response = await client.post("/admin/add", json={
        "user_id": test_user.id, "role": "event_admin", "event_id": event.id,
    }, headers=event_admin_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unknown_role_rejected(client: AsyncClient, test_user, main_admin_headers):
    response = await client.post("/admin/add", json={"user_id": test_user.id, "role": "super_admin"},
                                 headers=main_admin_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_nobody_deletes_their_own_admin_row(client: AsyncClient, main_admin, main_admin_headers):
    response = await client.delete(f"/admin/{main_admin.id}", headers=main_admin_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_department_admin_deletes_own_event_admin(client: AsyncClient, db_session, event_admin,
                                                        department_admin_headers):
    event_admin_id = event_admin.id

    response = await client.delete(f"/admin/{event_admin_id}", headers=department_admin_headers)

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.get(Admin, event_admin_id) is None


@pytest.mark.asyncio
async def test_department_admin_cannot_delete_main_admin(client: AsyncClient, main_admin,
                                                         department_admin_headers):
    response = await client.delete(f"/admin/{main_admin.id}", headers=department_admin_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_admin_listing_is_scoped(client: AsyncClient, main_admin, department_admin, event_admin,
                                       department_admin_headers, event_admin_headers, main_admin_headers):
    everyone = await client.get("/admin/all", headers=main_admin_headers)
    assert len(everyone.json()["data"]) == 3

    department_scope = await client.get("/admin/all", headers=department_admin_headers)
    assert {a["id"] for a in department_scope.json()["data"]} == {department_admin.id, event_admin.id}

    event_scope = await client.get("/admin/all", headers=event_admin_headers)
    assert [a["id"] for a in event_scope.json()["data"]] == [event_admin.id]


@pytest.mark.asyncio
async def test_current_admin_and_assignable_roles(client: AsyncClient, department_admin_headers):
    response = await client.get("/admin/me", headers=department_admin_headers)

    data = response.json()["data"]
    assert data["role"] == AdminRole.DEPARTMENT_ADMIN.value
    assert data["assignable_roles"] == [AdminRole.EVENT_ADMIN.value]


@pytest.mark.asyncio
async def test_users_with_emails(client: AsyncClient, make_user, main_admin_headers):
    make_user(email="priya.sharma@gmail.com")
    make_user(email="arjun.k@gmail.com")

    response = await client.get("/admin/users", params={"search": "priya.sharma"}, headers=main_admin_headers)

    assert [u["email"] for u in response.json()["data"]] == ["priya.sharma@gmail.com"]


@pytest.mark.asyncio
async def test_users_with_emails_requires_admin(client: AsyncClient, auth_headers):
    response = await client.get("/admin/users", headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_overview_counts(client: AsyncClient, event, other_event, test_user, make_registration,
                               main_admin_headers):
    from sanchalana.models.registration_model import PaymentStatus

    make_registration(test_user, event, payment_status=PaymentStatus.VERIFIED)
    make_registration(test_user, other_event)

    response = await client.get("/admin/overview", headers=main_admin_headers)

    assert response.json()["data"] == {
        "events": 2,
        "departments": 1,
        "registrations": 2,
        "verified_registrations": 1,
    }
