"""
Websocket channels: registration changes, live counter, session events
"""
import pytest
from fastapi import WebSocketDisconnect

from sanchalana.models.admin_model import AdminRole
from tests.helpers import fake_member


def token_of(headers: dict) -> str:
    return headers['Authorization'].split(' ', 1)[1]


def test_live_count_follows_verifications(ws_client, event, test_user, make_registration, main_admin_headers):
    registration = make_registration(test_user, event)

    with ws_client.websocket_connect("/registration/ws/live-count") as websocket:
        assert websocket.receive_json() == {"event": "count", "verified": 0}

        response = ws_client.put(f"/registration/verify/{registration.id}", headers=main_admin_headers)
        assert response.status_code == 200
        assert websocket.receive_json() == {"event": "count", "verified": 1}

        ws_client.put(f"/registration/reject/{registration.id}", headers=main_admin_headers)
        assert websocket.receive_json() == {"event": "count", "verified": 0}


def test_changes_channel_requires_admin(ws_client, auth_headers):
    with pytest.raises(WebSocketDisconnect):
        with ws_client.websocket_connect("/registration/ws/changes") as websocket:
            websocket.receive_json()

    with pytest.raises(WebSocketDisconnect):
        with ws_client.websocket_connect(f"/registration/ws/changes?token={token_of(auth_headers)}") as websocket:
            websocket.receive_json()


def test_changes_channel_streams_inserts_and_updates(ws_client, event, auth_headers, main_admin_headers):
    url = f"/registration/ws/changes?token={token_of(main_admin_headers)}"
    with ws_client.websocket_connect(url) as websocket:
        response = ws_client.post("/registration/add", json={
            "event_id": event.id,
            "team_members": [fake_member()],
            "payment_method": "Cash",
        }, headers=auth_headers)
        registration_id = response.json()["data"]["id"]

        inserted = websocket.receive_json()
        assert inserted["event"] == "INSERT"
        assert inserted["table"] == "registrations"
        assert inserted["record"]["id"] == registration_id
        assert inserted["record"]["payment_status"] == "Pending"

        ws_client.put(f"/registration/verify/{registration_id}", headers=main_admin_headers)
        updated = websocket.receive_json()
        assert updated["event"] == "UPDATE"
        assert updated["record"]["payment_status"] == "Verified"


def test_changes_channel_reports_cascaded_deletes(ws_client, event, test_user, make_registration,
                                                  main_admin_headers):
    registration = make_registration(test_user, event)
    registration_id, event_id = registration.id, event.id

    url = f"/registration/ws/changes?token={token_of(main_admin_headers)}"
    with ws_client.websocket_connect(url) as websocket:
        ws_client.delete(f"/event/{event_id}", headers=main_admin_headers)
        deleted = websocket.receive_json()
        assert deleted["event"] == "DELETE"
        assert deleted["record"]["id"] == registration_id


def test_session_channel_reports_sign_out(ws_client, auth_headers):
    url = f"/auth/ws/session?token={token_of(auth_headers)}"
    with ws_client.websocket_connect(url) as websocket:
        ws_client.post("/auth/signout", headers=auth_headers)
        message = websocket.receive_json()
        assert message["event"] == "SIGNED_OUT"


def test_session_channel_rejects_bad_token(ws_client):
    with pytest.raises(WebSocketDisconnect):
        with ws_client.websocket_connect("/auth/ws/session?token=garbage") as websocket:
            websocket.receive_json()


def test_changes_channel_respects_admin_scope(ws_client, event, other_department, make_event, make_admin,
                                              auth_headers_for, auth_headers):
    foreign_event = make_event(other_department, "Lathe Masters", team_size=2)
    foreign_admin = make_admin(AdminRole.DEPARTMENT_ADMIN, department=other_department)
    foreign_token = token_of(auth_headers_for(foreign_admin.id))
    event_id, foreign_event_id = event.id, foreign_event.id

    def register(target_event_id):
        return ws_client.post("/registration/add", json={
            "event_id": target_event_id,
            "team_members": [fake_member()],
            "payment_method": "Cash",
        }, headers=auth_headers)

    with ws_client.websocket_connect(f"/registration/ws/changes?token={foreign_token}") as websocket:
        assert register(event_id).status_code == 200
        assert register(foreign_event_id).status_code == 200

        # the first message is the in-scope insert, the other department's team never arrives
        first = websocket.receive_json()
        assert first["record"]["event_id"] == foreign_event_id
