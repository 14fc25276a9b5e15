"""
Unit tests for registration helpers: team validation, team ids, team_members parsing
"""
import json
import re
import pytest

from sanchalana.controller.registration_controller import (
    TEAM_ID_PREFIX,
    generate_team_id,
    parse_team_members,
    validate_team,
    unique_team_id,
)
from sanchalana.exceptions import ConflictError, ValidationError
from sanchalana.models.event_model import Event

MEMBER = {"name": "Asha Rao", "usn": "1SN21CS001", "phone": "9876543210"}


class TestParseTeamMembers:

    def test_list_passes_through(self):
        assert parse_team_members([MEMBER]) == [MEMBER]

    def test_json_string(self):
        assert parse_team_members(json.dumps([MEMBER, MEMBER])) == [MEMBER, MEMBER]

    def test_single_object_becomes_list(self):
        assert parse_team_members(MEMBER) == [MEMBER]
        assert parse_team_members(json.dumps(MEMBER)) == [MEMBER]

    def test_missing_keys_default_to_empty(self):
        assert parse_team_members([{"name": "Ravi"}]) == [{"name": "Ravi", "usn": "", "phone": ""}]

    @pytest.mark.parametrize("raw", ["not json", None, 42, "[1, 2]"])
    def test_garbage_degrades_to_empty_list(self, raw):
        assert parse_team_members(raw) == []

    def test_parse_failure_is_logged(self, caplog):
        with caplog.at_level("ERROR"):
            assert parse_team_members("{broken") == []
        assert "Error parsing team members" in caplog.text


class TestValidateTeam:

    def test_oversize_team_rejected(self):
        event = Event(id=1, department_id=1, title="Code Sprint", team_size=2, event_type="Technical")
        with pytest.raises(ValidationError) as exc:
            validate_team(event, [MEMBER, MEMBER, MEMBER])
        assert "more than 2" in exc.value.message

    def test_empty_team_rejected(self):
        event = Event(id=1, department_id=1, title="Solo", team_size=1, event_type="Cultural")
        with pytest.raises(ValidationError):
            validate_team(event, [])

    def test_full_team_accepted(self):
        event = Event(id=1, department_id=1, title="Code Sprint", team_size=2, event_type="Technical")
        validate_team(event, [MEMBER, MEMBER])


class TestTeamIds:

    def test_format(self):
        team_id = generate_team_id()
        assert team_id.startswith(TEAM_ID_PREFIX)
        assert re.fullmatch(r"TEAM-[0-9a-f]{8}", team_id)

    def test_unique_team_id_skips_taken_ids(self, db_session, make_user, event, make_registration, monkeypatch):
        taken = make_registration(make_user(), event).team_id
        candidates = iter([taken, "TEAM-0000beef"])
        monkeypatch.setattr(
            "sanchalana.controller.registration_controller.generate_team_id", lambda: next(candidates)
        )
        assert unique_team_id(db_session) == "TEAM-0000beef"

    def test_unique_team_id_gives_up(self, db_session, make_user, event, make_registration, monkeypatch):
        taken = make_registration(make_user(), event).team_id
        monkeypatch.setattr(
            "sanchalana.controller.registration_controller.generate_team_id", lambda: taken
        )
        with pytest.raises(ConflictError):
            unique_team_id(db_session)
