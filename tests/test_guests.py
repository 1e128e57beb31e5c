"""Tests for the RSVP flow and guest management.

Covers:
- Authenticated RSVP: confirmed status, profile name/email, duplicate, not found
- Anonymous RSVP: pending status, validation, private events, duplicate by email
- Capacity: full events refuse both kinds of RSVP
- Status updates: organizer only, enum validation, any-to-any transitions
- Removal: organizer or owning user only
- Guest list and "my events" queries
"""
from sparkbytes.models.guest import Guest
from tests.conftest import create_test_user, create_test_event, rsvp, rsvp_as_guest

MISSING_ID = "00000000-0000-0000-0000-000000000000"


def _setup(client, capacity: int = 0, is_public: bool = True):
    organizer = create_test_user("Organizer")
    attendee = create_test_user("Alice Smith")
    event = create_test_event(client, organizer, capacity=capacity, is_public=is_public)
    return organizer, attendee, event


class TestAuthenticatedRSVP:

    def test_rsvp_creates_confirmed_guest(self, client):
        _, attendee, event = _setup(client)
        resp = rsvp(client, event["id"], attendee)
        assert resp.status_code == 201, resp.text
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Successfully RSVP'd to event"
        guest = body["guest"]
        assert guest["status"] == "confirmed"
        assert guest["event_id"] == event["id"]
        assert guest["user_id"] == attendee["user_id"]
        assert guest["email"] == attendee["email"]
        assert guest["name"] == "Alice Smith"

    def test_rsvp_uses_profile_name_and_email(self, client):
        _, attendee, event = _setup(client)
        client.post("/api/profiles/", json={"name": "Ali S.", "email": "Ali@BU.edu"}, headers=attendee["headers"])
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        assert guest["name"] == "Ali S."
        assert guest["email"] == "ali@bu.edu"

    def test_rsvp_requires_token(self, client):
        _, _, event = _setup(client)
        resp = client.post(f"/api/guests/rsvp/{event['id']}")
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": "No token, authorization denied"}

    def test_rsvp_unknown_event(self, client):
        attendee = create_test_user("Alice")
        resp = rsvp(client, MISSING_ID, attendee)
        assert resp.status_code == 404
        assert resp.json()["message"] == "Event not found"

    def test_duplicate_rsvp_rejected_without_second_row(self, client, db):
        _, attendee, event = _setup(client)
        assert rsvp(client, event["id"], attendee).status_code == 201

        resp = rsvp(client, event["id"], attendee)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "You have already RSVP'd to this event"}
        assert db.query(Guest).filter(Guest.event_id == event["id"]).count() == 1

    def test_duplicate_rsvp_keeps_seat_count(self, client):
        _, attendee, event = _setup(client, capacity=5)
        rsvp(client, event["id"], attendee)
        rsvp(client, event["id"], attendee)
        detail = client.get(f"/api/events/{event['id']}").json()["event"]
        assert detail["reserved_count"] == 1

    def test_private_event_allows_account_rsvp(self, client):
        _, attendee, event = _setup(client, is_public=False)
        assert rsvp(client, event["id"], attendee).status_code == 201


class TestAnonymousRSVP:

    def test_guest_rsvp_is_pending(self, client):
        _, _, event = _setup(client)
        resp = rsvp_as_guest(client, event["id"], name="Visitor", email="Visitor@Example.com")
        assert resp.status_code == 201, resp.text
        guest = resp.json()["guest"]
        assert guest["status"] == "pending"
        assert guest["user_id"] is None
        assert guest["email"] == "visitor@example.com"

    def test_guest_rsvp_requires_name_and_email(self, client):
        _, _, event = _setup(client)
        for body in ({}, {"name": "Visitor"}, {"email": "v@example.com"}, {"name": "  ", "email": "v@example.com"}):
            resp = client.post(f"/api/guests/rsvp-guest/{event['id']}", json=body)
            assert resp.status_code == 400
            assert resp.json()["message"] == "Name and email are required"

    def test_validation_precedes_event_lookup(self, client):
        resp = client.post(f"/api/guests/rsvp-guest/{MISSING_ID}", json={"name": "Visitor"})
        assert resp.status_code == 400

    def test_guest_rsvp_unknown_event(self, client):
        resp = rsvp_as_guest(client, MISSING_ID)
        assert resp.status_code == 404

    def test_guest_rsvp_private_event_forbidden(self, client, db):
        _, _, event = _setup(client, is_public=False)
        resp = rsvp_as_guest(client, event["id"])
        assert resp.status_code == 403
        assert resp.json() == {"success": False, "message": "This event is private"}
        assert db.query(Guest).count() == 0

    def test_duplicate_email_is_case_insensitive(self, client, db):
        _, _, event = _setup(client)
        assert rsvp_as_guest(client, event["id"], email="visitor@example.com").status_code == 201
        resp = rsvp_as_guest(client, event["id"], name="Someone Else", email="VISITOR@example.com")
        assert resp.status_code == 400
        assert resp.json()["message"] == "This email has already RSVP'd to this event"
        assert db.query(Guest).count() == 1

    def test_invalid_email(self, client):
        _, _, event = _setup(client)
        resp = rsvp_as_guest(client, event["id"], email="not-an-email")
        assert resp.status_code == 400


class TestCapacity:

    def test_full_event_rejects_authenticated_rsvp(self, client):
        _, attendee, event = _setup(client, capacity=1)
        other = create_test_user("Bob")
        assert rsvp(client, event["id"], attendee).status_code == 201
        resp = rsvp(client, event["id"], other)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Event is at full capacity"

    def test_full_event_rejects_anonymous_rsvp(self, client):
        _, attendee, event = _setup(client, capacity=1)
        rsvp(client, event["id"], attendee)
        resp = rsvp_as_guest(client, event["id"])
        assert resp.status_code == 400
        assert resp.json()["message"] == "Event is at full capacity"

    def test_zero_capacity_is_unlimited(self, client):
        _, _, event = _setup(client, capacity=0)
        for i in range(5):
            assert rsvp(client, event["id"], create_test_user(f"User {i}")).status_code == 201

    def test_capacity_checked_before_duplicate(self, client):
        """A repeat RSVP to a full event reports the event as full."""
        _, attendee, event = _setup(client, capacity=1)
        rsvp(client, event["id"], attendee)
        resp = rsvp(client, event["id"], attendee)
        assert resp.json()["message"] == "Event is at full capacity"


class TestGuestStatusUpdate:

    def test_organizer_updates_status(self, client):
        organizer, attendee, event = _setup(client)
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.put(f"/api/guests/{guest['id']}", json={"status": "attended"}, headers=organizer["headers"])
        assert resp.status_code == 200
        assert resp.json()["guest"]["status"] == "attended"

    def test_any_status_may_follow_any_other(self, client):
        organizer, _, event = _setup(client)
        guest = rsvp_as_guest(client, event["id"]).json()["guest"]
        for new_status in ("attended", "pending", "declined", "confirmed", "pending"):
            resp = client.put(f"/api/guests/{guest['id']}", json={"status": new_status},
                              headers=organizer["headers"])
            assert resp.status_code == 200, resp.text
            assert resp.json()["guest"]["status"] == new_status

    def test_non_organizer_forbidden(self, client, db):
        _, attendee, event = _setup(client)
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.put(f"/api/guests/{guest['id']}", json={"status": "declined"}, headers=attendee["headers"])
        assert resp.status_code == 403
        assert db.get(Guest, guest["id"]).status.value == "confirmed"

    def test_invalid_status_rejected(self, client):
        organizer, attendee, event = _setup(client)
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.put(f"/api/guests/{guest['id']}", json={"status": "maybe"}, headers=organizer["headers"])
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_unknown_guest(self, client):
        organizer = create_test_user("Organizer")
        resp = client.put(f"/api/guests/{MISSING_ID}", json={"status": "declined"}, headers=organizer["headers"])
        assert resp.status_code == 404
        assert resp.json()["message"] == "Guest not found"


class TestGuestRemoval:

    def test_organizer_removes_guest(self, client, db):
        organizer, attendee, event = _setup(client)
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.delete(f"/api/guests/{guest['id']}", headers=organizer["headers"])
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Guest removed successfully"}
        assert db.get(Guest, guest["id"]) is None

    def test_guest_removes_own_rsvp(self, client, db):
        _, attendee, event = _setup(client)
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.delete(f"/api/guests/{guest['id']}", headers=attendee["headers"])
        assert resp.status_code == 200
        assert db.get(Guest, guest["id"]) is None

    def test_stranger_cannot_remove_guest(self, client, db):
        _, attendee, event = _setup(client)
        stranger = create_test_user("Mallory")
        guest = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.delete(f"/api/guests/{guest['id']}", headers=stranger["headers"])
        assert resp.status_code == 403
        assert db.get(Guest, guest["id"]) is not None

    def test_nobody_owns_an_anonymous_guest(self, client, db):
        _, attendee, event = _setup(client)
        guest = rsvp_as_guest(client, event["id"]).json()["guest"]
        resp = client.delete(f"/api/guests/{guest['id']}", headers=attendee["headers"])
        assert resp.status_code == 403
        assert db.get(Guest, guest["id"]) is not None


class TestGuestQueries:

    def test_guest_list_round_trip(self, client):
        organizer, attendee, event = _setup(client)
        created = rsvp(client, event["id"], attendee).json()["guest"]
        resp = client.get(f"/api/guests/event/{event['id']}", headers=organizer["headers"])
        assert resp.status_code == 200
        guests = resp.json()["guests"]
        assert guests == [created]

    def test_guest_list_organizer_only(self, client):
        _, attendee, event = _setup(client)
        resp = client.get(f"/api/guests/event/{event['id']}", headers=attendee["headers"])
        assert resp.status_code == 403
        assert resp.json()["message"] == "Not authorized to view guest list"

    def test_my_events_lists_active_rsvps_only(self, client):
        organizer, attendee, _ = _setup(client)
        kept = create_test_event(client, organizer, title="Bagels")
        declined = create_test_event(client, organizer, title="Tacos")
        rsvp(client, kept["id"], attendee)
        guest = rsvp(client, declined["id"], attendee).json()["guest"]
        client.put(f"/api/guests/{guest['id']}", json={"status": "declined"}, headers=organizer["headers"])

        resp = client.get("/api/guests/my/events", headers=attendee["headers"])
        assert resp.status_code == 200
        titles = [e["title"] for e in resp.json()["events"]]
        assert titles == ["Bagels"]
