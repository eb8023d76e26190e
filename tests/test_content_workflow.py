"""Tests for the content review workflow (service layer).

Covers:
- New content defaults to draft
- submit / approve / reject stamps for destinations, events, offices
- Permissive transitions by default, 409-style errors under strict mode
- Unknown ids raise RecordNotFoundError
- Status edits through update() stamp provenance; empty updates are no-ops
- Soft delete: unknown ids return False, hidden rows stay listable
"""

import pytest

from conftest import destination_payload, event_payload, office_payload
from tarhal.models.audit import AuditLog
from tarhal.services.destination_service import destinations
from tarhal.services.errors import InvalidTransitionError, RecordNotFoundError
from tarhal.services.event_service import events
from tarhal.services.travel_office_service import travel_offices


@pytest.fixture
def strict(app):
    app.config["STRICT_REVIEW_TRANSITIONS"] = True
    yield
    app.config["STRICT_REVIEW_TRANSITIONS"] = False


@pytest.fixture(params=["destinations", "events", "travel_offices"])
def content(request, country):
    """(service, created draft record) for each content type."""
    if request.param == "destinations":
        return destinations, destinations.create(destination_payload(country.id))
    if request.param == "events":
        return events, events.create(event_payload(country.id))
    return travel_offices, travel_offices.create(office_payload(country.id))


class TestWorkflow:

    def test_new_record_is_draft(self, content):
        _, record = content
        assert record.status == "draft"
        assert record.is_active is True

    def test_submit_stamps_submitter(self, content, supervisor):
        service, record = content
        service.submit_for_review(record.id, supervisor.id)
        assert record.status == "pending_review"
        assert record.submitted_by == supervisor.id
        assert record.submitted_at is not None

    def test_approve_publishes(self, content, supervisor, admin):
        service, record = content
        service.submit_for_review(record.id, supervisor.id)
        service.approve(record.id, admin.id)
        assert record.status == "published"
        assert record.reviewed_by == admin.id
        assert record.published_by == admin.id
        assert record.published_at is not None
        # Submission provenance survives later transitions
        assert record.submitted_by == supervisor.id

    def test_reject_returns_to_draft(self, content, supervisor, admin):
        service, record = content
        service.submit_for_review(record.id, supervisor.id)
        service.reject(record.id, admin.id, "Missing photos")
        assert record.status == "draft"
        assert record.rejection_reason == "Missing photos"
        assert record.reviewed_by == admin.id

    def test_transitions_are_audited(self, content, supervisor, admin):
        service, record = content
        service.submit_for_review(record.id, supervisor.id)
        service.approve(record.id, admin.id)
        actions = [
            e.action for e in
            AuditLog.query.filter_by(record_id=record.id)
            .order_by(AuditLog.created_at).all()
        ]
        assert actions == ["submit", "approve"]

    def test_unknown_id_raises(self, content, admin):
        service, _ = content
        with pytest.raises(RecordNotFoundError):
            service.approve("missing", admin.id)
        with pytest.raises(RecordNotFoundError):
            service.submit_for_review("missing", admin.id)
        with pytest.raises(RecordNotFoundError):
            service.reject("missing", admin.id, "no")


class TestPermissiveTransitions:

    def test_approve_straight_from_draft(self, country, admin):
        record = destinations.create(destination_payload(country.id))
        destinations.approve(record.id, admin.id)
        assert record.status == "published"

    def test_resubmit_restamps(self, country, supervisor, admin):
        record = events.create(event_payload(country.id))
        events.submit_for_review(record.id, supervisor.id)
        events.submit_for_review(record.id, admin.id)
        assert record.submitted_by == admin.id

    def test_reject_published(self, country, admin):
        record = destinations.create(destination_payload(country.id))
        destinations.approve(record.id, admin.id)
        destinations.reject(record.id, admin.id, "Outdated")
        assert record.status == "draft"
        # published_* stays as a record of the earlier publication
        assert record.published_by == admin.id


class TestStrictTransitions:

    def test_approve_requires_pending(self, strict, country, admin):
        record = destinations.create(destination_payload(country.id))
        with pytest.raises(InvalidTransitionError) as exc:
            destinations.approve(record.id, admin.id)
        assert exc.value.current_status == "draft"
        assert record.status == "draft"

    def test_submit_requires_draft(self, strict, country, supervisor, admin):
        record = destinations.create(destination_payload(country.id))
        destinations.submit_for_review(record.id, supervisor.id)
        with pytest.raises(InvalidTransitionError):
            destinations.submit_for_review(record.id, supervisor.id)

    def test_strict_happy_path(self, strict, country, supervisor, admin):
        record = events.create(event_payload(country.id))
        events.submit_for_review(record.id, supervisor.id)
        events.approve(record.id, admin.id)
        assert record.status == "published"


class TestStatusThroughUpdate:

    def test_create_as_pending_stamps_submission(self, country, supervisor):
        record = destinations.create(
            destination_payload(country.id, status="pending_review"), supervisor.id
        )
        assert record.submitted_by == supervisor.id
        assert record.submitted_at is not None

    def test_update_to_published_stamps_publication(self, country, admin):
        record = destinations.create(destination_payload(country.id))
        destinations.update(record.id, {"status": "published"}, admin.id)
        assert record.published_by == admin.id
        assert record.published_at is not None

    def test_update_ignores_unknown_fields(self, country, admin):
        record = destinations.create(destination_payload(country.id))
        before = record.updated_at
        same = destinations.update(record.id, {"not_a_field": 1}, admin.id)
        assert same is record
        assert record.updated_at == before

    def test_empty_update_changes_nothing(self, country, admin):
        record = destinations.create(destination_payload(country.id), admin.id)
        before = record.to_dict()

        same = destinations.update(record.id, {}, admin.id)

        assert same is record
        assert record.to_dict() == before
        assert AuditLog.query.filter_by(action="update").count() == 0


class TestSoftDelete:

    def test_unknown_id_returns_false(self, db_session):
        assert destinations.soft_delete("missing") is False
        assert events.soft_delete("missing") is False
        assert travel_offices.soft_delete("missing") is False

    def test_row_stays_listed_when_inactive_included(self, country, admin):
        record = destinations.create(destination_payload(country.id))

        assert destinations.soft_delete(record.id, admin.id) is True

        assert destinations.list_records(active_only=True) == []
        hidden = destinations.list_records(active_only=False)
        assert [r.id for r in hidden] == [record.id]
        assert hidden[0].is_active is False
        assert AuditLog.query.filter_by(action="soft_delete").count() == 1
