"""
Score Service Tests - Audition Judging Platform
tests/test_score_service.py

Submit, draft, unsubmit and status behaviour of judge score records.
"""
from datetime import date
from unittest.mock import MagicMock

import pytest

from conftest import full_scores, submit
from judging.core.exceptions import (
    EntityNotFoundException,
    ScoreAlreadySubmittedException,
    ScoringClosedException,
)
from judging.models.enumerations import EventStatus
from judging.models.event import EventCreate
from judging.models.candidate import CandidateCreate
from judging.models.score import ScoreDraft, ScoreSubmission
from judging.services.cache import results_version_key
from judging.services.score_service import ScoreService


class TestSubmit:
    """Tests for ScoreService.submit()."""

    def test_submit_creates_record(self, score_service, candidates, judges):
        record = submit(score_service, candidates["Alex"].id, judges[0], full_scores(3), "Strong turns")
        assert record.submitted is True
        assert record.submitted_at is not None
        assert record.judge_id == "judge-1"
        assert record.judge_name == "Judge 1"
        assert record.total == 24.0
        assert record.comments == "Strong turns"

    def test_record_id_is_deterministic(self, score_service, candidates, judges, active_event):
        record = submit(score_service, candidates["Alex"].id, judges[0], full_scores(3))
        assert record.id == score_service.scores.record_id(active_event.id, candidates["Alex"].id, "judge-1")

    def test_second_submit_rejected_until_unsubmit(self, score_service, candidates, judges):
        candidate_id = candidates["Alex"].id
        submit(score_service, candidate_id, judges[0], full_scores(3))

        with pytest.raises(ScoreAlreadySubmittedException):
            submit(score_service, candidate_id, judges[0], full_scores(4))

        score_service.unsubmit(candidate_id, judges[0])
        record = submit(score_service, candidate_id, judges[0], full_scores(4))
        assert record.total == 32.0
        assert len(score_service.list_for_candidate(candidate_id)) == 1

    def test_draft_then_submit_updates_in_place(self, score_service, candidates, judges):
        candidate_id = candidates["Blair"].id
        draft = score_service.save_draft(candidate_id, ScoreDraft(scores=full_scores(1)), judges[1])
        record = submit(score_service, candidate_id, judges[1], full_scores(2))

        assert record.id == draft.record.id
        records = score_service.list_for_candidate(candidate_id)
        assert len(records) == 1
        assert records[0].submitted is True
        assert records[0].scores.kick == 2.0

    def test_out_of_range_values_clamped(self, score_service, candidates, judges):
        record = submit(
            score_service,
            candidates["Alex"].id,
            judges[0],
            {"kick": 9, "jump": -1, "turn": "abc", "execution": 12},
        )
        assert record.scores.kick == 4.0
        assert record.scores.jump == 0.0
        assert record.scores.turn == 0.0
        assert record.scores.execution == 8.0
        assert record.scores.technique == 0.0

    def test_submitted_false_is_a_draft(self, score_service, candidates, judges):
        record = score_service.submit(
            ScoreSubmission(candidate_id=candidates["Alex"].id, scores=full_scores(2), submitted=False),
            judges[0],
        )
        assert record.submitted is False
        assert record.submitted_at is None

    def test_unknown_candidate(self, score_service, active_event, judges):
        with pytest.raises(EntityNotFoundException):
            submit(score_service, "missing", judges[0], full_scores(2))


class TestDraft:
    """Tests for ScoreService.save_draft()."""

    def test_draft_is_saved(self, score_service, candidates, judges):
        result = score_service.save_draft(candidates["Alex"].id, ScoreDraft(scores=full_scores(2)), judges[0])
        assert result.saved is True
        assert result.record.submitted is False
        assert result.record.last_saved is not None

    def test_draft_never_overwrites_submitted(self, score_service, candidates, judges):
        candidate_id = candidates["Alex"].id
        submit(score_service, candidate_id, judges[0], full_scores(3))

        result = score_service.save_draft(candidate_id, ScoreDraft(scores=full_scores(1)), judges[0])
        assert result.saved is False
        assert result.record.submitted is True
        assert score_service.list_for_candidate(candidate_id)[0].scores.kick == 3.0

    def test_malformed_scores_payload_tolerated(self, score_service, candidates, judges):
        result = score_service.save_draft(
            candidates["Alex"].id, ScoreDraft(scores="not-a-dict"), judges[0]
        )
        assert result.record.total == 0.0


class TestUnsubmit:
    """Tests for ScoreService.unsubmit()."""

    def test_unsubmit_returns_record_to_draft(self, score_service, candidates, judges):
        candidate_id = candidates["Alex"].id
        submit(score_service, candidate_id, judges[0], full_scores(3))

        record = score_service.unsubmit(candidate_id, judges[0])
        assert record.submitted is False
        assert record.submitted_at is None
        assert record.scores.kick == 3.0

    def test_unsubmit_without_record(self, score_service, candidates, judges):
        with pytest.raises(EntityNotFoundException):
            score_service.unsubmit(candidates["Alex"].id, judges[0])

    def test_unsubmit_only_touches_own_record(self, score_service, candidates, judges):
        candidate_id = candidates["Alex"].id
        submit(score_service, candidate_id, judges[0], full_scores(3))
        submit(score_service, candidate_id, judges[1], full_scores(2))

        score_service.unsubmit(candidate_id, judges[0])
        by_judge = {r.judge_id: r for r in score_service.list_for_candidate(candidate_id)}
        assert by_judge["judge-1"].submitted is False
        assert by_judge["judge-2"].submitted is True


class TestScoringWindow:
    """Scores are only written while the event is active."""

    def test_draft_event_rejects_scores(self, store, tenant, event_service, candidate_service, admin, judges):
        event = event_service.create(EventCreate(name="Spring", date=date(2026, 3, 1)), admin)
        candidate = candidate_service.register(event.id, CandidateCreate(name="Eli", audition_number=1))

        with pytest.raises(ScoringClosedException):
            submit(ScoreService(store, tenant), candidate.id, judges[0], full_scores(2))

    def test_completed_event_rejects_scores(self, score_service, event_service, active_event, candidates, admin, judges):
        event_service.change_status(active_event.id, EventStatus.COMPLETED, admin)
        with pytest.raises(ScoringClosedException):
            score_service.save_draft(candidates["Alex"].id, ScoreDraft(), judges[0])


class TestSubmissionStatus:
    """Tests for status and batch status."""

    def test_status_without_record(self, score_service, candidates, judges):
        status = score_service.status(candidates["Alex"].id, judges[0])
        assert status.submitted is False
        assert status.has_scores is False
        assert status.scores is None

    def test_status_with_submitted_record(self, score_service, candidates, judges):
        submit(score_service, candidates["Alex"].id, judges[0], full_scores(2), "ok")
        status = score_service.status(candidates["Alex"].id, judges[0])
        assert status.submitted is True
        assert status.has_scores is True
        assert status.comments == "ok"

    def test_batch_status(self, score_service, candidates, judges):
        submit(score_service, candidates["Alex"].id, judges[0], full_scores(2))
        score_service.save_draft(candidates["Blair"].id, ScoreDraft(scores=full_scores(1)), judges[0])

        batch = score_service.batch_status(
            [candidates["Alex"].id, candidates["Blair"].id, candidates["Casey"].id, "unknown"],
            judges[0],
        )
        assert batch.statuses[candidates["Alex"].id].submitted is True
        assert batch.statuses[candidates["Blair"].id].has_scores is True
        assert batch.statuses[candidates["Blair"].id].submitted is False
        assert batch.statuses[candidates["Casey"].id].has_scores is False
        assert batch.statuses["unknown"].has_scores is False


class TestCacheInvalidation:
    """Score writes drop the event's cached results."""

    def test_submit_invalidates_results(self, store, tenant, active_event, candidates, judges):
        cache = MagicMock()
        service = ScoreService(store, tenant, cache=cache)

        submit(service, candidates["Alex"].id, judges[0], full_scores(2))
        cache.bump_version.assert_called_with(results_version_key("org-alpha", active_event.id))

    def test_unsubmit_invalidates_results(self, store, tenant, active_event, candidates, judges):
        cache = MagicMock()
        service = ScoreService(store, tenant, cache=cache)
        submit(service, candidates["Alex"].id, judges[0], full_scores(2))
        cache.reset_mock()

        service.unsubmit(candidates["Alex"].id, judges[0])
        cache.bump_version.assert_called_once_with(results_version_key("org-alpha", active_event.id))
