"""
API Tests - Audition Judging Platform
tests/test_api.py

End-to-end HTTP tests against the in-memory store.
"""
import inspect

import pytest
from fastapi.routing import APIRoute

from conftest import full_scores, judge_headers
from judging.main import app

API = "/api/v1"


@pytest.fixture
def event_id(client, alpha_headers):
    response = client.post(f"{API}/events", json={"name": "Fall Auditions", "date": "2026-09-12"}, headers=alpha_headers)
    assert response.status_code == 201
    event_id = response.json()["id"]
    response = client.patch(f"{API}/events/{event_id}/status", json={"status": "active"}, headers=alpha_headers)
    assert response.status_code == 200
    return event_id


@pytest.fixture
def candidate_ids(client, alpha_headers, event_id):
    ids = {}
    for name, number in [("Alex", 101), ("Blair", 102), ("Casey", 103)]:
        response = client.post(
            f"{API}/events/{event_id}/candidates",
            json={"name": name, "audition_number": number},
            headers=alpha_headers,
        )
        assert response.status_code == 201
        ids[name] = response.json()["id"]
    return ids


def post_score(client, candidate_id, judge_id, value):
    return client.post(
        f"{API}/scores",
        json={"candidate_id": candidate_id, "scores": full_scores(value)},
        headers=judge_headers(judge_id),
    )


class TestRootAndHealth:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health_with_memory_store(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["dependencies"]["store"].startswith("healthy")
        assert body["dependencies"]["redis"] == "disabled"


class TestHeaders:

    def test_missing_organization_header(self, client):
        response = client.get(f"{API}/events", headers={"X-User-Id": "admin-1"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_REQUEST"

    def test_blank_organization_header(self, client):
        response = client.get(f"{API}/events", headers={"X-Organization-Id": " ", "X-User-Id": "admin-1"})
        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "INVALID_REQUEST"

    def test_missing_user_header_on_write(self, client):
        response = client.post(
            f"{API}/events",
            json={"name": "Fall", "date": "2026-09-12"},
            headers={"X-Organization-Id": "org-alpha"},
        )
        assert response.status_code == 400


class TestEventsApi:

    def test_create_requires_name_and_date(self, client, alpha_headers):
        response = client.post(f"{API}/events", json={"name": "Fall"}, headers=alpha_headers)
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["message"] == "Event date is required"

    def test_malformed_json(self, client, alpha_headers):
        response = client.post(
            f"{API}/events",
            content=b"{not json",
            headers={**alpha_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_REQUEST"

    def test_list_and_get(self, client, alpha_headers, event_id, candidate_ids):
        listed = client.get(f"{API}/events", headers=alpha_headers).json()
        assert [e["id"] for e in listed] == [event_id]
        assert listed[0]["candidate_count"] == 3

        event = client.get(f"{API}/events/{event_id}", headers=alpha_headers).json()
        assert event["status"] == "active"

    def test_unknown_event(self, client, alpha_headers):
        response = client.get(f"{API}/events/nope", headers=alpha_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "AUDITION_EVENT_NOT_FOUND"

    def test_invalid_transition(self, client, alpha_headers, event_id):
        response = client.post(f"{API}/events/{event_id}/archive", headers=alpha_headers)
        assert response.status_code == 409
        assert response.json()["error_code"] == "INVALID_STATUS_TRANSITION"

    def test_delete_event(self, client, alpha_headers, event_id, candidate_ids):
        response = client.delete(f"{API}/events/{event_id}", headers=alpha_headers)
        assert response.status_code == 200
        assert response.json()["count"] == 3
        assert client.get(f"{API}/events/{event_id}", headers=alpha_headers).status_code == 404


class TestCandidatesApi:

    def test_list_ordered(self, client, alpha_headers, event_id, candidate_ids):
        listed = client.get(f"{API}/events/{event_id}/candidates", headers=alpha_headers).json()
        assert [c["audition_number"] for c in listed] == [101, 102, 103]

    def test_blank_name(self, client, alpha_headers, event_id):
        response = client.post(
            f"{API}/events/{event_id}/candidates",
            json={"name": "  ", "audition_number": 5},
            headers=alpha_headers,
        )
        assert response.status_code == 422

    def test_groups(self, client, alpha_headers, event_id, candidate_ids):
        response = client.post(
            f"{API}/events/{event_id}/candidates/groups",
            json={"assignments": {candidate_ids["Alex"]: "Group A"}},
            headers=alpha_headers,
        )
        assert response.json() == {"updated": 1, "unmatched": []}

        response = client.post(
            f"{API}/events/{event_id}/candidates/auto-groups",
            json={"ranges": [{"group_name": "Late", "min_number": 102, "max_number": 199}]},
            headers=alpha_headers,
        )
        assert response.json() == {"updated": 2, "unmatched": [candidate_ids["Alex"]]}

    def test_delete_candidate(self, client, alpha_headers, candidate_ids):
        response = client.delete(f"{API}/candidates/{candidate_ids['Casey']}", headers=alpha_headers)
        assert response.status_code == 200
        response = client.delete(f"{API}/candidates/{candidate_ids['Casey']}", headers=alpha_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "CANDIDATE_NOT_FOUND"


class TestScoresApi:

    def test_submit_and_resubmit(self, client, candidate_ids):
        response = post_score(client, candidate_ids["Alex"], "judge-1", 3)
        assert response.status_code == 201
        assert response.json()["submitted"] is True

        response = post_score(client, candidate_ids["Alex"], "judge-1", 4)
        assert response.status_code == 409
        assert response.json()["error_code"] == "SCORE_ALREADY_SUBMITTED"

        response = client.put(f"{API}/scores/unsubmit/{candidate_ids['Alex']}", headers=judge_headers("judge-1"))
        assert response.status_code == 200
        assert response.json()["submitted"] is False

        assert post_score(client, candidate_ids["Alex"], "judge-1", 4).status_code == 201

    def test_lenient_category_values(self, client, candidate_ids):
        response = client.post(
            f"{API}/scores",
            json={"candidate_id": candidate_ids["Alex"], "scores": {"kick": "abc", "jump": 99, "execution": -4}},
            headers=judge_headers("judge-1"),
        )
        assert response.status_code == 201
        scores = response.json()["scores"]
        assert scores["kick"] == 0.0
        assert scores["jump"] == 4.0
        assert scores["execution"] == 0.0

    def test_draft_and_status(self, client, candidate_ids):
        headers = judge_headers("judge-2")
        response = client.put(
            f"{API}/scores/draft/{candidate_ids['Blair']}",
            json={"scores": full_scores(2), "comments": "needs polish"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["saved"] is True

        status_body = client.get(f"{API}/scores/status/{candidate_ids['Blair']}", headers=headers).json()
        assert status_body["submitted"] is False
        assert status_body["has_scores"] is True
        assert status_body["comments"] == "needs polish"

        batch = client.post(
            f"{API}/scores/status/batch",
            json={"candidate_ids": [candidate_ids["Alex"], candidate_ids["Blair"]]},
            headers=headers,
        ).json()["statuses"]
        assert batch[candidate_ids["Alex"]]["has_scores"] is False
        assert batch[candidate_ids["Blair"]]["has_scores"] is True

    def test_list_scores_for_candidate(self, client, alpha_headers, candidate_ids):
        post_score(client, candidate_ids["Alex"], "judge-1", 3)
        post_score(client, candidate_ids["Alex"], "judge-2", 2)
        records = client.get(f"{API}/scores/{candidate_ids['Alex']}", headers=alpha_headers).json()
        assert sorted(r["judge_id"] for r in records) == ["judge-1", "judge-2"]

    def test_scoring_closed_after_completion(self, client, alpha_headers, event_id, candidate_ids):
        client.patch(f"{API}/events/{event_id}/status", json={"status": "completed"}, headers=alpha_headers)
        response = post_score(client, candidate_ids["Alex"], "judge-1", 3)
        assert response.status_code == 409
        assert response.json()["error_code"] == "SCORING_CLOSED"


class TestResultsAndDeliberationApi:

    def test_full_pipeline(self, client, alpha_headers, event_id, candidate_ids):
        for judge, value in [("judge-1", 4), ("judge-2", 3), ("judge-3", 1)]:
            post_score(client, candidate_ids["Alex"], judge, value)
        post_score(client, candidate_ids["Blair"], "judge-1", 2)

        results = client.get(f"{API}/events/{event_id}/results", headers=alpha_headers).json()
        ranked = [(r["name"], r["rank"], r["total_average"]) for r in results["results"]]
        assert ranked == [("Alex", 1, 24.0), ("Blair", 2, 16.0), ("Casey", 3, 0.0)]

        suggested = client.get(f"{API}/events/{event_id}/results/suggested-levels", headers=alpha_headers).json()
        assert suggested["level_assignments"][candidate_ids["Alex"]] == "Level 1"

        progress = client.put(
            f"{API}/deliberations/{event_id}/progress",
            json={"level_assignments": {candidate_ids["Alex"]: "Level 1"}},
            headers=alpha_headers,
        ).json()
        assert progress["submitted"] is False
        resumed = client.get(f"{API}/deliberations/{event_id}", headers=alpha_headers).json()
        assert resumed["level_assignments"] == {candidate_ids["Alex"]: "Level 1"}

        transfer = client.post(
            f"{API}/deliberations/{event_id}/submit",
            json={"level_assignments": {candidate_ids["Alex"]: "Level 1", candidate_ids["Blair"]: "Level 2"}},
            headers=alpha_headers,
        )
        assert transfer.status_code == 200
        assert transfer.json()["count"] == 3

        roster = client.get(f"{API}/events/{event_id}/roster", headers=alpha_headers).json()
        assert [(m["name"], m["level"]) for m in roster] == [
            ("Alex", "Level 1"),
            ("Blair", "Level 2"),
            ("Casey", "Level 4"),
        ]
        assert len(client.get(f"{API}/roster", headers=alpha_headers).json()) == 3
        assert len(client.get(f"{API}/roster?level=Level 2", headers=alpha_headers).json()) == 1

        event = client.get(f"{API}/events/{event_id}", headers=alpha_headers).json()
        assert event["status"] == "completed"

    def test_deliberation_on_draft_event_rejected(self, client, alpha_headers):
        event_id = client.post(
            f"{API}/events", json={"name": "Draft", "date": "2026-01-01"}, headers=alpha_headers
        ).json()["id"]
        response = client.post(f"{API}/deliberations/{event_id}/submit", json={}, headers=alpha_headers)
        assert response.status_code == 409


class TestTenantIsolationApi:

    def test_other_org_gets_access_denied(self, client, beta_headers, event_id):
        response = client.get(f"{API}/events/{event_id}", headers=beta_headers)
        assert response.status_code == 403
        assert response.json()["error_code"] == "ACCESS_DENIED"

    def test_other_org_cannot_score(self, client, candidate_ids):
        response = client.post(
            f"{API}/scores",
            json={"candidate_id": candidate_ids["Alex"], "scores": full_scores(4)},
            headers=judge_headers("judge-9", organization_id="org-beta"),
        )
        assert response.status_code == 403

    def test_other_org_sees_empty_lists(self, client, beta_headers, event_id):
        assert client.get(f"{API}/events", headers=beta_headers).json() == []
        assert client.get(f"{API}/roster", headers=beta_headers).json() == []


class TestHandlersRunInThreadpool:

    def test_store_backed_handlers_are_sync(self):
        routes = [
            r for r in app.routes
            if isinstance(r, APIRoute) and (r.path.startswith(API) or r.path == "/health")
        ]
        assert routes
        blocking = [r.path for r in routes if inspect.iscoroutinefunction(r.endpoint)]
        assert blocking == []
