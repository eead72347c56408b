"""Tests for the dashboard stats endpoints."""

from __future__ import annotations

import datetime

import pytest
from fastapi.testclient import TestClient

from learnboard.main import app
from tests.conftest import (
    NOW,
    FailingProgressRepo,
    add_courses,
    add_progress,
    make_course,
    make_record,
    use_settings,
)

STATS_PATHS = ["/dashboard/stats", "/dashboard/stats/simple"]


def _seed_golden_student(student_id: int = 1) -> None:
    add_courses(make_course(1, "JavaScript Fundamentals"), make_course(2, "React.js"))
    add_progress(
        make_record(
            1,
            student_id=student_id,
            time_spent=8.5,
            progress=50,
            completed_lessons=2,
            last_accessed=NOW,
        ),
        make_record(
            2,
            student_id=student_id,
            time_spent=5.2,
            progress=25,
            last_accessed=NOW - datetime.timedelta(days=1),
        ),
    )


# ---- 200: real data ----


@pytest.mark.parametrize("path", STATS_PATHS)
def test_stats_for_student_with_progress(client: TestClient, path: str) -> None:
    _seed_golden_student(student_id=7)
    resp = client.get(path, params={"userId": 7})
    assert resp.status_code == 200
    assert "x-fallback-reason" not in resp.headers

    body = resp.json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["totalCourses"] == 2
    assert data["totalTimeSpent"] == 13.7
    assert data["averageProgress"] == 37.5
    assert data["completedCourses"] == 0
    assert data["inProgressCourses"] == 2

    first = data["recentCourses"][0]
    assert first["courseId"] == 1
    assert first["title"] == "JavaScript Fundamentals"
    assert first["completedLessons"] == 2
    assert first["thumbnail"] == "c1.png"
    assert first["lastAccessed"].startswith("2026-10-19T12:00:00")


def test_both_stats_paths_return_identical_payloads(client: TestClient) -> None:
    _seed_golden_student()
    add_progress(
        make_record(
            3,
            progress=100,
            time_spent=3.33,
            last_accessed=NOW - datetime.timedelta(days=2),
        )
    )
    aggregated = client.get("/dashboard/stats", params={"userId": 1}).json()
    simple = client.get("/dashboard/stats/simple", params={"userId": 1}).json()
    assert aggregated == simple
    assert aggregated["data"]["recentCourses"][-1]["title"] == "Unknown Course"


@pytest.mark.parametrize("path", STATS_PATHS)
def test_missing_user_id_uses_default_student(client: TestClient, path: str) -> None:
    _seed_golden_student(student_id=1)
    resp = client.get(path)
    assert resp.status_code == 200
    assert resp.json()["data"]["totalCourses"] == 2


def test_default_student_is_configurable(client: TestClient) -> None:
    _seed_golden_student(student_id=3)
    use_settings(default_student_id=3)
    resp = client.get("/dashboard/stats")
    assert "x-fallback-reason" not in resp.headers
    assert resp.json()["data"]["totalCourses"] == 2


# ---- 200: placeholder data ----


@pytest.mark.parametrize("path", STATS_PATHS)
def test_unknown_student_gets_placeholder_stats(client: TestClient, path: str) -> None:
    resp = client.get(path, params={"userId": 999})
    assert resp.status_code == 200
    assert resp.headers["x-fallback-reason"] == "empty"
    data = resp.json()["data"]
    assert data["totalCourses"] == 2
    assert data["totalTimeSpent"] == 13.7
    assert data["averageProgress"] == 37.5
    assert [c["title"] for c in data["recentCourses"]] == [
        "JavaScript Fundamentals",
        "React.js for Beginners",
    ]


@pytest.mark.parametrize("path", STATS_PATHS)
def test_store_failure_is_hidden_behind_placeholder_stats(
    client: TestClient, path: str, failing_progress_repo: FailingProgressRepo
) -> None:
    resp = client.get(path, params={"userId": 1})
    assert resp.status_code == 200
    assert resp.headers["x-fallback-reason"] == "error"
    body = resp.json()
    assert body["status"] == "success"
    assert body["data"]["totalTimeSpent"] == 13.7
    assert "unavailable" not in resp.text
    assert failing_progress_repo.calls == 1


# ---- strict mode ----


@pytest.mark.parametrize("path", STATS_PATHS)
def test_strict_mode_returns_zero_stats_for_unknown_student(
    client: TestClient, path: str, strict_mode
) -> None:
    resp = client.get(path, params={"userId": 999})
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "totalCourses": 0,
        "totalTimeSpent": 0.0,
        "averageProgress": 0.0,
        "completedCourses": 0,
        "inProgressCourses": 0,
        "recentCourses": [],
    }


@pytest.mark.parametrize("path", STATS_PATHS)
def test_strict_mode_surfaces_store_failure_as_500(
    path: str, strict_mode, failing_progress_repo: FailingProgressRepo
) -> None:
    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get(path, params={"userId": 1})
    assert resp.status_code == 500
    assert resp.json() == {"status": "error", "message": "Internal server error"}


# ---- 400: bad input ----


@pytest.mark.parametrize("user_id", ["abc", "0", "-4", "1.5"])
def test_malformed_user_id_rejected(client: TestClient, user_id: str) -> None:
    resp = client.get("/dashboard/stats", params={"userId": user_id})
    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "fail"
    assert "userId" in body["message"]


@pytest.mark.parametrize("path", STATS_PATHS)
@pytest.mark.parametrize("query", ["userId=", "userId=%20"])
def test_blank_user_id_uses_default_student(
    client: TestClient, path: str, query: str
) -> None:
    _seed_golden_student(student_id=1)
    resp = client.get(f"{path}?{query}")
    assert resp.status_code == 200
    assert "x-fallback-reason" not in resp.headers
    assert resp.json()["data"]["totalTimeSpent"] == 13.7


def test_non_finite_time_spent_counts_as_zero(client: TestClient) -> None:
    _seed_golden_student()
    add_progress(make_record(3, time_spent=float("nan"), progress=float("inf")))
    for path in STATS_PATHS:
        resp = client.get(path, params={"userId": 1})
        assert resp.status_code == 200
        assert "x-fallback-reason" not in resp.headers
        data = resp.json()["data"]
        assert data["totalCourses"] == 3
        assert data["totalTimeSpent"] == 13.7
        assert data["averageProgress"] == 25.0
        (malformed,) = [c for c in data["recentCourses"] if c["courseId"] == 3]
        assert malformed["timeSpent"] == 0.0
        assert malformed["progress"] == 0.0
