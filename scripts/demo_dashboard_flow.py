"""Demo: walk the dashboard endpoints using FastAPI TestClient.

Shows the placeholder fallback for an unknown student, then the real
numbers after seeding the in-memory stores.

Run with:
    python scripts/demo_dashboard_flow.py
"""

from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from learnboard.api.dependencies import course_repo, progress_repo
from learnboard.main import app
from learnboard.services.seed import DEMO_STUDENT_ID, seed_demo_data


def main() -> None:
    client = TestClient(app)

    # ── Step 1: empty stores → placeholder stats ────────────────────
    r = client.get("/dashboard/stats", params={"userId": 42})
    print(
        f"1. GET  /dashboard/stats?userId=42      → {r.status_code}  "
        f"fallback={r.headers.get('x-fallback-reason')}  "
        f"totalTimeSpent={r.json()['data']['totalTimeSpent']}"
    )

    # ── Step 2: seed, then real stats ───────────────────────────────
    asyncio.run(seed_demo_data(progress_repo, course_repo))
    r = client.get("/dashboard/stats", params={"userId": DEMO_STUDENT_ID})
    data = r.json()["data"]
    print(
        f"2. GET  /dashboard/stats?userId={DEMO_STUDENT_ID}       → {r.status_code}  "
        f"courses={data['totalCourses']} avg={data['averageProgress']} "
        f"completed={data['completedCourses']}"
    )

    # ── Step 3: manual-loop path agrees ─────────────────────────────
    r2 = client.get("/dashboard/stats/simple", params={"userId": DEMO_STUDENT_ID})
    print(f"3. GET  /dashboard/stats/simple         → same={r2.json() == r.json()}")

    # ── Step 4: trend ───────────────────────────────────────────────
    r = client.get(
        "/analytics/progress-trend", params={"userId": DEMO_STUDENT_ID, "days": 7}
    )
    print(f"4. GET  /analytics/progress-trend?days=7 → {len(r.json()['data'])} day(s)")

    # ── Step 5: course details, including a bad request ─────────────
    r = client.post("/courses/details", json={"courseIds": [1, 3]})
    print(f"5. POST /courses/details [1,3]          → total={r.json()['total']}")
    r = client.post("/courses/details", json={"courseIds": []})
    print(f"6. POST /courses/details []             → {r.status_code} {r.json()['message']}")


if __name__ == "__main__":
    main()
