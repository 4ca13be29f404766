"""
Initial committee data.

Loaded into an empty database on first start. Nothing here runs once the
committees table has rows, so edits made through the admin page are never
overwritten.
"""

import logging

from sqlalchemy import text
from sqlalchemy.orm import Session

from models import AdminUser, Committee, Task

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "sbs2569"

COMMITTEES = [
    {
        "id": 1,
        "title": "Steering Committee",
        "appendix": "Appendix 1",
        "status": "in-progress",
        "percent": 60,
        "start_date": "2026-01-05",
        "end_date": "2026-09-30",
        "notes": "Monthly review meeting on the first Monday.",
        "tasks": [
            {"text": "Approve project charter", "done": True},
            {"text": "Appoint sub-committee chairs", "done": True},
            {"text": "Approve budget allocation", "done": True},
            {"text": "Mid-year progress review", "done": False},
            {"text": "Final sign-off", "done": False},
        ],
    },
    {
        "id": 2,
        "title": "Curriculum Development Committee",
        "appendix": "Appendix 2",
        "status": "in-progress",
        "percent": 45,
        "start_date": "2026-01-15",
        "end_date": "2026-08-31",
        "notes": None,
        "tasks": [
            {"text": "Survey current course structure", "done": True},
            {"text": "Draft learning outcomes", "done": True},
            {"text": "Map outcomes to courses", "done": False},
            {"text": "Peer review of draft curriculum", "done": False},
        ],
    },
    {
        "id": 3,
        "title": "Budget and Procurement Committee",
        "appendix": "Appendix 3",
        "status": "completed",
        "percent": 100,
        "start_date": "2026-01-05",
        "end_date": "2026-03-31",
        "notes": "Budget approved by the board.",
        "tasks": [
            {"text": "Collect department requests", "done": True},
            {"text": "Consolidate budget plan", "done": True},
            {"text": "Submit for board approval", "done": True},
        ],
    },
    {
        "id": 4,
        "title": "Facilities and Safety Committee",
        "appendix": "Appendix 4",
        "status": "in-progress",
        "percent": 30,
        "start_date": "2026-02-01",
        "end_date": "2026-07-31",
        "notes": None,
        "tasks": [
            {"text": "Inspect classrooms and labs", "done": True},
            {"text": "List repair items", "done": False},
            {"text": "Fire drill", "done": False},
            {"text": "Update evacuation plan", "done": False},
        ],
    },
    {
        "id": 5,
        "title": "Student Affairs Committee",
        "appendix": "Appendix 5",
        "status": "not-started",
        "percent": 0,
        "start_date": "2026-05-01",
        "end_date": "2026-10-31",
        "notes": None,
        "tasks": [
            {"text": "Plan orientation week", "done": False},
            {"text": "Set up student council election", "done": False},
            {"text": "Publish activity calendar", "done": False},
        ],
    },
    {
        "id": 6,
        "title": "Quality Assurance Committee",
        "appendix": "Appendix 6",
        "status": "in-progress",
        "percent": 20,
        "start_date": "2026-03-01",
        "end_date": "2026-11-30",
        "notes": "Self-assessment report due in November.",
        "tasks": [
            {"text": "Define indicators", "done": True},
            {"text": "Collect evidence", "done": False},
            {"text": "Write self-assessment report", "done": False},
            {"text": "Internal audit", "done": False},
        ],
    },
    {
        "id": 7,
        "title": "Public Relations Committee",
        "appendix": "Appendix 7",
        "status": "completed",
        "percent": 100,
        "start_date": "2026-01-10",
        "end_date": "2026-04-30",
        "notes": None,
        "tasks": [
            {"text": "Redesign website front page", "done": True},
            {"text": "Open social media accounts", "done": True},
            {"text": "Print brochures", "done": True},
        ],
    },
    {
        "id": 8,
        "title": "Information Technology Committee",
        "appendix": "Appendix 8",
        "status": "in-progress",
        "percent": 70,
        "start_date": "2026-02-01",
        "end_date": "2026-06-30",
        "notes": None,
        "tasks": [
            {"text": "Upgrade campus Wi-Fi", "done": True},
            {"text": "Deploy learning management system", "done": True},
            {"text": "Train teachers on the new system", "done": True},
            {"text": "Migrate student records", "done": False},
        ],
    },
    {
        "id": 9,
        "title": "Community Engagement Committee",
        "appendix": "Appendix 9",
        "status": "not-started",
        "percent": 0,
        "start_date": "2026-06-01",
        "end_date": "2026-12-15",
        "notes": None,
        "tasks": [
            {"text": "Contact parent network", "done": False},
            {"text": "Organize open house", "done": False},
        ],
    },
    {
        "id": 10,
        "title": "Evaluation and Reporting Committee",
        "appendix": "Appendix 10",
        "status": "not-started",
        "percent": 0,
        "start_date": "2026-09-01",
        "end_date": "2026-12-31",
        "notes": None,
        "tasks": [
            {"text": "Design evaluation form", "done": False},
            {"text": "Collect committee reports", "done": False},
            {"text": "Publish annual summary", "done": False},
        ],
    },
]


def seed_database(session: Session) -> bool:
    """Fill an empty database; returns True if anything was inserted."""
    try:
        # Hold the write lock while checking, so concurrent starts seed only once
        session.execute(text("BEGIN IMMEDIATE"))
        if session.query(Committee).count() > 0:
            session.rollback()
            return False

        for c in COMMITTEES:
            committee = Committee(
                id=c["id"],
                title=c["title"],
                appendix=c["appendix"],
                status=c["status"],
                percent=c["percent"],
                start_date=c["start_date"],
                end_date=c["end_date"],
                notes=c["notes"],
            )
            committee.tasks = [
                Task(text=t["text"], done=1 if t["done"] else 0, sort_order=i)
                for i, t in enumerate(c["tasks"])
            ]
            session.add(committee)

        created_admin = session.query(AdminUser).count() == 0
        if created_admin:
            session.add(AdminUser(username=DEFAULT_ADMIN_USERNAME, password=DEFAULT_ADMIN_PASSWORD))

        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Database seeded with %d committees", len(COMMITTEES))
    if created_admin:
        logger.info("Default admin created (%s)", DEFAULT_ADMIN_USERNAME)
    return True
