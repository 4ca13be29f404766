"""Queries and mutations used by the HTTP routes.

Every function takes an open ``Session``; mutating functions commit before
returning so the change is on disk once the call comes back.
"""

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from models import AdminUser, Committee, Task

# Size of the tracked committee set, reported by the summary
TOTAL_COMMITTEES = 10

EDITABLE_FIELDS = ("title", "appendix", "status", "percent", "start_date", "end_date", "notes")


def task_to_dict(t: Task) -> dict:
    return {
        "id": t.id,
        "committee_id": t.committee_id,
        "text": t.text,
        "done": bool(t.done),
        "sort_order": t.sort_order,
    }


def committee_to_dict(c: Committee) -> dict:
    return {
        "id": c.id,
        "title": c.title,
        "appendix": c.appendix,
        "status": c.status,
        "percent": c.percent,
        "start_date": c.start_date,
        "end_date": c.end_date,
        "notes": c.notes,
        "updated_at": c.updated_at,
        "tasks": [task_to_dict(t) for t in c.tasks],
    }


def list_committees(db: Session) -> list[dict]:
    committees = (
        db.query(Committee)
        .options(selectinload(Committee.tasks))
        .order_by(Committee.id.asc())
        .all()
    )
    return [committee_to_dict(c) for c in committees]


def get_committee(db: Session, committee_id: int) -> dict | None:
    """Return one committee with its tasks, or None if the id is unknown."""
    c = db.query(Committee).filter(Committee.id == committee_id).first()
    if c is None:
        return None
    return committee_to_dict(c)


def get_summary(db: Session) -> dict:
    rows = (
        db.query(Committee.status, func.count(Committee.id))
        .group_by(Committee.status)
        .all()
    )
    stats = [{"status": status, "count": count} for status, count in rows]

    # SQLite ROUND rounds halves away from zero
    avg = db.query(func.round(func.avg(Committee.percent))).scalar()

    return {
        "stats": stats,
        "avg_percent": int(avg) if avg is not None else 0,
        "total": TOTAL_COMMITTEES,
    }


def update_committee(db: Session, committee_id: int, fields: dict) -> None:
    """Overwrite every editable field; an unknown id updates nothing."""
    values = {name: fields.get(name) for name in EDITABLE_FIELDS}
    values["updated_at"] = func.datetime("now", "localtime")
    try:
        db.query(Committee).filter(Committee.id == committee_id).update(
            values, synchronize_session=False
        )
        db.commit()
    except Exception:
        db.rollback()
        raise


def replace_tasks(db: Session, committee_id: int, tasks: list[dict]) -> None:
    """Swap the committee's whole checklist for ``tasks`` in one transaction."""
    try:
        db.query(Task).filter(Task.committee_id == committee_id).delete(
            synchronize_session=False
        )
        db.add_all(
            Task(
                committee_id=committee_id,
                text=t.get("text"),
                done=1 if t.get("done") else 0,
                sort_order=i,
            )
            for i, t in enumerate(tasks)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise


def delete_committee(db: Session, committee_id: int) -> bool:
    c = db.query(Committee).filter(Committee.id == committee_id).first()
    if c is None:
        return False
    try:
        db.delete(c)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return True


def authenticate(db: Session, username: str | None, password: str | None) -> dict | None:
    if username is None or password is None:
        return None
    user = (
        db.query(AdminUser)
        .filter(AdminUser.username == username, AdminUser.password == password)
        .first()
    )
    if user is None:
        return None
    return {"id": user.id, "username": user.username}


def set_password(db: Session, username: str | None, new_password: str | None) -> None:
    try:
        db.query(AdminUser).filter(AdminUser.username == username).update(
            {"password": new_password}, synchronize_session=False
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
