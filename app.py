import csv
import io
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import crud
from auth import require_admin
from config import BASE_DIR, Settings, get_settings
from db import Database, get_db
from errors import error_response, register_error_handlers
from logging_setup import setup_logging
from schemas import CommitteeUpdate, LoginRequest, PasswordChange, TaskListUpdate

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "ชื่อผู้ใช้หรือรหัสผ่านไม่ถูกต้อง"

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and seed data before serving, release the pool after"""
    app.state.database.init()
    yield
    app.state.database.dispose()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings.db_path)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    register_error_handlers(app)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    @app.get("/health")
    def health():
        """Health check endpoint for monitoring and CI"""
        return {"status": "ok"}

    # --- public API ---

    @app.get("/api/committees")
    def read_committees(db: Session = Depends(get_db)):
        return crud.list_committees(db)

    @app.get("/api/committees/{committee_id}")
    def read_committee(committee_id: int, db: Session = Depends(get_db)):
        committee = crud.get_committee(db, committee_id)
        if committee is None:
            raise HTTPException(status_code=404, detail="Not found")
        return committee

    @app.get("/api/summary")
    def read_summary(db: Session = Depends(get_db)):
        return crud.get_summary(db)

    @app.get("/api/export/committees.csv")
    def export_csv(db: Session = Depends(get_db)):
        """Export committees and their tasks as CSV"""
        committees = crud.list_committees(db)

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(["Type", "Committee ID", "Title / Task", "Appendix", "Status", "Percent",
                         "Start", "End", "Updated", "Notes"])
        for c in committees:
            writer.writerow(["Committee", c["id"], c["title"], c["appendix"] or "", c["status"],
                             c["percent"], c["start_date"] or "", c["end_date"] or "",
                             c["updated_at"] or "", c["notes"] or ""])

        for c in committees:
            for t in c["tasks"]:
                status = "Done" if t["done"] else "Pending"
                writer.writerow(["Task", c["id"], t["text"], "-", status, "-", "-", "-", "-", "-"])

        output.seek(0)
        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=committees.csv"}
        )

    @app.get("/api/report", response_class=PlainTextResponse)
    def export_report(db: Session = Depends(get_db)):
        """Export a progress report as Markdown"""
        committees = crud.list_committees(db)
        summary = crud.get_summary(db)

        done_tasks = sum(1 for c in committees for t in c["tasks"] if t["done"])
        total_tasks = sum(len(c["tasks"]) for c in committees)

        lines = []
        lines.append(f"# {settings.app_name} Progress Report")
        lines.append("")
        lines.append("## Summary")
        lines.append(f"- Committees: **{len(committees)}/{summary['total']}**")
        lines.append(f"- Average progress: **{summary['avg_percent']}%**")
        lines.append(f"- Tasks: **{done_tasks}/{total_tasks}** completed")
        lines.append("")
        lines.append("## By Status")
        for s in sorted(summary["stats"], key=lambda x: x["count"], reverse=True):
            lines.append(f"- {s['status']}: {s['count']}")
        lines.append("")
        lines.append("## Committees")
        for c in committees:
            appendix = f" ({c['appendix']})" if c["appendix"] else ""
            lines.append(f"### {c['id']}. {c['title']}{appendix}")
            lines.append(f"- Status: {c['status']} ({c['percent']}%)")
            if c["start_date"] or c["end_date"]:
                lines.append(f"- Period: {c['start_date'] or '?'} → {c['end_date'] or '?'}")
            if c["notes"]:
                lines.append(f"- Notes: _{c['notes']}_")
            for t in c["tasks"]:
                mark = "x" if t["done"] else " "
                lines.append(f"  - [{mark}] {t['text']}")
            lines.append("")

        return "\n".join(lines)

    @app.post("/api/auth/login")
    def login(body: LoginRequest, db: Session = Depends(get_db)):
        user = crud.authenticate(db, body.username, body.password)
        if user is None:
            return error_response(LOGIN_FAILED_MESSAGE, 401)
        return {"ok": True, "user": user}

    # --- admin API (Basic auth) ---

    @app.put("/api/admin/committees/{committee_id}")
    def update_committee(
        committee_id: int,
        body: CommitteeUpdate,
        db: Session = Depends(get_db),
        admin: dict = Depends(require_admin),
    ):
        crud.update_committee(db, committee_id, body.model_dump())
        return {"ok": True}

    @app.put("/api/admin/committees/{committee_id}/tasks")
    def update_tasks(
        committee_id: int,
        body: TaskListUpdate,
        db: Session = Depends(get_db),
        admin: dict = Depends(require_admin),
    ):
        crud.replace_tasks(db, committee_id, [t.model_dump() for t in body.tasks])
        return {"ok": True}

    @app.delete("/api/admin/committees/{committee_id}")
    def delete_committee(
        committee_id: int,
        db: Session = Depends(get_db),
        admin: dict = Depends(require_admin),
    ):
        if not crud.delete_committee(db, committee_id):
            raise HTTPException(status_code=404, detail="Not found")
        logger.info("Committee %d deleted by %s", committee_id, admin["username"])
        return {"ok": True}

    @app.put("/api/admin/password")
    def change_password(
        body: PasswordChange,
        db: Session = Depends(get_db),
        admin: dict = Depends(require_admin),
    ):
        crud.set_password(db, body.username, body.new_password)
        logger.info("Password changed for %r by %s", body.username, admin["username"])
        return {"ok": True}

    # --- pages ---

    @app.get("/admin", response_class=HTMLResponse)
    def admin_page(request: Request):
        return templates.TemplateResponse(request, "admin.html", {"app_name": settings.app_name})

    # Client-side routing: everything else gets the dashboard
    @app.get("/{full_path:path}", response_class=HTMLResponse)
    def dashboard(request: Request):
        return templates.TemplateResponse(request, "index.html", {"app_name": settings.app_name})

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    database = Database(settings.db_path)
    try:
        database.init()
    except (SQLAlchemyError, OSError):
        logger.exception("Database setup failed for %s", settings.db_path)
        sys.exit(1)

    logger.info("%s running on http://localhost:%d", settings.app_name, settings.port)
    logger.info("Dashboard: http://localhost:%d", settings.port)
    logger.info("Admin:     http://localhost:%d/admin", settings.port)
    uvicorn.run(create_app(settings, database), host=settings.host, port=settings.port,
                log_config=None)


if __name__ == "__main__":
    main()
