import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import IntegrityError

import seed
from db import Database
from models import AdminUser, Base, Committee, Task


def test_fresh_database_is_seeded(db):
    assert db.query(Committee).count() == len(seed.COMMITTEES) == 10
    assert db.query(Task).count() == sum(len(c["tasks"]) for c in seed.COMMITTEES)

    admins = db.query(AdminUser).all()
    assert [(a.username, a.password) for a in admins] == [("admin", "sbs2569")]


def test_seeded_tasks_keep_order_and_done_flags(db):
    for c in seed.COMMITTEES:
        tasks = db.query(Task).filter(Task.committee_id == c["id"]).order_by(Task.sort_order).all()
        assert [t.sort_order for t in tasks] == list(range(len(c["tasks"])))
        assert [t.text for t in tasks] == [t["text"] for t in c["tasks"]]
        assert [bool(t.done) for t in tasks] == [t["done"] for t in c["tasks"]]


def test_seeding_twice_does_not_duplicate(settings, database):
    # A second process start on the same file
    restarted = Database(settings.db_path)
    restarted.init()
    try:
        with restarted.session() as s:
            assert s.query(Committee).count() == 10
            assert s.query(AdminUser).count() == 1
            assert seed.seed_database(s) is False
    finally:
        restarted.dispose()


def test_seeding_skips_populated_database_and_keeps_admin_password(db, settings):
    db.query(AdminUser).filter(AdminUser.username == "admin").update({"password": "changed"})
    db.commit()

    restarted = Database(settings.db_path)
    restarted.init()
    try:
        with restarted.session() as s:
            assert s.query(AdminUser).one().password == "changed"
    finally:
        restarted.dispose()


def test_failed_seed_leaves_database_empty(tmp_path, monkeypatch):
    broken = list(seed.COMMITTEES) + [dict(seed.COMMITTEES[0], id=11, title=None)]
    monkeypatch.setattr(seed, "COMMITTEES", broken)

    database = Database(tmp_path / "broken.db")
    with pytest.raises(IntegrityError):
        database.init()

    try:
        with database.session() as s:
            assert s.query(Committee).count() == 0
            assert s.query(Task).count() == 0
            assert s.query(AdminUser).count() == 0
    finally:
        database.dispose()


def test_concurrent_first_starts_seed_once(tmp_path):
    path = tmp_path / "race.db"
    databases = [Database(path), Database(path)]
    Base.metadata.create_all(bind=databases[0].engine)
    barrier = threading.Barrier(2)

    def start(database):
        with database.session() as s:
            barrier.wait()
            return seed.seed_database(s)

    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(start, databases))

        assert sorted(results) == [False, True]
        with databases[0].session() as s:
            assert s.query(Committee).count() == 10
            assert s.query(AdminUser).count() == 1
    finally:
        for database in databases:
            database.dispose()
