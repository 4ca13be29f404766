from sqlalchemy import Column, Integer, String, Text, ForeignKey, text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# SQLite's local-time clock, stored as "YYYY-MM-DD HH:MM:SS"
LOCAL_NOW = text("(datetime('now','localtime'))")


class Committee(Base):
    __tablename__ = "committees"
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(Text, nullable=False)
    appendix = Column(Text)
    status = Column(String(50), nullable=False, default="not-started", server_default="not-started")
    percent = Column(Integer, nullable=False, default=0, server_default="0")
    start_date = Column(String(20))
    end_date = Column(String(20))
    notes = Column(Text)
    updated_at = Column(String(19), server_default=LOCAL_NOW)

    tasks = relationship(
        "Task",
        back_populates="committee",
        order_by="Task.sort_order",
        cascade="all, delete",
        passive_deletes=True,
    )


class Task(Base):
    __tablename__ = "tasks"
    id = Column(Integer, primary_key=True, autoincrement=True)
    committee_id = Column(
        Integer,
        ForeignKey("committees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = Column(Text, nullable=False)
    done = Column(Integer, nullable=False, default=0, server_default="0")
    sort_order = Column(Integer, nullable=False, default=0, server_default="0")

    committee = relationship("Committee", back_populates="tasks")


class AdminUser(Base):
    __tablename__ = "admin_users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    # plain text, compared verbatim by crud.authenticate
    password = Column(String(200), nullable=False)
