from typing import Any

from pydantic import BaseModel, Field


# Field values are passed to storage untouched; SQLite decides what it accepts

class LoginRequest(BaseModel):
    username: Any = None
    password: Any = None


class CommitteeUpdate(BaseModel):
    # Missing fields are written as NULL, the same as the admin page sending them empty
    title: Any = None
    appendix: Any = None
    status: Any = None
    percent: Any = None
    start_date: Any = None
    end_date: Any = None
    notes: Any = None


class TaskItem(BaseModel):
    text: Any = None
    done: Any = False


class TaskListUpdate(BaseModel):
    tasks: list[TaskItem]


class PasswordChange(BaseModel):
    username: Any = None
    new_password: Any = Field(default=None, alias="newPassword")
