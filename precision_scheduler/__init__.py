"""
Precision Scheduler - Quản lý thời khóa biểu giảng dạy có kiểm tra xung đột.

Ví dụ:
    >>> from precision_scheduler import SchedulingStore, build_config, make_draft
    >>> store = SchedulingStore.from_config(build_config())
    >>> store.load()
    >>> lecturer = store.add_lecturer("Nguyen Van A", ["MCA"])
    >>> store.add_session(make_draft("Mon", "09:00", "10:00", lecturer.id,
    ...                              "Room 101", "MCA", "Algorithms"))
"""

from .config import build_config
from .core.constraints import Conflict, ConflictChecker, ConflictKind
from .core.errors import (
    AdminRequired,
    AuthenticationFailed,
    InvalidLecturer,
    InvalidName,
    InvalidSession,
    LecturerConflict,
    MissingSelection,
    ProgramConflict,
    RoomConflict,
    SchedulerError,
    SessionConflict,
    StorageError,
    UnknownReference,
)
from .core.store import SchedulingStore
from .models import DAYS, Lecturer, Session, SessionDraft, StoreSnapshot, make_draft

__version__ = '1.0.0'
