"""
Data class đại diện cho toàn bộ trạng thái của thời khóa biểu tại một thời điểm.
Đây là đối tượng mà SchedulingStore thay thế nguyên khối sau mỗi thao tác thay đổi dữ liệu.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .lecturer import Lecturer
from .session import Session

# Key của các collection trong tài liệu lưu trữ (programs được lưu dưới tên "groups")
LECTURERS_KEY = 'lecturers'
SESSIONS_KEY = 'sessions'
ROOMS_KEY = 'rooms'
SUBJECTS_KEY = 'subjects'
PROGRAMS_KEY = 'groups'


@dataclass(frozen=True)
class StoreSnapshot:
    """
    Snapshot bất biến của 5 collection.

    Attributes:
        lecturers (Tuple[Lecturer, ...]): Danh sách giảng viên.
        sessions (Tuple[Session, ...]): Các buổi học đã xếp, theo thứ tự thêm vào.
        rooms (Tuple[str, ...]): Danh sách phòng học.
        subjects (Tuple[str, ...]): Danh sách môn học.
        programs (Tuple[str, ...]): Danh sách chương trình/lớp.

    Note:
        - Thứ tự của sessions quan trọng: kiểm tra xung đột quét theo thứ tự này
          và báo xung đột ĐẦU TIÊN tìm thấy.
    """

    lecturers: Tuple[Lecturer, ...] = field(default_factory=tuple)
    sessions: Tuple[Session, ...] = field(default_factory=tuple)
    rooms: Tuple[str, ...] = field(default_factory=tuple)
    subjects: Tuple[str, ...] = field(default_factory=tuple)
    programs: Tuple[str, ...] = field(default_factory=tuple)

    def evolve(self, **changes: Iterable) -> 'StoreSnapshot':
        """Tạo snapshot mới với các collection được thay thế (tự chuyển thành tuple)."""
        return replace(self, **{name: tuple(value) for name, value in changes.items()})

    def get_lecturer(self, lecturer_id: str) -> Optional[Lecturer]:
        for lecturer in self.lecturers:
            if lecturer.id == lecturer_id:
                return lecturer
        return None

    def get_session(self, session_id: str) -> Optional[Session]:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    def get_sessions_by_day(self, day: str) -> List[Session]:
        """
        Lấy danh sách các buổi học trong một ngày.

        Args:
            day (str): Ngày cần tìm (Mon..Fri).

        Returns:
            List[Session]: Các buổi học trong ngày đó.
        """
        return [session for session in self.sessions if session.day == day]

    def get_sessions_by_room(self, room: str) -> List[Session]:
        return [session for session in self.sessions if session.room == room]

    def get_sessions_by_program(self, program: str) -> List[Session]:
        return [session for session in self.sessions if session.program == program]

    def get_sessions_by_lecturer(self, lecturer_id: str) -> List[Session]:
        return [session for session in self.sessions if session.lecturer_id == lecturer_id]

    def to_dict(self) -> Dict[str, Any]:
        """Chuyển snapshot thành tài liệu phẳng gồm 5 key."""
        return {
            LECTURERS_KEY: [lecturer.to_dict() for lecturer in self.lecturers],
            SESSIONS_KEY: [session.to_dict() for session in self.sessions],
            ROOMS_KEY: list(self.rooms),
            SUBJECTS_KEY: list(self.subjects),
            PROGRAMS_KEY: list(self.programs),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StoreSnapshot':
        """
        Tạo snapshot từ tài liệu đã lưu. Collection nào thiếu được coi là rỗng.

        Raises:
            KeyError: Nếu một lecturer/session thiếu trường bắt buộc.
        """
        return cls(
            lecturers=tuple(Lecturer.from_dict(item) for item in data.get(LECTURERS_KEY, [])),
            sessions=tuple(Session.from_dict(item) for item in data.get(SESSIONS_KEY, [])),
            rooms=tuple(str(r) for r in data.get(ROOMS_KEY, [])),
            subjects=tuple(str(s) for s in data.get(SUBJECTS_KEY, [])),
            programs=tuple(str(p) for p in data.get(PROGRAMS_KEY, [])),
        )

    def __str__(self) -> str:
        return (
            f"Thời khóa biểu: {len(self.sessions)} buổi | "
            f"{len(self.lecturers)} giảng viên | {len(self.rooms)} phòng | "
            f"{len(self.subjects)} môn | {len(self.programs)} chương trình"
        )

    def __len__(self) -> int:
        return len(self.sessions)

    def __bool__(self) -> bool:
        # Snapshot không có buổi học nào vẫn là một snapshot hợp lệ
        return True
