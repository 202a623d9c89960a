"""
Module kiểm tra ràng buộc khi thêm một buổi học mới vào thời khóa biểu.

Quy tắc nhận buổi học (admission rule): buổi học mới KHÔNG được chồng lấn thời gian,
trong cùng ngày, với một buổi học đã có nếu trùng giảng viên, trùng phòng hoặc trùng
chương trình. Chỉ báo xung đột ĐẦU TIÊN tìm thấy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Type

from ..models.session import DAYS, Session, SessionDraft, normalize_draft, normalize_time
from ..models.snapshot import StoreSnapshot
from .errors import (
    InvalidSession,
    LecturerConflict,
    MissingSelection,
    ProgramConflict,
    RoomConflict,
    SessionConflict,
    UnknownReference,
)


class ConflictKind(Enum):
    """Loại xung đột, theo đúng thứ tự ưu tiên khi kiểm tra."""
    LECTURER = 'lecturer'
    ROOM = 'room'
    PROGRAM = 'program'


@dataclass(frozen=True)
class Conflict:
    """
    Kết quả kiểm tra xung đột.

    Attributes:
        kind (ConflictKind): Trục bị trùng (giảng viên / phòng / chương trình).
        existing (Session): Buổi học đã có gây ra xung đột.
    """

    kind: ConflictKind
    existing: Session

    @property
    def message(self) -> str:
        """Thông báo cho người dùng, kèm khoảng thời gian của buổi học bị trùng."""
        time_range = self.existing.time_range
        if self.kind is ConflictKind.LECTURER:
            return f"Lecturer already has a class: {time_range}"
        if self.kind is ConflictKind.ROOM:
            return f"Room is occupied by {self.existing.program}: {time_range}"
        return f"This program already has a session: {time_range}"

    def to_error(self) -> SessionConflict:
        """Chuyển kết quả thành exception tương ứng để raise."""
        return CONFLICT_ERRORS[self.kind](self)


CONFLICT_ERRORS: Dict[ConflictKind, Type[SessionConflict]] = {
    ConflictKind.LECTURER: LecturerConflict,
    ConflictKind.ROOM: RoomConflict,
    ConflictKind.PROGRAM: ProgramConflict,
}


class ConflictChecker:
    """
    Class kiểm tra một buổi học mới so với các buổi học đã có.

    Không giữ trạng thái: mọi dữ liệu cần thiết được truyền vào qua tham số,
    nên có thể dùng để xem trước (preview) trên form mà không cần thay đổi store.
    """

    def __init__(self, days: Iterable[str] = DAYS):
        self.days = tuple(days)

    @staticmethod
    def _check_overlap(candidate: SessionDraft, existing: Session) -> bool:
        """
        Kiểm tra 2 buổi học có cùng ngày và khoảng thời gian chồng lấn không.

        Overlap xảy ra khi: start_1 < end_2 AND start_2 < end_1 (khoảng nửa mở).
        """
        return candidate.overlaps(existing)

    @staticmethod
    def _conflict_kind(candidate: SessionDraft, existing: Session) -> Optional[ConflictKind]:
        """Xác định trục trùng theo thứ tự: giảng viên -> phòng -> chương trình."""
        if existing.lecturer_id == candidate.lecturer_id:
            return ConflictKind.LECTURER
        if existing.room == candidate.room:
            return ConflictKind.ROOM
        if existing.program == candidate.program:
            return ConflictKind.PROGRAM
        return None

    def find_conflict(self, sessions: Iterable[Session],
                      candidate: SessionDraft) -> Optional[Conflict]:
        """
        Tìm xung đột đầu tiên của buổi học mới.

        Strategy:
            - Quét các buổi học đã có theo thứ tự thêm vào (một lượt duy nhất)
            - Với mỗi buổi cùng ngày và chồng lấn thời gian: kiểm tra giảng viên,
              rồi phòng, rồi chương trình
            - Trả về ngay khi gặp trục trùng đầu tiên

        Args:
            sessions (Iterable[Session]): Các buổi học hiện có.
            candidate (SessionDraft): Buổi học cần thêm.

        Returns:
            Optional[Conflict]: None nếu không có xung đột.
        """
        candidate = normalize_draft(candidate)
        for existing in sessions:
            if not self._check_overlap(candidate, existing):
                continue
            kind = self._conflict_kind(candidate, existing)
            if kind is not None:
                return Conflict(kind=kind, existing=existing)
        return None

    def validate_draft(self, snapshot: StoreSnapshot, candidate: SessionDraft) -> None:
        """
        Kiểm tra payload của buổi học trước khi kiểm tra xung đột.

        Raises:
            MissingSelection: Chưa chọn giảng viên.
            InvalidSession: Ngày không hợp lệ, giờ sai định dạng hoặc start >= end.
            UnknownReference: Giảng viên/phòng/chương trình/môn không tồn tại.
        """
        if not candidate.lecturer_id:
            raise MissingSelection("Please select a lecturer")

        if candidate.day not in self.days:
            raise InvalidSession(
                f"Ngày không hợp lệ: {candidate.day}. Chỉ chấp nhận {', '.join(self.days)}"
            )

        try:
            start = normalize_time(candidate.start_time)
            end = normalize_time(candidate.end_time)
        except (ValueError, TypeError):
            raise InvalidSession(
                f"Giờ không đúng định dạng HH:MM: {candidate.start_time}-{candidate.end_time}"
            )
        if (start, end) != (candidate.start_time, candidate.end_time):
            raise InvalidSession(f"Giờ phải ở dạng HH:MM: {candidate.time_range}")
        if not start < end:
            raise InvalidSession(f"Giờ bắt đầu phải trước giờ kết thúc: {candidate.time_range}")

        if snapshot.get_lecturer(candidate.lecturer_id) is None:
            raise UnknownReference(f"Giảng viên không tồn tại: {candidate.lecturer_id}")
        if candidate.room not in snapshot.rooms:
            raise UnknownReference(f"Phòng không tồn tại: {candidate.room}")
        if candidate.program not in snapshot.programs:
            raise UnknownReference(f"Chương trình không tồn tại: {candidate.program}")
        if candidate.subject not in snapshot.subjects:
            raise UnknownReference(f"Môn học không tồn tại: {candidate.subject}")

    def check(self, snapshot: StoreSnapshot, candidate: SessionDraft) -> None:
        """
        Kiểm tra đầy đủ: payload rồi xung đột. Raise lỗi đầu tiên gặp phải.

        Raises:
            SchedulerError: Một trong các lỗi của validate_draft, hoặc
                LecturerConflict / RoomConflict / ProgramConflict.
        """
        candidate = normalize_draft(candidate)
        self.validate_draft(snapshot, candidate)
        conflict = self.find_conflict(snapshot.sessions, candidate)
        if conflict is not None:
            raise conflict.to_error()
