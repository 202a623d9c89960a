"""
Data class đại diện cho một buổi học (session) trong thời khóa biểu.
Một session gắn một giảng viên, một phòng, một chương trình (lớp) và một môn học
vào một khoảng thời gian trong một ngày của tuần học.
"""

from dataclasses import dataclass, asdict, replace
from datetime import datetime
from typing import Any, Dict, Optional

# Các ngày học trong tuần (thứ tự này cũng là thứ tự sắp xếp khi hiển thị/xuất file)
DAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri')

TIME_FORMAT = "%H:%M"

# Mapping tên thuộc tính -> key trong tài liệu JSON đã lưu
SESSION_KEY_MAPPING = {
    'id': 'id',
    'day': 'day',
    'start_time': 'startTime',
    'end_time': 'endTime',
    'lecturer_id': 'lecturerId',
    'room': 'room',
    'program': 'class',
    'subject': 'subject',
}


def normalize_time(value: str) -> str:
    """
    Chuẩn hóa chuỗi giờ về dạng "HH:MM" (ví dụ: "9:00" -> "09:00").

    Args:
        value (str): Chuỗi giờ cần chuẩn hóa.

    Returns:
        str: Chuỗi giờ dạng "HH:MM".

    Raises:
        ValueError: Nếu chuỗi không đúng định dạng giờ.
    """
    return datetime.strptime(str(value).strip(), TIME_FORMAT).strftime(TIME_FORMAT)


def intervals_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """
    Kiểm tra 2 khoảng thời gian nửa mở [start, end) có chồng lấn không.

    Overlap xảy ra khi: start_a < end_b AND start_b < end_a.
    Hai buổi chạm nhau ở đầu mút (09:00-10:00 và 10:00-11:00) KHÔNG bị coi là overlap.
    Giờ luôn ở dạng "HH:MM" có số 0 đứng đầu nên so sánh chuỗi là đủ.
    """
    return start_a < end_b and start_b < end_a


@dataclass(frozen=True)
class SessionDraft:
    """
    Dữ liệu một buổi học chưa có ID (payload do giao diện gửi lên khi tạo mới).

    Attributes:
        day (str): Ngày học, một trong DAYS.
        start_time (str): Giờ bắt đầu ("HH:MM").
        end_time (str): Giờ kết thúc ("HH:MM"), phải lớn hơn start_time.
        lecturer_id (str): ID giảng viên phụ trách.
        room (str): Tên phòng học.
        program (str): Tên chương trình/lớp (key "class" trong file lưu).
        subject (str): Tên môn học.
    """

    day: str
    start_time: str
    end_time: str
    lecturer_id: str
    room: str
    program: str
    subject: str

    def overlaps(self, other: 'SessionDraft') -> bool:
        """Cùng ngày và khoảng thời gian chồng lấn."""
        return self.day == other.day and intervals_overlap(
            self.start_time, self.end_time, other.start_time, other.end_time
        )

    @property
    def time_range(self) -> str:
        return f"{self.start_time}-{self.end_time}"


@dataclass(frozen=True)
class Session(SessionDraft):
    """
    Một buổi học đã được xếp vào thời khóa biểu.

    Attributes:
        id (str): Định danh duy nhất, do store cấp khi thêm.

    Note:
        - Session là immutable: mọi thay đổi đều tạo snapshot mới trong store.
        - Khi lưu ra JSON, các key theo SESSION_KEY_MAPPING (startTime, lecturerId, class, ...).
    """

    id: str = ''

    @classmethod
    def from_draft(cls, draft: SessionDraft, session_id: str) -> 'Session':
        return cls(
            id=session_id,
            day=draft.day,
            start_time=draft.start_time,
            end_time=draft.end_time,
            lecturer_id=draft.lecturer_id,
            room=draft.room,
            program=draft.program,
            subject=draft.subject,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Chuyển session thành dict với các key của tài liệu lưu trữ."""
        data = asdict(self)
        return {SESSION_KEY_MAPPING[name]: data[name] for name in SESSION_KEY_MAPPING}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Session':
        """
        Tạo Session từ dict đọc được trong file lưu.

        Raises:
            KeyError: Nếu thiếu key bắt buộc.
        """
        values = {name: str(data[key]) for name, key in SESSION_KEY_MAPPING.items()}
        return cls(**values)

    def __str__(self) -> str:
        return (
            f"[{self.day} {self.time_range}] {self.subject} - {self.program} "
            f"@ {self.room}"
        )


def _maybe_normalize(value: str) -> str:
    try:
        return normalize_time(value)
    except (ValueError, TypeError):
        return value


def normalize_draft(draft: SessionDraft) -> SessionDraft:
    """
    Trả về bản sao của draft với giờ đã chuẩn hóa về "HH:MM".

    Giờ không parse được giữ nguyên để bước kiểm tra payload báo InvalidSession.
    So sánh overlap dựa trên so sánh chuỗi nên mọi draft phải đi qua hàm này trước.
    """
    start = _maybe_normalize(draft.start_time)
    end = _maybe_normalize(draft.end_time)
    if (start, end) == (draft.start_time, draft.end_time):
        return draft
    return replace(draft, start_time=start, end_time=end)


def make_draft(day: str, start_time: str, end_time: str,
               lecturer_id: Optional[str], room: str, program: str,
               subject: str) -> SessionDraft:
    """Tạo SessionDraft, tự chuẩn hóa giờ nếu hợp lệ (giữ nguyên nếu không parse được)."""
    return normalize_draft(SessionDraft(
        day=day,
        start_time=start_time,
        end_time=end_time,
        lecturer_id=lecturer_id or '',
        room=room,
        program=program,
        subject=subject,
    ))
