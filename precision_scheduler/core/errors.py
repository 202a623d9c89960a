"""
Các exception của hệ thống thời khóa biểu.

Mọi lỗi đều được raise đồng bộ tại chỗ vi phạm, không tự retry và không làm hỏng store:
sau một thao tác thất bại, snapshot hiện tại vẫn giữ nguyên.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.session import Session
    from .constraints import Conflict


class SchedulerError(Exception):
    """Base class cho mọi lỗi của store."""


class SessionConflict(SchedulerError):
    """
    Buổi học mới bị trùng với một buổi học đã có.

    Attributes:
        conflict (Conflict): Kết quả kiểm tra (loại xung đột + buổi học bị trùng).
        existing (Session): Buổi học đã có gây ra xung đột.
    """

    def __init__(self, conflict: 'Conflict'):
        super().__init__(conflict.message)
        self.conflict = conflict
        self.existing: 'Session' = conflict.existing


class LecturerConflict(SessionConflict):
    """Giảng viên đã có buổi học chồng lấn trong ngày."""


class RoomConflict(SessionConflict):
    """Phòng đã bị một buổi học khác chiếm trong khoảng thời gian đó."""


class ProgramConflict(SessionConflict):
    """Chương trình/lớp đã có buổi học chồng lấn trong ngày."""


class MissingSelection(SchedulerError):
    """Chưa chọn một trường tham chiếu bắt buộc (giảng viên)."""


class InvalidSession(SchedulerError):
    """Dữ liệu buổi học không hợp lệ (ngày, định dạng giờ, start >= end)."""


class InvalidLecturer(SchedulerError):
    """Dữ liệu giảng viên không hợp lệ (tên rỗng)."""


class InvalidName(SchedulerError):
    """Tên phòng/môn/chương trình rỗng."""


class UnknownReference(SchedulerError):
    """Buổi học tham chiếu tới giảng viên/phòng/lớp/môn không tồn tại."""


class AuthenticationFailed(SchedulerError):
    """Mật khẩu quản trị không đúng."""


class AdminRequired(SchedulerError):
    """Thao tác cần quyền quản trị nhưng chưa đăng nhập."""


class StorageError(SchedulerError):
    """Không đọc được hoặc tài liệu lưu trữ bị sửa đổi."""
