"""
Package models - Tầng dữ liệu của ứng dụng thời khóa biểu.

Module này cung cấp các data classes cơ bản:
- Lecturer: Đại diện cho một giảng viên
- SessionDraft: Dữ liệu một buổi học chưa có ID
- Session: Một buổi học đã được xếp lịch
- StoreSnapshot: Toàn bộ trạng thái thời khóa biểu tại một thời điểm

Các class này hoàn toàn độc lập với logic kiểm tra xung đột và lưu trữ.
"""

from .lecturer import Lecturer
from .session import (
    DAYS, Session, SessionDraft, make_draft, normalize_draft, normalize_time, intervals_overlap,
)
from .snapshot import StoreSnapshot

__all__ = [
    'DAYS', 'Lecturer', 'Session', 'SessionDraft', 'StoreSnapshot',
    'make_draft', 'normalize_draft', 'normalize_time', 'intervals_overlap',
]
