"""
Các truy vấn chỉ đọc phục vụ giao diện: lưới thời khóa biểu theo tuần,
khung giờ mặc định khi bấm vào một ô, thống kê cho dashboard, tìm giảng viên.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ..config import GRID_TIMES
from ..models.lecturer import Lecturer
from ..models.session import DAYS, Session
from ..models.snapshot import StoreSnapshot

ALL_PROGRAMS = 'All Programs'


def build_grid(snapshot: StoreSnapshot, program: Optional[str] = None,
               days: Sequence[str] = DAYS,
               times: Sequence[str] = GRID_TIMES) -> pd.DataFrame:
    """
    Dựng lưới thời khóa biểu: mỗi dòng là một mốc giờ, mỗi cột là một ngày.

    Mỗi ô chứa danh sách các buổi học BẮT ĐẦU tại mốc giờ đó (lọc theo chương trình nếu có).
    Mốc giờ cuối cùng chỉ là giờ kết thúc nên không có dòng riêng.

    Args:
        snapshot (StoreSnapshot): Dữ liệu hiện tại.
        program (Optional[str]): Tên chương trình cần lọc; None hoặc "All Programs" = tất cả.
        days (Sequence[str]): Các cột ngày.
        times (Sequence[str]): Các mốc giờ.

    Returns:
        pd.DataFrame: index = mốc giờ, columns = ngày, giá trị = List[Session].
    """
    rows = list(times[:-1])
    cells: Dict[str, Dict[str, List[Session]]] = {
        day: {time: [] for time in rows} for day in days
    }

    show_all = program is None or program == ALL_PROGRAMS
    for session in snapshot.sessions:
        if not show_all and session.program != program:
            continue
        if session.day in cells and session.start_time in cells[session.day]:
            cells[session.day][session.start_time].append(session)

    index = pd.Index(rows, name='time')
    return pd.DataFrame({
        day: pd.Series([cells[day][time] for time in rows], index=index, dtype=object)
        for day in days
    }, index=index)


def default_slot_range(time: str) -> Tuple[str, str]:
    """
    Khung giờ mặc định khi bấm vào một ô trống: từ time đến tròn giờ kế tiếp.

    Ví dụ: "09:00" -> ("09:00", "10:00").
    """
    next_hour = int(time.split(':')[0]) + 1
    return time, f"{next_hour:02d}:00"


def duration_hours(session: Session) -> int:
    """Số giờ (tính theo giờ tròn) mà buổi học chiếm trên lưới, tối thiểu 1."""
    hours = int(session.end_time.split(':')[0]) - int(session.start_time.split(':')[0])
    return max(hours, 1)


def search_lecturers(snapshot: StoreSnapshot, text: str) -> List[Lecturer]:
    """Lọc giảng viên theo tên (không phân biệt hoa thường)."""
    needle = (text or '').strip().lower()
    if not needle:
        return list(snapshot.lecturers)
    return [lec for lec in snapshot.lecturers if needle in lec.name.lower()]


def dashboard_stats(snapshot: StoreSnapshot, today: str = 'Mon',
                    recent_count: int = 3) -> Dict[str, Any]:
    """
    Thống kê tổng quan cho dashboard.

    Returns:
        Dict[str, Any]:
            - active_lecturers: số giảng viên
            - classes_today: số buổi học trong ngày `today`
            - sessions_per_program: {chương trình: số buổi học}
            - recent_lecturers: các giảng viên thêm gần nhất (mới nhất trước)
    """
    counts = pd.Series([s.program for s in snapshot.sessions], dtype=object).value_counts()
    recent = list(snapshot.lecturers[-recent_count:])[::-1] if recent_count > 0 else []
    return {
        'active_lecturers': len(snapshot.lecturers),
        'classes_today': len(snapshot.get_sessions_by_day(today)),
        'sessions_per_program': {p: int(counts.get(p, 0)) for p in snapshot.programs},
        'recent_lecturers': recent,
    }
