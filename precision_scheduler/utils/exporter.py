"""
Module xuất thời khóa biểu ra file Excel.
Hỗ trợ định dạng đẹp (kẻ bảng, tô màu header, tự động giãn cột).
"""

import logging
from typing import Dict, List

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..core.timetable_view import build_grid
from ..models.session import DAYS
from ..models.snapshot import StoreSnapshot

logger = logging.getLogger(__name__)

SESSIONS_SHEET = 'Sessions'
GRID_SHEET = 'Timetable'

# Các cột căn trái, còn lại căn giữa
LEFT_ALIGNED_COLUMNS = ['Subject', 'Lecturer']


class Exporter:
    """
    Class chịu trách nhiệm xuất thời khóa biểu ra các định dạng file.
    """

    @staticmethod
    def sessions_dataframe(snapshot: StoreSnapshot) -> pd.DataFrame:
        """
        Chuẩn bị bảng các buổi học, sắp xếp theo Ngày -> Giờ bắt đầu -> Phòng.

        Returns:
            pd.DataFrame: Mỗi dòng là một buổi học (tên giảng viên thay cho ID nếu tìm thấy).
        """
        lecturer_names: Dict[str, str] = {lec.id: lec.name for lec in snapshot.lecturers}

        data: List[dict] = []
        for session in snapshot.sessions:
            data.append({
                "Day": session.day,
                "Start": session.start_time,
                "End": session.end_time,
                "Program": session.program,
                "Subject": session.subject,
                "Room": session.room,
                # Fallback: hiển thị ID nếu giảng viên không còn
                "Lecturer": lecturer_names.get(session.lecturer_id, session.lecturer_id),
            })

        columns = ["Day", "Start", "End", "Program", "Subject", "Room", "Lecturer"]
        df = pd.DataFrame(data, columns=columns)
        if not df.empty:
            day_order = {day: idx for idx, day in enumerate(DAYS)}
            df = df.assign(_day_order=df["Day"].map(day_order).fillna(len(DAYS)))
            df = df.sort_values(by=['_day_order', 'Start', 'Room']).drop(columns='_day_order')
            df = df.reset_index(drop=True)
        return df

    @staticmethod
    def grid_dataframe(snapshot: StoreSnapshot) -> pd.DataFrame:
        """Lưới tuần dạng chữ: mỗi ô liệt kê "Program - Subject (Room)" của các buổi bắt đầu tại đó."""
        grid = build_grid(snapshot)
        text_grid = grid.apply(lambda column: column.map(
            lambda sessions: "\n".join(
                f"{s.program} - {s.subject} ({s.room})" for s in sessions
            )
        ))
        return text_grid.reset_index().rename(columns={'time': 'Time'})

    @staticmethod
    def _format_sheet(worksheet, df: pd.DataFrame) -> None:
        # Font chữ và Căn lề Header
        header_font = Font(name='Times New Roman', size=12, bold=True, color='FFFFFF')
        header_fill = PatternFill(start_color="0070C0", end_color="0070C0", fill_type="solid")
        header_align = Alignment(horizontal='center', vertical='center')

        # Font chữ và Căn lề Nội dung
        content_font = Font(name='Times New Roman', size=11)
        center_align = Alignment(horizontal='center', vertical='center', wrap_text=True)
        left_align = Alignment(horizontal='left', vertical='center', wrap_text=True)

        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col_idx, column_cells in enumerate(worksheet.columns, 1):
            # Tự động giãn chiều rộng cột theo dòng dài nhất trong ô
            length = max(
                max((len(line) for line in str(cell.value or '').split('\n')), default=0)
                for cell in column_cells
            )
            worksheet.column_dimensions[get_column_letter(col_idx)].width = (length + 4) * 1.2

            header_name = df.columns[col_idx - 1]
            for cell in column_cells:
                cell.border = thin_border
                if cell.row == 1:
                    cell.font = header_font
                    cell.fill = header_fill
                    cell.alignment = header_align
                else:
                    cell.font = content_font
                    cell.alignment = left_align if header_name in LEFT_ALIGNED_COLUMNS else center_align

    @classmethod
    def export_to_excel(cls, snapshot: StoreSnapshot, file_path: str) -> bool:
        """
        Xuất thời khóa biểu ra file Excel gồm 2 sheet: danh sách buổi học và lưới tuần.

        Args:
            snapshot (StoreSnapshot): Dữ liệu cần xuất.
            file_path (str): Đường dẫn file lưu (.xlsx).

        Returns:
            bool: True nếu thành công, False nếu không có dữ liệu hoặc có lỗi.
        """
        if not snapshot.sessions:
            logger.warning("Không có dữ liệu để xuất.")
            return False

        try:
            sessions_df = cls.sessions_dataframe(snapshot)
            grid_df = cls.grid_dataframe(snapshot)

            with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
                sessions_df.to_excel(writer, index=False, sheet_name=SESSIONS_SHEET)
                grid_df.to_excel(writer, index=False, sheet_name=GRID_SHEET)
                cls._format_sheet(writer.sheets[SESSIONS_SHEET], sessions_df)
                cls._format_sheet(writer.sheets[GRID_SHEET], grid_df)

            logger.info(f"Đã xuất file Excel thành công tại: {file_path}")
            return True

        except (OSError, ValueError) as e:
            logger.error(f"Lỗi khi xuất file Excel: {str(e)}")
            return False
