"""
Module đọc dữ liệu danh mục (giảng viên, phòng, môn học, chương trình) từ file Excel/CSV.
Sử dụng pandas để xử lý dữ liệu hiệu quả và hỗ trợ nhiều định dạng file.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..core.errors import SchedulerError

# Cấu hình logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class DataLoader:
    """
    Class chịu trách nhiệm đọc dữ liệu danh mục từ file Excel/CSV.

    Hỗ trợ:
        - File Excel (.xlsx, .xls)
        - File CSV (.csv)
        - Xử lý dữ liệu thiếu và dòng trống
        - Nhiều tên cột thay thế (alias) cho cùng một thuộc tính
    """

    LECTURER_NAME_COLUMNS = ['Name', 'Lecturer', 'Teacher', 'Tên giảng viên', 'Họ tên']
    LECTURER_CLASSES_COLUMNS = ['Classes', 'Programs', 'Lớp', 'Chương trình']

    ROOM_COLUMNS = ['Room', 'Rooms', 'Phòng', 'Tên phòng', 'Mã phòng']
    SUBJECT_COLUMNS = ['Subject', 'Subjects', 'Môn học', 'Tên môn']
    PROGRAM_COLUMNS = ['Program', 'Programs', 'Group', 'Class', 'Lớp', 'Chương trình']

    @staticmethod
    def _detect_file_type(file_path: str) -> str:
        """
        Xác định loại file dựa trên phần mở rộng.

        Raises:
            ValueError: Nếu định dạng file không được hỗ trợ.
        """
        extension = Path(file_path).suffix.lower()

        if extension in ['.xlsx', '.xls']:
            return 'excel'
        elif extension == '.csv':
            return 'csv'
        else:
            raise ValueError(
                f"Định dạng file không được hỗ trợ: {extension}. "
                f"Chỉ hỗ trợ .xlsx, .xls, .csv"
            )

    @staticmethod
    def _read_file(file_path: str) -> pd.DataFrame:
        """
        Đọc file Excel hoặc CSV thành DataFrame.

        Raises:
            FileNotFoundError: Nếu file không tồn tại.
            ValueError: Nếu định dạng file không được hỗ trợ.
        """
        if not Path(file_path).exists():
            raise FileNotFoundError(f"File không tồn tại: {file_path}")

        file_type = DataLoader._detect_file_type(file_path)
        if file_type == 'excel':
            df = pd.read_excel(file_path)
            logger.info(f"Đã đọc file Excel: {file_path}")
        else:
            df = pd.read_csv(file_path, encoding='utf-8-sig')
            logger.info(f"Đã đọc file CSV: {file_path}")
        return df

    @staticmethod
    def _clean_dataframe(df: pd.DataFrame) -> pd.DataFrame:
        """Làm sạch DataFrame: xóa dòng trống, strip whitespace."""
        df = df.dropna(how='all').copy()
        df.columns = df.columns.astype(str).str.strip()

        for col in df.select_dtypes(include=['object', 'string']).columns:
            df[col] = df[col].astype(str).str.strip()

        # Thay thế 'nan' string thành NaN thực sự
        df = df.replace({'nan': pd.NA, '<NA>': pd.NA, '': pd.NA})
        return df

    @staticmethod
    def _find_column(df: pd.DataFrame, possible_names: List[str]) -> Optional[str]:
        """Tìm tên cột trong DataFrame dựa trên danh sách các tên có thể (không phân biệt hoa thường)."""
        lowered = {str(col).lower(): col for col in df.columns}
        for name in possible_names:
            if name.lower() in lowered:
                return lowered[name.lower()]
        return None

    @classmethod
    def load_names(cls, file_path: str, possible_columns: List[str]) -> List[str]:
        """
        Đọc một danh sách tên (phòng, môn học hoặc chương trình) từ file.

        Nếu không tìm thấy cột nào khớp, dùng cột đầu tiên của file.
        Tên trùng lặp chỉ được giữ lại một lần (giữ thứ tự xuất hiện).

        Returns:
            List[str]: Danh sách tên.
        """
        df = cls._clean_dataframe(cls._read_file(file_path))
        if df.columns.empty:
            logger.warning(f"File {file_path} không có cột nào")
            return []

        column = cls._find_column(df, possible_columns) or df.columns[0]
        names = [str(value).strip() for value in df[column].dropna()]
        unique = list(dict.fromkeys(name for name in names if name))

        logger.info(f"✅ Đã load {len(unique)} mục từ cột '{column}'")
        return unique

    @classmethod
    def load_lecturers(cls, file_path: str) -> List[Tuple[str, List[str]]]:
        """
        Đọc danh sách giảng viên từ file.

        Cột Classes chứa danh sách chương trình phân cách bởi dấu phẩy (ví dụ: "MCA, BCA").

        Returns:
            List[Tuple[str, List[str]]]: Các cặp (tên, danh sách chương trình).

        Raises:
            ValueError: Nếu thiếu cột tên giảng viên.
        """
        df = cls._clean_dataframe(cls._read_file(file_path))

        name_col = cls._find_column(df, cls.LECTURER_NAME_COLUMNS)
        classes_col = cls._find_column(df, cls.LECTURER_CLASSES_COLUMNS)
        if name_col is None:
            raise ValueError(
                f"Thiếu cột tên giảng viên. "
                f"Các cột hiện có: {df.columns.tolist()}"
            )

        lecturers = []
        for _, row in df.iterrows():
            if pd.isna(row[name_col]):
                continue
            classes: List[str] = []
            if classes_col and pd.notna(row[classes_col]):
                classes = [c.strip() for c in str(row[classes_col]).split(',') if c.strip()]
            lecturers.append((str(row[name_col]).strip(), classes))

        logger.info(f"✅ Đã load thành công {len(lecturers)} giảng viên")
        return lecturers


def import_catalog(store, rooms_file: Optional[str] = None,
                   subjects_file: Optional[str] = None,
                   programs_file: Optional[str] = None,
                   lecturers_file: Optional[str] = None) -> Dict[str, int]:
    """
    Nạp dữ liệu danh mục vào store (cần quyền quản trị nếu store bắt buộc).

    Phòng/môn/chương trình đã tồn tại được bỏ qua; giảng viên luôn được thêm mới.

    Returns:
        Dict[str, int]: Số mục đã đọc cho từng loại.
    """
    sources = [
        ('rooms', rooms_file, DataLoader.ROOM_COLUMNS, store.add_room),
        ('subjects', subjects_file, DataLoader.SUBJECT_COLUMNS, store.add_subject),
        ('programs', programs_file, DataLoader.PROGRAM_COLUMNS, store.add_program),
    ]

    summary: Dict[str, int] = {}
    for key, file_path, columns, add in sources:
        if not file_path:
            continue
        names = DataLoader.load_names(file_path, columns)
        for name in names:
            add(name)
        summary[key] = len(names)

    if lecturers_file:
        lecturers = DataLoader.load_lecturers(lecturers_file)
        for name, classes in lecturers:
            try:
                store.add_lecturer(name, classes)
            except SchedulerError as e:
                logger.error(f"Lỗi khi thêm giảng viên {name}: {str(e)}")
                raise
        summary['lecturers'] = len(lecturers)

    return summary
