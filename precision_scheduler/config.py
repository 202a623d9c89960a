"""
Cấu hình mặc định của ứng dụng thời khóa biểu.

Config là một dict lồng nhau (cùng dạng với dict mà form cấu hình trả về):
    - storage_config: đường dẫn file lưu, có tự lưu sau mỗi thay đổi hay không
    - admin_config: mật khẩu quản trị, có bắt buộc quyền quản trị hay không
    - schedule_config: các ngày học, các mốc giờ của lưới, ngày "hôm nay" cho dashboard
    - default_data: dữ liệu khởi tạo khi chưa có file lưu
"""

import copy
import os
from typing import Any, Dict, Optional

from .core.auth import DEFAULT_ADMIN_SECRET
from .models.session import DAYS

ENV_DATA_PATH = 'PRECISION_SCHEDULER_DATA'
ENV_ADMIN_SECRET = 'PRECISION_SCHEDULER_SECRET'

DEFAULT_STORAGE_FILE = 'precision_scheduler_v2.json'

# Các mốc giờ trên lưới thời khóa biểu (dòng cuối chỉ là mốc kết thúc)
GRID_TIMES = (
    '07:00', '08:00', '09:00', '10:00', '11:00', '12:00',
    '13:00', '14:00', '15:00', '16:00', '17:00',
)

DEFAULT_CONFIG: Dict[str, Any] = {
    'storage_config': {
        'path': DEFAULT_STORAGE_FILE,
        'autosave': True,
    },
    'admin_config': {
        'secret': DEFAULT_ADMIN_SECRET,
        'require_admin': True,
    },
    'schedule_config': {
        'days': list(DAYS),
        'grid_times': list(GRID_TIMES),
        'today': 'Mon',
    },
    'default_data': {
        'lecturers': [],
        'sessions': [],
        'rooms': ['Room 101', 'Room 102', 'Room 103'],
        'subjects': ['Software Engineering', 'Algorithms', 'Database Management', 'Networking'],
        'groups': ['MCA', 'BCA', 'BCS', 'MSc Data Science'],
    },
}


def build_config(overrides: Optional[Dict[str, Any]] = None,
                 use_env: bool = True) -> Dict[str, Any]:
    """
    Tạo config hoàn chỉnh từ DEFAULT_CONFIG + overrides (+ biến môi trường).

    Args:
        overrides (Dict[str, Any], optional): Các giá trị ghi đè, theo từng section.
            Ví dụ: {'storage_config': {'autosave': False}}
        use_env (bool): Đọc PRECISION_SCHEDULER_DATA / PRECISION_SCHEDULER_SECRET nếu có.

    Returns:
        Dict[str, Any]: Config mới (không dùng chung object với DEFAULT_CONFIG).
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if use_env:
        data_path = os.environ.get(ENV_DATA_PATH)
        if data_path:
            config['storage_config']['path'] = data_path
        secret = os.environ.get(ENV_ADMIN_SECRET)
        if secret:
            config['admin_config']['secret'] = secret

    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(copy.deepcopy(values))
        else:
            config[section] = copy.deepcopy(values)

    return config
