"""
Data class đại diện cho một giảng viên trong hệ thống thời khóa biểu.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Lecturer:
    """
    Class đại diện cho một giảng viên.

    Attributes:
        id (str): Mã giảng viên (định danh duy nhất, do store cấp).
        name (str): Tên giảng viên (không được rỗng).
        classes (Tuple[str, ...]): Các chương trình/lớp mà giảng viên được phân công trên danh nghĩa.

    Note:
        - classes chỉ mang tính thông tin, KHÔNG được đối chiếu với program của Session.
    """

    id: str
    name: str
    classes: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'classes': list(self.classes)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Lecturer':
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            classes=tuple(str(c) for c in data.get('classes', [])),
        )

    def __str__(self) -> str:
        classes_str = f" ({', '.join(self.classes)})" if self.classes else ""
        return f"[{self.id}] {self.name}{classes_str}"
