"""
Module lưu/đọc toàn bộ trạng thái thời khóa biểu ra file JSON.

Tài liệu lưu là một object phẳng với 5 key (lecturers, sessions, rooms, subjects, groups),
kèm trường version và checksum SHA-256 để phát hiện file bị sửa tay.
"""

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..core.errors import StorageError
from ..models.snapshot import StoreSnapshot

logger = logging.getLogger(__name__)

STORAGE_SCHEMA_VERSION = 1


def compute_checksum(document: dict) -> str:
    data_copy = dict(document)
    if 'checksum' in data_copy:
        data_copy.pop('checksum')
    payload = json.dumps(data_copy, sort_keys=True, ensure_ascii=False).encode('utf-8')
    return hashlib.sha256(payload).hexdigest()


def attach_checksum(document: dict) -> dict:
    data = dict(document)
    data['version'] = STORAGE_SCHEMA_VERSION
    data['checksum'] = compute_checksum(data)
    return data


def validate_document(document: dict) -> None:
    """
    Kiểm tra version và checksum của tài liệu đã đọc.

    Tài liệu không có cả version lẫn checksum (định dạng cũ, chỉ có 5 key) vẫn được chấp nhận.

    Raises:
        StorageError: Nếu version không hỗ trợ hoặc checksum không khớp.
    """
    if 'version' not in document and 'checksum' not in document:
        return
    if 'version' not in document:
        raise StorageError('Thiếu trường version trong file lưu')
    try:
        version = int(document['version'])
    except (TypeError, ValueError):
        raise StorageError(f"Phiên bản file lưu không hợp lệ: {document['version']!r}")
    if version != STORAGE_SCHEMA_VERSION:
        raise StorageError(f"Phiên bản file lưu không hỗ trợ: {document['version']}")
    if 'checksum' not in document:
        raise StorageError('Thiếu checksum')
    if document['checksum'] != compute_checksum(document):
        raise StorageError('Checksum không khớp, tệp có thể bị sửa đổi')


def snapshot_to_json(snapshot: StoreSnapshot) -> str:
    return json.dumps(attach_checksum(snapshot.to_dict()), ensure_ascii=False, indent=2)


def snapshot_from_json(text: str) -> StoreSnapshot:
    """
    Đọc snapshot từ chuỗi JSON.

    Raises:
        StorageError: Nếu JSON hỏng, checksum sai hoặc thiếu trường bắt buộc.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageError(f"File lưu không phải JSON hợp lệ: {e}")
    if not isinstance(document, dict):
        raise StorageError("File lưu phải là một JSON object")

    validate_document(document)
    try:
        return StoreSnapshot.from_dict(document)
    except (KeyError, TypeError, AttributeError) as e:
        raise StorageError(f"File lưu thiếu dữ liệu bắt buộc: {e}")


class JsonStorage:
    """
    Class chịu trách nhiệm đọc/ghi snapshot ra một file JSON trên đĩa.

    Attributes:
        path (Path): Đường dẫn file lưu.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Optional[StoreSnapshot]:
        """
        Đọc snapshot từ file.

        Returns:
            Optional[StoreSnapshot]: None nếu file chưa tồn tại.

        Raises:
            StorageError: Nếu file tồn tại nhưng không đọc được.
        """
        if not self.path.exists():
            logger.info(f"Chưa có file lưu tại {self.path}, dùng dữ liệu mặc định")
            return None

        try:
            text = self.path.read_text(encoding='utf-8')
        except OSError as e:
            logger.error(f"Lỗi khi đọc file {self.path}: {str(e)}")
            raise StorageError(f"Không thể đọc file: {str(e)}")

        snapshot = snapshot_from_json(text)
        logger.info(f"Đã đọc file lưu: {self.path} ({snapshot})")
        return snapshot

    def save(self, snapshot: StoreSnapshot) -> None:
        """
        Ghi snapshot ra file (ghi vào file tạm rồi thay thế để không để lại file dở dang).

        Raises:
            StorageError: Nếu không ghi được file.
        """
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(snapshot_to_json(snapshot), encoding='utf-8')
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Lỗi khi ghi file {self.path}: {str(e)}")
            raise StorageError(f"Không thể ghi file: {str(e)}")
        logger.debug(f"Đã lưu {snapshot} vào {self.path}")

    def clear(self) -> None:
        """Xóa file lưu (tương đương xóa local storage)."""
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Đã xóa file lưu: {self.path}")
