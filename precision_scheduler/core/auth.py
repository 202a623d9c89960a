"""
Cổng quyền quản trị (elevated access) cho các thao tác xóa/quản trị.

Đây chỉ là một cờ boolean bật bằng mật khẩu dùng chung, KHÔNG phải cơ chế bảo mật.
"""

import logging

from .errors import AdminRequired, AuthenticationFailed

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_SECRET = 'admin123'


class AccessGate:
    """
    Giữ trạng thái đăng nhập quản trị.

    Attributes:
        enforced (bool): Nếu False, require_admin() luôn cho qua.
    """

    def __init__(self, secret: str = DEFAULT_ADMIN_SECRET, enforced: bool = True):
        self._secret = secret
        self._is_admin = False
        self.enforced = enforced

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    def authenticate(self, secret: str) -> bool:
        """
        Bật quyền quản trị nếu mật khẩu đúng.

        Raises:
            AuthenticationFailed: Nếu mật khẩu sai (quyền hiện tại giữ nguyên).
        """
        if secret != self._secret:
            logger.warning("Đăng nhập quản trị thất bại")
            raise AuthenticationFailed("Invalid admin password")
        self._is_admin = True
        logger.info("Đã bật quyền quản trị")
        return True

    def logout(self) -> None:
        self._is_admin = False
        logger.info("Đã thoát quyền quản trị")

    def require_admin(self, action: str = '') -> None:
        """Raise AdminRequired nếu thao tác cần quyền mà chưa đăng nhập."""
        if self.enforced and not self._is_admin:
            raise AdminRequired(f"Cần quyền quản trị để thực hiện: {action or 'thao tác này'}")
