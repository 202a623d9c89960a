"""
SchedulingStore - nơi giữ toàn bộ dữ liệu thời khóa biểu và áp dụng quy tắc nhận buổi học.

Mọi thao tác thay đổi dữ liệu đều là một giao dịch "kiểm tra rồi thay thế":
snapshot mới được dựng hoàn chỉnh (kể cả phần xóa dây chuyền) rồi mới gán vào store,
nên không bao giờ quan sát được trạng thái xóa dở dang.
"""

import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models.lecturer import Lecturer
from ..models.session import Session, SessionDraft, normalize_draft
from ..models.snapshot import StoreSnapshot
from ..utils.storage import JsonStorage
from .auth import AccessGate
from .constraints import Conflict, ConflictChecker
from .errors import InvalidLecturer, InvalidName, SessionConflict

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Sinh định danh mới (uuid4, không trùng trong sử dụng thông thường)."""
    return uuid.uuid4().hex


class SchedulingStore:
    """
    Store trung tâm của ứng dụng thời khóa biểu.

    Attributes:
        checker (ConflictChecker): Bộ kiểm tra ràng buộc khi thêm buổi học.
        gate (AccessGate): Cờ quyền quản trị cho các thao tác xóa/quản trị.
        storage (Optional[JsonStorage]): Nơi lưu trữ; None nếu chỉ dùng trong bộ nhớ.
        autosave (bool): Tự gọi save() sau mỗi thao tác thành công.
        default_snapshot (StoreSnapshot): Dữ liệu dùng khi load() không tìm thấy file lưu.

    Note:
        - Các thao tác đọc trả về tuple (bất biến), giao diện không thể sửa trực tiếp.
        - Các thao tác cần quyền quản trị: thêm/xóa phòng, môn, chương trình;
          xóa giảng viên; xóa buổi học.
    """

    def __init__(self, snapshot: Optional[StoreSnapshot] = None,
                 storage: Optional[JsonStorage] = None,
                 gate: Optional[AccessGate] = None,
                 checker: Optional[ConflictChecker] = None,
                 autosave: bool = False,
                 default_snapshot: Optional[StoreSnapshot] = None):
        self.default_snapshot = default_snapshot if default_snapshot is not None else StoreSnapshot()
        self._snapshot = snapshot if snapshot is not None else self.default_snapshot
        self.storage = storage
        self.gate = gate or AccessGate()
        self.checker = checker or ConflictChecker()
        self.autosave = autosave

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'SchedulingStore':
        """
        Tạo store từ config (xem precision_scheduler.config.build_config).
        Store trả về CHƯA được load; gọi load() ở thời điểm khởi động.
        """
        storage_config = config.get('storage_config', {})
        admin_config = config.get('admin_config', {})
        schedule_config = config.get('schedule_config', {})

        storage = JsonStorage(storage_config['path']) if storage_config.get('path') else None
        gate_kwargs = {'enforced': admin_config.get('require_admin', True)}
        if 'secret' in admin_config:
            gate_kwargs['secret'] = admin_config['secret']
        checker = ConflictChecker(schedule_config['days']) if 'days' in schedule_config else None

        return cls(
            storage=storage,
            gate=AccessGate(**gate_kwargs),
            checker=checker,
            autosave=storage_config.get('autosave', True),
            default_snapshot=StoreSnapshot.from_dict(config.get('default_data', {})),
        )

    # ------------------------------------------------------------------
    # Vòng đời: load / save
    # ------------------------------------------------------------------

    def load(self) -> StoreSnapshot:
        """
        Nạp dữ liệu từ storage, hoặc dùng dữ liệu mặc định nếu chưa có file lưu.

        Raises:
            StorageError: Nếu file lưu tồn tại nhưng hỏng.
        """
        loaded = self.storage.load() if self.storage is not None else None
        self._snapshot = loaded if loaded is not None else self.default_snapshot
        return self._snapshot

    def save(self) -> None:
        if self.storage is None:
            return
        self.storage.save(self._snapshot)

    def _commit(self, snapshot: StoreSnapshot) -> StoreSnapshot:
        """
        Lưu snapshot mới (nếu bật autosave) rồi mới thay snapshot hiện tại (một lần gán duy nhất).

        Raises:
            StorageError: Nếu lưu thất bại; snapshot hiện tại giữ nguyên.
        """
        if self.autosave and self.storage is not None:
            self.storage.save(snapshot)
        self._snapshot = snapshot
        return snapshot

    # ------------------------------------------------------------------
    # Truy cập chỉ đọc
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def lecturers(self) -> Tuple[Lecturer, ...]:
        return self._snapshot.lecturers

    @property
    def sessions(self) -> Tuple[Session, ...]:
        return self._snapshot.sessions

    @property
    def rooms(self) -> Tuple[str, ...]:
        return self._snapshot.rooms

    @property
    def subjects(self) -> Tuple[str, ...]:
        return self._snapshot.subjects

    @property
    def programs(self) -> Tuple[str, ...]:
        return self._snapshot.programs

    def get_lecturer(self, lecturer_id: str) -> Optional[Lecturer]:
        return self._snapshot.get_lecturer(lecturer_id)

    def sessions_for_lecturer(self, lecturer_id: str) -> List[Session]:
        return self._snapshot.get_sessions_by_lecturer(lecturer_id)

    def sessions_for_program(self, program: str) -> List[Session]:
        return self._snapshot.get_sessions_by_program(program)

    def sessions_on(self, day: str) -> List[Session]:
        return self._snapshot.get_sessions_by_day(day)

    def sessions_at(self, day: str, time: str) -> List[Session]:
        """
        Các buổi học BẮT ĐẦU đúng tại (day, time).

        Buổi học bắt đầu sớm hơn và kéo dài qua mốc này KHÔNG được tính
        (đó là việc của phần hiển thị).
        """
        return [s for s in self._snapshot.sessions if s.day == day and s.start_time == time]

    def is_slot_open(self, day: str, time: str) -> bool:
        """Ô lưới chỉ mở để tạo nhanh khi không có buổi học nào bắt đầu tại đó."""
        return not self.sessions_at(day, time)

    # ------------------------------------------------------------------
    # Quyền quản trị
    # ------------------------------------------------------------------

    @property
    def is_admin(self) -> bool:
        return self.gate.is_admin

    def authenticate(self, secret: str) -> bool:
        return self.gate.authenticate(secret)

    def logout(self) -> None:
        self.gate.logout()

    # ------------------------------------------------------------------
    # Buổi học
    # ------------------------------------------------------------------

    def check_session(self, candidate: SessionDraft) -> Optional[Conflict]:
        """Xem trước xung đột của một buổi học, không thay đổi store."""
        return self.checker.find_conflict(self._snapshot.sessions, candidate)

    def add_session(self, candidate: SessionDraft) -> Session:
        """
        Thêm buổi học mới sau khi kiểm tra payload và xung đột.

        Thứ tự kiểm tra xung đột: giảng viên -> phòng -> chương trình,
        chỉ báo xung đột đầu tiên tìm thấy.

        Args:
            candidate (SessionDraft): Buổi học cần thêm (chưa có ID).

        Returns:
            Session: Buổi học đã được thêm (có ID).

        Raises:
            MissingSelection, InvalidSession, UnknownReference: Payload không hợp lệ.
            LecturerConflict, RoomConflict, ProgramConflict: Bị trùng lịch.
        """
        candidate = normalize_draft(candidate)
        snapshot = self._snapshot
        try:
            self.checker.check(snapshot, candidate)
        except SessionConflict as e:
            logger.warning(f"Từ chối buổi học {candidate.day} {candidate.time_range}: {e}")
            raise

        session = Session.from_draft(candidate, generate_id())
        self._commit(snapshot.evolve(sessions=snapshot.sessions + (session,)))
        logger.info(f"Đã thêm buổi học {session}")
        return session

    def remove_session(self, session_id: str) -> None:
        """Xóa buổi học theo ID; không có thì bỏ qua."""
        self.gate.require_admin('xóa buổi học')
        snapshot = self._snapshot
        remaining = [s for s in snapshot.sessions if s.id != session_id]
        if len(remaining) == len(snapshot.sessions):
            return
        self._commit(snapshot.evolve(sessions=remaining))
        logger.info(f"Đã xóa buổi học {session_id}")

    # ------------------------------------------------------------------
    # Giảng viên
    # ------------------------------------------------------------------

    def add_lecturer(self, name: str, classes: Iterable[str] = ()) -> Lecturer:
        """
        Thêm giảng viên mới.

        Args:
            name (str): Tên giảng viên (không rỗng).
            classes (Iterable[str]): Các chương trình được phân công (chỉ mang tính thông tin).

        Raises:
            InvalidLecturer: Nếu tên rỗng.
        """
        name = (name or '').strip()
        if not name:
            raise InvalidLecturer("Tên giảng viên không được để trống")

        lecturer = Lecturer(
            id=generate_id(),
            name=name,
            classes=tuple(c.strip() for c in classes if c and c.strip()),
        )
        snapshot = self._snapshot
        self._commit(snapshot.evolve(lecturers=snapshot.lecturers + (lecturer,)))
        logger.info(f"Đã thêm giảng viên {lecturer}")
        return lecturer

    def remove_lecturer(self, lecturer_id: str) -> None:
        """Xóa giảng viên và toàn bộ buổi học của giảng viên đó."""
        self.gate.require_admin('xóa giảng viên')
        snapshot = self._snapshot
        if snapshot.get_lecturer(lecturer_id) is None:
            return
        sessions = [s for s in snapshot.sessions if s.lecturer_id != lecturer_id]
        removed = len(snapshot.sessions) - len(sessions)
        self._commit(snapshot.evolve(
            lecturers=[l for l in snapshot.lecturers if l.id != lecturer_id],
            sessions=sessions,
        ))
        logger.info(f"Đã xóa giảng viên {lecturer_id} và {removed} buổi học liên quan")

    # ------------------------------------------------------------------
    # Phòng / môn / chương trình
    # ------------------------------------------------------------------

    @staticmethod
    def _clean_name(name: str, label: str) -> str:
        name = (name or '').strip()
        if not name:
            raise InvalidName(f"Tên {label} không được để trống")
        return name

    def _add_name(self, collection: str, name: str, label: str) -> str:
        self.gate.require_admin(f"thêm {label}")
        name = self._clean_name(name, label)
        snapshot = self._snapshot
        current = getattr(snapshot, collection)
        if name in current:
            logger.info(f"{label.capitalize()} '{name}' đã tồn tại, bỏ qua")
            return name
        self._commit(snapshot.evolve(**{collection: current + (name,)}))
        logger.info(f"Đã thêm {label} '{name}'")
        return name

    def _remove_name(self, collection: str, session_field: str, name: str, label: str) -> None:
        self.gate.require_admin(f"xóa {label}")
        snapshot = self._snapshot
        current = getattr(snapshot, collection)
        if name not in current:
            return
        sessions = [s for s in snapshot.sessions if getattr(s, session_field) != name]
        removed = len(snapshot.sessions) - len(sessions)
        self._commit(snapshot.evolve(**{
            collection: [item for item in current if item != name],
            'sessions': sessions,
        }))
        logger.info(f"Đã xóa {label} '{name}' và {removed} buổi học liên quan")

    def add_room(self, name: str) -> str:
        return self._add_name('rooms', name, 'phòng')

    def remove_room(self, name: str) -> None:
        self._remove_name('rooms', 'room', name, 'phòng')

    def add_subject(self, name: str) -> str:
        return self._add_name('subjects', name, 'môn học')

    def remove_subject(self, name: str) -> None:
        self._remove_name('subjects', 'subject', name, 'môn học')

    def add_program(self, name: str) -> str:
        return self._add_name('programs', name, 'chương trình')

    def remove_program(self, name: str) -> None:
        self._remove_name('programs', 'program', name, 'chương trình')
