"""
Test các thao tác thêm/xóa của SchedulingStore, xóa dây chuyền và quyền quản trị.
"""

import pytest

from precision_scheduler.core.auth import AccessGate
from precision_scheduler.core.errors import (
    AdminRequired,
    AuthenticationFailed,
    InvalidLecturer,
    InvalidName,
)
from precision_scheduler.core.store import SchedulingStore
from precision_scheduler.models import StoreSnapshot


@pytest.fixture
def busy_store(store, lecturer, lecturer2, new_draft):
    """Store có sẵn 4 buổi học trải trên nhiều giảng viên / phòng / chương trình / môn."""
    store.add_session(new_draft(day='Mon', lecturer_id=lecturer.id, room='R101',
                                program='MCA', subject='Algorithms'))
    store.add_session(new_draft(day='Tue', lecturer_id=lecturer.id, room='R102',
                                program='BCA', subject='Networking'))
    store.add_session(new_draft(day='Mon', lecturer_id=lecturer2.id, room='R102',
                                program='BCA', subject='Algorithms'))
    store.add_session(new_draft(day='Wed', lecturer_id=lecturer2.id, room='R101',
                                program='MCA', subject='Networking'))
    return store


def test_add_then_remove_restores_sessions(store, lecturer, new_draft):
    store.add_session(new_draft(day='Thu', lecturer_id=lecturer.id))
    before = store.sessions

    session = store.add_session(new_draft(lecturer_id=lecturer.id))
    store.remove_session(session.id)

    assert store.sessions == before


def test_remove_missing_session_is_noop(busy_store):
    before = busy_store.snapshot
    busy_store.remove_session('does-not-exist')
    assert busy_store.snapshot is before


def test_session_ids_are_unique(busy_store):
    ids = [s.id for s in busy_store.sessions]
    assert len(set(ids)) == len(ids)


def test_remove_lecturer_cascades(busy_store, lecturer, lecturer2):
    busy_store.remove_lecturer(lecturer.id)

    assert [l.id for l in busy_store.lecturers] == [lecturer2.id]
    assert len(busy_store.sessions) == 2
    assert all(s.lecturer_id == lecturer2.id for s in busy_store.sessions)


@pytest.mark.parametrize('remove, name, field', [
    ('remove_room', 'R101', 'room'),
    ('remove_subject', 'Algorithms', 'subject'),
    ('remove_program', 'BCA', 'program'),
])
def test_remove_name_cascades_exactly(busy_store, remove, name, field):
    expected = [s for s in busy_store.sessions if getattr(s, field) != name]

    getattr(busy_store, remove)(name)

    assert list(busy_store.sessions) == expected
    collection = {'room': 'rooms', 'subject': 'subjects', 'program': 'programs'}[field]
    assert name not in getattr(busy_store, collection)


@pytest.mark.parametrize('remove', ['remove_room', 'remove_subject', 'remove_program',
                                    'remove_lecturer'])
def test_remove_missing_entity_is_noop(busy_store, remove):
    before = busy_store.snapshot
    getattr(busy_store, remove)('missing')
    assert busy_store.snapshot is before


def test_add_lecturer(store):
    lec = store.add_lecturer('  Dr. Rao ', ['MCA', ' BCA ', ''])
    assert lec.name == 'Dr. Rao'
    assert lec.classes == ('MCA', 'BCA')
    assert store.get_lecturer(lec.id) == lec


def test_add_lecturer_requires_name(store):
    with pytest.raises(InvalidLecturer):
        store.add_lecturer('   ', ['MCA'])
    assert store.lecturers == ()


def test_duplicate_names_are_not_appended_twice(store):
    before = store.rooms
    assert store.add_room('R101') == 'R101'
    assert store.rooms == before

    store.add_subject('Compilers')
    store.add_subject('Compilers')
    assert store.subjects.count('Compilers') == 1


def test_empty_names_rejected(store):
    with pytest.raises(InvalidName):
        store.add_program('  ')


def test_sessions_at_only_counts_exact_start(busy_store, lecturer, new_draft):
    busy_store.add_session(new_draft(day='Fri', start='09:00', end='11:00',
                                     lecturer_id=lecturer.id))

    assert len(busy_store.sessions_at('Mon', '09:00')) == 2
    assert busy_store.is_slot_open('Fri', '10:00')
    assert not busy_store.is_slot_open('Fri', '09:00')
    assert busy_store.is_slot_open('Thu', '09:00')


def test_read_helpers(busy_store, lecturer):
    assert len(busy_store.sessions_for_lecturer(lecturer.id)) == 2
    assert len(busy_store.sessions_for_program('MCA')) == 2
    assert len(busy_store.sessions_on('Mon')) == 2


# ============================================================
# Quyền quản trị
# ============================================================

def test_gated_operations_require_admin(busy_store, lecturer):
    busy_store.logout()
    before = busy_store.snapshot

    for call in (
        lambda: busy_store.remove_session(busy_store.sessions[0].id),
        lambda: busy_store.remove_lecturer(lecturer.id),
        lambda: busy_store.add_room('R200'),
        lambda: busy_store.remove_room('R101'),
        lambda: busy_store.add_subject('Compilers'),
        lambda: busy_store.remove_subject('Algorithms'),
        lambda: busy_store.add_program('MBA'),
        lambda: busy_store.remove_program('MCA'),
    ):
        with pytest.raises(AdminRequired):
            call()

    assert busy_store.snapshot is before


def test_lecturer_and_session_creation_not_gated(store, new_draft):
    store.logout()
    lec = store.add_lecturer('Open', [])
    store.add_session(new_draft(lecturer_id=lec.id))
    assert len(store.sessions) == 1


def test_authentication():
    gate = AccessGate('secret')
    with pytest.raises(AuthenticationFailed):
        gate.authenticate('wrong')
    assert not gate.is_admin

    assert gate.authenticate('secret')
    assert gate.is_admin
    gate.logout()
    assert not gate.is_admin


def test_gate_can_be_disabled():
    store = SchedulingStore(gate=AccessGate(enforced=False))
    store.add_room('R1')
    store.remove_room('R1')
    assert store.rooms == ()


def test_default_snapshot_without_sessions_is_kept():
    """Dữ liệu mặc định chỉ có danh mục (chưa có buổi học nào) vẫn được dùng khi load()."""
    defaults = StoreSnapshot(rooms=('A', 'B'), programs=('MCA',))
    assert len(defaults) == 0 and bool(defaults)

    store = SchedulingStore(default_snapshot=defaults)
    assert store.snapshot is defaults
    assert store.load().rooms == ('A', 'B')
    assert store.programs == ('MCA',)
