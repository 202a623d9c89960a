"""Fixtures dùng chung cho các test của store thời khóa biểu."""

import sys
from pathlib import Path

import pytest

# Setup paths
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from precision_scheduler.config import build_config
from precision_scheduler.core.auth import AccessGate
from precision_scheduler.core.store import SchedulingStore
from precision_scheduler.models import StoreSnapshot, make_draft


@pytest.fixture
def default_snapshot():
    return StoreSnapshot.from_dict(build_config(use_env=False)['default_data'])


@pytest.fixture
def store(default_snapshot):
    """Store trong bộ nhớ, dữ liệu mặc định, đã đăng nhập quản trị."""
    s = SchedulingStore(default_snapshot=default_snapshot, gate=AccessGate('admin123'))
    s.load()
    s.authenticate('admin123')
    s.add_room('R101')
    s.add_room('R102')
    return s


@pytest.fixture
def lecturer(store):
    return store.add_lecturer('L', ['MCA'])


@pytest.fixture
def lecturer2(store):
    return store.add_lecturer('L2', ['BCA'])


def draft(day='Mon', start='09:00', end='10:00', lecturer_id='', room='R101',
          program='MCA', subject='Algorithms'):
    return make_draft(day, start, end, lecturer_id, room, program, subject)


@pytest.fixture
def new_draft():
    """Factory tạo SessionDraft với giá trị mặc định (Mon 09:00-10:00, R101, MCA, Algorithms)."""
    return draft
