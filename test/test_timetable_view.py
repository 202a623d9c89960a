"""
Test các truy vấn hiển thị: lưới tuần, khung giờ mặc định, dashboard, tìm giảng viên.
"""

from precision_scheduler.core.timetable_view import (
    ALL_PROGRAMS,
    build_grid,
    dashboard_stats,
    default_slot_range,
    duration_hours,
    search_lecturers,
)


def test_grid_shape_and_cells(store, lecturer, lecturer2, new_draft):
    mca = store.add_session(new_draft(lecturer_id=lecturer.id, program='MCA'))
    bca = store.add_session(new_draft(day='Tue', start='13:00', end='15:00',
                                      lecturer_id=lecturer2.id, program='BCA', room='R102'))

    grid = build_grid(store.snapshot)
    assert list(grid.columns) == ['Mon', 'Tue', 'Wed', 'Thu', 'Fri']
    assert list(grid.index) == ['07:00', '08:00', '09:00', '10:00', '11:00', '12:00',
                                '13:00', '14:00', '15:00', '16:00']
    assert grid.at['09:00', 'Mon'] == [mca]
    assert grid.at['13:00', 'Tue'] == [bca]
    # Buổi học kéo dài qua 14:00 nhưng không bắt đầu tại đó
    assert grid.at['14:00', 'Tue'] == []


def test_grid_program_filter(store, lecturer, lecturer2, new_draft):
    store.add_session(new_draft(lecturer_id=lecturer.id, program='MCA'))
    store.add_session(new_draft(lecturer_id=lecturer2.id, program='BCA', room='R102'))

    assert len(build_grid(store.snapshot, ALL_PROGRAMS).at['09:00', 'Mon']) == 2
    only_bca = build_grid(store.snapshot, 'BCA').at['09:00', 'Mon']
    assert [s.program for s in only_bca] == ['BCA']


def test_default_slot_range():
    assert default_slot_range('09:00') == ('09:00', '10:00')
    assert default_slot_range('16:00') == ('16:00', '17:00')


def test_duration_hours(store, lecturer, new_draft):
    long_session = store.add_session(new_draft(start='08:00', end='11:00', lecturer_id=lecturer.id))
    short_session = store.add_session(new_draft(day='Tue', start='08:00', end='08:30',
                                                lecturer_id=lecturer.id))
    assert duration_hours(long_session) == 3
    assert duration_hours(short_session) == 1


def test_dashboard_stats(store, new_draft):
    names = ['A', 'B', 'C', 'D']
    lecturers = [store.add_lecturer(name, []) for name in names]
    store.add_session(new_draft(lecturer_id=lecturers[0].id, program='MCA'))
    store.add_session(new_draft(day='Tue', lecturer_id=lecturers[1].id, program='MCA'))

    stats = dashboard_stats(store.snapshot)
    assert stats['active_lecturers'] == 4
    assert stats['classes_today'] == 1
    assert stats['sessions_per_program']['MCA'] == 2
    assert stats['sessions_per_program']['BCS'] == 0
    assert [lec.name for lec in stats['recent_lecturers']] == ['D', 'C', 'B']


def test_search_lecturers(store):
    store.add_lecturer('Dr. Anita Rao', [])
    store.add_lecturer('Prof. Kumar', [])

    assert [l.name for l in search_lecturers(store.snapshot, 'rao')] == ['Dr. Anita Rao']
    assert len(search_lecturers(store.snapshot, '')) == 2
