"""
Test xuất thời khóa biểu ra Excel và nạp dữ liệu danh mục từ Excel/CSV.
"""

import pandas as pd
import pytest

from precision_scheduler.core.store import SchedulingStore
from precision_scheduler.utils.data_loader import DataLoader, import_catalog
from precision_scheduler.utils.exporter import GRID_SHEET, SESSIONS_SHEET, Exporter


def test_export_to_excel(tmp_path, store, lecturer, lecturer2, new_draft):
    store.add_session(new_draft(day='Wed', start='11:00', end='12:00', lecturer_id=lecturer.id))
    store.add_session(new_draft(day='Mon', start='10:00', end='11:00', lecturer_id=lecturer2.id,
                                room='R102', program='BCA', subject='Networking'))
    store.add_session(new_draft(day='Mon', start='08:00', end='09:00', lecturer_id=lecturer.id))

    file_path = tmp_path / 'timetable.xlsx'
    assert Exporter.export_to_excel(store.snapshot, str(file_path))

    sessions = pd.read_excel(file_path, sheet_name=SESSIONS_SHEET)
    assert sessions['Day'].tolist() == ['Mon', 'Mon', 'Wed']
    assert sessions['Start'].tolist() == ['08:00', '10:00', '11:00']
    assert sessions.loc[1, 'Lecturer'] == 'L2'

    grid = pd.read_excel(file_path, sheet_name=GRID_SHEET)
    assert grid.columns.tolist() == ['Time', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri']
    row = grid[grid['Time'] == '10:00'].iloc[0]
    assert row['Mon'] == 'BCA - Networking (R102)'


def test_export_empty_snapshot_returns_false(tmp_path, store):
    file_path = tmp_path / 'empty.xlsx'
    assert Exporter.export_to_excel(store.snapshot, str(file_path)) is False
    assert not file_path.exists()


def test_loader_rejects_unknown_extension(tmp_path):
    path = tmp_path / 'rooms.txt'
    path.write_text('Room\nA1\n')
    with pytest.raises(ValueError):
        DataLoader.load_names(str(path), DataLoader.ROOM_COLUMNS)


def test_loader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataLoader.load_names(str(tmp_path / 'nope.csv'), DataLoader.ROOM_COLUMNS)


def test_clean_dataframe_strips_string_dtype():
    df = pd.DataFrame({
        ' Phòng ': pd.array([' A ', 'B  ', None], dtype='string'),
        'Ghi chú': [' x ', 'nan', ''],
    })
    cleaned = DataLoader._clean_dataframe(df)

    assert list(cleaned.columns) == ['Phòng', 'Ghi chú']
    assert cleaned['Phòng'].tolist()[:2] == ['A', 'B']
    assert pd.isna(cleaned['Phòng'].iloc[2])
    assert cleaned['Ghi chú'].iloc[0] == 'x'
    assert pd.isna(cleaned['Ghi chú'].iloc[1]) and pd.isna(cleaned['Ghi chú'].iloc[2])


def test_load_names_from_csv(tmp_path):
    path = tmp_path / 'rooms.csv'
    path.write_text('Phòng,Sức chứa\nLab 1,30\n  Lab 2 ,40\nLab 1,30\n,\n', encoding='utf-8')

    assert DataLoader.load_names(str(path), DataLoader.ROOM_COLUMNS) == ['Lab 1', 'Lab 2']


def test_load_lecturers_from_excel(tmp_path):
    path = tmp_path / 'lecturers.xlsx'
    pd.DataFrame({
        'Name': ['Dr. Rao', 'Prof. Kumar'],
        'Classes': ['MCA, BCA', None],
    }).to_excel(path, index=False)

    assert DataLoader.load_lecturers(str(path)) == [
        ('Dr. Rao', ['MCA', 'BCA']),
        ('Prof. Kumar', []),
    ]


def test_load_lecturers_requires_name_column(tmp_path):
    path = tmp_path / 'bad.csv'
    path.write_text('Foo,Bar\n1,2\n')
    with pytest.raises(ValueError):
        DataLoader.load_lecturers(str(path))


def test_import_catalog(tmp_path):
    rooms = tmp_path / 'rooms.csv'
    rooms.write_text('Room\nLab 1\nLab 2\n')
    programs = tmp_path / 'programs.csv'
    programs.write_text('Program\nMCA\nMBA\n')
    lecturers = tmp_path / 'lecturers.csv'
    lecturers.write_text('Name,Classes\nDr. Rao,"MCA, MBA"\n')

    store = SchedulingStore()
    store.authenticate('admin123')
    summary = import_catalog(store, rooms_file=str(rooms), programs_file=str(programs),
                             lecturers_file=str(lecturers))

    assert summary == {'rooms': 2, 'programs': 2, 'lecturers': 1}
    assert store.rooms == ('Lab 1', 'Lab 2')
    assert store.programs == ('MCA', 'MBA')
    assert store.lecturers[0].classes == ('MCA', 'MBA')
