"""
Package core - Logic nghiệp vụ của thời khóa biểu.

- constraints: quy tắc nhận buổi học (kiểm tra trùng giảng viên / phòng / chương trình)
- store: SchedulingStore giữ dữ liệu, xóa dây chuyền, load/save
- auth: cờ quyền quản trị
- timetable_view: các truy vấn chỉ đọc cho giao diện
- errors: các exception
"""
