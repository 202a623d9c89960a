"""
Package utils - Lưu trữ JSON, đọc dữ liệu từ Excel/CSV và xuất Excel.
"""
