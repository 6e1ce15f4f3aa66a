"""Import file parsers."""
from cashflow.parsers.csv_records import (
    collect_records,
    parse_csv_file,
    parse_records,
    read_csv_lines,
)

__all__ = ["collect_records", "parse_csv_file", "parse_records", "read_csv_lines"]
