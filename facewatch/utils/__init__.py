from .datetime_utils import (
    utc_now,
    ensure_utc,
    now_iso,
    to_iso,
    parse_iso,
    date_key,
    today_key,
    is_valid_date_key,
    filename_timestamp,
    parse_filename_timestamp,
)
from .json_files import read_json, write_json_atomic

__all__ = [
    "utc_now",
    "ensure_utc",
    "now_iso",
    "to_iso",
    "parse_iso",
    "date_key",
    "today_key",
    "is_valid_date_key",
    "filename_timestamp",
    "parse_filename_timestamp",
    "read_json",
    "write_json_atomic",
]
