"""dupcmp - 内容が同一のファイルを段階的な比較で判定するツール"""

from .cluster import checksum_entries, find_duplicate_sets, group_by_size
from .compare import (
    CompareConfig,
    Verdict,
    compare_entries,
    compare_entry_checksums,
    compare_entry_contents,
    compare_sizes,
)
from .entry import Entry, EntryStatus, copy_entry, get_entry_checksum, make_entry
from .errors import (
    ChecksumUnavailableError,
    ComparisonIndeterminateError,
    DupcmpError,
    FileUnreadableError,
)
from .report import Reporter
from .ui import run_compare

__all__ = [
    "ChecksumUnavailableError",
    "CompareConfig",
    "ComparisonIndeterminateError",
    "DupcmpError",
    "Entry",
    "EntryStatus",
    "FileUnreadableError",
    "Reporter",
    "Verdict",
    "checksum_entries",
    "compare_entries",
    "compare_entry_checksums",
    "compare_entry_contents",
    "compare_sizes",
    "copy_entry",
    "find_duplicate_sets",
    "get_entry_checksum",
    "group_by_size",
    "make_entry",
    "run_compare",
]
