"""ファイルエントリとチェックサム計算"""

import enum
import hashlib
import threading
from dataclasses import dataclass, field

from .constants import CHUNK_SIZE, DIGEST_SIZE
from .errors import ChecksumUnavailableError, FileUnreadableError, error_reason


class EntryStatus(enum.Enum):
    """チェックサムの状態（UNTOUCHED から一方向にのみ遷移）"""

    UNTOUCHED = enum.auto()
    CHECKSUMMED = enum.auto()
    INVALID = enum.auto()


@dataclass(eq=False)
class Entry:
    """比較候補のファイル"""

    _path: str
    _size: int
    status: EntryStatus = EntryStatus.UNTOUCHED
    digest: bytes = bytes(DIGEST_SIZE)  # CHECKSUMMED の時のみ有効
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def path(self) -> str:
        return self._path

    @property
    def size(self) -> int:
        return self._size

    def __deepcopy__(self, memo: dict) -> "Entry":
        return copy_entry(self)


def make_entry(path: str, size: int) -> Entry:
    """パスとサイズからエントリを作成"""
    return Entry(path, size)


def copy_entry(entry: Entry) -> Entry:
    """状態を共有しない複製を作成"""
    with entry._lock:
        return Entry(entry.path, entry.size, entry.status, entry.digest)


def _read_checksum(path: str) -> bytes:
    """ファイル全体の SHA-1 を計算"""
    sha1 = hashlib.sha1()
    with open(path, "rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            sha1.update(chunk)
    return sha1.digest()


def get_entry_checksum(entry: Entry) -> bytes:
    """必要ならチェックサムを計算して返す

    1 エントリにつき読み込みは高々 1 回。失敗した場合は INVALID となり、
    以降は I/O なしで ChecksumUnavailableError を送出する。

    Raises:
        FileUnreadableError: オープン・読み込みに失敗した
        ChecksumUnavailableError: 以前に失敗している
    """
    with entry._lock:
        if entry.status is EntryStatus.INVALID:
            raise ChecksumUnavailableError(entry.path)
        if entry.status is EntryStatus.CHECKSUMMED:
            return entry.digest

        try:
            digest = _read_checksum(entry.path)
        except (OSError, ValueError) as e:
            # ValueError: パスに NUL 文字を含む場合など
            entry.status = EntryStatus.INVALID
            raise FileUnreadableError(entry.path, error_reason(e)) from e

        entry.digest = digest
        entry.status = EntryStatus.CHECKSUMMED
        return digest
