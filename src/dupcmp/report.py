"""I/O エラーの通知"""

import sys
import threading
from typing import TextIO

from .constants import COLOR_RESET, COLOR_WARNING
from .errors import DupcmpError


class Reporter:
    """読み込みエラーを警告として表示"""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.count = 0
        self._lock = threading.Lock()  # ワーカースレッドからも呼ばれる

    def warning(self, error: DupcmpError) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        with self._lock:
            self.count += 1
            print(f"{COLOR_WARNING}⚠️  {error.path}: {error.reason}{COLOR_RESET}", file=stream)
