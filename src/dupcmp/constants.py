"""定数・グローバル状態"""

import threading

# ファイル読み込み単位 (8KB)
CHUNK_SIZE = 8192

# SHA-1 ダイジェスト長 (160bit)
DIGEST_SIZE = 20

# 空入力の SHA-1
EMPTY_DIGEST = bytes.fromhex("da39a3ee5e6b4b0d3255bfef95601890afd80709")

# ANSI256 カラー（黒背景に合う落ち着いた色）
COLOR_SUCCESS = "\033[38;5;72m"  # シアングリーン
COLOR_WARNING = "\033[38;5;180m"  # ライトサーモン
COLOR_DIM = "\033[38;5;242m"  # ミディアムグレー
COLOR_RESET = "\033[0m"

# グローバル停止フラグ
shutdown_event = threading.Event()
