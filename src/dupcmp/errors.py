"""エラー種別"""


class DupcmpError(Exception):
    """ファイル比較で発生するエラーの基底クラス"""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class FileUnreadableError(DupcmpError):
    """ファイルのオープン・読み込みに失敗"""


class ChecksumUnavailableError(DupcmpError):
    """以前の読み込み失敗によりチェックサムが得られない"""

    def __init__(self, path: str) -> None:
        super().__init__(path, "チェックサムを計算できません")


class ComparisonIndeterminateError(DupcmpError):
    """バイト比較中にファイルが読めなくなった"""


def error_reason(e: Exception) -> str:
    """例外から表示用の理由を取り出す"""
    if isinstance(e, OSError) and e.strerror:
        return e.strerror
    return str(e)
