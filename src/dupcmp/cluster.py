"""重複ファイルの集約

比較パイプラインを使って、エントリ一覧を同一内容のグループにまとめる。
"""

import multiprocessing as mp
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from .compare import CompareConfig, Verdict, compare_entries, try_entry_checksum
from .constants import shutdown_event
from .entry import Entry, copy_entry


def group_by_size(entries: Iterable[Entry]) -> dict[int, list[Entry]]:
    """サイズ毎にグループ化（順序は入力順を保持）"""
    groups: dict[int, list[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.size, []).append(entry)
    return groups


def _checksum_targets(entries: Iterable[Entry]) -> list[Entry]:
    """同じサイズのファイルが他にあるエントリのみ"""
    return [entry for group in group_by_size(entries).values() if len(group) >= 2 for entry in group]


def count_checksum_targets(entries: Iterable[Entry]) -> int:
    """チェックサム計算が必要なエントリ数をカウント"""
    return len(_checksum_targets(entries))


def checksum_entries(
    entries: Iterable[Entry],
    config: CompareConfig,
    progress_callback: Callable[[int], None] | None = None,
    num_workers: int | None = None,
) -> int:
    """チェックサムを並列で事前計算

    スレッドで実行するので、各エントリのキャッシュはそのまま共有される。

    Returns:
        計算に成功したエントリ数
    """
    targets = _checksum_targets(entries)
    if not targets:
        return 0

    if num_workers is None:
        num_workers = min(mp.cpu_count(), 8)

    ok_count = 0
    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        futures = [executor.submit(try_entry_checksum, entry, config) for entry in targets]

        try:
            for future in as_completed(futures):
                if shutdown_event.is_set():
                    executor.shutdown(wait=False, cancel_futures=True)
                    break

                if future.result() is not None:
                    ok_count += 1

                if progress_callback is not None:
                    progress_callback(1)
        except KeyboardInterrupt:
            # 未着手の計算を取り消してから呼び出し元へ
            shutdown_event.set()
            executor.shutdown(wait=False, cancel_futures=True)
            raise

    return ok_count


def _cluster_group(group: list[Entry], config: CompareConfig) -> list[list[Entry]]:
    """同サイズのエントリを、各クラスタの先頭と比較して振り分ける"""
    clusters: list[list[Entry]] = []
    for entry in group:
        if shutdown_event.is_set():
            break
        for cluster in clusters:
            if compare_entries(cluster[0], entry, config) is Verdict.EQUAL:
                cluster.append(entry)
                break
        else:
            clusters.append([entry])
    return clusters


def find_duplicate_sets(entries: Iterable[Entry], config: CompareConfig) -> list[list[Entry]]:
    """同一内容のファイルのグループを探す

    結果は入力とは独立した複製のリスト（サイズ昇順、各グループは入力順）
    """
    dup_sets: list[list[Entry]] = []
    for _, group in sorted(group_by_size(entries).items()):
        if shutdown_event.is_set():
            break
        if len(group) < 2:
            continue
        for cluster in _cluster_group(group, config):
            if len(cluster) >= 2:
                dup_sets.append([copy_entry(entry) for entry in cluster])

    return dup_sets
