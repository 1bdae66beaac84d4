"""UI/実行処理"""

import os
import stat
import sys

import enlighten

from .cluster import checksum_entries, count_checksum_targets, find_duplicate_sets
from .compare import CompareConfig
from .constants import COLOR_DIM, COLOR_RESET, COLOR_SUCCESS, COLOR_WARNING, shutdown_event
from .entry import Entry, make_entry
from .errors import FileUnreadableError, error_reason


def build_entries(file_path_list: list[str], config: CompareConfig) -> list[Entry]:
    """パスからエントリを作成（通常ファイル以外・stat 失敗は通知して除外）"""
    entries: list[Entry] = []
    for path in file_path_list:
        try:
            st = os.stat(path)
        except (OSError, ValueError) as e:
            config.report(FileUnreadableError(path, error_reason(e)))
            continue
        if not stat.S_ISREG(st.st_mode):
            config.report(FileUnreadableError(path, "通常ファイルではありません"))
            continue
        entries.append(make_entry(path, st.st_size))
    return entries


def print_dup_sets(dup_sets: list[list[Entry]]) -> None:
    """重複グループを表示（1行1パス、グループ間は空行）"""
    for i, dup_set in enumerate(dup_sets):
        if i > 0:
            print()
        for entry in dup_set:
            print(entry.path)


def run_compare(
    file_path_list: list[str],
    config: CompareConfig,
    num_workers: int | None = None,
) -> list[list[Entry]]:
    """ファイルを比較して重複グループを表示"""
    manager = enlighten.Manager()
    tool_status = manager.status_bar(
        status_format="🔍 dupcmp:{fill}{status}{fill}",
        color="bold_bright_white_on_lightslategray",
        justify=enlighten.Justify.CENTER,
        status="重複ファイルを調べています...",
    )
    progress_bar: enlighten.Counter | None = None
    dup_sets: list[list[Entry]] = []

    try:
        entries = build_entries(file_path_list, config)

        progress_bar = manager.counter(
            total=count_checksum_targets(entries),
            desc="🔑 チェックサム",
            unit="件",
            bar_format="{desc}{desc_pad}{percentage:3.0f}%|{bar}| {count:,d}/{total:,d} {unit} [{elapsed}<{eta}]",
        )

        def on_checksum(_: int) -> None:
            assert progress_bar is not None
            progress_bar.update()

        checksum_entries(entries, config, on_checksum, num_workers)

        tool_status.update(status="比較中...")
        dup_sets = find_duplicate_sets(entries, config)

        if shutdown_event.is_set():
            print(f"\n{COLOR_WARNING}⏹️  中断しました{COLOR_RESET}")
            return dup_sets

        if dup_sets:
            tool_status.update(status=f"✅ {len(dup_sets)} グループ見つかりました")
        else:
            tool_status.update(status="✨ 重複ファイルは見つかりませんでした")

    except KeyboardInterrupt:
        shutdown_event.set()
        print(f"\n{COLOR_WARNING}⏹️  中断しました{COLOR_RESET}")
        sys.exit(130)

    finally:
        if progress_bar is not None:
            progress_bar.close()
        tool_status.close()
        manager.stop()

    print_dup_sets(dup_sets)

    if config.reporter.count > 0:
        print(f"{COLOR_DIM}⚠️  読み込みエラー: {config.reporter.count} 件{COLOR_RESET}", file=sys.stderr)
    else:
        print(f"{COLOR_SUCCESS}🎉 完了{COLOR_RESET}", file=sys.stderr)

    return dup_sets
