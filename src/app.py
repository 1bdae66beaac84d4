#!/usr/bin/env python3

"""
内容が同一のファイルを探すツールです。

Usage:
  app.py [-q] [-t] [-j WORKERS] FILE...

Options:
  FILE            比較対象のファイル
  -q, --quiet     読み込みエラーを表示しない
  -t, --thorough  チェックサム一致後にバイト単位で比較する
  -j WORKERS      チェックサム計算の並列数 [default: 4]
"""

from docopt import docopt

from dupcmp import CompareConfig, run_compare


def main() -> None:
    assert __doc__ is not None
    args = docopt(__doc__)

    config = CompareConfig(thorough=args["--thorough"], quiet=args["--quiet"])

    run_compare(args["FILE"], config, int(args["-j"]))


if __name__ == "__main__":
    main()
