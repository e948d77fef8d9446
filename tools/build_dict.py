from __future__ import annotations
"""
プロジェクト用単語リストのブートストラップ用スクリプト。
- PO ファイルを走査し、msgid (または msgstr) の単語を収集して頻度辞書を生成。
- 生成物は 1行1語 のプレーンテキスト(dict.txt)として出力し、
  pocleaner の --dict-id / --dict-str にそのまま渡せる。

使い方(例):
  python tools/build_dict.py po/ --out dict.txt --min-freq 3
  python tools/build_dict.py po/fr.po --msgstr --out dict-fr.txt
"""
import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable

# 自パッケージのユーティリティを利用
from pocleaner.checker import iter_po_files
from pocleaner.errors import PocleanerError
from pocleaner.po import load_catalog
from pocleaner.words import iter_words


def gather_words(paths: Iterable[str], msgstr: bool = False) -> Counter:
    cnt: Counter = Counter()
    for p in iter_po_files(paths):
        try:
            catalog = load_catalog(p)
        except (OSError, PocleanerError) as e:
            print(f"[warn] skip {p}: {e}", file=sys.stderr)
            continue
        for entry in catalog.entries:
            if entry.is_header or entry.obsolete:
                continue
            for msgid, msgstr_text in entry.pairs():
                text = msgstr_text if msgstr else msgid
                for _s, _e, word in iter_words(text, entry.format):
                    # 数字だけの語は辞書に入れない
                    if not word.isdigit():
                        cnt[word] += 1
    return cnt


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('paths', nargs='+', help='走査するPOファイル/ディレクトリ')
    ap.add_argument('--out', default='dict.txt', help='出力ファイル(既定: dict.txt)')
    ap.add_argument('--min-freq', type=int, default=2, help='採用する最小出現回数(既定:2)')
    ap.add_argument('--msgstr', action='store_true', help='msgid ではなく訳文 (msgstr) から収集')
    args = ap.parse_args()

    cnt = gather_words(args.paths, msgstr=args.msgstr)
    words = [w for w, c in cnt.items() if c >= args.min_freq]
    words.sort()
    Path(args.out).write_text("\n".join(words), encoding='utf-8')
    print(f"Wrote {len(words)} words to {args.out}")

if __name__ == '__main__':
    main()
