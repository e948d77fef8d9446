"""文字列を単語単位に分割し、各単語の (start, end) を返すトークナイザ。

- 位置は UTF-8 バイト列上のオフセット (半開区間)。
- 英数字 (Unicode) が単語を構成し、ハイフンと結合文字は単語の途中でのみ許可。
- format="c" の場合は printf 形式の書式指定子を単語として扱わない。
"""
from __future__ import annotations

import unicodedata
from typing import Iterator, Optional, Tuple

from .c_format import get_index_end_c_format, utf8_char_len

_PERCENT = ord("%")
# 結合文字 (母音記号・ヴィラーマなど) は単語の途中であれば単語の一部
_WORD_MARKS = ("Mn", "Mc")


class WordPos:
    """単語位置のイテレータ。一度走査し終えたら再利用はできない。"""

    def __init__(self, s: str, fmt: str = "") -> None:
        self.data = s.encode("utf-8")
        self.length = len(self.data)
        self.skip_c_format = fmt == "c"
        self.pos = 0

    def __iter__(self) -> "WordPos":
        return self

    def __next__(self) -> Tuple[int, int]:
        idx_start: Optional[int] = None
        idx_end: Optional[int] = None
        data = self.data
        while self.pos < self.length:
            if self.skip_c_format and idx_start is None and data[self.pos] == _PERCENT:
                self.pos += 1
                if self.pos < self.length and data[self.pos] == _PERCENT:
                    # "%%" はリテラルの %
                    self.pos += 1
                else:
                    self.pos = get_index_end_c_format(data, self.pos, self.length)
                if self.pos >= self.length:
                    raise StopIteration
                continue
            len_c = utf8_char_len(data[self.pos])
            c = data[self.pos:self.pos + len_c].decode("utf-8")
            if c.isalnum() or (idx_start is not None and (c == "-" or unicodedata.category(c) in _WORD_MARKS)):
                if idx_start is None:
                    idx_start = self.pos
                idx_end = self.pos + len_c
            elif idx_start is not None:
                break
            self.pos += len_c
        if idx_start is None or idx_end is None:
            raise StopIteration
        return idx_start, idx_end

    def word(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8")


def iter_words(s: str, fmt: str = "") -> Iterator[Tuple[int, int, str]]:
    """(start, end, 単語) を順に返す。"""
    words = WordPos(s, fmt)
    for start, end in words:
        yield start, end, words.word(start, end)


__all__ = ["WordPos", "iter_words"]
