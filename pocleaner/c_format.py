"""C 言語の printf 形式 (%d, %05d, %1$s など) の書式指定子を読み飛ばすためのスキャナ。

変換文字の妥当性は検証しない。指定子の終端位置だけを求める。
"""
from __future__ import annotations

_FLAGS = frozenset(b"-+ #0")
_DIGITS = frozenset(b"0123456789")
# 長いものから順に照合する (hh -> h, ll -> l)
_LENGTH_MODIFIERS = (b"hh", b"ll", b"h", b"l", b"L", b"q", b"j", b"z", b"Z", b"t")


def _skip_digits(data: bytes, pos: int, length: int) -> int:
    while pos < length and data[pos] in _DIGITS:
        pos += 1
    return pos


def utf8_char_len(first: int) -> int:
    if first < 0x80:
        return 1
    if first < 0xE0:
        return 2
    if first < 0xF0:
        return 3
    return 4


def get_index_end_c_format(data: bytes, pos: int, length: int) -> int:
    """`%` の直後 (pos) から書式指定子を読み、その終端+1 の位置を返す。

    変換文字が見つからないまま末尾に達した場合は length を返す
    (残りの文字列はすべて指定子の一部として扱われる)。
    """
    # 引数位置: %1$s
    end_digits = _skip_digits(data, pos, length)
    if end_digits > pos and end_digits < length and data[end_digits] == ord("$"):
        pos = end_digits + 1
    # フラグ
    while pos < length and data[pos] in _FLAGS:
        pos += 1
    # 幅
    if pos < length and data[pos] == ord("*"):
        pos += 1
    else:
        pos = _skip_digits(data, pos, length)
    # 精度
    if pos < length and data[pos] == ord("."):
        pos += 1
        if pos < length and data[pos] == ord("*"):
            pos += 1
        else:
            pos = _skip_digits(data, pos, length)
    # 長さ修飾子
    for modifier in _LENGTH_MODIFIERS:
        if data.startswith(modifier, pos, length):
            pos += len(modifier)
            break
    # 変換文字 (非ASCIIの場合はコードポイント全体を消費)
    if pos >= length:
        return length
    return min(pos + utf8_char_len(data[pos]), length)


__all__ = ["get_index_end_c_format", "utf8_char_len"]
