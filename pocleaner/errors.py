from __future__ import annotations


class PocleanerError(Exception):
    pass


class CatalogError(PocleanerError):
    """PO ファイルを解析できない。"""


class DictionaryNotFound(PocleanerError):
    """指定言語の辞書が見つからない。"""


class DictionaryError(PocleanerError):
    """単語リストファイルを読み込めない。"""


class UnknownRuleError(PocleanerError, KeyError):
    def __str__(self) -> str:
        return f"unknown rule: {self.args[0]}"


__all__ = ["PocleanerError", "CatalogError", "DictionaryNotFound", "DictionaryError", "UnknownRuleError"]
