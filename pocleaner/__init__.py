"""pocleaner
PO (gettext) 翻訳カタログの簡易スペルチェッカー。

主な提供機能:
- Unicode 対応の単語分割 (printf 形式の書式指定子を読み飛ばすモード付き)
- 原文/訳文それぞれの辞書によるスペルチェックルール
- 誤りの位置 (バイトオフセット) を保持した診断結果
- CLI インターフェース
"""
from .checker import ALL_RULES, Checker, check_file, check_paths, check_text
from .diagnostic import Diagnostic, Severity
from .po import Entry
from .words import WordPos

__all__ = [
    "ALL_RULES",
    "Checker",
    "Diagnostic",
    "Entry",
    "Severity",
    "WordPos",
    "check_text",
    "check_file",
    "check_paths",
]

__version__ = "0.1.0"
