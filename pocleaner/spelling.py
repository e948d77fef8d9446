"""辞書に基づくスペルチェックルール。

- spelling-id: 原文 (msgid) を原文言語の辞書で検査
- spelling-str: 訳文 (msgstr) を翻訳言語の辞書で検査

辞書が無い場合は何もしない。修正候補の提示は行わない。

誤りの例:
    msgid "this is a tyypo"
    msgstr "ceci est une fôte"
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Set

from .diagnostic import Severity, Span
from .rules import Rule
from .words import WordPos

if TYPE_CHECKING:  # pragma: no cover
    from .checker import Checker
    from .dictionary import Dictionary
    from .po import Entry


@dataclass
class MisspelledWords:
    words: List[str] = field(default_factory=list)
    known: Set[str] = field(default_factory=set)
    positions: List[Span] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.words)

    def sorted_words(self) -> List[str]:
        return sorted(self.words)


def find_misspelled(text: str, fmt: str, dictionary: "Dictionary") -> MisspelledWords:
    """text 中の辞書に無い単語と、その全出現位置を集める。

    一度誤りと判定した単語は辞書を引き直さず位置だけ追加する。
    """
    result = MisspelledWords()
    words = WordPos(text, fmt)
    for start, end in words:
        word = words.word(start, end)
        if word in result.known:
            result.positions.append((start, end))
        elif not dictionary.check(word):
            result.words.append(word)
            result.known.add(word)
            result.positions.append((start, end))
    return result


class SpellingIdRule(Rule):
    name = "spelling-id"
    is_default = False
    severity = Severity.INFO

    def check_msg(self, checker: "Checker", entry: "Entry", msgid: str, msgstr: str) -> None:
        if checker.dict_id is None:
            return
        found = find_misspelled(msgid, entry.format, checker.dict_id)
        if found:
            checker.report_msg(
                entry,
                "misspelled words in source: " + ", ".join(found.sorted_words()),
                msgid,
                found.positions,
                msgstr,
                [],
            )


class SpellingStrRule(Rule):
    name = "spelling-str"
    is_default = False
    severity = Severity.INFO

    def check_msg(self, checker: "Checker", entry: "Entry", msgid: str, msgstr: str) -> None:
        if checker.dict_str is None:
            return
        found = find_misspelled(msgstr, entry.format, checker.dict_str)
        if found:
            checker.report_msg(
                entry,
                "misspelled words in translation: " + ", ".join(found.sorted_words()),
                msgid,
                [],
                msgstr,
                found.positions,
            )


__all__ = ["MisspelledWords", "find_misspelled", "SpellingIdRule", "SpellingStrRule"]
