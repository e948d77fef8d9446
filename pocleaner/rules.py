"""ルールの共通インターフェースとレジストリ。

各ルールは名前 (kebab-case)・既定で有効かどうか・固定の重大度を持ち、
check_msg でエントリの (msgid, msgstr) を検査して checker へ報告する。
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence

from .diagnostic import Severity
from .errors import UnknownRuleError

if TYPE_CHECKING:  # pragma: no cover
    from .checker import Checker
    from .po import Entry


class Rule(ABC):
    name: str = ""
    is_default: bool = True
    severity: Severity = Severity.WARNING

    @abstractmethod
    def check_msg(self, checker: "Checker", entry: "Entry", msgid: str, msgstr: str) -> None:
        """問題があれば checker.report_msg() で報告する。戻り値はなし。"""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class Rules:
    def __init__(self, rules: Sequence[Rule]) -> None:
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            if rule.name in self._rules:
                raise ValueError(f"duplicate rule name: {rule.name}")
            self._rules[rule.name] = rule

    def __iter__(self):
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def names(self) -> List[str]:
        return list(self._rules)

    def get(self, name: str) -> Rule:
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownRuleError(name) from None

    def select(self, select: Iterable[str] | None = None, ignore: Iterable[str] | None = None) -> List[Rule]:
        """有効にするルールを返す。

        select が空なら既定ルール、"all" なら全ルール。ignore で除外。
        未知の名前は UnknownRuleError。
        """
        select = list(select or [])
        ignored = {self.get(n).name for n in (ignore or [])}
        if not select:
            chosen = [r for r in self._rules.values() if r.is_default]
        elif "all" in select:
            chosen = list(self._rules.values())
        else:
            wanted = {self.get(n).name for n in select}
            chosen = [r for r in self._rules.values() if r.name in wanted]
        return [r for r in chosen if r.name not in ignored]


__all__ = ["Rule", "Rules"]
