"""診断結果 (Diagnostic) と重大度の定義。"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Tuple

Span = Tuple[int, int]


class Severity(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        key = name.strip().upper()
        if key == "WARN":
            key = "WARNING"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown severity: {name}") from None

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Diagnostic:
    path: str | None
    line: int
    rule: str
    severity: Severity
    message: str
    msgid: str
    msgid_pos: Tuple[Span, ...] = ()
    msgstr: str = ""
    msgstr_pos: Tuple[Span, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "rule": self.rule,
            "severity": self.severity.label,
            "message": self.message,
            "msgid": self.msgid,
            "msgid_pos": [list(p) for p in self.msgid_pos],
            "msgstr": self.msgstr,
            "msgstr_pos": [list(p) for p in self.msgstr_pos],
        }


def _merge_spans(spans: Iterable[Span]) -> List[Span]:
    merged: List[Span] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def highlight(text: str, spans: Iterable[Span], before: str = "[", after: str = "]") -> str:
    """バイト位置の spans を before/after で囲んだ文字列を返す。

    重複・隣接する span はひとつにまとめる。
    """
    data = text.encode("utf-8")
    out: List[bytes] = []
    last = 0
    for start, end in _merge_spans(spans):
        out.append(data[last:start])
        out.append(before.encode("utf-8") + data[start:end] + after.encode("utf-8"))
        last = end
    out.append(data[last:])
    return b"".join(out).decode("utf-8")


__all__ = ["Severity", "Diagnostic", "Span", "highlight"]
