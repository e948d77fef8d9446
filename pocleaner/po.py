"""polib を用いた PO カタログの読み込み。

検査対象として必要な情報だけを Entry (不変) に写し取る。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Tuple

import polib

from .errors import CatalogError


@dataclass(frozen=True)
class Entry:
    msgid: str
    msgstr: str = ""
    format: str = ""  # "c" なら printf 形式の書式指定子を含む
    msgid_plural: str = ""
    msgstr_plural: Tuple[str, ...] = ()
    linenum: int = 0
    fuzzy: bool = False
    obsolete: bool = False

    @property
    def is_header(self) -> bool:
        return self.msgid == "" and not self.msgid_plural

    def pairs(self) -> Iterator[Tuple[str, str]]:
        """検査する (msgid, msgstr) の組を返す。

        複数形は msgid/msgstr[0], msgid_plural/msgstr[n] (n >= 1)。
        """
        if not self.msgid_plural:
            yield self.msgid, self.msgstr
            return
        if not self.msgstr_plural:
            yield self.msgid, ""
            yield self.msgid_plural, ""
            return
        yield self.msgid, self.msgstr_plural[0]
        for msgstr in self.msgstr_plural[1:]:
            yield self.msgid_plural, msgstr


@dataclass
class Catalog:
    path: str | None
    language: str = ""
    entries: List[Entry] = field(default_factory=list)


def normalize_language(lang: str) -> str:
    # "fr-FR" -> "fr_FR"
    return lang.strip().replace("-", "_")


def entry_from_polib(e: polib.POEntry) -> Entry:
    fmt = "c" if "c-format" in e.flags else ""
    plural = tuple(e.msgstr_plural[k] for k in sorted(e.msgstr_plural, key=int)) if e.msgid_plural else ()
    return Entry(
        msgid=e.msgid,
        msgstr=e.msgstr,
        format=fmt,
        msgid_plural=e.msgid_plural or "",
        msgstr_plural=plural,
        linenum=e.linenum or 0,
        fuzzy="fuzzy" in e.flags,
        obsolete=bool(e.obsolete),
    )


def _build(po: polib.POFile, path: str | None) -> Catalog:
    return Catalog(
        path=path,
        language=normalize_language(po.metadata.get("Language", "")),
        entries=[entry_from_polib(e) for e in po],
    )


def parse_catalog(content: str, path: str | None = None) -> Catalog:
    try:
        po = polib.pofile(content)
    except (OSError, ValueError) as e:
        raise CatalogError(f"{path or '<memory>'}: {e}") from e
    return _build(po, path)


def load_catalog(path: str | Path) -> Catalog:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(path))
    try:
        po = polib.pofile(str(p))
    except (OSError, ValueError) as e:
        raise CatalogError(f"{path}: {e}") from e
    return _build(po, str(path))


__all__ = ["Entry", "Catalog", "entry_from_polib", "normalize_language", "parse_catalog", "load_catalog"]
