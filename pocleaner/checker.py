"""高レベル API: PO テキスト/ファイル/パス群に対するルール検査

- Checker: 有効なルールと辞書 (原文用/訳文用) を保持し、診断結果を集める
- check_text / check_file / check_paths: 解析・辞書解決・検査をまとめて行う
"""
from __future__ import annotations

import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from .diagnostic import Diagnostic, Span
from .dictionary import Dictionary, get_dict
from .errors import DictionaryError, PocleanerError
from .po import Catalog, Entry, load_catalog, parse_catalog
from .rules import Rule, Rules
from .spelling import SpellingIdRule, SpellingStrRule

ALL_RULES = Rules([SpellingIdRule(), SpellingStrRule()])

DEFAULT_LANG_ID = "en_US"
PO_SUFFIXES = {".po", ".pot"}


class Checker:
    def __init__(
        self,
        rules: Sequence[Rule],
        dict_id: Optional[Dictionary] = None,
        dict_str: Optional[Dictionary] = None,
        path: str | None = None,
    ) -> None:
        self.rules = list(rules)
        self.dict_id = dict_id
        self.dict_str = dict_str
        self.path = path
        self.diagnostics: List[Diagnostic] = []
        self._rule: Optional[Rule] = None

    def report_msg(
        self,
        entry: Entry,
        message: str,
        msgid: str,
        msgid_pos: Iterable[Span],
        msgstr: str,
        msgstr_pos: Iterable[Span],
    ) -> None:
        rule = self._rule
        if rule is None:
            raise RuntimeError("report_msg() called outside of a rule check")
        self.diagnostics.append(Diagnostic(
            path=self.path,
            line=entry.linenum,
            rule=rule.name,
            severity=rule.severity,
            message=message,
            msgid=msgid,
            msgid_pos=tuple(msgid_pos),
            msgstr=msgstr,
            msgstr_pos=tuple(msgstr_pos),
        ))

    def check_entry(self, entry: Entry) -> None:
        for msgid, msgstr in entry.pairs():
            for rule in self.rules:
                self._rule = rule
                try:
                    rule.check_msg(self, entry, msgid, msgstr)
                finally:
                    self._rule = None

    def check_catalog(self, catalog: Catalog) -> List[Diagnostic]:
        for entry in catalog.entries:
            # ヘッダと廃止エントリは対象外
            if entry.is_header or entry.obsolete:
                continue
            self.check_entry(entry)
        return self.diagnostics


def _run(
    catalog: Catalog,
    rules: Sequence[Rule],
    dict_id: Optional[Dictionary],
    dict_str: Optional[Dictionary],
    lang_str: str | None,
    dict_str_files: List[str] | None,
    use_enchant: bool,
) -> List[Diagnostic]:
    if dict_str is None:
        # 訳文の言語は指定が無ければカタログのヘッダ (Language) から
        lang = lang_str or catalog.language
        if lang or dict_str_files:
            dict_str = get_dict(lang if use_enchant else None, dict_str_files)
    checker = Checker(rules, dict_id=dict_id, dict_str=dict_str, path=catalog.path)
    return checker.check_catalog(catalog)


def check_text(
    content: str,
    rules: Sequence[Rule] | None = None,
    dict_id: Optional[Dictionary] = None,
    dict_str: Optional[Dictionary] = None,
    path: str | None = None,
    lang_str: str | None = None,
    dict_str_files: List[str] | None = None,
    use_enchant: bool = False,
) -> List[Diagnostic]:
    if rules is None:
        rules = ALL_RULES.select(["all"])
    catalog = parse_catalog(content, path=path)
    return _run(catalog, rules, dict_id, dict_str, lang_str, dict_str_files, use_enchant)


def check_file(
    path: str,
    rules: Sequence[Rule] | None = None,
    dict_id: Optional[Dictionary] = None,
    dict_str: Optional[Dictionary] = None,
    lang_str: str | None = None,
    dict_str_files: List[str] | None = None,
    use_enchant: bool = False,
) -> List[Diagnostic]:
    if rules is None:
        rules = ALL_RULES.select(["all"])
    catalog = load_catalog(path)
    return _run(catalog, rules, dict_id, dict_str, lang_str, dict_str_files, use_enchant)


def iter_po_files(paths: Iterable[str | os.PathLike[str]]) -> Iterator[Path]:
    for p in paths:
        path = Path(p)
        if path.is_file():
            yield path
        elif path.is_dir():
            for root, _dirs, files in os.walk(path):
                for f in sorted(files):
                    if Path(f).suffix.lower() in PO_SUFFIXES:
                        yield Path(root) / f


def check_paths(
    paths: Iterable[str],
    rules: Sequence[Rule] | None = None,
    jobs: int = 1,
    lang_id: str | None = DEFAULT_LANG_ID,
    lang_str: str | None = None,
    dict_id_files: List[str] | None = None,
    dict_str_files: List[str] | None = None,
    use_enchant: bool = True,
) -> List[Diagnostic]:
    files = [str(f) for f in iter_po_files(paths)]
    if rules is None:
        rules = ALL_RULES.select(["all"])
    # 原文用辞書は全ファイル共通。jobs > 1 ではスレッド間で共有されるため、
    # 辞書バックエンドが読み取り専用の並行 check() に耐えることが前提。
    dict_id = get_dict(lang_id if use_enchant else None, dict_id_files)

    def _one(fpath: str) -> List[Diagnostic]:
        try:
            return check_file(
                fpath,
                rules=rules,
                dict_id=dict_id,
                lang_str=lang_str,
                dict_str_files=dict_str_files,
                use_enchant=use_enchant,
            )
        except DictionaryError:
            # 単語リストの不備はファイル単位ではなく実行全体のエラー
            raise
        except (OSError, PocleanerError) as e:
            print(f"[warn] failed to check {fpath}: {e}", file=sys.stderr)
            return []

    results: List[Diagnostic] = []
    # 並列/直列実行
    if jobs and jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            futs = {ex.submit(_one, f): f for f in files}
            by_file = {}
            for fut in as_completed(futs):
                by_file[futs[fut]] = fut.result()
        # 出力順はファイル順に揃える
        for f in files:
            results.extend(by_file.get(f, []))
    else:
        for f in files:
            results.extend(_one(f))
    return results


__all__ = [
    "Checker",
    "ALL_RULES",
    "DEFAULT_LANG_ID",
    "check_text",
    "check_file",
    "check_paths",
    "iter_po_files",
]
