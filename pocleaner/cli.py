from __future__ import annotations
import argparse
import json
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict

from .checker import ALL_RULES, DEFAULT_LANG_ID, check_paths
from .diagnostic import Severity, highlight
from .dictionary import is_available as enchant_available
from .errors import DictionaryError, UnknownRuleError


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pocleaner",
        description="PO ファイルの原文/訳文をスペルチェックします"
    )
    p.add_argument("paths", nargs="*", help="走査するPOファイル/ディレクトリ")
    p.add_argument("--json", action="store_true", help="JSONで出力")
    p.add_argument("--config", help="設定ファイル(TOML: pyproject.toml など)を読み込み、既定値を上書き")
    p.add_argument("--fail-on-issue", action="store_true", help="問題が1件でもあれば終了コード1")
    p.add_argument("--select", action="append", metavar="RULE", help="有効にするルール (複数指定は繰り返し, all で全ルール)")
    p.add_argument("--ignore", action="append", metavar="RULE", help="無効にするルール")
    p.add_argument("--list-rules", action="store_true", help="ルール一覧を表示して終了")
    p.add_argument("--lang-id", default=None, help=f"原文の言語コード (既定: {DEFAULT_LANG_ID})")
    p.add_argument("--lang-str", default=None, help="訳文の言語コード (既定: POヘッダの Language)")
    p.add_argument("--dict-id", action="append", dest="dict_id_files", metavar="FILE", help="原文用の単語リスト(複数可): txt(1行1語)/json/yaml")
    p.add_argument("--dict-str", action="append", dest="dict_str_files", metavar="FILE", help="訳文用の単語リスト(複数可): txt(1行1語)/json/yaml")
    p.add_argument("--no-enchant", action="store_true", help="PyEnchantの言語辞書を使わず単語リストのみで検査")
    p.add_argument("--jobs", type=int, default=1, help="並列実行のワーカー数")
    p.add_argument("--min-severity", choices=["INFO", "WARNING", "ERROR"], default="INFO", help="この重大度未満を非表示にします (既定: INFO)")
    return p


def _load_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as f:
        cfg = tomllib.load(f)
    tool = cfg.get("tool", {}) if isinstance(cfg, dict) else {}
    section = tool.get("pocleaner", {}) if isinstance(tool, dict) else {}
    return section if isinstance(section, dict) else {}


def _apply_config(args: argparse.Namespace, parser: argparse.ArgumentParser, cfg: Dict[str, Any]) -> None:
    # CLI引数が最優先。未指定の項目だけ設定で補完する。
    for key, attr in [
        ("select", "select"),
        ("ignore", "ignore"),
        ("dictId", "dict_id_files"),
        ("dictStr", "dict_str_files"),
    ]:
        if key in cfg and not getattr(args, attr):
            val = cfg[key]
            setattr(args, attr, [str(x) for x in val] if isinstance(val, list) else [str(val)])
    if "langId" in cfg and args.lang_id is None:
        args.lang_id = str(cfg["langId"])
    if "langStr" in cfg and args.lang_str is None:
        args.lang_str = str(cfg["langStr"])
    if "enchant" in cfg and not args.no_enchant:
        args.no_enchant = not bool(cfg["enchant"])
    if "jobs" in cfg and args.jobs == parser.get_default("jobs"):
        args.jobs = int(cfg["jobs"])
    if "minSeverity" in cfg and args.min_severity == parser.get_default("min_severity"):
        args.min_severity = Severity.from_name(str(cfg["minSeverity"])).name
    if "failOnIssue" in cfg and not args.fail_on_issue:
        args.fail_on_issue = bool(cfg["failOnIssue"])


def _print_rules() -> None:
    for rule in ALL_RULES:
        default = "default" if rule.is_default else "optional"
        print(f"{rule.name:<16} {rule.severity.label:<8} {default}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.list_rules:
        _print_rules()
        return 0
    if not args.paths:
        parser.print_usage(sys.stderr)
        print("pocleaner: error: paths are required", file=sys.stderr)
        return 2
    # 設定ファイル読込（TOMLのみ）
    if args.config:
        try:
            _apply_config(args, parser, _load_config(Path(args.config)))
        except (OSError, tomllib.TOMLDecodeError, ValueError, TypeError) as e:
            print(f"[error] failed to load config {args.config}: {e}", file=sys.stderr)
            return 2
    try:
        rules = ALL_RULES.select(args.select, args.ignore)
    except UnknownRuleError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2
    if not rules:
        print("[warn] 有効なルールがありません。--select spelling-id などで指定してください。", file=sys.stderr)
    use_enchant = not args.no_enchant
    if use_enchant and not enchant_available():
        print("[warn] 'pyenchant' が見つかりません。--dict-id/--dict-str の単語リストのみで検査します。", file=sys.stderr)
        use_enchant = False

    try:
        diagnostics = check_paths(
            args.paths,
            rules=rules,
            jobs=args.jobs,
            lang_id=args.lang_id or DEFAULT_LANG_ID,
            lang_str=args.lang_str,
            dict_id_files=args.dict_id_files,
            dict_str_files=args.dict_str_files,
            use_enchant=use_enchant,
        )
    except DictionaryError as e:
        print(f"[error] failed to load word list: {e}", file=sys.stderr)
        return 2
    # 重大度フィルタ
    minsev = Severity.from_name(args.min_severity)
    diagnostics = [d for d in diagnostics if d.severity >= minsev]
    if args.json:
        data = [d.to_dict() for d in diagnostics]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        if not diagnostics:
            print("No issues found.")
        else:
            for d in diagnostics:
                # エディタでクリック可能な file:line 形式
                loc = f"{d.path}:{d.line}" if d.path else "<memory>"
                print(f"{loc}: [{d.severity.label}] {d.rule}: {d.message}")
                print(f"    msgid:  {highlight(d.msgid, d.msgid_pos)}")
                print(f"    msgstr: {highlight(d.msgstr, d.msgstr_pos)}")
            print(f"Total: {len(diagnostics)} issue(s)")
    if args.fail_on_issue and diagnostics:
        return 1
    return 0

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
