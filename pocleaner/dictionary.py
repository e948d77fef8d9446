"""スペルチェック用の辞書バックエンド。

- 単語リスト: プレーンテキスト(1行1語, 先頭#はコメント) / JSON / YAML
  JSON/YAML は {"words": [...]} もしくは配列。
- PyEnchant (任意依存): 言語コード (en_US, fr など) で辞書を開く。
  未導入なら is_available() が False を返し、その辞書は使われない。
"""
from __future__ import annotations

import json
import sys
import unicodedata
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Set

try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None  # YAML未インストール時はtxt/JSONのみ

try:  # Optional dependency
    import enchant  # type: ignore
    _ENCHANT_AVAILABLE = True
except Exception:  # pragma: no cover - optional dependency may be missing
    enchant = None  # type: ignore
    _ENCHANT_AVAILABLE = False

from .errors import DictionaryError, DictionaryNotFound


class Dictionary(Protocol):
    def check(self, word: str) -> bool: ...


def is_available() -> bool:
    return _ENCHANT_AVAILABLE


def _normalize(word: str) -> str:
    return unicodedata.normalize("NFC", word)


class WordListDictionary:
    """単語集合による辞書。小文字で登録された語は大文字小文字を問わず一致する。"""

    def __init__(self, words: Iterable[str]) -> None:
        self.words: Set[str] = {_normalize(w) for w in words if w}

    def __len__(self) -> int:
        return len(self.words)

    def check(self, word: str) -> bool:
        word = _normalize(word)
        return word in self.words or word.lower() in self.words


class EnchantDictionary:
    def __init__(self, lang: str) -> None:
        if not _ENCHANT_AVAILABLE:
            raise DictionaryNotFound(f"{lang}: pyenchant is not installed")
        try:
            self._dict = enchant.Dict(lang)
        except enchant.errors.DictNotFoundError as e:
            raise DictionaryNotFound(f"{lang}: {e}") from e
        self.lang = lang

    def check(self, word: str) -> bool:
        return bool(self._dict.check(word))


class DictionaryChain:
    """いずれかの辞書が認識すれば正しい綴りとみなす。"""

    def __init__(self, *dicts: Dictionary) -> None:
        self.dicts = list(dicts)

    def check(self, word: str) -> bool:
        return any(d.check(word) for d in self.dicts)


def _words_from_data(data) -> List[str]:
    if isinstance(data, dict):
        data = data.get("words", [])
    if not isinstance(data, list):
        raise ValueError("単語リストは配列か {words: [...]} である必要があります")
    return [str(w).strip() for w in data if str(w).strip()]


def _read_word_file(path: Path) -> List[str]:
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8-sig")
    if suffix == ".json":
        return _words_from_data(json.loads(text))
    if suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAMLがインストールされていないためYAMLは読み込めません。'pip install PyYAML' を実行してください")
        return _words_from_data(yaml.safe_load(text) or [])
    # プレーンテキスト
    words: List[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        words.append(line)
    return words


_LOAD_ERRORS: tuple = (ValueError,)  # UnicodeDecodeError / JSONDecodeError / 形式エラー
if yaml is not None:
    _LOAD_ERRORS += (yaml.YAMLError,)


def load_words(paths: Iterable[str | Path]) -> List[str]:
    """単語リストを読み込む。存在しないファイルは無視し、壊れたファイルは DictionaryError。"""
    words: List[str] = []
    for p in paths:
        path = Path(p)
        if not path.is_file():
            continue
        try:
            words.extend(_read_word_file(path))
        except _LOAD_ERRORS as e:
            raise DictionaryError(f"{path}: {e}") from e
    # 重複除去
    return sorted(set(words))


def get_dict(lang: str | None = None, dict_files: Iterable[str | Path] | None = None) -> Optional[Dictionary]:
    """単語リストと言語辞書から辞書を組み立てる。何も使えなければ None。"""
    dicts: List[Dictionary] = []
    if dict_files:
        words = load_words(dict_files)
        if words:
            dicts.append(WordListDictionary(words))
    if lang:
        if _ENCHANT_AVAILABLE:
            try:
                dicts.append(EnchantDictionary(lang))
            except DictionaryNotFound as e:
                print(f"[warn] dictionary not found: {e}", file=sys.stderr)
        else:
            print(f"[warn] 'pyenchant' が見つからないため言語辞書 {lang} は使用できません。", file=sys.stderr)
    if not dicts:
        return None
    if len(dicts) == 1:
        return dicts[0]
    return DictionaryChain(*dicts)


__all__ = [
    "Dictionary",
    "WordListDictionary",
    "EnchantDictionary",
    "DictionaryChain",
    "is_available",
    "load_words",
    "get_dict",
]
