import json
import os
import subprocess
import sys
from pathlib import Path

from pocleaner.cli import main

ROOT = Path(__file__).resolve().parents[1]

PO = '''msgid ""
msgstr ""
"Language: fr\\n"

msgid "this is a tyypo"
msgstr "ceci est une fôte"
'''


def _setup(tmp_path):
    po = tmp_path / "fr.po"
    po.write_text(PO, encoding="utf-8")
    dict_id = tmp_path / "en.txt"
    dict_id.write_text("this\nis\na\ntypo\n", encoding="utf-8")
    dict_str = tmp_path / "fr.txt"
    dict_str.write_text("ceci\nest\nune\nfaute\n", encoding="utf-8")
    return po, dict_id, dict_str


def test_cli_json(tmp_path, capsys):
    po, dict_id, dict_str = _setup(tmp_path)
    code = main([
        str(po), "--select", "all", "--no-enchant",
        "--dict-id", str(dict_id), "--dict-str", str(dict_str), "--json",
    ])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert [d["message"] for d in data] == [
        "misspelled words in source: tyypo",
        "misspelled words in translation: fôte",
    ]
    assert data[0]["msgid_pos"] == [[10, 15]]
    assert data[1]["msgstr_pos"] == [[13, 18]]
    assert data[1]["severity"] == "info"


def test_cli_text_output(tmp_path, capsys):
    po, dict_id, dict_str = _setup(tmp_path)
    code = main([
        str(po), "--select", "spelling-str", "--no-enchant",
        "--dict-str", str(dict_str), "--fail-on-issue",
    ])
    out = capsys.readouterr().out
    assert code == 1
    assert "[info] spelling-str: misspelled words in translation: fôte" in out
    assert "ceci est une [fôte]" in out
    assert "Total: 1 issue(s)" in out


def test_cli_min_severity(tmp_path, capsys):
    po, dict_id, dict_str = _setup(tmp_path)
    code = main([
        str(po), "--select", "all", "--no-enchant", "--dict-id", str(dict_id),
        "--min-severity", "WARNING", "--fail-on-issue",
    ])
    assert code == 0
    assert "No issues found." in capsys.readouterr().out


def test_cli_no_rules_selected(tmp_path, capsys):
    po, dict_id, _ = _setup(tmp_path)
    code = main([str(po), "--no-enchant", "--dict-id", str(dict_id)])
    captured = capsys.readouterr()
    assert code == 0
    assert "No issues found." in captured.out
    assert "[warn]" in captured.err


def test_cli_unknown_rule(tmp_path, capsys):
    po, _, _ = _setup(tmp_path)
    assert main([str(po), "--select", "grammar"]) == 2
    assert "unknown rule: grammar" in capsys.readouterr().err


def test_cli_config(tmp_path, capsys):
    po, dict_id, _ = _setup(tmp_path)
    cfg = tmp_path / "pyproject.toml"
    cfg.write_text(
        "[tool.pocleaner]\n"
        'select = ["spelling-id"]\n'
        "enchant = false\n"
        f"dictId = [{json.dumps(str(dict_id))}]\n",
        encoding="utf-8",
    )
    code = main([str(po), "--config", str(cfg), "--json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert [d["rule"] for d in data] == ["spelling-id"]


def test_cli_bad_config(tmp_path, capsys):
    po, _, _ = _setup(tmp_path)
    cfg = tmp_path / "bad.toml"
    cfg.write_text("[tool.pocleaner\n", encoding="utf-8")
    assert main([str(po), "--config", str(cfg)]) == 2


def test_cli_directory_and_jobs(tmp_path, capsys):
    po, dict_id, _ = _setup(tmp_path)
    (tmp_path / "de.po").write_text(PO.replace("fr", "de"), encoding="utf-8")
    (tmp_path / "broken.po").write_text('msgid "a"\nfoo bar\n', encoding="utf-8")
    code = main([
        str(tmp_path), "--select", "spelling-id", "--no-enchant",
        "--dict-id", str(dict_id), "--jobs", "2", "--json",
    ])
    captured = capsys.readouterr()
    assert code == 0
    data = json.loads(captured.out)
    assert [Path(d["path"]).name for d in data] == ["de.po", "fr.po"]
    assert "broken.po" in captured.err


def test_smoke_list_rules():
    cp = subprocess.run(
        [sys.executable, "-m", "pocleaner", "--list-rules"],
        cwd=str(ROOT), capture_output=True, text=True,
    )
    assert cp.returncode == 0
    assert "spelling-id" in cp.stdout
    assert "spelling-str" in cp.stdout


def test_smoke_build_dict(tmp_path):
    po, _, _ = _setup(tmp_path)
    out = tmp_path / "dict.txt"
    cp = subprocess.run(
        [sys.executable, str(ROOT / "tools" / "build_dict.py"), str(po), "--out", str(out), "--min-freq", "1"],
        cwd=str(ROOT), capture_output=True, text=True,
        env={**os.environ, "PYTHONPATH": str(ROOT)},
    )
    assert cp.returncode == 0, cp.stderr
    assert out.read_text(encoding="utf-8").split("\n") == ["a", "is", "this", "tyypo"]


def test_cli_broken_word_list(tmp_path, capsys):
    po, _, _ = _setup(tmp_path)
    bad = tmp_path / "bad.json"
    bad.write_text('{words: ["x"]}', encoding="utf-8")
    code = main([str(po), "--select", "all", "--no-enchant", "--dict-id", str(bad)])
    assert code == 2
    assert "bad.json" in capsys.readouterr().err
    # 訳文用の単語リストは並列実行時も同様
    (tmp_path / "de.po").write_text(PO, encoding="utf-8")
    code = main([str(tmp_path), "--select", "all", "--no-enchant", "--dict-str", str(bad), "--jobs", "2"])
    assert code == 2
    assert "bad.json" in capsys.readouterr().err
