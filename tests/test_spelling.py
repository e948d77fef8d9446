from pocleaner import ALL_RULES, Checker, Entry, Severity, check_text
from pocleaner.dictionary import WordListDictionary
from pocleaner.spelling import SpellingIdRule, SpellingStrRule, find_misspelled

RULES = [SpellingIdRule(), SpellingStrRule()]


class CountingDict:
    def __init__(self, words):
        self.words = set(words)
        self.calls = []

    def check(self, word):
        self.calls.append(word)
        return word in self.words


def _check(entry, dict_id=None, dict_str=None):
    checker = Checker(RULES, dict_id=dict_id, dict_str=dict_str)
    checker.check_entry(entry)
    return checker.diagnostics


def test_rule_identity():
    assert SpellingIdRule.name == "spelling-id"
    assert SpellingStrRule.name == "spelling-str"
    for rule in RULES:
        assert rule.is_default is False
        assert rule.severity == Severity.INFO


def test_spelling_error_source():
    entry = Entry(msgid="this is a tyypo", msgstr="ceci est une fôte")
    diags = _check(entry, dict_id=WordListDictionary(["typo"]))
    assert len(diags) == 1
    diag = diags[0]
    assert diag.rule == "spelling-id"
    assert diag.severity == Severity.INFO
    assert diag.message == "misspelled words in source: a, is, this, tyypo"
    assert diag.msgid_pos == ((0, 4), (5, 7), (8, 9), (10, 15))
    assert diag.msgstr_pos == ()
    assert diag.msgstr == "ceci est une fôte"


def test_spelling_error_translation():
    entry = Entry(msgid="this is a typo", msgstr="ceci est une fôte")
    diags = _check(entry, dict_str=WordListDictionary(["faute"]))
    assert len(diags) == 1
    diag = diags[0]
    assert diag.rule == "spelling-str"
    assert diag.message == "misspelled words in translation: ceci, est, fôte, une"
    assert diag.msgid_pos == ()
    assert diag.msgstr_pos == ((0, 4), (5, 8), (9, 12), (13, 18))


def test_both_rules_are_independent():
    entry = Entry(msgid="this is a tyypo", msgstr="ceci est une fôte")
    diags = _check(
        entry,
        dict_id=WordListDictionary(["this", "is", "a", "typo"]),
        dict_str=WordListDictionary(["ceci", "est", "une", "faute"]),
    )
    assert [d.message for d in diags] == [
        "misspelled words in source: tyypo",
        "misspelled words in translation: fôte",
    ]


def test_repeated_word_listed_once_with_all_positions():
    entry = Entry(msgid="tyypo and tyypo")
    diags = _check(entry, dict_id=WordListDictionary(["and"]))
    assert diags[0].message == "misspelled words in source: tyypo"
    assert diags[0].msgid_pos == ((0, 5), (10, 15))


def test_dictionary_queried_once_per_misspelled_word():
    d = CountingDict(["ok"])
    found = find_misspelled("bad ok bad ok bad", "", d)
    assert found.words == ["bad"]
    assert found.positions == [(0, 3), (7, 10), (14, 17)]
    assert d.calls.count("bad") == 1


def test_words_sorted_by_code_point():
    found = find_misspelled("zeta Alpha éclair beta", "", WordListDictionary([]))
    assert found.words == ["zeta", "Alpha", "éclair", "beta"]
    assert found.sorted_words() == ["Alpha", "beta", "zeta", "éclair"]


def test_no_dictionary_no_diagnostic():
    entry = Entry(msgid="this is a tyypo", msgstr="ceci est une fôte")
    assert _check(entry) == []


def test_all_words_known():
    entry = Entry(msgid="tested", msgstr="testé")
    diags = _check(entry, dict_id=WordListDictionary(["tested"]), dict_str=WordListDictionary(["testé"]))
    assert diags == []


def test_empty_strings():
    entry = Entry(msgid="", msgstr="")
    assert _check(entry, dict_id=WordListDictionary([]), dict_str=WordListDictionary([])) == []


def test_c_format_entry_skips_specifiers():
    entry = Entry(msgid="%d tyypo %s", format="c")
    diags = _check(entry, dict_id=WordListDictionary([]))
    assert diags[0].message == "misspelled words in source: tyypo"
    assert diags[0].msgid_pos == ((3, 8),)


def test_check_text_catalog():
    content = '''
msgid ""
msgstr ""
"Language: fr\\n"

msgid "this is a tyypo"
msgstr "ceci est une fôte"

#, c-format
msgid "one fiel"
msgid_plural "%d fiels"
msgstr[0] "un fichier"
msgstr[1] "%d fichiers"

#~ msgid "obsolete tyypo"
#~ msgstr "vieille fôte"
'''
    diags = check_text(
        content,
        rules=ALL_RULES.select(["spelling-id"]),
        dict_id=WordListDictionary(["this", "is", "a", "typo", "one", "file", "files"]),
    )
    assert [d.message for d in diags] == [
        "misspelled words in source: tyypo",
        "misspelled words in source: fiel",
        "misspelled words in source: fiels",
    ]
    assert diags[2].msgid == "%d fiels"
    assert diags[2].msgid_pos == ((3, 8),)
    assert all(d.line > 0 for d in diags)
