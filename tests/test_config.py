"""Environment configuration: rule file override and folding default."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from phonetic import DaitchMokotoffSoundex, default_rule_set
from phonetic.config import DEFAULT_DM_RULES_PATH, dm_folding_default, dm_rules_path


def test_default_rules_path(monkeypatch):
    monkeypatch.delenv("PHONETIC_DM_RULES", raising=False)
    assert dm_rules_path() == DEFAULT_DM_RULES_PATH
    assert DEFAULT_DM_RULES_PATH.exists()


def test_rules_override(monkeypatch, tmp_path):
    path = tmp_path / "custom.txt"
    path.write_text('"a" "1" "2" "3"\n"b" "7" "7" "7"\n', encoding="utf-8")
    monkeypatch.setenv("PHONETIC_DM_RULES", str(path))
    assert dm_rules_path() == path
    rule_set = default_rule_set()
    assert [r.pattern for r in rule_set.rules] == ["a", "b"]
    assert default_rule_set() is rule_set
    assert DaitchMokotoffSoundex().soundex("Abba") == "173000"


def test_default_rule_set_is_shared(monkeypatch):
    monkeypatch.delenv("PHONETIC_DM_RULES", raising=False)
    assert default_rule_set() is default_rule_set()


@pytest.mark.parametrize("value, expected", [
    (None, True),
    ("", True),
    ("1", True),
    ("true", True),
    ("YES", True),
    ("0", False),
    ("false", False),
    ("off", False),
])
def test_folding_default(monkeypatch, value, expected):
    if value is None:
        monkeypatch.delenv("PHONETIC_DM_FOLDING", raising=False)
    else:
        monkeypatch.setenv("PHONETIC_DM_FOLDING", value)
    assert dm_folding_default() is expected


def test_folding_default_drives_encoder(monkeypatch):
    monkeypatch.delenv("PHONETIC_DM_RULES", raising=False)
    monkeypatch.setenv("PHONETIC_DM_FOLDING", "false")
    assert DaitchMokotoffSoundex().folding is False
    assert DaitchMokotoffSoundex(folding=True).folding is True


def test_dotenv_read_from_working_directory(monkeypatch, tmp_path):
    import importlib
    from phonetic import config

    (tmp_path / ".env").write_text("PHONETIC_DM_FOLDING=false\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PHONETIC_ENV_FILE", raising=False)
    # setenv first so the value loaded from .env is removed afterwards
    monkeypatch.setenv("PHONETIC_DM_FOLDING", "")
    monkeypatch.delenv("PHONETIC_DM_FOLDING")
    importlib.reload(config)
    assert config.dm_folding_default() is False
