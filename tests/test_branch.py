"""Branch: repeat suppression, forced append, truncation, padding and equality."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from phonetic import Branch, MAX_LENGTH


def test_new_branch_is_empty():
    b = Branch()
    assert str(b) == ""
    assert b.last_replacement is None


def test_repeat_of_previous_tail_is_suppressed():
    b = Branch()
    b.process_next_replacement("54", False)
    b.process_next_replacement("4", False)
    assert str(b) == "54"
    assert b.last_replacement == "4"


def test_different_replacement_is_appended():
    b = Branch()
    b.process_next_replacement("4", False)
    b.process_next_replacement("43", False)
    assert str(b) == "443"


def test_empty_replacement_resets_suppression():
    b = Branch()
    b.process_next_replacement("6", False)
    b.process_next_replacement("", False)
    b.process_next_replacement("6", False)
    assert str(b) == "66"


def test_force_append_overrides_suppression():
    b = Branch()
    b.process_next_replacement("6", False)
    b.process_next_replacement("6", True)
    assert str(b) == "66"


def test_truncated_at_max_length():
    b = Branch()
    b.process_next_replacement("12345", False)
    b.process_next_replacement("678", False)
    assert str(b) == "123456"
    b.process_next_replacement("9", False)
    assert str(b) == "123456"
    assert b.last_replacement == "9"
    assert len(str(b)) == MAX_LENGTH


def test_finish_pads_and_is_idempotent():
    b = Branch()
    b.process_next_replacement("97", False)
    b.finish()
    assert str(b) == "970000"
    b.finish()
    assert str(b) == "970000"


def test_fork_is_independent():
    b = Branch()
    b.process_next_replacement("94", False)
    f = b.fork()
    assert f == b
    assert f is not b
    assert f.last_replacement == "94"
    f.process_next_replacement("5", False)
    assert str(f) == "945"
    assert str(b) == "94"
    assert f != b


def test_equality_by_code_only():
    a = Branch()
    a.process_next_replacement("4", False)
    b = Branch()
    b.process_next_replacement("4", False)
    b.process_next_replacement("", False)
    assert a == b
    assert hash(a) == hash(b)
    assert a.last_replacement != b.last_replacement
