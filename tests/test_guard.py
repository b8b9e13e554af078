"""Tests for the pre-flight size guard."""

import pytest

from smartcat.errors import SizeLimitExceeded
from smartcat.guard import Outcome, SizeGuard
from smartcat.models import Api, Message, Prompt


def _prompt(content, char_limit):
    return Prompt(api=Api.OPENAI, messages=(Message.user(content),), char_limit=char_limit)


class _Reader:
    def __init__(self, answer):
        self.answer = answer
        self.messages = []

    def __call__(self, message):
        self.messages.append(message)
        return self.answer


@pytest.mark.parametrize("char_limit", [None, 0])
def test_disabled_limit_always_proceeds(char_limit):
    guard = SizeGuard(interactive=False)

    assert guard.check(_prompt("x" * 10_000, char_limit)) is Outcome.PROCEED


def test_disabled_limit_never_computes_length(monkeypatch):
    def _boom(self):
        raise AssertionError("length computed with disabled limit")

    monkeypatch.setattr(Prompt, "content_length", _boom)
    guard = SizeGuard(interactive=False)

    assert guard.check(_prompt("abc", 0)) is Outcome.PROCEED


def test_within_limit_proceeds():
    guard = SizeGuard(interactive=False)

    assert guard.check(_prompt("x" * 10, 10)) is Outcome.PROCEED


def test_over_limit_non_interactive_raises():
    guard = SizeGuard(interactive=False)

    with pytest.raises(SizeLimitExceeded) as exc:
        guard.check(_prompt("x" * 11, 10))

    assert exc.value.total == 11
    assert exc.value.limit == 10


def test_length_counts_bytes_across_messages():
    prompt = Prompt(
        api=Api.OPENAI,
        messages=(Message.system("abcde"), Message.user("é" * 3)),
        char_limit=10,
    )

    with pytest.raises(SizeLimitExceeded) as exc:
        SizeGuard(interactive=False).check(prompt)

    assert exc.value.total == 11


def test_over_limit_interactive_confirmed():
    reader = _Reader(" Y \n")
    guard = SizeGuard(interactive=True, read_line=reader)

    assert guard.check(_prompt("x" * 11, 10)) is Outcome.PROCEED
    assert "11" in reader.messages[0]
    assert "10" in reader.messages[0]


@pytest.mark.parametrize("answer", ["n\n", "y\n", "", "Yes\n"])
def test_over_limit_interactive_declined(answer):
    guard = SizeGuard(interactive=True, read_line=_Reader(answer))

    assert guard.check(_prompt("x" * 11, 10)) is Outcome.ABORT


def test_interactive_guard_requires_reader():
    with pytest.raises(ValueError):
        SizeGuard(interactive=True)


def test_non_interactive_guard_never_reads():
    reader = _Reader("Y")
    guard = SizeGuard(interactive=False, read_line=reader)

    with pytest.raises(SizeLimitExceeded):
        guard.check(_prompt("x" * 11, 10))

    assert reader.messages == []
