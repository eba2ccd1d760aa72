"""Tests for execution mode resolution."""

import itertools

import pytest

from shsh.modes import ExecutionMode, resolve_mode


def _expected(print_only, auto_confirm, is_piped):
    if print_only:
        return ExecutionMode.PRINT_ONLY
    if is_piped and not auto_confirm:
        return ExecutionMode.PRINT_ONLY
    if auto_confirm:
        return ExecutionMode.AUTO_EXECUTE
    return ExecutionMode.INTERACTIVE


@pytest.mark.parametrize(
    "print_only,auto_confirm,is_piped",
    list(itertools.product([False, True], repeat=3)),
)
def test_all_flag_combinations(print_only, auto_confirm, is_piped):
    assert resolve_mode(print_only, auto_confirm, is_piped) == _expected(
        print_only, auto_confirm, is_piped
    )


class TestPrecedence:

    def test_print_flag_wins_over_yes(self):
        assert resolve_mode(print_only=True, auto_confirm=True, is_piped=False) is ExecutionMode.PRINT_ONLY

    def test_piped_without_yes_never_executes(self):
        assert resolve_mode(print_only=False, auto_confirm=False, is_piped=True) is ExecutionMode.PRINT_ONLY

    def test_piped_with_yes_executes(self):
        assert resolve_mode(print_only=False, auto_confirm=True, is_piped=True) is ExecutionMode.AUTO_EXECUTE

    def test_terminal_without_flags_is_interactive(self):
        assert resolve_mode(print_only=False, auto_confirm=False, is_piped=False) is ExecutionMode.INTERACTIVE

    def test_interactive_only_without_pipe(self):
        interactive = [
            combo for combo in itertools.product([False, True], repeat=3)
            if resolve_mode(*combo) is ExecutionMode.INTERACTIVE
        ]
        assert interactive == [(False, False, False)]
