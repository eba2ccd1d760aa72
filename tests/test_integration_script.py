"""Tests for the shell integration scripts."""

import shutil
import subprocess

import pytest

from shsh.errors import InputError, UnsupportedShellError
from shsh.integration import SUPPORTED_SHELLS, detect_shell, generate_integration


class TestGenerate:

    def test_zsh_uses_print_s(self):
        script = generate_integration("zsh")
        assert "shsh()" in script
        assert 'print -rs -- "$cmd"' in script
        assert "history -s" not in script
        assert 'eval "$(shsh --init zsh)"' in script

    def test_bash_uses_history_s(self):
        script = generate_integration("bash")
        assert "shsh()" in script
        assert 'history -s "$cmd"' in script
        assert "print -rs" not in script
        assert 'eval "$(shsh --init bash)"' in script

    @pytest.mark.parametrize(
        "shell,history_call",
        [("zsh", 'print -rs -- "$cmd"'), ("bash", 'history -s "$cmd"')],
    )
    def test_records_history_then_evaluates(self, shell, history_call):
        script = generate_integration(shell)
        assert script.index(history_call) < script.index('eval "$cmd"')

    @pytest.mark.parametrize("shell", SUPPORTED_SHELLS)
    def test_confirmation_loop(self, shell):
        script = generate_integration(shell)
        assert "Execute? (y/n/r): " in script
        assert "[Rr][Ee][Tt][Rr][Yy]" in script
        assert "extra=(--retry)" in script
        assert "Aborted." in script

    @pytest.mark.parametrize("shell", SUPPORTED_SHELLS)
    def test_yes_flag_handling(self, shell):
        script = generate_integration(shell)
        assert "--yes|-y) auto_execute=1 ;;" in script
        assert "(( auto_execute ))" in script

    @pytest.mark.parametrize("shell", SUPPORTED_SHELLS)
    def test_special_flag_passthrough(self, shell):
        script = generate_integration(shell)
        assert "--init|--print|-p|--help|-h)" in script
        assert 'command shsh "$@"' in script
        assert 'command shsh --print "${extra[@]}" "${args[@]}"' in script

    @pytest.mark.parametrize("shell", SUPPORTED_SHELLS)
    def test_piped_stdin_passes_through(self, shell):
        assert "if [[ ! -t 0 ]]; then" in generate_integration(shell)

    def test_unsupported_shell(self):
        with pytest.raises(UnsupportedShellError) as exc_info:
            generate_integration("fish")

        message = str(exc_info.value)
        assert "Unsupported shell: fish" in message
        assert "zsh" in message and "bash" in message
        assert exc_info.value.supported == ("zsh", "bash")

    def test_unsupported_shell_is_input_error(self):
        with pytest.raises(InputError):
            generate_integration("powershell")

    def test_pure(self):
        assert generate_integration("zsh") == generate_integration("zsh")


class TestSyntax:
    """The generated scripts parse in their target shell."""

    @pytest.mark.parametrize("shell", SUPPORTED_SHELLS)
    def test_valid_syntax(self, shell, tmp_path):
        if shutil.which(shell) is None:
            pytest.skip(f"{shell} not installed")
        script = tmp_path / f"wrapper.{shell}"
        script.write_text(generate_integration(shell))

        result = subprocess.run([shell, "-n", str(script)], capture_output=True, text=True)

        assert result.returncode == 0, result.stderr


class TestDetectShell:

    def test_zsh(self):
        assert detect_shell({"SHELL": "/bin/zsh"}) == "zsh"

    def test_bash(self):
        assert detect_shell({"SHELL": "/usr/local/bin/bash"}) == "bash"

    def test_unknown_defaults_to_zsh(self):
        assert detect_shell({"SHELL": "/usr/bin/fish"}) == "zsh"

    def test_unset_defaults_to_zsh(self):
        assert detect_shell({}) == "zsh"
