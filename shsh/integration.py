"""
Shell integration scripts.

`shsh` run as a child process cannot touch the calling shell: a generated
``cd`` or ``export`` is lost, and the command never shows up in history.
The scripts below define a ``shsh`` shell function that asks the real
program for the command only (``--print``), confirms it inline, records it
with the shell's own history primitive and evaluates it in place.

Install with::

    eval "$(shsh --init zsh)"    # ~/.zshrc
    eval "$(shsh --init bash)"   # ~/.bashrc
"""

import os
from typing import Mapping, Optional

from .errors import UnsupportedShellError

DEFAULT_SHELL = "zsh"

ZSH_SCRIPT = r'''# shsh shell integration for zsh
# Add this line to ~/.zshrc:
#   eval "$(shsh --init zsh)"

shsh() {
  local arg
  for arg in "$@"; do
    case "$arg" in
      --init|--print|-p|--help|-h)
        command shsh "$@"
        return $?
        ;;
    esac
  done

  # Piped input is consumed by generation and cannot be replayed to eval.
  if [[ ! -t 0 ]]; then
    command shsh "$@"
    return $?
  fi

  local auto_execute=0
  local -a args extra
  args=()
  extra=()
  for arg in "$@"; do
    case "$arg" in
      --yes|-y) auto_execute=1 ;;
      *) args+=("$arg") ;;
    esac
  done

  local cmd answer
  while true; do
    cmd="$(command shsh --print "${extra[@]}" "${args[@]}")" || return $?
    [[ -z "$cmd" ]] && return 1

    if (( auto_execute )); then
      print -r -- "$cmd"
      break
    fi

    print -r -- "Generated command:"
    print -r -- "$cmd"
    print
    read "answer?Execute? (y/n/r): " || answer=""
    if [[ "$answer" =~ '^([Yy]|[Yy][Ee][Ss])$' ]]; then
      break
    elif [[ "$answer" =~ '^([Rr]|[Rr][Ee][Tt][Rr][Yy])$' ]]; then
      extra=(--retry)
      continue
    else
      print "Aborted."
      return 0
    fi
  done

  print -rs -- "$cmd"
  eval "$cmd"
}
'''

BASH_SCRIPT = r'''# shsh shell integration for bash
# Add this line to ~/.bashrc:
#   eval "$(shsh --init bash)"

shsh() {
  local arg
  for arg in "$@"; do
    case "$arg" in
      --init|--print|-p|--help|-h)
        command shsh "$@"
        return $?
        ;;
    esac
  done

  # Piped input is consumed by generation and cannot be replayed to eval.
  if [[ ! -t 0 ]]; then
    command shsh "$@"
    return $?
  fi

  local auto_execute=0
  local -a args=()
  local -a extra=()
  for arg in "$@"; do
    case "$arg" in
      --yes|-y) auto_execute=1 ;;
      *) args+=("$arg") ;;
    esac
  done

  local cmd answer
  while true; do
    cmd="$(command shsh --print "${extra[@]}" "${args[@]}")" || return $?
    [[ -z "$cmd" ]] && return 1

    if (( auto_execute )); then
      printf '%s\n' "$cmd"
      break
    fi

    printf 'Generated command:\n%s\n\n' "$cmd"
    read -r -p "Execute? (y/n/r): " answer || answer=""
    if [[ "$answer" =~ ^([Yy]|[Yy][Ee][Ss])$ ]]; then
      break
    elif [[ "$answer" =~ ^([Rr]|[Rr][Ee][Tt][Rr][Yy])$ ]]; then
      extra=(--retry)
      continue
    else
      echo "Aborted."
      return 0
    fi
  done

  history -s "$cmd"
  eval "$cmd"
}
'''

SCRIPTS = {
    "zsh": ZSH_SCRIPT,
    "bash": BASH_SCRIPT,
}

SUPPORTED_SHELLS = tuple(SCRIPTS)


def generate_integration(shell: str) -> str:
    """
    Return the integration script for ``shell``.

    Raises:
        UnsupportedShellError: ``shell`` is not one of SUPPORTED_SHELLS
    """
    try:
        return SCRIPTS[shell]
    except KeyError:
        raise UnsupportedShellError(shell, SUPPORTED_SHELLS) from None


def detect_shell(env: Optional[Mapping[str, str]] = None) -> str:
    """Guess the integration flavour from $SHELL, defaulting to zsh."""
    env = os.environ if env is None else env
    name = os.path.basename(env.get("SHELL", "").rstrip("/"))
    return name if name in SCRIPTS else DEFAULT_SHELL
