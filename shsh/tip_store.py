"""
First-run tip persistence.

shsh prints a one-time hint about shell integration after the first command
it executes itself. Whether the hint was shown lives behind a small store
interface so the CLI can be tested with an in-memory fake.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from .config_file import CONFIG_DIR

logger = logging.getLogger(__name__)

STATE_PATH = CONFIG_DIR / "state.json"

TIP_TEMPLATE = (
    "Tip: run eval \"$(shsh --init {shell})\" in your shell config so executed "
    "commands land in your shell history and cd/export persist."
)


class TipStore(ABC):
    """Remembers whether the integration tip was shown."""

    @abstractmethod
    def has_shown_tip(self) -> bool:
        pass

    @abstractmethod
    def mark_tip_shown(self) -> None:
        pass


class FileTipStore(TipStore):
    """
    JSON file backed store.

    A missing or unparsable file reads as empty. Other keys in the file are
    preserved on write.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else STATE_PATH

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def has_shown_tip(self) -> bool:
        return bool(self._read().get("tip_shown", False))

    def mark_tip_shown(self) -> None:
        data = self._read()
        data["tip_shown"] = True
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


class MemoryTipStore(TipStore):
    """In-memory store, for tests and for runs that must not touch disk."""

    def __init__(self, shown: bool = False):
        self.shown = shown

    def has_shown_tip(self) -> bool:
        return self.shown

    def mark_tip_shown(self) -> None:
        self.shown = True


def show_tip_once(store: TipStore, shell: str, out) -> bool:
    """Print the integration tip to ``out`` unless it was shown before."""
    if store.has_shown_tip():
        return False
    print(TIP_TEMPLATE.format(shell=shell), file=out)
    try:
        store.mark_tip_shown()
    except OSError as e:
        logger.debug(f"Could not persist tip state: {e}")
    return True
