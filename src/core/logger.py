"""
InstaVault - Logger
===================

Tree-style console and file logging.
"""

import os
import traceback
from datetime import datetime
from typing import List, Optional, Tuple

from src.core.config import LOGS_DIR
from src.core.constants import TIMEZONE


# ANSI colors
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
CYAN = "\033[96m"
GRAY = "\033[90m"

Items = Optional[List[Tuple[str, str]]]


class Logger:
    """Tree-style logger with colors."""

    def __init__(self):
        self.log_file = LOGS_DIR / "instavault.log"
        self.error_file = LOGS_DIR / "instavault_error.log"
        self.debug_enabled = os.getenv("INSTAVAULT_DEBUG_LOGS", "false").lower() == "true"

    def _timestamp(self) -> str:
        """Get formatted timestamp."""
        now = datetime.now(TIMEZONE)
        return now.strftime("%H:%M:%S %Z")

    def _write_file(self, message: str, error: bool = False) -> None:
        """Write to log file."""
        try:
            with open(self.error_file if error else self.log_file, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError:
            pass

    def _format_tree(self, items: Items) -> str:
        """Format items as a tree."""
        if not items:
            return ""
        lines = []
        for i, (key, value) in enumerate(items):
            prefix = "└─" if i == len(items) - 1 else "├─"
            lines.append(f"  {prefix} {key}: {value}")
        return "\n".join(lines)

    def _emit(
        self,
        title: str,
        items: Items,
        emoji: str,
        color: str = "",
        error: bool = False,
    ) -> None:
        timestamp = self._timestamp()
        tree_str = self._format_tree(items)

        # Console output with colors
        console_msg = f"{GRAY}[{timestamp}]{RESET} {color}{emoji}{RESET} {BOLD}{title}{RESET}"
        if tree_str:
            console_msg += f"\n{CYAN}{tree_str}{RESET}"
        print(console_msg)

        # File output without colors
        file_msg = f"[{timestamp}] {emoji} {title}"
        if tree_str:
            file_msg += f"\n{tree_str}"
        self._write_file(file_msg, error=error)

    def tree(self, title: str, items: Items, emoji: str = "ℹ️") -> None:
        """Log with tree format."""
        self._emit(title, items, emoji)

    def info(self, message: str, items: Items = None) -> None:
        """Log info message."""
        self._emit(message, items, "ℹ️", BLUE)

    def success(self, message: str, items: Items = None) -> None:
        """Log success message."""
        self._emit(message, items, "✅", GREEN)

    def warning(self, message: str, items: Items = None) -> None:
        """Log warning message."""
        self._emit(message, items, "⚠️", YELLOW, error=True)

    def error(self, message: str, items: Items = None) -> None:
        """Log error message."""
        self._emit(message, items, "❌", RED, error=True)

    def debug(self, message: str, items: Items = None) -> None:
        """Log debug message (only when INSTAVAULT_DEBUG_LOGS=true)."""
        if self.debug_enabled:
            self._emit(message, items, "🔍", GRAY)

    def error_tree(self, title: str, exc: BaseException, items: Items = None) -> None:
        """Log an exception with its type, message and last traceback frame."""
        details = list(items or [])
        details.append(("Error Type", type(exc).__name__))
        details.append(("Error", str(exc)[:100]))
        frames = traceback.extract_tb(exc.__traceback__)
        if frames:
            last = frames[-1]
            details.append(("Location", f"{os.path.basename(last.filename)}:{last.lineno}"))
        self._emit(title, details, "❌", RED, error=True)


logger = Logger()
