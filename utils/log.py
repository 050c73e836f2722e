"""
Color-coded console output for server startup and dataset loading.

Uses colorama for cross-platform terminal color support. Per-request and
per-provider diagnostics go through the standard logging module instead.
"""

import datetime
import logging
import sys
from pathlib import Path
from typing import Optional

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for console output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    STEP = Fore.BLUE + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    METHOD = Fore.MAGENTA + Style.BRIGHT
    PATH = Fore.CYAN
    VALUE = Fore.GREEN
    RESET = Style.RESET_ALL


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Console messages
# ---------------------------------------------------------------------------

def header(msg: str) -> None:
    """Print a bold banner."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


def step(msg: str) -> None:
    print(f"{C.STEP}[{_ts()}] >> {msg}{C.RESET}")


def ok(msg: str) -> None:
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def warn(msg: str) -> None:
    print(f"{C.WARN}[{_ts()}] WARN {msg}{C.RESET}")


def err(msg: str) -> None:
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


def route(method: str, path: str, summary: str = "") -> None:
    """Print one endpoint line for the startup banner."""
    print(f"  {C.METHOD}{method:<7}{C.RESET}{C.PATH}{path:<32}{C.RESET} {summary}")


def summary_table(title: str, rows: list[tuple[str, str]]) -> None:
    """Print a summary table with label-value pairs."""
    print(f"\n{C.HEADER}{title}{C.RESET}")
    max_label = max(len(r[0]) for r in rows) if rows else 0
    for label, value in rows:
        print(f"  {label:<{max_label}}  {C.VALUE}{value}{C.RESET}")
    print()


# ---------------------------------------------------------------------------
# Verbose logging setup
# ---------------------------------------------------------------------------

def setup_verbose_logging(
    name: str = "api",
    level: int = logging.DEBUG,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach console (INFO+) and file (DEBUG+) handlers to a named logger.

    Module loggers under the same dotted prefix (api.main, api.data_access)
    propagate into it. The file is <log_dir>/<name>.log, log_dir defaulting
    to logs/ at the repository root.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on re-import
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.INFO)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    log_dir = Path(log_dir) if log_dir else Path(__file__).resolve().parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / f"{name}.log", encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    logger.addHandler(fh)
    logger.propagate = False

    return logger
