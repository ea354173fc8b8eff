from __future__ import annotations
import logging
import os
from pathlib import Path


# Resolve installation dir (minilisp package directory)
_MINILISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_PATH = _MINILISP_DIR / 'prelude' / 'stdlib.lsp'
_DEFAULT_REPL_HOST = '127.0.0.1'
_DEFAULT_REPL_PORT = 8765
_DEFAULT_LOG_LEVEL = 'WARNING'


def get_prelude_path() -> Path:
    # A directory setting means stdlib.lsp inside it
    raw = os.environ.get('MINILISP_PRELUDE_PATH')
    if not raw or not raw.strip():
        return _DEFAULT_PRELUDE_PATH
    p = Path(raw.strip())
    return p / 'stdlib.lsp' if p.is_dir() else p


def get_repl_host() -> str:
    return os.environ.get('MINILISP_REPL_HOST') or _DEFAULT_REPL_HOST


def get_repl_port() -> int:
    raw = os.environ.get('MINILISP_REPL_PORT')
    if not raw:
        return _DEFAULT_REPL_PORT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"MINILISP_REPL_PORT must be an integer, got {raw!r}") from None


def get_log_level() -> int:
    name = (os.environ.get('MINILISP_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(debug: bool = False) -> None:
    """Configure the root logger once for a command-line entry point."""
    logging.basicConfig(
        level=logging.DEBUG if debug else get_log_level(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
