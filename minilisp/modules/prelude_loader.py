from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Protocol

from minilisp.config import get_prelude_path

log = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def resolve_prelude() -> Optional[Path]:
    p = get_prelude_path()
    return p if p.is_file() else None


def load_prelude(itp: _HasEvalPrelude) -> None:
    p = resolve_prelude()
    if p is None:
        raise FileNotFoundError(f"Cannot find prelude at '{get_prelude_path()}' (MINILISP_PRELUDE_PATH)")
    log.debug("loading prelude from %s", p)
    itp.eval_prelude(p.read_text(encoding='utf-8'))
