from __future__ import annotations

import logging
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TieredRepository:
    """Remote store first, local side-store as mirror and fallback.

    Reads: remote, then mirror into local; on remote failure read local.
    Writes: remote, then mirror into local; on remote failure write local only.
    """

    name = "records"

    def _remote_first(self, op: str, remote: Callable[[], T], mirror: Callable[[T], None], local: Callable[[], T]) -> T:
        try:
            result = remote()
        except Exception:
            logger.warning("Remote %s %s failed, using local store", self.name, op, exc_info=True)
            return local()
        mirror(result)
        return result
