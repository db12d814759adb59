# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cleanup stage: release every response body that is still open."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ..models import PipelineRecord
from ..pipeline import spawn

logger = logging.getLogger(__name__)


def cleanup(records: Iterable[PipelineRecord]) -> threading.Event:
    """Drain ``records`` on a thread; the returned event is set once input is closed."""
    done = threading.Event()

    def run() -> None:
        released = 0
        try:
            for record in records:
                if record.response is not None and not record.response.is_closed:
                    released += 1
                record.release()
        finally:
            logger.debug("Cleanup released %d open response bodies", released)
            done.set()

    spawn(run, name="cleanup")
    return done


__all__ = ["cleanup"]
