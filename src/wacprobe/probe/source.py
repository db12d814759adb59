# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL source: one URL per input line, shared by all requesters."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from contextlib import AbstractContextManager, nullcontext
from typing import TextIO

from ..errors import ConfigError
from ..pipeline import Channel, spawn

logger = logging.getLogger(__name__)

STDIN_SENTINEL = "-"

# Undecodable bytes become U+FFFD so one bad line cannot hide the others.
ENCODING = "utf-8"
DECODE_ERRORS = "replace"


def open_url_source(path: str, *, stdin: TextIO | None = None) -> AbstractContextManager[TextIO]:
    """
    Open the URL list named by ``path``; ``-`` selects standard input.

    Interactive stdin is rejected because nothing is piped into it.
    """
    if path == STDIN_SENTINEL:
        stream = stdin if stdin is not None else sys.stdin
        if stream is None or stream.isatty():
            raise ConfigError("stdin is empty")
        reconfigure = getattr(stream, "reconfigure", None)
        if callable(reconfigure):
            reconfigure(encoding=ENCODING, errors=DECODE_ERRORS)
        return nullcontext(stream)
    try:
        return open(path, encoding=ENCODING, errors=DECODE_ERRORS)
    except OSError as exc:
        raise ConfigError(f"could not open file: '{path}'") from exc


def read_urls(lines: Iterable[str], *, capacity: int = 1) -> Channel[str]:
    """
    Feed stripped, non-blank lines into a channel from a producer thread.

    If reading fails part way, the channel is closed with that exception so the
    caller can report the run as incomplete.
    """
    out: Channel[str] = Channel(capacity)

    def produce() -> None:
        count = 0
        error: BaseException | None = None
        try:
            for line in lines:
                url = line.strip()
                if not url:
                    continue
                out.send(url)
                count += 1
        except Exception as exc:  # noqa: BLE001
            logger.debug("Reading URLs failed after %d entries: %r", count, exc)
            error = exc
        finally:
            logger.debug("URL source exhausted after %d entries", count)
            out.close(error)

    spawn(produce, name="url-source")
    return out


__all__ = ["STDIN_SENTINEL", "open_url_source", "read_urls"]
