# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Type-agnostic pipeline primitives."""

from .channel import Channel, ChannelClosed, spawn
from .fanout import merge, split

__all__ = ["Channel", "ChannelClosed", "merge", "spawn", "split"]
