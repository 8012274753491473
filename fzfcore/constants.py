"""Tunable limits, event identifiers and exit codes shared across the finder."""

from __future__ import annotations

import os
import sys
from enum import IntEnum

# Core (durations are in seconds)
COORDINATOR_DELAY_MAX = 0.100
COORDINATOR_DELAY_STEP = 0.010

# Reader
READER_BUFFER_SIZE = 64 * 1024
READER_POLL_INTERVAL_MIN = 0.010
READER_POLL_INTERVAL_STEP = 0.005
READER_POLL_INTERVAL_MAX = 0.050

# Terminal
INITIAL_DELAY = 0.020
INITIAL_DELAY_TAC = 0.100
SPINNER_DURATION = 0.100
PREVIEW_CANCEL_WAIT = 0.500
PREVIEW_CHUNK_DELAY = 0.100
PREVIEW_DELAYED = 0.500
MAX_PATTERN_LENGTH = 300
MAX_MULTI = 2**31 - 1

# Matcher
NUM_PARTITIONS_MULTIPLIER = 8
MAX_PARTITIONS = 32
PROGRESS_MIN_DURATION = 0.200

# Capacity of each chunk
CHUNK_SIZE = 100

# Pre-allocated scratch sizes for the scoring matrices
SLAB16_SIZE = 100 * 1024
SLAB32_SIZE = 2048

# Results of low-selectivity queries are not cached
QUERY_CACHE_MAX = CHUNK_SIZE // 5

# Mergers with large lists are not cached
MERGER_CACHE_MAX = 100000

# History
DEFAULT_HISTORY_MAX = 1000

# Jump labels
DEFAULT_JUMP_LABELS = (
    "asdfghjklqwertyuiopzxcvbnm1234567890"
    "ASDFGHJKLQWERTYUIOPZXCVBNM`~;:,<.>/?'\"!@#$%^&*()[{]}-_=+"
)

_UNIX_DEFAULT_COMMAND = (
    "set -o pipefail; command find -L . -mindepth 1 "
    "\\( -path '*/.*' -o -fstype 'sysfs' -o -fstype 'devfs' "
    "-o -fstype 'devtmpfs' -o -fstype 'proc' \\) -prune "
    "-o -type f -print -o -type l -print 2> /dev/null | cut -b3-"
)

_CYGWIN_DEFAULT_COMMAND = (
    'sh -c "command find -L . -mindepth 1 -path \'*/.*\' -prune '
    '-o -type f -print -o -type l -print 2> /dev/null | cut -b3-"'
)


class EventType(IntEnum):
    """Events exchanged between the reader, matcher and terminal."""

    READ_NEW = 0
    READ_FIN = 1
    SEARCH_NEW = 2
    SEARCH_PROGRESS = 3
    SEARCH_FIN = 4
    HEADER = 5
    READY = 6
    QUIT = 7


class ExitCode(IntEnum):
    """Process exit statuses."""

    CANCEL = -1
    OK = 0
    NO_MATCH = 1
    ERROR = 2
    INTERRUPT = 130


def default_command(platform: str | None = None, term: str | None = None) -> str:
    """Return the shell command that lists files when no input is piped in.

    ``platform`` defaults to ``sys.platform`` and ``term`` to ``$TERM``.
    On Windows outside of Cygwin there is no default command and an empty
    string is returned.
    """
    if platform is None:
        platform = sys.platform
    if term is None:
        term = os.environ.get("TERM", "")
    if not platform.startswith("win"):
        return _UNIX_DEFAULT_COMMAND
    if term == "cygwin":
        return _CYGWIN_DEFAULT_COMMAND
    return ""