# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import logging
from typing import Optional

from .constants import DEFAULT_LOG_FILE, DEFAULT_LOG_LEVEL, DEFAULT_LOG_FORMAT


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def single_char_to_level(char: str) -> int:
    """Maps a level name to its logging constant.

    Only the leading character matters and case is ignored,
    so d, Debug and DEBUG are all the same level."""
    leading = char[:1].upper()
    for name in LOG_LEVELS:
        if name[0] == leading:
            level: int = getattr(logging, name)
            return level
    raise ValueError('unknown log level %r' % char)


class Logger:
    """Configures the root logger once per process."""

    @staticmethod
    def setup(
            log_file: Optional[str] = DEFAULT_LOG_FILE,
            log_level: str = DEFAULT_LOG_LEVEL,
            log_format: str = DEFAULT_LOG_FORMAT,
    ) -> None:
        level = single_char_to_level(log_level)
        if log_file is None:
            logging.basicConfig(level=level, format=log_format)
            return
        logging.basicConfig(    # pragma: no cover
            filename=log_file,
            filemode='a',
            level=level,
            format=log_format,
        )
