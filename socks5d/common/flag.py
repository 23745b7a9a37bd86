# -*- coding: utf-8 -*-
"""
    socks5.py
    ~~~~~~~~~
    Threaded SOCKS5 proxy server with username/password authentication
    and transparent TCP relay.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import sys
import socket
import argparse
import ipaddress

from typing import Any, List, Optional

from .types import CredentialValidator
from .utils import bytes_, text_, is_py2, set_open_file_limit
from .constants import COLON, PY2_DEPRECATION_MESSAGE
from .logger import Logger

from .version import __version__


# Flags that keyword options of FlagParser.initialize replace as is.
OVERRIDABLE_FLAGS = (
    'port',
    'backlog',
    'timeout',
    'client_recvbuf_size',
    'server_recvbuf_size',
    'pid_file',
)


class FlagParser:
    """Process wide argparse registry.

    Modules register their own flags at import time through the
    module level `flags` instance, e.g. the listener owns
    ``--hostname`` and ``--port``.  Register flags at module level
    only, argparse refuses a flag registered twice."""

    def __init__(self) -> None:
        self.parser = argparse.ArgumentParser(
            description='socks5.py v%s' % __version__,
        )

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action:
        return self.parser.add_argument(*args, **kwargs)

    def parse_args(self, input_args: List[str]) -> argparse.Namespace:
        return self.parser.parse_args(input_args)

    @staticmethod
    def initialize(
        input_args: Optional[List[str]] = None,
        **opts: Any,
    ) -> argparse.Namespace:
        """Parses `input_args` and resolves final flag values.

        Keyword `opts` take precedence over parsed flags, which is how
        embedding applications and tests configure the server without
        building a command line.  Besides the names within
        OVERRIDABLE_FLAGS, `hostname` (an ip address object),
        `basic_auth`, `validator` and `dialer` are understood."""
        if is_py2():
            print(PY2_DEPRECATION_MESSAGE)
            sys.exit(1)

        args = flags.parse_args(input_args or [])

        if args.version:
            print(__version__)
            sys.exit(0)

        Logger.setup(args.log_file, args.log_level, args.log_format)
        set_open_file_limit(args.open_file_limit)

        for name in OVERRIDABLE_FLAGS:
            setattr(args, name, opts.get(name, getattr(args, name)))

        if 'hostname' in opts:
            args.hostname = opts['hostname']
        else:
            args.hostname = ipaddress.ip_address(args.hostname)
        args.family = socket.AF_INET6 if args.hostname.version == 6 else socket.AF_INET

        # A caller supplied validator always wins over --basic-auth.
        if 'validator' in opts:
            args.validator = opts['validator']
        else:
            args.validator = FlagParser.basic_auth_validator(
                opts.get('basic_auth', args.basic_auth),
            )
        # Credentials live on within the validator only
        args.basic_auth = None

        args.dialer = opts.get('dialer')
        return args

    @staticmethod
    def basic_auth_validator(
            basic_auth: Optional[str],
    ) -> Optional[CredentialValidator]:
        """Returns a validator accepting exactly the colon separated
        `user:password` pair, or None when authentication is disabled.

        Password may itself contain colons."""
        if not basic_auth:
            return None
        raw = bytes_(basic_auth)
        if COLON not in raw:
            raise ValueError('--basic-auth expects user:password')
        user, password = raw.split(COLON, 1)
        expected = (text_(user), text_(password))

        def validator(username: str, passwd: str) -> bool:
            return (username, passwd) == expected
        return validator


flags = FlagParser()
