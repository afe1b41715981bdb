# coding: utf-8
"""Logging implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.

The purpose of this class is to allow console output to be replaced with calls to whatever logging
the application uses (e.g. rospy.logdebug), by subclassing and overriding the level methods."""

import sys


class Logger(object):

    """Simple logger implementation that just prints messages at or above a threshold."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50

    def __init__(self, level=WARNING, stream=None):
        """
        Args:
            level (int): Messages below this level are dropped
            stream: File to print to (standard error by default)
        """
        self.level = level
        self._stream = stream

    def _log_impl(self, msg, *args):
        """Implementation function to make subclassing work."""
        print(msg % args, file=self._stream or sys.stderr)

    def _log(self, level, msg, *args):
        """Print msg % args if level is high enough."""
        if level >= self.level:
            self._log_impl(msg, *args)

    def debug(self, msg, *args):
        self._log(self.DEBUG, msg, *args)

    def info(self, msg, *args):
        self._log(self.INFO, msg, *args)

    def warning(self, msg, *args):
        self._log(self.WARNING, msg, *args)

    def error(self, msg, *args):
        self._log(self.ERROR, msg, *args)

    def fatal(self, msg, *args):
        self._log(self.FATAL, msg, *args)
