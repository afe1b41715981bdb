# coding: utf-8
"""NatNet decoding library.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""
__all__ = ['__version__', 'protocol', 'DecodeError', 'Decoder', 'Logger', 'MessageId', 'Version']


from . import protocol
from .__version__ import __version__
from .Decoder import Decoder
from .logging import Logger
from .protocol import DecodeError, MessageId, Version
