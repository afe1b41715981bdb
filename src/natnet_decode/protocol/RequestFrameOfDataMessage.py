# coding: utf-8
"""RequestFrameOfData message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

__all__ = ['RequestFrameOfDataMessage']

import attr

from .common import MessageId, register_message


@register_message(MessageId.RequestFrameOfData)
@attr.s(frozen=True)
class RequestFrameOfDataMessage(object):

    """Request the server to send the current frame of data."""

    def serialize(self):
        return b''
