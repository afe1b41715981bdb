# coding: utf-8
"""UnrecognizedRequest message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

__all__ = ['UnrecognizedRequestMessage']

import attr

from .common import MessageId, register_message


@register_message(MessageId.UnrecognizedRequest)
@attr.s(frozen=True)
class UnrecognizedRequestMessage(object):

    """The sender did not understand the last request."""

    @classmethod
    def deserialize(cls, data=None, version=None):
        return cls()
