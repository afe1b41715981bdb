# coding: utf-8
"""MessageString message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

__all__ = ['MessageStringMessage']

import attr

from .common import MessageId, register_message


@register_message(MessageId.MessageString)
@attr.s(frozen=True)
class MessageStringMessage(object):

    """Free-form message from the sending application."""

    text = attr.ib()  # type: str

    @classmethod
    def deserialize(cls, data, version=None):
        return cls(data.unpack_cstr())
