# coding: utf-8
"""Response message implementations.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.

A response to a command is either an integer result code or a string, and the message itself
doesn't say which.  As in the SDK's PacketClient, a payload length of exactly 4 means an integer and
anything else means a string.
"""

__all__ = ['ResponseMessage', 'ResponseStringMessage']

import attr

from .common import MessageId, int32_t, register_message


@register_message(MessageId.Response, length=int32_t.size)
@attr.s(frozen=True)
class ResponseMessage(object):

    """Integer response to a command."""

    code = attr.ib()  # type: int

    @classmethod
    def deserialize(cls, data, version=None):
        return cls(data.unpack(int32_t))


@register_message(MessageId.Response)
@attr.s(frozen=True)
class ResponseStringMessage(object):

    """String response to a command."""

    text = attr.ib()  # type: str

    @classmethod
    def deserialize(cls, data, version=None):
        return cls(data.unpack_cstr())
