# coding: utf-8
"""Ping message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

__all__ = ['PingMessage']

import attr

from .common import MessageId, register_message

# Largest payload the envelope's length field can describe
_MAX_PAYLOAD_SIZE = 0xFFFF


@register_message(MessageId.Ping)
@attr.s(frozen=True)
class PingMessage(object):

    """Ping message (request a PingResponse from the server).

    Attributes:
        name (str): Name of the client application
    """

    name = attr.ib(default='NatNetLib')  # type: str

    def serialize(self):
        """Serialize the payload, which is the name as a null-terminated string.

        Names too long for the envelope's length field are cut short, keeping the null terminator.
        """
        name = self.name.encode('utf-8')
        if b'\0' in name:
            raise ValueError('Ping name must not contain null bytes')
        payload = name + b'\0'
        if len(payload) > _MAX_PAYLOAD_SIZE:
            payload = payload[:_MAX_PAYLOAD_SIZE - 1] + b'\0'
        return payload
