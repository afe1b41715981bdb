# coding: utf-8
"""PingResponse message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

__all__ = ['Sender', 'PingResponseMessage']

import attr

from .common import MessageId, Version, register_message


@attr.s(frozen=True)
class Sender(object):

    """Application which is sending NatNet data.

    The application version is whatever the application uses; there is no guarantee that it means
    anything beyond being four numbers.

    Attributes:
        name (str): Application name
        version (Version): Application version
        natnet_version (Version): NatNet version the application speaks
    """

    name = attr.ib()  # type: str
    version = attr.ib()  # type: Version
    natnet_version = attr.ib()  # type: Version

    # The name always occupies this many bytes, with garbage after the null
    _NAME_SIZE = 256

    @classmethod
    def deserialize(cls, data, version=None):
        """Deserialize a Sender from a ParseBuffer."""
        name = data.unpack_cstr(cls._NAME_SIZE)
        app_version = Version.deserialize(data, version)
        natnet_version = Version.deserialize(data, version)
        return cls(name, app_version, natnet_version)


@register_message(MessageId.PingResponse)
@attr.s(frozen=True)
class PingResponseMessage(object):

    """Response to a Ping request.

    Attributes:
        sender (:class:`Sender`):
    """

    sender = attr.ib()  # type: Sender

    @classmethod
    def deserialize(cls, data, version):
        """Deserialize a PingResponse message.

        :type data: ParseBuffer
        :type version: Version"""
        return cls(Sender.deserialize(data, version))
