# coding: utf-8
"""NatNet decoder.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

__all__ = ['Decoder']

import attr

from . import protocol
from .logging import Logger


@attr.s(frozen=True)
class Decoder(object):

    """Decodes NatNet packets produced by a given protocol version.

    A Decoder holds nothing but the version and a logger, so one instance can be shared between
    threads or reused for any number of packets.

    Attributes:
        version (:class:`~natnet_decode.protocol.Version`): Protocol version of the sender
    """

    version = attr.ib()  # type: protocol.Version
    _log = attr.ib(default=attr.Factory(Logger), eq=False, repr=False)  # type: Logger

    @classmethod
    def for_version(cls, version_string, log=None):
        """Create a decoder from a version string like '2.9.0'."""
        return cls(protocol.Version.parse(version_string), log or Logger())

    def unpack(self, data, strict=False):
        """Decode one packet.

        Args:
            data (bytes or file-like): The packet, or a binary stream positioned at its start
            strict (bool): Raise an exception if there is data left after the message

        Returns:
            A message instance (:class:`~natnet_decode.protocol.FrameOfDataMessage`,
            :class:`~natnet_decode.protocol.PingResponseMessage`, ...)

        Raises:
            DecodeError: if the packet can't be decoded with this version
        """
        message_id, length, payload = protocol.deserialize_header(data)
        return self._unpack_payload(message_id, length, payload, strict)

    def unpack_type(self, message_id, data, strict=False):
        """Decode one packet if it contains the given type of message.

        Useful for probing a server whose version is unknown: an unreadable envelope or a message of
        a different type gives None rather than an exception.

        Args:
            message_id (:class:`~natnet_decode.protocol.MessageId`): Type of message wanted
            data (bytes or file-like): The packet, or a binary stream positioned at its start
            strict (bool): Raise an exception if there is data left after the message

        Returns:
            A message instance, or None
        """
        try:
            actual_id, length, payload = protocol.deserialize_header(data)
        except protocol.DecodeError as e:
            self._log.debug('Could not read message header: %s', e)
            return None
        if actual_id != message_id:
            self._log.debug('Skipping message with ID %s while looking for %s', actual_id,
                            message_id)
            return None
        return self._unpack_payload(actual_id, length, payload, strict)

    def _unpack_payload(self, message_id, length, payload, strict):
        self._log.debug('Unpacking NatNet message with ID %s, size %d', message_id, length)
        try:
            return protocol.deserialize_payload(message_id, length, payload, self.version, strict)
        except protocol.DecodeError as e:
            self._log.debug('Failed to decode message with ID %s as NatNet %s: %s', message_id,
                            self.version, e)
            raise
