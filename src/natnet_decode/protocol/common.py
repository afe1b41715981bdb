# coding: utf-8
"""Utilities for protocol package.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.
"""

import collections
import enum
import functools
import io
import struct

import attr


class MessageId(enum.IntEnum):

    """Message IDs for each NatNet message.

    Attributes:
        Ping: Request for sender information
        PingResponse: Sender application name and version, and the NatNet version it speaks
        Request: Command request
        Response: Command response, either an integer code or a string
        RequestModelDef: Request for model definitions
        ModelDef: List of definitions of markersets, rigid bodies and skeletons
        RequestFrameOfData: Request for a single frame of data
        FrameOfData: Frame of motion capture data
        MessageString: Free-form text from the sender application
        UnrecognizedRequest: The sender did not understand the last request
    """

    Ping = 0
    PingResponse = 1
    Request = 2
    Response = 3
    RequestModelDef = 4
    ModelDef = 5
    RequestFrameOfData = 6
    FrameOfData = 7
    MessageString = 8
    UnrecognizedRequest = 100


# Field types
int32_t = struct.Struct('<i')
uint16_t = struct.Struct('<H')
uint32_t = struct.Struct('<I')
float_t = struct.Struct('<f')
double_t = struct.Struct('<d')
vector3_t = struct.Struct('<fff')
quaternion_t = struct.Struct('<ffff')


class DecodeError(Exception):

    """Base class for everything that can go wrong while decoding a packet."""


class StructuralMismatchError(DecodeError):

    """The end-of-data marker of a frame was not zero.

    Everything decoded before the marker is probably garbage, and the most likely cause is that the
    packet was produced by a different protocol version than the one used to decode it."""

    def __init__(self, end_marker, version=None):
        self.end_marker = end_marker
        self.version = version
        super(StructuralMismatchError, self).__init__(
            'End of data marker is {} rather than 0 (most likely the sender does not speak NatNet '
            '{})'.format(end_marker, version))


class UnknownMessageTypeError(DecodeError):

    """Envelope contains a message ID which cannot be decoded."""

    def __init__(self, message_id):
        self.message_id = message_id
        super(UnknownMessageTypeError, self).__init__(
            'Got an unknown message with ID {}'.format(int(message_id)))


class UnknownModelTypeError(DecodeError):

    """Model definition has a type discriminant other than markerset, rigid body or skeleton."""

    def __init__(self, model_type):
        self.model_type = model_type
        super(UnknownModelTypeError, self).__init__(
            'Unknown model description type {}'.format(model_type))


class TruncatedError(DecodeError):

    """Not enough bytes left to decode the requested field.

    This is most likely caused by a version mismatch rather than a broken connection."""

    def __init__(self, requested, available):
        self.requested = requested
        self.available = available
        super(TruncatedError, self).__init__(
            'Needed {} bytes but only {} were available'.format(requested, available))


class TransportError(DecodeError):

    """The byte source failed for a reason other than running out of data.

    This covers errors raised by the source itself, including reading from a closed file."""


class TextDecodingError(DecodeError):

    """A string field is not valid UTF-8."""


class TrailingDataError(DecodeError):

    """Unread bytes remain after decoding a message in strict mode."""


class ParseBuffer(object):

    """Buffer handling logic.

    Wraps a byte source and provides methods for unpacking data types (as struct.Struct instances)
    from it.  The source is either a bytes-like object or a binary file-like object with a
    ``read`` method (a file, a socket file, an io.BytesIO, ...).  Reads only ever go forward.

    Attributes:
        offset (int): Number of bytes consumed so far
    """

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._length = len(source)
            source = io.BytesIO(source)
        else:
            self._length = None
        self._source = source
        self.offset = 0

    @property
    def remaining(self):
        """Number of unread bytes, or None if the source is a stream of unknown length."""
        if self._length is None:
            return None
        return self._length - self.offset

    def _read(self, size):
        chunks = []
        needed = size
        while needed > 0:
            try:
                chunk = self._source.read(needed)
            except (OSError, ValueError) as e:
                raise TransportError('Failed to read from source: {}'.format(e)) from e
            if not chunk:
                raise TruncatedError(size, size - needed)
            chunks.append(chunk)
            needed -= len(chunk)
        self.offset += size
        return b''.join(chunks)

    def skip(self, struct_type, n=1):
        """Skip `n` fields of the given type."""
        self._read(struct_type.size*n)

    def unpack(self, struct_type):
        """Unpack a field.

        Args:
            struct_type (struct.Struct): Type of field to unpack
        """
        value = struct_type.unpack(self._read(struct_type.size))
        if len(value) == 1:
            value = value[0]
        return value

    def unpack_cstr(self, size=None):
        """Unpack a null-terminated string field.

        If size is given then always unpack that many bytes, otherwise unpack up to the first null.
        """
        if size is not None:
            value, _, _ = self._read(size).partition(b'\0')
        else:
            field = bytearray()
            while True:
                c = self._read(1)
                if c == b'\0':
                    break
                field += c
            value = bytes(field)
        try:
            return value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise TextDecodingError('Could not decode string {!r}: {}'.format(value, e)) from e

    def unpack_bytes(self, size):
        """Unpack a fixed-length field of bytes."""
        return self._read(size)

    def unpack_count(self, item_size):
        """Unpack the length prefix of an array.

        The count comes straight off the wire, so a negative count is treated as an empty array and,
        when the length of the source is known, a count that could not possibly fit in the rest of
        the buffer fails immediately instead of after decoding as many items as there are.

        Args:
            item_size (int): Minimum number of bytes each item occupies on the wire
        """
        count = self.unpack(int32_t)
        if count < 0:
            return 0
        remaining = self.remaining
        if remaining is not None and count*item_size > remaining:
            raise TruncatedError(count*item_size, remaining)
        return count

    def unpack_array(self, item_size, unpack_item):
        """Unpack a count-prefixed array.

        Args:
            item_size (int): Minimum number of bytes each item occupies on the wire
            unpack_item (callable): Called with no arguments to unpack each item

        Returns:
            tuple: The unpacked items
        """
        count = self.unpack_count(item_size)
        return tuple(unpack_item() for i in range(count))


class Version(collections.namedtuple('Version', ('major', 'minor', 'build', 'revision'))):

    """NatNet version, with correct comparison operator.

    Believe it or not, this is performance-critical.

    Attributes:
        major (int):
        minor (int):
        build (int):
        revision (int):"""

    _version_t = struct.Struct('BBBB')

    def __new__(cls, major, minor=0, build=0, revision=0):
        return super(Version, cls).__new__(cls, major, minor, build, revision)

    @classmethod
    def parse(cls, version_string):
        """Parse a dotted version string such as '2.9.0' (up to four parts)."""
        parts = version_string.strip().split('.')
        if not 1 <= len(parts) <= 4:
            raise ValueError('Invalid version string {!r}'.format(version_string))
        return cls(*(int(p) for p in parts))

    @classmethod
    def deserialize(cls, data, version=None):
        """Deserialize a Version from a ParseBuffer."""
        return cls(*data.unpack(cls._version_t))

    def serialize(self):
        """Serialize a Version to bytes."""
        return self._version_t.pack(*self)

    def __str__(self):
        return '{}.{}.{}.{}'.format(*self)


@attr.s
class SerDesRegistry(object):

    """Registry of message implementations, which can serialize messages and deserialize packets.

    An instance of this is used to provide the module-level functions.  It is only written to at
    import time, when the message modules register themselves."""

    _implementation_types = attr.ib(default=attr.Factory(dict))

    def register_message(self, id_, length=None):
        """Decorator to register the class which implements a given message.

        Every registered class gets a ``message_id`` attribute.  Only classes with a ``deserialize``
        classmethod are used for decoding; request messages only need ``serialize``.

        Args:
            id_ (:class:`MessageId`):
            length (int): Only use this class when the envelope declares exactly this payload
                length (otherwise use it for any length without a more specific registration)
        """

        def register_message_impl(cls):
            cls.message_id = id_
            if hasattr(cls, 'deserialize'):
                self._implementation_types[(id_, length)] = cls
            return cls

        return register_message_impl

    @staticmethod
    def serialize(message):
        """Serialize a message instance into a binary packet.

        Args:
            message: A message instance

        Returns:
            bytes: The message serialized as a packet, ready to be sent
        """
        message_id = message.message_id
        payload = message.serialize()
        return uint16_t.pack(message_id) + uint16_t.pack(len(payload)) + payload

    @staticmethod
    def deserialize_header(data):
        """Deserialize the envelope of a packet.

        The declared length is returned as-is; it is not used to limit how much of the payload is
        read.

        Args:
            data (bytes or file-like or ParseBuffer): A NatNet packet

        Returns:
            tuple[MessageId or int, int, ParseBuffer]: Message ID (a plain int if the ID is unknown),
            declared payload length and the buffer positioned at the start of the payload
        """
        if not isinstance(data, ParseBuffer):
            data = ParseBuffer(data)
        message_id = data.unpack(uint16_t)
        length = data.unpack(uint16_t)
        try:
            message_id = MessageId(message_id)
        except ValueError:
            pass
        return message_id, length, data

    def _implementation_for(self, message_id, length):
        impl = self._implementation_types.get((message_id, length))
        if impl is None:
            impl = self._implementation_types.get((message_id, None))
        if impl is None:
            raise UnknownMessageTypeError(message_id)
        return impl

    def deserialize_payload(self, message_id, length, payload_data, version, strict=False):
        """Deserialize the payload of a packet into a message instance.

        Args:
            message_id (MessageId)
            length (int): Payload length declared in the envelope
            payload_data (ParseBuffer): raw payload
            version (Version): Protocol version to use when deserializing
            strict (bool): Raise an exception if there is data left in the buffer after parsing

        Returns:
            Message instance
        """
        message_type = self._implementation_for(message_id, length)
        message = message_type.deserialize(payload_data, version)
        if strict and payload_data.remaining:
            raise TrailingDataError('{} bytes remaining after parsing {} message'
                                    .format(payload_data.remaining, message_id.name))
        return message

    def deserialize(self, data, version, strict=False):
        """Deserialize a packet into a message instance.

        Args:
            data (bytes or file-like or ParseBuffer): A NatNet packet
            version (Version): Protocol version to use when deserializing
            strict (bool): Raise an exception if there is data left in the buffer after parsing.

        Returns:
            Message instance
        """
        message_id, length, payload_data = self.deserialize_header(data)
        return self.deserialize_payload(message_id, length, payload_data, version, strict)

    def deserialize_type(self, wanted, data, version, strict=False):
        """Deserialize a packet only if it contains the wanted type of message.

        This is meant for probing: if the envelope cannot be read at all, or it is for a different
        type of message, return None instead of raising.  Once the type matches, errors from the
        payload are raised as usual.

        Args:
            wanted (MessageId): Type of message to decode
            data (bytes or file-like or ParseBuffer): A NatNet packet
            version (Version): Protocol version to use when deserializing
            strict (bool): Raise an exception if there is data left in the buffer after parsing.

        Returns:
            Message instance or None
        """
        try:
            message_id, length, payload_data = self.deserialize_header(data)
        except DecodeError:
            return None
        if message_id != wanted:
            return None
        return self.deserialize_payload(message_id, length, payload_data, version, strict)


_registry = SerDesRegistry()


# Wrap these so sphinx documents them as proper functions
@functools.wraps(_registry.register_message)
def register_message(*args, **kwargs):
    return _registry.register_message(*args, **kwargs)


@functools.wraps(_registry.serialize)
def serialize(*args, **kwargs):
    return _registry.serialize(*args, **kwargs)


@functools.wraps(_registry.deserialize_header)
def deserialize_header(*args, **kwargs):
    return _registry.deserialize_header(*args, **kwargs)


@functools.wraps(_registry.deserialize)
def deserialize(*args, **kwargs):
    return _registry.deserialize(*args, **kwargs)


@functools.wraps(_registry.deserialize_payload)
def deserialize_payload(*args, **kwargs):
    return _registry.deserialize_payload(*args, **kwargs)


@functools.wraps(_registry.deserialize_type)
def deserialize_type(*args, **kwargs):
    return _registry.deserialize_type(*args, **kwargs)
