# coding: utf-8
"""NatNet protocol parsing.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.

Each message is implemented as a class with a serialize method (outgoing requests) or a deserialize
classmethod (everything a server sends).

To deserialize a packet, use :func:`~natnet_decode.protocol.deserialize` and check the type of the
return value (against the message types you're interested in).  Alternatively, use
:func:`~natnet_decode.protocol.deserialize_header` and check the message ID (against the message
IDs you're interested in), then use :func:`~natnet_decode.protocol.deserialize_payload` to get a
message instance.  To decode a packet only if it is of one type (e.g. while trying out candidate
protocol versions), use :func:`~natnet_decode.protocol.deserialize_type`.

The protocol version is always passed in explicitly; nothing here guesses it from the data."""

__all__ = [
    # Functions
    'serialize', 'deserialize', 'deserialize_header', 'deserialize_payload', 'deserialize_type',
    'supports',
    # Misc
    'Feature', 'MessageId', 'ParseBuffer', 'Version',
    # Errors
    'DecodeError', 'StructuralMismatchError', 'UnknownMessageTypeError', 'UnknownModelTypeError',
    'TruncatedError', 'TransportError', 'TextDecodingError', 'TrailingDataError',
    # Messages
    'FrameOfDataMessage', 'MessageStringMessage', 'ModelDefinitionsMessage', 'PingMessage',
    'PingResponseMessage', 'RequestFrameOfDataMessage', 'RequestModelDefinitionsMessage',
    'ResponseMessage', 'ResponseStringMessage', 'UnrecognizedRequestMessage']

from .common import (DecodeError, MessageId, ParseBuffer, StructuralMismatchError,
                     TextDecodingError, TrailingDataError, TransportError, TruncatedError,
                     UnknownMessageTypeError, UnknownModelTypeError, Version, deserialize,
                     deserialize_header, deserialize_payload, deserialize_type, serialize)
from .features import Feature, supports
from .FrameOfDataMessage import FrameOfDataMessage
from .MessageStringMessage import MessageStringMessage
from .ModelDefinitionsMessage import ModelDefinitionsMessage
from .PingMessage import PingMessage
from .PingResponseMessage import PingResponseMessage
from .RequestFrameOfDataMessage import RequestFrameOfDataMessage
from .RequestModelDefinitionsMessage import RequestModelDefinitionsMessage
from .ResponseMessage import ResponseMessage, ResponseStringMessage
from .UnrecognizedRequestMessage import UnrecognizedRequestMessage
