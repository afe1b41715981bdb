# coding: utf-8
"""Which optional fields are present in which protocol versions.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.

NatNet is not self-describing, so fields which were added over time can only be decoded if you know
which version produced the packet.  Every version check made by the message implementations goes
through :func:`supports` so that the thresholds live in one table.
"""

__all__ = ['Feature', 'supports', 'timestamp_type']

import enum

from .common import Version, double_t, float_t


class Feature(enum.Enum):

    """Optional parts of the wire format.

    Attributes:
        Params: 16-bit flag fields on labeled markers, rigid bodies and frames
        DoubleTimestamp: Frame timestamp is a double
        FloatTimestamp: Frame timestamp is a float
        ForcePlates: Frames contain force plate data
    """

    Params = 'params'
    DoubleTimestamp = 'double_timestamp'
    FloatTimestamp = 'float_timestamp'
    ForcePlates = 'force_plates'


# {feature: (first version with it, first version without it or None)}
_FEATURE_VERSIONS = {
    Feature.Params: (Version(2, 6), None),
    Feature.DoubleTimestamp: (Version(2, 7), None),
    Feature.FloatTimestamp: (Version(2, 6), Version(2, 7)),
    Feature.ForcePlates: (Version(2, 9), None),
}


def supports(version, feature):
    """Return True if packets from the given protocol version contain the given feature.

    Args:
        version (Version): Protocol version the packet was produced with
        feature (Feature):
    """
    introduced, removed = _FEATURE_VERSIONS[feature]
    return version >= introduced and (removed is None or version < removed)


def timestamp_type(version):
    """Field type of the frame timestamp, or None if frames from this version have no timestamp."""
    if supports(version, Feature.DoubleTimestamp):
        return double_t
    if supports(version, Feature.FloatTimestamp):
        return float_t
    return None
