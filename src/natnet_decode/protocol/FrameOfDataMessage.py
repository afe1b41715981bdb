# coding: utf-8
"""FrameOfData message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.

This is the most complicated message.

All positions are given as (x, y, z) tuples of floats, in whatever co-ordinate frame the server is
using.  All orientations are given in quaternion form as (x, y, z, w) tuples of floats.  Every
sequence is a tuple, and every class is frozen.

Fields which only exist in some protocol versions are None when the packet was decoded with a
version that doesn't have them (see :mod:`~natnet_decode.protocol.features`).
"""

__all__ = ['Marker', 'Quaternion', 'LabeledMarker', 'RigidBody', 'Skeleton', 'ForcePlate',
           'FrameOfDataMessage']

import collections
from typing import Optional  # noqa: F401

import attr

from .common import (MessageId, StructuralMismatchError, float_t, int32_t, quaternion_t,
                     register_message, uint16_t, uint32_t, vector3_t)
from .features import Feature, supports, timestamp_type


class Marker(collections.namedtuple('Marker', ('x', 'y', 'z'))):

    """A single 3D point."""

    __slots__ = ()

    @classmethod
    def deserialize(cls, data, version=None):
        """Deserialize a Marker from a ParseBuffer."""
        return cls(*data.unpack(vector3_t))


class Quaternion(collections.namedtuple('Quaternion', ('x', 'y', 'z', 'w'))):

    __slots__ = ()

    @classmethod
    def deserialize(cls, data, version=None):
        """Deserialize a Quaternion from a ParseBuffer."""
        return cls(*data.unpack(quaternion_t))


@attr.s(frozen=True)
class LabeledMarker(object):

    """A single marker and associated information.

    Attributes:
        id_ (int): Marker ID
        position (:class:`Marker`):
        size (float): Estimated marker size
        occluded (bool or None): True if the marker was occluded in this frame
        point_cloud_solved (bool or None): True if the position was calculated directly
        model_solved (bool or None): True if the position was calculated from a model
    """

    id_ = attr.ib()  # type: int
    position = attr.ib()  # type: Marker
    size = attr.ib()  # type: float
    occluded = attr.ib(default=None)  # type: Optional[bool]
    point_cloud_solved = attr.ib(default=None)  # type: Optional[bool]
    model_solved = attr.ib(default=None)  # type: Optional[bool]

    _OCCLUDED = 0x01
    _POINT_CLOUD_SOLVED = 0x02
    _MODEL_SOLVED = 0x04

    # id, position and size
    wire_size = int32_t.size + vector3_t.size + float_t.size

    @classmethod
    def deserialize(cls, data, version):
        """Deserialize a LabeledMarker from a ParseBuffer."""
        id_ = data.unpack(int32_t)
        position = Marker.deserialize(data, version)
        size = data.unpack(float_t)

        occluded = point_cloud_solved = model_solved = None
        if supports(version, Feature.Params):
            params = data.unpack(uint16_t)
            occluded = (params & cls._OCCLUDED) != 0
            point_cloud_solved = (params & cls._POINT_CLOUD_SOLVED) != 0
            model_solved = (params & cls._MODEL_SOLVED) != 0

        return cls(id_, position, size, occluded, point_cloud_solved, model_solved)


@attr.s(frozen=True)
class RigidBody(object):

    """Rigid body data.

    The markers, marker IDs and marker sizes are parallel tuples of the same length, in the same
    order they are sent in (all the positions, then all the IDs, then all the sizes).

    Attributes:
        id_ (int): Streaming ID
        position (:class:`Marker`):
        orientation (:class:`Quaternion`):
        markers (tuple[:class:`Marker`]): Position of each marker
        marker_ids (tuple[int]): ID of each marker
        marker_sizes (tuple[float]): Size of each marker
        mean_error (float): Mean error per marker
        valid_track (bool or None): True if the rigid body was tracked successfully
    """

    id_ = attr.ib()  # type: int
    position = attr.ib()  # type: Marker
    orientation = attr.ib()  # type: Quaternion
    markers = attr.ib()  # type: tuple[Marker]
    marker_ids = attr.ib()  # type: tuple[int]
    marker_sizes = attr.ib()  # type: tuple[float]
    mean_error = attr.ib()  # type: float
    valid_track = attr.ib(default=None)  # type: Optional[bool]

    # id, position, orientation, marker count and mean error
    wire_size = int32_t.size + vector3_t.size + quaternion_t.size + int32_t.size + float_t.size

    @classmethod
    def deserialize(cls, data, version):
        """Deserialize a RigidBody from a ParseBuffer."""
        id_ = data.unpack(int32_t)
        position = Marker.deserialize(data, version)
        orientation = Quaternion.deserialize(data, version)

        marker_count = data.unpack_count(vector3_t.size + int32_t.size + float_t.size)
        markers = tuple(Marker.deserialize(data, version) for i in range(marker_count))
        marker_ids = tuple(data.unpack(int32_t) for i in range(marker_count))
        marker_sizes = tuple(data.unpack(float_t) for i in range(marker_count))

        mean_error = data.unpack(float_t)

        valid_track = None
        if supports(version, Feature.Params):
            params = data.unpack(uint16_t)
            valid_track = (params & 0x01) != 0

        return cls(id_, position, orientation, markers, marker_ids, marker_sizes, mean_error,
                   valid_track)


@attr.s(frozen=True)
class Skeleton(object):

    """Skeleton data, which consists of a set of rigid bodies.

    Attributes:
        id_ (int): Skeleton ID
        bones (tuple[:class:`RigidBody`]):
    """

    id_ = attr.ib()  # type: int
    bones = attr.ib()  # type: tuple[RigidBody]

    wire_size = 2*int32_t.size

    @classmethod
    def deserialize(cls, data, version):
        """Deserialize a Skeleton from a ParseBuffer."""
        id_ = data.unpack(int32_t)
        bones = data.unpack_array(RigidBody.wire_size, lambda: RigidBody.deserialize(data, version))
        return cls(id_, bones)


@attr.s(frozen=True)
class ForcePlate(object):

    """Force plate data.

    Each channel has its own sample count, so channels may have different lengths.

    Attributes:
        id_ (int): Force plate ID
        channels (tuple[tuple[float]]): Samples for each channel
    """

    id_ = attr.ib()  # type: int
    channels = attr.ib()  # type: tuple[tuple[float]]

    wire_size = 2*int32_t.size

    @classmethod
    def deserialize(cls, data, version=None):
        """Deserialize a ForcePlate from a ParseBuffer."""
        id_ = data.unpack(int32_t)
        channels = data.unpack_array(
            int32_t.size, lambda: data.unpack_array(float_t.size, lambda: data.unpack(float_t)))
        return cls(id_, channels)


@register_message(MessageId.FrameOfData)
@attr.s(frozen=True)
class FrameOfDataMessage(object):

    """Frame of mocap data.

    Attributes:
        frame_number (int):
        marker_sets (dict[str, tuple[:class:`Marker`]]): Markers in each named marker set (if a
            name appears twice in a frame, only the last one is kept)
        other_markers (tuple[:class:`Marker`]): Unlabeled markers
        rigid_bodies (tuple[:class:`RigidBody`]):
        skeletons (tuple[:class:`Skeleton`]):
        labeled_markers (tuple[:class:`LabeledMarker`]):
        force_plates (tuple[:class:`ForcePlate`] or None): Force plate data, if available
        latency (float): Software latency
        timecode (tuple[int, int]): SMPTE timecode and subframe
        timestamp (float or None): Software timestamp, if available
        is_recording (bool or None): True if the server is recording
        tracked_models_changed (bool or None): True if the tracked models have changed since the
            last frame
    """

    frame_number = attr.ib()  # type: int
    marker_sets = attr.ib()  # type: dict[str, tuple[Marker]]
    other_markers = attr.ib()  # type: tuple[Marker]
    rigid_bodies = attr.ib()  # type: tuple[RigidBody]
    skeletons = attr.ib()  # type: tuple[Skeleton]
    labeled_markers = attr.ib()  # type: tuple[LabeledMarker]
    force_plates = attr.ib()  # type: Optional[tuple[ForcePlate]]
    latency = attr.ib()  # type: float
    timecode = attr.ib()  # type: tuple[int, int]
    timestamp = attr.ib(default=None)  # type: Optional[float]
    is_recording = attr.ib(default=None)  # type: Optional[bool]
    tracked_models_changed = attr.ib(default=None)  # type: Optional[bool]

    @classmethod
    def deserialize(cls, data, version):
        """Deserialize a FrameOfData message.

        Args:
            data (:class:`~natnet_decode.protocol.common.ParseBuffer`):
            version (:class:`~natnet_decode.protocol.common.Version`):

        Returns:
            FrameOfDataMessage: Deserialized message

        Raises:
            StructuralMismatchError: if the end of data marker is not zero
        """

        frame_number = data.unpack(int32_t)

        marker_sets = {}
        marker_set_count = data.unpack_count(1 + int32_t.size)
        for i in range(marker_set_count):
            name = data.unpack_cstr()
            marker_sets[name] = data.unpack_array(vector3_t.size,
                                                  lambda: Marker.deserialize(data, version))

        other_markers = data.unpack_array(vector3_t.size, lambda: Marker.deserialize(data, version))
        rigid_bodies = data.unpack_array(RigidBody.wire_size,
                                         lambda: RigidBody.deserialize(data, version))
        skeletons = data.unpack_array(Skeleton.wire_size,
                                      lambda: Skeleton.deserialize(data, version))
        labeled_markers = data.unpack_array(LabeledMarker.wire_size,
                                            lambda: LabeledMarker.deserialize(data, version))

        force_plates = None
        if supports(version, Feature.ForcePlates):
            force_plates = data.unpack_array(ForcePlate.wire_size,
                                             lambda: ForcePlate.deserialize(data, version))

        latency = data.unpack(float_t)
        timecode = (data.unpack(uint32_t), data.unpack(uint32_t))

        timestamp = None
        timestamp_t = timestamp_type(version)
        if timestamp_t is not None:
            timestamp = float(data.unpack(timestamp_t))

        is_recording = tracked_models_changed = None
        if supports(version, Feature.Params):
            params = data.unpack(uint16_t)
            is_recording = (params & 0x01) != 0
            tracked_models_changed = (params & 0x02) != 0

        end_marker = data.unpack(int32_t)
        if end_marker != 0:
            raise StructuralMismatchError(end_marker, version)

        return cls(frame_number, marker_sets, other_markers, rigid_bodies, skeletons,
                   labeled_markers, force_plates, latency, timecode, timestamp, is_recording,
                   tracked_models_changed)
