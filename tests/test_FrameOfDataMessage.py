"""Tests for parsing FrameOfData messages."""

import io
import struct

import pytest

from natnet_decode.protocol import (FrameOfDataMessage, StructuralMismatchError, TruncatedError,
                                    Version, deserialize)
from natnet_decode.protocol.common import ParseBuffer
from natnet_decode.protocol.FrameOfDataMessage import (ForcePlate, LabeledMarker, Marker,
                                                       Quaternion, RigidBody, Skeleton)

import packets


def test_parse_frame_v2_9():
    """Test parsing a NatNet 2.9 packet containing a FrameOfData."""
    packet = packets.frame_packet(Version(2, 9))
    frame = deserialize(packet, Version(2, 9), strict=True)  # type: FrameOfDataMessage

    assert type(frame) == FrameOfDataMessage
    assert frame.frame_number == 42

    assert frame.marker_sets == {
        'Rigid Body 1': ((1.0, 2.0, 3.0),),
        'all': ((1.0, 2.0, 3.0), (4.0, 5.0, 6.0)),
    }
    assert frame.other_markers == ((0.5, 0.25, 0.125),)

    assert len(frame.rigid_bodies) == 1
    body = frame.rigid_bodies[0]
    assert body.id_ == 1
    assert body.position == Marker(0.5, 1.5, -0.5)
    assert body.orientation == Quaternion(0.0, 0.0, 0.0, 1.0)
    assert body.orientation.w == 1.0
    assert body.markers == ((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
    assert body.marker_ids == (10, 11)
    assert body.marker_sizes == (0.25, 0.5)
    assert body.mean_error == 0.125
    assert body.valid_track is True

    assert len(frame.skeletons) == 1
    skeleton = frame.skeletons[0]
    assert skeleton.id_ == 2
    assert len(skeleton.bones) == 1
    assert skeleton.bones[0].id_ == 0x20001
    assert skeleton.bones[0].markers == ()
    assert skeleton.bones[0].valid_track is False

    assert frame.labeled_markers == (
        LabeledMarker(10, Marker(1.0, 2.0, 3.0), 0.25, occluded=True, point_cloud_solved=False,
                      model_solved=True),
        LabeledMarker(11, Marker(4.0, 5.0, 6.0), 0.5, occluded=False, point_cloud_solved=True,
                      model_solved=False),
    )

    assert frame.force_plates == (ForcePlate(3, ((1.0, 2.0), (3.0,))),)
    assert frame.latency == 0.5
    assert frame.timecode == (7, 8)
    assert frame.timestamp == 1234.5
    assert frame.is_recording is True
    assert frame.tracked_models_changed is True


@pytest.mark.parametrize('version,has_params,has_timestamp,has_force_plates', [
    (Version(2, 5), False, False, False),
    (Version(2, 6), True, True, False),
    (Version(2, 7), True, True, False),
    (Version(2, 9), True, True, True),
    (Version(3), True, True, True),
])
def test_optional_fields_follow_version(version, has_params, has_timestamp, has_force_plates):
    """Test the same frame laid out for different versions has exactly the right optional fields."""
    frame = deserialize(packets.frame_packet(version), version, strict=True)

    assert (frame.is_recording is not None) == has_params
    assert (frame.tracked_models_changed is not None) == has_params
    assert (frame.rigid_bodies[0].valid_track is not None) == has_params
    assert (frame.labeled_markers[0].occluded is not None) == has_params
    assert (frame.timestamp is not None) == has_timestamp
    assert (frame.force_plates is not None) == has_force_plates

    # Everything else is unaffected
    assert frame.frame_number == 42
    assert frame.timecode == (7, 8)
    assert sorted(frame.marker_sets) == ['Rigid Body 1', 'all']


def test_timestamp_is_float_in_2_6():
    """Test the 2.6 single precision timestamp comes out as a Python float."""
    frame = deserialize(packets.frame_packet(Version(2, 6)), Version(2, 6))
    assert isinstance(frame.timestamp, float)
    assert frame.timestamp == 1234.5


def test_parse_frame_v2_5_has_no_optional_fields():
    frame = deserialize(packets.frame_packet(Version(2, 5)), Version(2, 5))
    assert frame.force_plates is None
    assert frame.timestamp is None
    assert frame.is_recording is None
    assert frame.tracked_models_changed is None
    assert frame.labeled_markers[1] == LabeledMarker(11, Marker(4.0, 5.0, 6.0), 0.5)


@pytest.mark.parametrize('end_marker', [1, -1, 0x7fffffff])
def test_nonzero_end_marker(end_marker):
    """Test a frame with a corrupted end of data marker is rejected."""
    packet = packets.frame_packet(Version(2, 9), end_marker=end_marker)
    with pytest.raises(StructuralMismatchError) as excinfo:
        deserialize(packet, Version(2, 9))
    assert excinfo.value.end_marker == end_marker
    assert excinfo.value.version == Version(2, 9)


def test_version_mismatch_is_detected():
    """Test decoding a 2.9 frame as 2.7 doesn't silently produce a frame."""
    packet = packets.frame_packet(Version(2, 9))
    with pytest.raises((StructuralMismatchError, TruncatedError)):
        deserialize(packet, Version(2, 7))


def test_truncated_frame():
    """Test every truncation of a valid frame is reported as truncated."""
    packet = packets.frame_packet(Version(2, 9))
    for length in range(len(packet)):
        with pytest.raises(TruncatedError):
            deserialize(packet[:length], Version(2, 9))


def test_truncated_frame_from_stream():
    """Test truncation is detected the same way when reading from a stream."""
    packet = packets.frame_packet(Version(2, 7))
    for length in (0, 3, 4, 20, len(packet) - 1):
        with pytest.raises(TruncatedError):
            deserialize(io.BytesIO(packet[:length]), Version(2, 7))


def test_deserialize_is_repeatable():
    """Test decoding the same buffer twice gives equal frames."""
    packet = packets.frame_packet(Version(2, 9))
    assert deserialize(packet, Version(2, 9)) == deserialize(packet, Version(2, 9))


def test_deserialize_from_stream():
    """Test decoding from a file-like object only consumes one message."""
    packet = packets.frame_packet(Version(2, 9))
    stream = io.BytesIO(packet + packet)
    first = deserialize(stream, Version(2, 9))
    second = deserialize(stream, Version(2, 9))
    assert first == second == deserialize(packet, Version(2, 9))
    assert stream.read() == b''


def test_duplicate_marker_set_names_keep_last():
    payload = (struct.pack('<i', 1) +  # frame number
               packets.count(2) +
               packets.cstr('dup') + packets.count(1) + packets.marker((1.0, 1.0, 1.0)) +
               packets.cstr('dup') + packets.count(1) + packets.marker((2.0, 2.0, 2.0)) +
               packets.count(0)*4 +  # other markers, rigid bodies, skeletons, labeled markers
               struct.pack('<f', 0.5) +  # latency
               struct.pack('<II', 0, 0) +  # timecode
               struct.pack('<i', 0))
    frame = deserialize(packets.envelope(7, payload), Version(2, 5), strict=True)
    assert frame.marker_sets == {'dup': ((2.0, 2.0, 2.0),)}


def test_huge_count_fails_before_decoding_items():
    """Test a count which can't possibly fit in the packet is rejected up front."""
    payload = packets.count(1) + packets.count(0) + packets.count(0x7fffffff)
    with pytest.raises(TruncatedError) as excinfo:
        deserialize(packets.envelope(7, payload), Version(2, 9))
    assert excinfo.value.requested == 0x7fffffff*12


def test_parse_rigid_body_v2_5():
    data = ParseBuffer(packets.rigid_body(5, (1.0, 2.0, 3.0), (0.0, 0.0, 0.0, 1.0),
                                          markers=[(1.0, 1.0, 1.0)], marker_ids=[3],
                                          marker_sizes=[0.5], mean_error=0.25))
    body = RigidBody.deserialize(data, Version(2, 5))
    assert body == RigidBody(5, (1.0, 2.0, 3.0), (0.0, 0.0, 0.0, 1.0), ((1.0, 1.0, 1.0),), (3,),
                             (0.5,), 0.25)
    assert body.valid_track is None
    assert data.remaining == 0


def test_parse_skeleton():
    bone = packets.rigid_body(7, (1.0, 2.0, 3.0), (0.0, 0.0, 0.0, 1.0), params=0)
    data = ParseBuffer(packets.skeleton(1, [bone, bone]))
    skeleton = Skeleton.deserialize(data, Version(2, 9))
    assert skeleton.id_ == 1
    assert len(skeleton.bones) == 2
    assert skeleton.bones[0] == skeleton.bones[1]
    assert data.remaining == 0


def test_parse_force_plate_with_ragged_channels():
    data = ParseBuffer(packets.force_plate(9, [[], [1.0], [1.0, 2.0, 3.0]]))
    plate = ForcePlate.deserialize(data, Version(2, 9))
    assert plate == ForcePlate(9, ((), (1.0,), (1.0, 2.0, 3.0)))


def test_entities_are_frozen():
    frame = deserialize(packets.frame_packet(Version(2, 9)), Version(2, 9))
    with pytest.raises(AttributeError):
        frame.frame_number = 1
    with pytest.raises(AttributeError):
        frame.rigid_bodies[0].id_ = 2


def test_deserialize_frame(benchmark):
    """Benchmark parsing a NatNet 2.9 packet containing a FrameOfData."""
    packet = packets.frame_packet(Version(2, 9))
    benchmark(deserialize, packet, Version(2, 9))
