# coding: utf-8
"""ModelDef message implementation.

Copyright (c) 2017, Matthew Edwards.  This file is subject to the 3-clause BSD
license, as found in the LICENSE file in the top-level directory of this
distribution.  No part of natnet_decode, including this file, may be copied,
modified, propagated, or distributed except according to the terms contained
in the LICENSE file.

This message contains descriptions of all tracked models (markersets, rigid bodies and skeletons).

It is not sent automatically when the tracked models change.  The next FrameOfData will have a flag
set, then the client sends a RequestModelDefinitions message to prompt the server to send this.
"""

__all__ = ['ModelDefinitionsMessage', 'ModelType', 'MarkerSetDescription', 'RigidBodyDescription',
           'SkeletonDescription']

import enum

import attr

from .common import (MessageId, SerDesRegistry, UnknownModelTypeError, int32_t, register_message,
                     vector3_t)


class ModelType(enum.IntEnum):
    MarkerSet = 0
    RigidBody = 1
    Skeleton = 2


class ModelRegistry(SerDesRegistry):
    """Abuse SerDesRegistry a bit to use for model types."""

    def deserialize(self, data, version, strict=None):
        """Deserialize a model description.

        Args:
            data (ParseBuffer): Pointer into a NatNet packet
            version (Version): Protocol version to use when deserializing
            strict (bool): ignored

        Returns:
            Model description instance

        Raises:
            UnknownModelTypeError: if the type is not one of :class:`ModelType`
        """
        model_type = data.unpack(int32_t)
        try:
            impl = self._implementation_types[(model_type, None)]
        except KeyError:
            raise UnknownModelTypeError(model_type) from None
        return impl.deserialize(data, version)

    def deserialize_header(self, *args, **kwargs):
        raise NotImplementedError()

    def deserialize_payload(self, *args, **kwargs):
        raise NotImplementedError()

    def deserialize_type(self, *args, **kwargs):
        raise NotImplementedError()


_registry = ModelRegistry()


@_registry.register_message(ModelType.MarkerSet)
@attr.s(frozen=True)
class MarkerSetDescription(object):

    """Description of a markerset.

    Attributes:
        name (str):
        marker_names (tuple[str]):
    """

    name = attr.ib()  # type: str
    marker_names = attr.ib()  # type: tuple[str]

    @classmethod
    def deserialize(cls, data, version=None):
        name = data.unpack_cstr()
        marker_names = data.unpack_array(1, data.unpack_cstr)
        return cls(name, marker_names)


@_registry.register_message(ModelType.RigidBody)
@attr.s(frozen=True)
class RigidBodyDescription(object):

    """Description of a rigid body.

    Attributes:
        name (str):
        id_ (int): Streaming ID
        parent_id (int): For a rigid body which is part of a hierarchy (i.e., a skeleton), the ID of
            the parent rigid body
        offset (tuple[float, float, float]): (x, y, z) offset relative to parent
    """

    name = attr.ib()  # type: str
    id_ = attr.ib()  # type: int
    parent_id = attr.ib()  # type: int
    offset = attr.ib()  # type: tuple[float, float, float]

    # empty name, id, parent id and offset
    wire_size = 1 + 2*int32_t.size + vector3_t.size

    @classmethod
    def deserialize(cls, data, version=None):
        name = data.unpack_cstr()
        id_ = data.unpack(int32_t)
        parent_id = data.unpack(int32_t)
        offset = data.unpack(vector3_t)
        return cls(name, id_, parent_id, offset)


@_registry.register_message(ModelType.Skeleton)
@attr.s(frozen=True)
class SkeletonDescription(object):

    """Description of a skeleton.

    Attributes:
        name (str):
        id_ (int): Streaming ID
        bones (tuple[:class:`RigidBodyDescription`]):
    """

    name = attr.ib()  # type: str
    id_ = attr.ib()  # type: int
    bones = attr.ib()  # type: tuple[RigidBodyDescription]

    @classmethod
    def deserialize(cls, data, version=None):
        name = data.unpack_cstr()
        id_ = data.unpack(int32_t)
        bones = data.unpack_array(RigidBodyDescription.wire_size,
                                  lambda: RigidBodyDescription.deserialize(data, version))
        return cls(name, id_, bones)


@register_message(MessageId.ModelDef)
@attr.s(frozen=True)
class ModelDefinitionsMessage(object):

    """Tracked model definitions.

    Attributes:
        models (tuple): Mixed tuple of :class:`MarkerSetDescription`, :class:`RigidBodyDescription`
            and :class:`SkeletonDescription`."""

    models = attr.ib()  # type: tuple

    @classmethod
    def deserialize(cls, data, version):
        # Type discriminant plus at least an empty name
        models = data.unpack_array(int32_t.size + 1, lambda: _registry.deserialize(data, version))
        return cls(models)
