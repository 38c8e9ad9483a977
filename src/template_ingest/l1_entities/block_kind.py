"""L1 entities: block kinds and capability scopes understood by the configurator."""

from __future__ import annotations

import enum

IMAGE_TYPE_NAMES = frozenset({'//ly.img.ubq/graphic', '//ly.img.ubq/image', 'graphic', 'image'})
TEXT_TYPE_NAMES = frozenset({'//ly.img.ubq/text', 'text'})

REPLACEABLE_IMAGE_KEY = 'replaceableImage'


class BlockKind(enum.Enum):
    IMAGE = 'image'
    TEXT = 'text'
    OTHER = 'other'

    @classmethod
    def from_type_name(cls, type_name: str) -> BlockKind:
        if type_name in IMAGE_TYPE_NAMES:
            return cls.IMAGE
        if type_name in TEXT_TYPE_NAMES:
            return cls.TEXT
        return cls.OTHER


class CapabilityScope(enum.Enum):
    FILL_CHANGE = 'fill/change'
    TEXT_EDIT = 'text/edit'
    SELECT = 'editor/select'
    MOVE = 'layer/move'
    RESIZE = 'layer/resize'
    ROTATE = 'layer/rotate'
