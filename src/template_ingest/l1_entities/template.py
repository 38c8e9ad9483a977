"""Template descriptor models — pure data, no I/O."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

DEFAULT_FRONT_PAGE_INDEX = 0
DEFAULT_BACK_PAGE_INDEX = 1


class Side(enum.Enum):
    FRONT = 'front'
    BACK = 'back'


class TemplateDescriptor(BaseModel):
    """Identifies a loadable template and its side/page layout."""

    model_config = {'frozen': True}

    reference: str = ''
    name: str = ''
    sides: Literal[1, 2] | None = None
    front_page_index: int | None = Field(default=None, ge=0)
    back_page_index: int | None = Field(default=None, ge=0)

    @model_validator(mode='after')
    def _validate_distinct_sides(self) -> TemplateDescriptor:
        if self.sides == 2 and self.page_index_for(Side.FRONT) == self.page_index_for(Side.BACK):
            raise ValueError('front_page_index and back_page_index must differ for a double-sided template')
        return self

    @property
    def is_double_sided(self) -> bool:
        return self.sides == 2

    def page_index_for(self, side: Side) -> int:
        """Resolve *side* to a 0-based page index. Each hint overrides only its own default."""
        if side is Side.FRONT:
            return self.front_page_index if self.front_page_index is not None else DEFAULT_FRONT_PAGE_INDEX
        return self.back_page_index if self.back_page_index is not None else DEFAULT_BACK_PAGE_INDEX
