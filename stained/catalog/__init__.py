"""
Catalog - static game components.

Dice and colors, board templates, public objectives and tools.
Nothing here holds match state.
"""

from .dice import Color, Die, ALL_COLORS, ALL_FACES
from .templates import Slot, SlotKind, BoardTemplate, TemplateCard, ALL_TEMPLATE_CARDS
from .objectives import Objective, ObjectiveType, ALL_OBJECTIVES
from .tools import Tool, ToolType, ALL_TOOL_TYPES, IMPLEMENTED_TOOL_TYPES

__all__ = [
    "Color",
    "Die",
    "ALL_COLORS",
    "ALL_FACES",
    "Slot",
    "SlotKind",
    "BoardTemplate",
    "TemplateCard",
    "ALL_TEMPLATE_CARDS",
    "Objective",
    "ObjectiveType",
    "ALL_OBJECTIVES",
    "Tool",
    "ToolType",
    "ALL_TOOL_TYPES",
    "IMPLEMENTED_TOOL_TYPES",
]
