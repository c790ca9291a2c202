"""
PagePicker - Page Selection

Selection state for the page picker and the range-string codec it uses
to keep the editable range field in sync.
"""

from pagepicker.selection.range_codec import decode, encode, normalize
from pagepicker.selection.selection_model import ModifierState, SelectionModel

__all__ = [
    "ModifierState",
    "SelectionModel",
    "decode",
    "encode",
    "normalize",
]
