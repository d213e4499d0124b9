"""Node package - capability protocols and the plain in-memory control tree.

The engine never looks at concrete node classes. It probes the facets
declared in :mod:`form_validator.nodes.capabilities`:

- Visible (required of every node), Requireable, Enableable
- PropertyHolder, Bindable (with a Binding carrying an external DataType)
- ErrorStateful, Containerish, MultiToken, LabelHinted
"""

from .capabilities import (
    Bindable,
    Binding,
    Containerish,
    DataType,
    Enableable,
    ErrorStateful,
    LabelHinted,
    MultiToken,
    PropertyHolder,
    Requireable,
    Visible,
)
from .controls import Container, Control, Element, Input, Label, MultiInput, Select

__all__ = [
    "Bindable",
    "Binding",
    "Containerish",
    "DataType",
    "Enableable",
    "ErrorStateful",
    "LabelHinted",
    "MultiToken",
    "PropertyHolder",
    "Requireable",
    "Visible",
    "Container",
    "Control",
    "Element",
    "Input",
    "Label",
    "MultiInput",
    "Select",
]
