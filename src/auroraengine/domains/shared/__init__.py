"""Shared Kernel - Types shared across bounded contexts.

This module contains the element and component model consumed by the
Element Selection Context and by character registration.
"""

from auroraengine.domains.shared.kernel import (
    DisplayNameComponent,
    Element,
    ElementBuilder,
    ElementComponent,
    ElementComponents,
    ElementDraft,
    ElementTypeName,
    OptionIdentifier,
    SelectionStatusDetail,
)

__all__ = [
    "DisplayNameComponent",
    "Element",
    "ElementBuilder",
    "ElementComponent",
    "ElementComponents",
    "ElementDraft",
    "ElementTypeName",
    "OptionIdentifier",
    "SelectionStatusDetail",
]
