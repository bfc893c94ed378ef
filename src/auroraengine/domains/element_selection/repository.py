"""In-memory element store for the Element Selection Context.

Implements the ElementDataProvider protocol so handlers can query it
with a predicate. Element authoring and persistence live elsewhere;
this store only holds what it is given.
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, List, Optional

from auroraengine.domains.shared import Element


class InMemoryElementRepository:
    """Thread-safe in-memory element store.

    Elements keep insertion order, so handlers present options in the
    order the elements were added.
    """

    def __init__(self, elements: Optional[Iterable[Element]] = None) -> None:
        self._elements: Dict[str, Element] = {}
        self._lock = threading.Lock()
        if elements is not None:
            self.add_many(elements)

    def add(self, element: Element) -> None:
        """Add or replace an element by identifier."""
        with self._lock:
            self._elements[element.identifier] = element

    def add_many(self, elements: Iterable[Element]) -> int:
        count = 0
        with self._lock:
            for element in elements:
                self._elements[element.identifier] = element
                count += 1
        return count

    def remove(self, identifier: str) -> bool:
        with self._lock:
            return self._elements.pop(identifier, None) is not None

    def get(self, identifier: str) -> Optional[Element]:
        with self._lock:
            return self._elements.get(identifier)

    def get_elements(self, predicate: Callable[[Element], bool]) -> List[Element]:
        """Return every element matching the predicate."""
        with self._lock:
            snapshot = list(self._elements.values())
        return [element for element in snapshot if predicate(element)]

    def element_types(self) -> List[str]:
        with self._lock:
            return sorted({e.element_type for e in self._elements.values()})

    def __len__(self) -> int:
        with self._lock:
            return len(self._elements)
