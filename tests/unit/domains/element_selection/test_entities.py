"""Tests for element selection entities."""
from auroraengine.domains.element_selection.entities import ElementAggregate
from auroraengine.domains.element_selection.value_objects import (
    ElementSelectionHandlerContext,
    SelectionRule,
)
from auroraengine.domains.shared import Element


def _context():
    return ElementSelectionHandlerContext(
        identifier="handler-1", selection_rule=SelectionRule("Language")
    )


class TestElementAggregate:
    def test_create_records_provenance(self):
        element = Element("ID_3", "Elvish", "Language")
        aggregate = ElementAggregate.create(element, _context())
        assert aggregate.element is element
        assert aggregate.context_identifier == "handler-1"
        assert aggregate.selection_rule == SelectionRule("Language")
        assert aggregate.element_identifier == "ID_3"

    def test_identity_equality(self):
        element = Element("ID_3", "Elvish", "Language")
        a = ElementAggregate.create(element, _context())
        b = ElementAggregate.create(element, _context())
        assert a != b
        assert a == a
        assert a.aggregate_id != b.aggregate_id

    def test_to_dict(self):
        aggregate = ElementAggregate.create(Element("ID_3", "Elvish", "Language"), _context())
        d = aggregate.to_dict()
        assert d["element_identifier"] == "ID_3"
        assert d["element_name"] == "Elvish"
        assert d["selection_rule"] == "Language"
        assert d["context_identifier"] == "handler-1"
        assert d["aggregate_id"] == aggregate.aggregate_id
