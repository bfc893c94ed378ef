"""Tests for element selection adapters and the in-memory repository."""

import pytest

from auroraengine.domains.element_selection import (
    ElementAggregate,
    ElementSelectionHandlerContext,
    ElementSelectionHandlerFactory,
    ElementSelectionHandlerManager,
    InMemoryElementRepository,
    PresenterConfiguration,
    SelectionOption,
    SelectionRule,
)
from auroraengine.domains.element_selection.adapters import (
    CharacterAggregateRegistry,
    CharacterRegistrationProvider,
    ElementSelectionToolAdapter,
    InMemorySelectionPresenterFactory,
)
from auroraengine.domains.shared import Element


def _languages():
    return [
        Element("ID_1", "Common", "Language"),
        Element("ID_2", "Undercommon", "Language"),
        Element("ID_3", "Elvish", "Language"),
        Element("ID_4", "Druidic", "Language"),
    ]


def _aggregate(element=None):
    context = ElementSelectionHandlerContext.create(SelectionRule("Language"))
    return ElementAggregate.create(element or Element("ID_3", "Elvish", "Language"), context)


# =============================================================================
# InMemoryElementRepository
# =============================================================================


class TestInMemoryElementRepository:
    def test_get_elements_filters_by_predicate(self):
        repo = InMemoryElementRepository(_languages())
        repo.add(Element("ID_S", "Stealth", "Skill"))
        result = repo.get_elements(lambda e: e.element_type == "Language")
        assert [e.name for e in result] == ["Common", "Undercommon", "Elvish", "Druidic"]

    def test_add_replaces_by_identifier(self):
        repo = InMemoryElementRepository()
        repo.add(Element("ID_1", "Common", "Language"))
        repo.add(Element("ID_1", "Common Tongue", "Language"))
        assert len(repo) == 1
        assert repo.get("ID_1").name == "Common Tongue"

    def test_remove(self):
        repo = InMemoryElementRepository(_languages())
        assert repo.remove("ID_1") is True
        assert repo.remove("ID_1") is False
        assert repo.get("ID_1") is None

    def test_element_types(self):
        repo = InMemoryElementRepository(_languages())
        repo.add(Element("ID_S", "Stealth", "Skill"))
        assert repo.element_types() == ["Language", "Skill"]


# =============================================================================
# Presenter
# =============================================================================


class TestInMemorySelectionPresenterFactory:
    def test_applies_configuration(self):
        factory = InMemorySelectionPresenterFactory()

        def configure(configuration: PresenterConfiguration):
            configuration.element_type = "Language"

        presenter = factory.create_presenter(configure)
        assert presenter.element_type == "Language"
        assert factory.created == [presenter]

    def test_records_updates(self):
        presenter = InMemorySelectionPresenterFactory().create_presenter(lambda c: None)
        presenter.update_header("Select a Language")
        presenter.update_selection_options([SelectionOption("ID_1", "Common", "Language")])
        rendered = presenter.render()
        assert rendered["header"] == "Select a Language"
        assert rendered["options"][0]["identifier"] == "ID_1"
        assert presenter.update_count == 1


# =============================================================================
# Character registration
# =============================================================================


class TestCharacterAggregateRegistry:
    @pytest.mark.asyncio
    async def test_register_and_unregister(self):
        registry = CharacterAggregateRegistry()
        aggregate = _aggregate()
        await registry.register(aggregate)
        assert aggregate in registry
        await registry.unregister(aggregate)
        assert aggregate not in registry

    @pytest.mark.asyncio
    async def test_double_register_rejected(self):
        registry = CharacterAggregateRegistry()
        aggregate = _aggregate()
        await registry.register(aggregate)
        with pytest.raises(ValueError, match="already registered"):
            await registry.register(aggregate)

    @pytest.mark.asyncio
    async def test_unregister_unknown_rejected(self):
        registry = CharacterAggregateRegistry()
        with pytest.raises(ValueError, match="not registered"):
            await registry.unregister(_aggregate())

    def test_provider_shares_registry(self):
        provider = CharacterRegistrationProvider()
        assert (
            provider.get_aggregate_registration_manager()
            is provider.get_aggregate_registration_manager()
        )


# =============================================================================
# ElementSelectionToolAdapter
# =============================================================================


@pytest.fixture
def adapter_setup():
    registration = CharacterRegistrationProvider()
    manager = ElementSelectionHandlerManager(
        factory=ElementSelectionHandlerFactory(
            data_provider=InMemoryElementRepository(_languages()),
            registration_provider=registration,
            presenter_factory=InMemorySelectionPresenterFactory(),
        )
    )
    return ElementSelectionToolAdapter(manager), registration.registry


class TestElementSelectionToolAdapter:
    def test_create(self, adapter_setup):
        adapter, _ = adapter_setup
        result = adapter.create("Language")
        assert result["success"] is True
        assert len(result["handlers"]) == 1
        assert result["handlers"][0]["state"] == "created"

    def test_initialize(self, adapter_setup):
        adapter, _ = adapter_setup
        adapter.create("Language")
        result = adapter.initialize("Language")
        assert result["success"] is True
        assert result["header"] == "Select a Language"
        assert len(result["options"]) == 4

    def test_initialize_twice_reports_error(self, adapter_setup):
        adapter, _ = adapter_setup
        adapter.create("Language")
        adapter.initialize("Language")
        result = adapter.initialize("Language")
        assert result["success"] is False
        assert result["error_type"] == "InvalidStateTransitionError"
        assert result["state"] == "initialized"

    def test_missing_handler(self, adapter_setup):
        adapter, _ = adapter_setup
        result = adapter.initialize("Language")
        assert result["success"] is False
        assert "selection_create" in result["error"]

    @pytest.mark.asyncio
    async def test_register_unknown_option(self, adapter_setup):
        adapter, registry = adapter_setup
        adapter.create("Language")
        adapter.initialize("Language")
        result = await adapter.register("Language", "ID_99")
        assert result["success"] is False
        assert result["error_type"] == "OptionNotFoundError"
        assert result["available_options"] == ["ID_1", "ID_2", "ID_3", "ID_4"]
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_register_and_unregister(self, adapter_setup):
        adapter, registry = adapter_setup
        adapter.create("Language")
        adapter.initialize("Language")

        result = await adapter.register("Language", "ID_3")
        assert result["success"] is True
        assert result["registered"]["element_name"] == "Elvish"
        assert registry.elements_of_type("Language") == ["Elvish"]

        result = await adapter.unregister("Language")
        assert result["success"] is True
        assert len(registry) == 0

        result = await adapter.unregister("Language")
        assert result["success"] is False

    def test_remove_and_status(self, adapter_setup):
        adapter, _ = adapter_setup
        adapter.create("Language")
        adapter.initialize("Language")

        status = adapter.status(detail="full")
        assert status["count"] == 1
        assert len(status["handlers"][0]["options"]) == 4

        assert adapter.remove("Language")["removed"] is True
        assert adapter.remove("Language")["removed"] is False
        assert adapter.status("Language")["count"] == 0

    @pytest.mark.asyncio
    async def test_blank_element_type_reports_error(self, adapter_setup):
        adapter, _ = adapter_setup
        responses = [
            adapter.create("   "),
            adapter.initialize(""),
            await adapter.register(" ", "ID_1"),
            await adapter.unregister(" "),
            adapter.remove(""),
            adapter.status(" "),
        ]
        for result in responses:
            assert result["success"] is False
            assert result["error_type"] == "ValueError"
            assert "cannot be empty" in result["error"]
