"""Shared fixtures for racial_scaling tests."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest

from racial_scaling.core import BatchOrchestrator, GenerationContext, TemplateStore
from racial_scaling.core.models import GeneratedVariant
from racial_scaling.core.generator import VariantGenerator
from racial_scaling.settings import AppSettings


@pytest.fixture
def templates() -> TemplateStore:
    """TemplateStore with both default templates loaded."""
    store = TemplateStore()
    store.load_templates()
    return store


@pytest.fixture
def orchestrator(templates: TemplateStore) -> BatchOrchestrator:
    """Orchestrator without Qt event processing between iterations."""
    return BatchOrchestrator(GenerationContext(templates=templates), yield_hook=lambda: None)


@pytest.fixture
def variants(templates: TemplateStore) -> List[GeneratedVariant]:
    """MIN variant at 0.5 and MAX variant at 1.5."""
    generator = VariantGenerator()
    return [
        generator.generate(0.5, templates.meta_template, templates.mod_template, "MIN"),
        generator.generate(1.5, templates.meta_template, templates.mod_template, "MAX"),
    ]


@pytest.fixture
def collection_document() -> Dict[str, Any]:
    return {
        "Version": 2,
        "Id": "0b1e5a8c-1f0e-4b3a-9d57-5c1b0f6a2e11",
        "Name": "Default",
        "Settings": {
            "Some Hair Mod": {"Settings": {}, "Priority": 3, "Enabled": True},
        },
        "Inheritance": [],
    }


@pytest.fixture
def sort_order_document() -> Dict[str, Any]:
    return {
        "Data": {
            "Some Hair Mod": "Hair/Some Hair Mod",
            "[0900] Height MIN - 0.9x": "Old/[0900] Height MIN - 0.9x",
        },
        "EmptyFolders": [],
    }


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    """AppSettings stored in a throwaway INI file."""
    return AppSettings(file_path=tmp_path / "settings.ini")


@pytest.fixture
def restore_root_handlers() -> Iterator[None]:
    """Drop handlers installed by setup_logging after the test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
