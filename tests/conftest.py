"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path

from token_translator.storage import ProjectStore
from token_translator.models import Project


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def az_tree():
    """Azerbaijani token export."""
    return {
        "common": {
            "$extensions": {"com.figma": {"hiddenFromPublishing": True}},
            "buttons": {
                "save": {
                    "$type": "string",
                    "$value": "Yadda saxla",
                    "$extensions": {"com.figma": {"variableId": "VariableID:1:1"}}
                },
                "cancel": {"$type": "string", "$value": "Ləğv et"}
            }
        },
        "home": {
            "title": {"$type": "string", "$value": "Ana səhifə"}
        }
    }


@pytest.fixture
def en_tree():
    """English token export."""
    return {
        "common": {
            "buttons": {
                "save": {
                    "$type": "string",
                    "$value": "Save",
                    "$extensions": {"com.figma": {"variableId": "VariableID:9:9"}}
                },
                "cancel": {"$type": "string", "$value": "Cancel"},
                "close": {"$type": "string", "$value": "Cancel"}
            }
        },
        "home": {
            "title": {"$type": "string", "$value": "Home"},
            "Sub Title": {"$type": "string", "$value": "Welcome"}
        }
    }


@pytest.fixture
def ru_tree():
    """Russian token export."""
    return {
        "common": {
            "$extensions": {"com.figma": {"scopes": ["TEXT_CONTENT"]}},
            "buttons": {
                "save": {"$type": "string", "$value": "Сохранить"}
            }
        }
    }


@pytest.fixture
def documents(az_tree, en_tree, ru_tree):
    """The three exports as JSON text."""
    return {
        "az": json.dumps(az_tree, ensure_ascii=False),
        "en": json.dumps(en_tree, ensure_ascii=False),
        "ru": json.dumps(ru_tree, ensure_ascii=False),
    }


@pytest.fixture
def memory_store():
    """A project store that is never written to disk."""
    return ProjectStore(Project(name="Test project"))


@pytest.fixture
def file_store(temp_dir):
    """A project store backed by a file in the temporary directory."""
    return ProjectStore.create(temp_dir / "project.json", "Test project")
