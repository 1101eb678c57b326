import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from openapi_deref.config.settings import ResolverSettings, get_settings  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from resolver settings in the surrounding environment."""
    for name in list(os.environ):
        if name.upper().startswith("OPENAPI_DEREF_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default resolver settings, independent of any .env file."""
    return ResolverSettings(_env_file=None)


@pytest.fixture
def pet_registry():
    """A small acyclic registry with a composed definition."""
    return {
        "Pet": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string"},
                "tag": {"type": "string"},
            },
        },
        "Cat": {
            "allOf": [
                {"$ref": "#/components/schemas/Pet"},
                {"type": "object", "properties": {"indoor": {"type": "boolean"}}},
            ],
            "x-kind": "cat",
        },
        "Error": {
            "type": "object",
            "properties": {
                "code": {"type": "integer"},
                "message": {"type": "string"},
            },
        },
    }


@pytest.fixture
def petstore(pet_registry):
    """A document exercising parameters, bodies, responses and callbacks."""
    return {
        "openapi": "3.0.1",
        "info": {"title": "Petstore", "version": "1.0"},
        "paths": {
            "/pets": {
                "get": {
                    "parameters": [
                        {
                            "name": "filter",
                            "in": "query",
                            "schema": {"$ref": "#/components/schemas/Pet"},
                        },
                        {
                            "name": "q",
                            "in": "query",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Cat"}
                                }
                            },
                        },
                    ],
                    "responses": {
                        "200": {
                            "description": "ok",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "array",
                                        "items": {"$ref": "#/components/schemas/Pet"},
                                    }
                                }
                            },
                        },
                        "default": {
                            "description": "error",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Error"}
                                }
                            },
                        },
                    },
                },
                "post": {
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Cat"}
                            }
                        }
                    },
                    "callbacks": {
                        "onAdopted": {
                            "{$request.body#/callbackUrl}": {
                                "post": {
                                    "requestBody": {
                                        "content": {
                                            "application/json": {
                                                "schema": {
                                                    "$ref": "#/components/schemas/Pet"
                                                }
                                            }
                                        }
                                    },
                                    "responses": {"200": {"description": "ok"}},
                                }
                            }
                        }
                    },
                    "responses": {"201": {"description": "created"}},
                },
            }
        },
        "components": {"schemas": pet_registry},
    }


def collect_refs(node):
    """Return every $ref string reachable from a JSON-like node."""
    found = []
    if isinstance(node, dict):
        if isinstance(node.get("$ref"), str):
            found.append(node["$ref"])
        for value in node.values():
            found.extend(collect_refs(value))
    elif isinstance(node, list):
        for value in node:
            found.extend(collect_refs(value))
    return found


@pytest.fixture
def refs_of():
    """Expose :func:`collect_refs` to tests."""
    return collect_refs
