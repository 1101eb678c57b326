"""Unit tests for document traversal.

These tests make sure every schema-bearing location of an operation is
visited, including callbacks, and that malformed sub-structures are
skipped instead of failing the pass.
"""

import pytest

from openapi_deref import DiagnosticKind, DocumentWalker, resolve_document

pytestmark = pytest.mark.unit


def test_resolve_document_removes_all_references(petstore, settings, refs_of):
    report = resolve_document(petstore, settings)

    assert refs_of(petstore["paths"]) == []
    assert report.paths == 1
    # Two parameters, two responses, one request body and one callback body
    assert report.schemas_resolved == 6
    assert report.complete


def test_parameters_are_resolved(petstore, settings):
    resolve_document(petstore, settings)

    parameters = petstore["paths"]["/pets"]["get"]["parameters"]
    assert parameters[0]["schema"]["properties"]["name"] == {"type": "string"}
    content_schema = parameters[1]["content"]["application/json"]["schema"]
    assert "allOf" not in content_schema
    assert list(content_schema["properties"]) == ["name", "tag", "indoor"]


def test_request_body_and_responses_are_resolved(petstore, settings):
    resolve_document(petstore, settings)

    post = petstore["paths"]["/pets"]["post"]
    body = post["requestBody"]["content"]["application/json"]["schema"]
    assert body["required"] == ["name"]
    assert body["x-kind"] == "cat"

    responses = petstore["paths"]["/pets"]["get"]["responses"]
    listing = responses["200"]["content"]["application/json"]["schema"]
    assert listing["type"] == "array"
    assert listing["items"]["properties"]["tag"] == {"type": "string"}
    error = responses["default"]["content"]["application/json"]["schema"]
    assert list(error["properties"]) == ["code", "message"]


def test_callbacks_are_resolved_recursively(petstore, settings):
    resolve_document(petstore, settings)

    callback = petstore["paths"]["/pets"]["post"]["callbacks"]["onAdopted"]
    operation = callback["{$request.body#/callbackUrl}"]["post"]
    schema = operation["requestBody"]["content"]["application/json"]["schema"]
    assert schema["type"] == "object"
    assert "name" in schema["properties"]


def test_nested_callbacks_are_resolved(pet_registry, settings, refs_of):
    inner = {
        "post": {
            "requestBody": {
                "content": {
                    "application/json": {"schema": {"$ref": "#/components/schemas/Error"}}
                }
            }
        }
    }
    document = {
        "paths": {
            "/hooks": {
                "put": {
                    "callbacks": {
                        "outer": {
                            "{$url}": {
                                "post": {"callbacks": {"inner": {"{$url}/inner": inner}}}
                            }
                        }
                    }
                }
            }
        },
        "components": {"schemas": pet_registry},
    }

    report = resolve_document(document, settings)

    assert refs_of(document["paths"]) == []
    assert report.schemas_resolved == 1


def test_resolve_path_directly(pet_registry, settings):
    path_item = {
        "delete": {
            "responses": {
                "404": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Error"}
                        }
                    }
                }
            }
        }
    }
    walker = DocumentWalker(pet_registry, settings)

    walker.resolve_path(path_item)

    schema = path_item["delete"]["responses"]["404"]["content"]["application/json"]["schema"]
    assert schema is pet_registry["Error"]
    assert walker.schemas_resolved == 1


def test_path_level_keys_are_not_operations(pet_registry, settings):
    path_item = {
        "summary": "not an operation",
        "parameters": [{"name": "id", "in": "path", "schema": {"$ref": "#/components/schemas/Pet"}}],
    }
    walker = DocumentWalker(pet_registry, settings)

    walker.resolve_path(path_item)

    assert path_item["parameters"][0]["schema"] == {"$ref": "#/components/schemas/Pet"}
    assert walker.schemas_resolved == 0


def test_malformed_structures_are_skipped(settings):
    document = {
        "paths": {
            "/none": None,
            "/odd": {
                "get": "not an operation",
                "post": {
                    "parameters": "bad",
                    "requestBody": {"content": None},
                    "callbacks": {"cb": None, "other": {"{$url}": "bad"}},
                    "responses": {"200": None, "201": {"content": {"text/plain": None}}},
                },
                "put": {
                    "parameters": [None, {"name": "x", "in": "query"}],
                    "responses": {"204": {"description": "empty"}},
                },
            },
        },
        "components": {"schemas": {}},
    }

    report = resolve_document(document, settings)

    assert report.paths == 1
    assert report.schemas_resolved == 0
    assert report.diagnostics == []


def test_document_without_paths(settings):
    report = resolve_document({"openapi": "3.0.0"}, settings)

    assert report.paths == 0
    assert report.schemas_resolved == 0


def test_document_without_registry_reports_unresolved(settings):
    document = {
        "paths": {
            "/pets": {
                "get": {
                    "responses": {
                        "200": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Pet"}
                                }
                            }
                        }
                    }
                }
            }
        }
    }

    report = resolve_document(document, settings)

    assert not report.complete
    assert report.unresolved_names() == ["Pet"]
    assert report.count_by_kind() == {"unresolved_reference": 1}
    schema = document["paths"]["/pets"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/Pet"}


def test_each_call_uses_a_fresh_cache(pet_registry, settings):
    def document():
        return {
            "paths": {
                "/cats": {
                    "get": {
                        "parameters": [
                            {"name": "c", "in": "query", "schema": {"$ref": "#/components/schemas/Cat"}}
                        ]
                    }
                }
            },
            "components": {"schemas": pet_registry},
        }

    first, second = document(), document()
    resolve_document(first, settings)
    resolve_document(second, settings)

    first_schema = first["paths"]["/cats"]["get"]["parameters"][0]["schema"]
    second_schema = second["paths"]["/cats"]["get"]["parameters"][0]["schema"]
    assert first_schema == second_schema
    assert first_schema is not second_schema


def test_scalar_parameter_schema_reports_no_type_match(settings):
    document = {
        "paths": {
            "/items": {
                "get": {"parameters": [{"name": "limit", "in": "query", "schema": {"type": "integer"}}]}
            }
        },
        "components": {"schemas": {"Unused": {"type": "string"}}},
    }

    report = resolve_document(document, settings)

    assert [d.kind for d in report.diagnostics] == [DiagnosticKind.NO_TYPE_MATCH]
    assert document["paths"]["/items"]["get"]["parameters"][0]["schema"] == {"type": "integer"}


def test_alias_reached_after_its_cycle_closes_is_flattened(settings, refs_of):
    def content(name):
        return {
            "content": {
                "application/json": {"schema": {"$ref": f"#/components/schemas/{name}"}}
            }
        }

    document = {
        "paths": {
            "/loops": {
                "get": {"responses": {"200": content("A"), "201": content("C")}}
            }
        },
        "components": {
            "schemas": {
                "A": {
                    "allOf": [
                        {
                            "type": "object",
                            "properties": {"c": {"$ref": "#/components/schemas/C"}},
                        }
                    ]
                },
                "C": {"$ref": "#/components/schemas/A"},
            }
        },
    }

    resolve_document(document, settings)

    responses = document["paths"]["/loops"]["get"]["responses"]
    for code in ("200", "201"):
        schema = responses[code]["content"]["application/json"]["schema"]
        assert "allOf" not in schema
        assert schema["properties"]["c"] == {"type": "object"}
    assert refs_of(document["paths"]) == []
