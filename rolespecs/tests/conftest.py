import pytest

from loaders.document_loader import MappingDocumentLoader


@pytest.fixture
def svc_a():
    return {
        "swagger": "2.0",
        "basePath": "/a",
        "info": {"title": "Service A", "version": "1.2.0"},
        "paths": {
            "/items": {
                "get": {
                    "operationId": "opA",
                    "tags": ["t1"],
                    "responses": {"200": {"description": "ok", "schema": {"$ref": "#/definitions/Foo"}}},
                },
            },
            "/items/{id}": {
                "delete": {
                    "operationId": "deleteItem",
                    "tags": ["t1", "admin"],
                    "x-dependency-operation-ids": ["opA"],
                    "responses": {"204": {"description": "deleted"}},
                },
            },
        },
        "definitions": {
            "Foo": {"type": "object", "properties": {"bar": {"$ref": "#/definitions/Bar"}}},
            "Bar": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Unused": {"type": "string"},
        },
    }


@pytest.fixture
def svc_b():
    return {
        "swagger": "2.0",
        "basePath": "/b",
        "info": {"title": "Service B", "version": "0.1.5"},
        "paths": {
            "/orders": {
                "post": {
                    "operationId": "opB",
                    "tags": ["t2"],
                    "x-dependency-operation-ids": ["deleteItem"],
                    "responses": {"201": {"description": "created"}},
                },
                "get": {
                    "summary": "no operation id",
                    "tags": ["hidden"],
                    "responses": {"200": {"description": "ok"}},
                },
            },
        },
        "definitions": {
            "Order": {"type": "object"},
        },
    }


@pytest.fixture
def loader(svc_a, svc_b):
    return MappingDocumentLoader({"services/a.json": svc_a, "services/b.json": svc_b})


@pytest.fixture
def config():
    return {
        "swagger": {"spec": {"swagger": "2.0", "info": {"title": "API", "version": "0.0.0"}}},
        "services": [{"spec": "services/a.json"}, {"spec": "services/b.json"}],
        "features": {
            "f1": {"operationIds": ["opA"]},
            "f2": {"operationIds": ["opB", "deleteItem"]},
        },
        "roles": {
            "viewer": ["f1"],
            "admin": ["f1", "f2"],
        },
    }
