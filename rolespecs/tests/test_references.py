from rolespecs.references import definition_name, resolve_reachable, scan_references


def test_scan_empty_values():
    assert scan_references(None) == set()
    assert scan_references({}) == set()
    assert scan_references([]) == set()


def test_scan_nested_refs():
    operation = {
        "parameters": [{"in": "body", "schema": {"$ref": "#/definitions/Input"}}],
        "responses": {
            "200": {"schema": {"type": "array", "items": {"$ref": "#/definitions/Output"}}},
            "400": {"schema": {"allOf": [{"$ref": "#/definitions/Error"}, {"type": "object"}]}},
        },
    }
    assert scan_references(operation) == {"Input", "Output", "Error"}


def test_scan_ignores_ref_like_text():
    schema = {
        "description": "see #/definitions/Foo for details",
        "example": {"link": "#/definitions/Bar"},
        "$ref": "#/definitions/Real",
    }
    assert scan_references(schema) == {"Real"}


def test_scan_ignores_external_and_component_refs():
    schema = {"anyOf": [
        {"$ref": "other.json#/definitions/Foo"},
        {"$ref": "#/components/schemas/Bar"},
        {"$ref": "#/definitions/Baz"},
    ]}
    assert scan_references(schema) == {"Baz"}


def test_definition_name_decodes_pointer_escapes():
    assert definition_name("#/definitions/a~1b~0c") == "a/b~c"
    assert definition_name("#/definitions/") is None
    assert definition_name("#/definitions/Foo/properties") is None


def test_resolve_transitive():
    definitions = {
        "A": {"$ref": "#/definitions/B"},
        "B": {"properties": {"c": {"$ref": "#/definitions/C"}}},
        "C": {"type": "string"},
        "D": {"type": "string"},
    }
    assert resolve_reachable(definitions, {"A"}) == {"A", "B", "C"}


def test_resolve_tolerates_cycles():
    definitions = {
        "Node": {"properties": {"children": {"items": {"$ref": "#/definitions/Node"}},
                                "parent": {"$ref": "#/definitions/Parent"}}},
        "Parent": {"properties": {"node": {"$ref": "#/definitions/Node"}}},
    }
    assert resolve_reachable(definitions, {"Node"}) == {"Node", "Parent"}


def test_resolve_keeps_dangling_names():
    definitions = {"A": {"$ref": "#/definitions/Missing"}}
    assert resolve_reachable(definitions, {"A"}) == {"A", "Missing"}


def test_resolve_empty_seed():
    assert resolve_reachable({"A": {"type": "string"}}, set()) == set()
