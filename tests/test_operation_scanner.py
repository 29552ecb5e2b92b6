"""
Unit tests for the operation scanner and path grouper

Tests:
- Response and request field aggregation
- Tag group fan-out and default group
- Deterministic, sorted output
- Edge cases: missing paths/content/schema, unsupported methods
"""

import copy

import pytest

from pathgen.introspection.operation_scanner import (
    OperationScanner,
    extract_request_field_paths,
    extract_response_field_paths,
    iter_operations,
    operation_groups,
)
from pathgen.introspection.path_grouper import extract_group_paths
from pathgen.schema.models import ScanLocation


def response_operation(schema, tags=None):
    """Operation returning schema as JSON"""
    operation = {
        "responses": {"200": {"description": "OK", "content": {"application/json": {"schema": schema}}}}
    }
    if tags is not None:
        operation["tags"] = tags
    return operation


EMAIL_SCHEMA = {"type": "object", "properties": {"email": {"type": "string"}}}


# ============================================================================
# TEST: OperationScanner - responses
# ============================================================================


class TestResponseScan:
    """Tests for response field scanning"""

    def test_single_path(self):
        """Test the basic example: one tagged path returning email"""
        document = {"paths": {"/user/{id}": {"get": response_operation(EMAIL_SCHEMA, ["users"])}}}

        result = extract_response_field_paths(document, ["email"])

        assert result.field_paths == {"email": ["/user/{id}"]}
        assert result.group_field_paths == {"email": {"users": ["/user/{id}"]}}

    def test_multi_tag_fan_out(self):
        """Test an operation with several tags contributes to every tag"""
        document = {"paths": {"/login": {"post": response_operation(EMAIL_SCHEMA, ["auth", "users"])}}}

        result = extract_response_field_paths(document, ["email"])

        assert result.group_field_paths["email"]["auth"] == ["/login"]
        assert result.group_field_paths["email"]["users"] == ["/login"]

    def test_untagged_operation_uses_default_group(self):
        """Test untagged and empty-tag operations go to the default group"""
        document = {
            "paths": {
                "/a": {"get": response_operation(EMAIL_SCHEMA)},
                "/b": {"get": response_operation(EMAIL_SCHEMA, [])},
            }
        }

        result = extract_response_field_paths(document, ["email"])

        assert result.group_field_paths["email"] == {"default": ["/a", "/b"]}

    def test_custom_default_group(self):
        """Test the default group name is configurable per call"""
        document = {"paths": {"/a": {"get": response_operation(EMAIL_SCHEMA)}}}

        result = OperationScanner(document, default_group="misc").scan_responses(["email"])

        assert result.group_field_paths["email"] == {"misc": ["/a"]}

    def test_all_status_codes_and_media_types(self):
        """Test every response code and media type is scanned"""
        document = {
            "paths": {
                "/a": {
                    "get": {
                        "responses": {
                            "200": {"content": {"text/plain": {"schema": {"type": "string"}}}},
                            "400": {
                                "content": {
                                    "application/json": {"schema": {"type": "string"}},
                                    "application/problem+json": {"schema": {"properties": {"token": {}}}},
                                }
                            },
                        }
                    }
                }
            }
        }

        result = extract_response_field_paths(document, ["token"])

        assert result.field_paths == {"token": ["/a"]}

    def test_fixture_spec(self, sample_openapi_spec):
        """Test scanning with $ref schemas and $ref response objects"""
        result = extract_response_field_paths(sample_openapi_spec, ["email", "token", "missing"])

        assert result.field_paths == {
            "email": ["/sign-in/email", "/user/{id}"],
            "token": ["/sign-in/email"],
            "missing": [],
        }
        assert result.group_field_paths["email"] == {
            "auth": ["/sign-in/email"],
            "users": ["/user/{id}"],
        }
        assert result.group_field_paths["missing"] == {}

    def test_dereferenced_flag_disables_ref_resolution(self, sample_openapi_spec):
        """Test $ref nodes are not followed for dereferenced documents"""
        scanner = OperationScanner(sample_openapi_spec, dereferenced=True)

        result = scanner.scan_responses(["email"])

        assert result.field_paths == {"email": []}

    def test_reporter_receives_context(self, sample_openapi_spec):
        """Test findings carry path, method and location"""
        findings = []
        scanner = OperationScanner(sample_openapi_spec, reporter=findings.append)

        scanner.scan_responses(["token"])

        assert [(f.path, f.method, f.field, f.location) for f in findings] == [
            ("/sign-in/email", "post", "token", ScanLocation.RESPONSE)
        ]


# ============================================================================
# TEST: OperationScanner - requests
# ============================================================================


class TestRequestScan:
    """Tests for request body scanning"""

    def test_request_fields(self, sample_openapi_spec):
        """Test request bodies are scanned independently of responses"""
        result = extract_request_field_paths(sample_openapi_spec, ["password", "token"])

        assert result.field_paths == {"password": ["/sign-in/email"], "token": []}
        assert result.group_field_paths == {"password": {"auth": ["/sign-in/email"]}, "token": {}}

    def test_request_body_ref(self):
        """Test requestBody given as a $ref to components"""
        document = {
            "components": {
                "requestBodies": {
                    "Login": {"content": {"application/json": {"schema": {"properties": {"password": {}}}}}}
                }
            },
            "paths": {"/login": {"post": {"requestBody": {"$ref": "#/components/requestBodies/Login"}}}},
        }

        result = extract_request_field_paths(document, ["password"])

        assert result.field_paths == {"password": ["/login"]}

    def test_missing_content_or_schema(self):
        """Test bodies without content or schema contribute nothing"""
        document = {
            "paths": {
                "/a": {"post": {"requestBody": {"description": "none"}}},
                "/b": {"post": {"requestBody": {"content": {"application/json": {}}}}},
                "/c": {"post": {"requestBody": {"content": {"application/json": {"schema": None}}}}},
            }
        }

        assert extract_request_field_paths(document, ["email"]).field_paths == {"email": []}


# ============================================================================
# TEST: OperationScanner - edge cases
# ============================================================================


class TestScannerEdgeCases:
    """Tests for edge cases and determinism"""

    @pytest.mark.parametrize("document", [{}, {"paths": None}, {"paths": []}, {"openapi": "3.0.0"}])
    def test_no_paths(self, document):
        """Test documents without paths yield empty lists for every field"""
        result = extract_response_field_paths(document, ["email", "name"])

        assert result.field_paths == {"email": [], "name": []}
        assert result.group_field_paths == {"email": {}, "name": {}}

    def test_unsupported_methods_ignored(self):
        """Test only the fixed set of HTTP methods is scanned"""
        document = {
            "paths": {
                "/a": {
                    "trace": response_operation(EMAIL_SCHEMA),
                    "x-internal": response_operation(EMAIL_SCHEMA),
                    "parameters": [],
                }
            }
        }

        assert extract_response_field_paths(document, ["email"]).field_paths == {"email": []}

    def test_malformed_entries_skipped(self):
        """Test malformed path items, operations and responses do not raise"""
        document = {
            "paths": {
                "/a": None,
                "/b": {"get": "nope"},
                "/c": {"get": {"responses": ["200"]}},
                "/d": {"get": {"responses": {"200": None, "201": {"content": []}}}},
            }
        }

        assert extract_response_field_paths(document, ["email"]).field_paths == {"email": []}

    def test_sorted_and_deterministic(self):
        """Test output does not depend on document iteration order"""
        paths = {
            "/zeta": {"get": response_operation(EMAIL_SCHEMA, ["b", "a"])},
            "/alpha": {"post": response_operation(EMAIL_SCHEMA, ["a"])},
            "/mid": {"put": response_operation(EMAIL_SCHEMA, ["b"])},
        }
        forward = {"paths": paths}
        backward = {"paths": dict(reversed(list(paths.items())))}

        first = extract_response_field_paths(forward, ["email"]).to_dict()
        second = extract_response_field_paths(backward, ["email"]).to_dict()

        assert first == second
        assert first["fieldPaths"]["email"] == ["/alpha", "/mid", "/zeta"]
        assert list(first["groupFieldPaths"]["email"]) == ["a", "b"]
        assert first["groupFieldPaths"]["email"]["b"] == ["/mid", "/zeta"]

    def test_path_deduplicated_across_methods(self):
        """Test a path found by several operations appears once"""
        document = {
            "paths": {
                "/a": {
                    "get": response_operation(EMAIL_SCHEMA, ["x"]),
                    "post": response_operation(EMAIL_SCHEMA, ["x"]),
                }
            }
        }

        result = extract_response_field_paths(document, ["email"])

        assert result.field_paths == {"email": ["/a"]}
        assert result.group_field_paths == {"email": {"x": ["/a"]}}

    def test_input_not_mutated(self, sample_openapi_spec):
        """Test scanning leaves the document unchanged"""
        before = copy.deepcopy(sample_openapi_spec)

        extract_response_field_paths(sample_openapi_spec, ["email"])
        extract_request_field_paths(sample_openapi_spec, ["email"])

        assert sample_openapi_spec == before

    def test_no_targets(self, sample_openapi_spec):
        """Test an empty field list produces an empty result"""
        result = extract_response_field_paths(sample_openapi_spec, [])
        assert result.is_empty()

    def test_duplicate_targets(self, sample_openapi_spec):
        """Test requested fields are de-duplicated in order"""
        result = extract_response_field_paths(sample_openapi_spec, ["token", "email", "token"])
        assert result.fields == ["token", "email"]

    def test_cyclic_graph(self):
        """Test a cyclic (dereferenced) schema graph terminates"""
        node = {"properties": {"token": {"type": "string"}}}
        node["properties"]["parent"] = node
        document = {"paths": {"/tree": {"get": response_operation(node)}}}

        result = OperationScanner(document, dereferenced=True).scan_responses(["token", "email"])

        assert result.field_paths == {"token": ["/tree"], "email": []}


# ============================================================================
# TEST: helpers
# ============================================================================


class TestOperationHelpers:
    """Tests for operation iteration helpers"""

    def test_iter_operations_order(self):
        """Test operations are yielded in the fixed method order"""
        document = {"paths": {"/a": {"post": {}, "get": {}, "options": {}}}}
        assert [m for _, m, _ in iter_operations(document)] == ["get", "post", "options"]

    def test_operation_groups(self):
        """Test tag extraction"""
        assert operation_groups({"tags": ["a", "b"]}) == ["a", "b"]
        assert operation_groups({"tags": []}) == ["default"]
        assert operation_groups({"tags": "a"}) == ["default"]
        assert operation_groups({}, "misc") == ["misc"]


# ============================================================================
# TEST: extract_group_paths
# ============================================================================


class TestPathGrouper:
    """Tests for grouping paths by tag"""

    def test_default_and_tagged(self):
        """Test untagged paths go to default, tagged ones to their tag"""
        document = {"paths": {"/a": {"get": {}}, "/b": {"get": {"tags": ["b"]}}}}

        assert extract_group_paths(document) == {"default": ["/a"], "b": ["/b"]}

    def test_fixture_spec(self, sample_openapi_spec):
        """Test grouping across methods and multiple tags"""
        assert extract_group_paths(sample_openapi_spec) == {
            "admin": ["/user/{id}"],
            "auth": ["/sign-in/email"],
            "default": ["/ok"],
            "users": ["/user/{id}"],
        }

    def test_path_in_several_groups(self):
        """Test a path joins the groups of all its operations"""
        document = {
            "paths": {
                "/items": {"get": {"tags": ["read"]}, "post": {"tags": ["write"]}, "delete": {}},
            }
        }

        assert extract_group_paths(document) == {
            "default": ["/items"],
            "read": ["/items"],
            "write": ["/items"],
        }

    def test_sorted_paths(self):
        """Test group paths are sorted and de-duplicated"""
        document = {"paths": {"/z": {"get": {"tags": ["t"]}}, "/a": {"get": {"tags": ["t"]}, "put": {"tags": ["t"]}}}}

        assert extract_group_paths(document) == {"t": ["/a", "/z"]}

    def test_custom_default_group(self):
        """Test the default group name is configurable"""
        document = {"paths": {"/a": {"get": {}}}}
        assert extract_group_paths(document, default_group="general") == {"general": ["/a"]}

    @pytest.mark.parametrize("document", [{}, {"paths": {}}, {"paths": None}, None])
    def test_no_paths(self, document):
        """Test documents without paths give an empty mapping"""
        assert extract_group_paths(document) == {}

    def test_ignores_unsupported_methods(self):
        """Test non-HTTP keys on path items are ignored"""
        document = {"paths": {"/a": {"trace": {"tags": ["x"]}, "summary": "A"}}}
        assert extract_group_paths(document) == {}
