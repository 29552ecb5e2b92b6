"""Shared fixtures for path generator tests."""

import pytest


@pytest.fixture
def sample_openapi_spec():
    """Sample OpenAPI 3.0 specification with tags, $refs and open schemas"""
    return {
        "openapi": "3.0.0",
        "info": {"title": "Auth API", "version": "1.0.0"},
        "components": {
            "schemas": {
                "User": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string"},
                        "email": {"type": "string"},
                        "name": {"type": "string"},
                    },
                },
                "Session": {
                    "type": "object",
                    "properties": {
                        "token": {"type": "string"},
                        "user": {"$ref": "#/components/schemas/User"},
                    },
                },
                "Credentials": {
                    "type": "object",
                    "properties": {
                        "email": {"type": "string"},
                        "password": {"type": "string"},
                    },
                },
            },
            "responses": {
                "UserResponse": {
                    "description": "A user",
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/User"}}
                    },
                }
            },
        },
        "paths": {
            "/sign-in/email": {
                "post": {
                    "tags": ["auth"],
                    "requestBody": {
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Credentials"}}
                        }
                    },
                    "responses": {
                        "200": {
                            "description": "Signed in",
                            "content": {
                                "application/json": {"schema": {"$ref": "#/components/schemas/Session"}}
                            },
                        },
                        "401": {"description": "Unauthorized"},
                    },
                }
            },
            "/user/{id}": {
                "get": {
                    "tags": ["users"],
                    "responses": {"200": {"$ref": "#/components/responses/UserResponse"}},
                },
                "delete": {
                    "tags": ["users", "admin"],
                    "responses": {"204": {"description": "Deleted"}},
                },
            },
            "/ok": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "Health",
                            "content": {"text/plain": {"schema": {"type": "string"}}},
                        }
                    }
                }
            },
        },
    }
