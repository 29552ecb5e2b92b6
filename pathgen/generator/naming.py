"""Identifier helpers for generated TypeScript code."""
import re

SEPARATOR_PATTERN = re.compile(r"[_\-\s]+(.)")
NON_ALNUM_PATTERN = re.compile(r"[^a-zA-Z0-9]")
CAMEL_CASE_PATTERN = re.compile(r"[a-z][a-zA-Z0-9]*")
CAMEL_BOUNDARY_PATTERN = re.compile(r"([a-z])([A-Z])")
PATH_PARAM_PATTERN = re.compile(r"\{([^}]+)\}")
JS_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def _join_separated(value: str) -> str:
    return SEPARATOR_PATTERN.sub(lambda m: m.group(1).upper(), value)


def _safe(identifier: str) -> str:
    """Prefix identifiers that would start with a digit (or be empty)."""
    if not identifier or identifier[0].isdigit():
        return f"_{identifier}"
    return identifier


def to_valid_identifier(value: str) -> str:
    """Convert a group name to a lower camelCase identifier ("User Auth" -> "userAuth")."""
    result = _join_separated(value.lower())
    result = result[:1].lower() + result[1:]
    return _safe(NON_ALNUM_PATTERN.sub("", result))


def to_pascal_case(value: str) -> str:
    """Convert to PascalCase ("user-auth" -> "UserAuth")."""
    result = _join_separated(value.lower())
    result = result[:1].upper() + result[1:]
    return _safe(NON_ALNUM_PATTERN.sub("", result))


def to_camel_case(value: str) -> str:
    """Convert to camelCase, keeping names that already are camelCase."""
    if CAMEL_CASE_PATTERN.fullmatch(value):
        return value
    result = _join_separated(value)
    result = result[:1].lower() + result[1:]
    return _safe(NON_ALNUM_PATTERN.sub("", result))


def to_upper_snake(value: str) -> str:
    """Convert to UPPER_SNAKE_CASE, splitting camelCase words ("userId" -> "USER_ID")."""
    result = CAMEL_BOUNDARY_PATTERN.sub(r"\1_\2", value)
    result = SEPARATOR_PATTERN.sub(r"_\1", result)
    result = re.sub(r"[^a-zA-Z0-9_]", "", result)
    return _safe(result.upper())


def path_to_constant_name(path: str, group: str) -> str:
    """
    Build the constant name for a path within a group

    "/users/{id}/posts" in group "users" -> "USERS_ID_POSTS"
    """
    group_name = to_valid_identifier(group).upper()

    processed = path[1:] if path.startswith("/") else path

    group_prefix = group.lower()
    if processed.startswith(group_prefix + "/") or processed.startswith(group_prefix + "-"):
        processed = processed[len(group_prefix) + 1:]

    processed = PATH_PARAM_PATTERN.sub(r"\1", processed)
    processed = NON_ALNUM_PATTERN.sub("_", processed)
    parts = [part.upper() for part in processed.split("_") if part]

    return f"{group_name}_{'_'.join(parts) or 'ROOT'}"


def is_js_identifier(value: str) -> bool:
    """Check if value can be used as an unquoted object key."""
    return bool(JS_IDENTIFIER_PATTERN.fullmatch(value))
