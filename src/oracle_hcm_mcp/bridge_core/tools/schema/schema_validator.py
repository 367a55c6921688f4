from typing import Any, Dict, FrozenSet, Optional

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Checks and cleans the JSON schemas generated for tool inputs before they
    are advertised through ``tools/list``.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Reject schemas whose local ``$ref`` graph contains a cycle; those cannot
        be inlined into a flat input schema.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs") or schema.get("definitions") or {}

        def find_cycle(node: Any, seen: FrozenSet[str]) -> Optional[str]:
            if isinstance(node, list):
                for item in node:
                    cycle = find_cycle(item, seen)
                    if cycle:
                        return cycle
                return None
            if not isinstance(node, dict):
                return None

            ref = node.get("$ref")
            if isinstance(ref, str):
                if ref in seen:
                    return ref
                target = defs.get(ref.rsplit("/", 1)[-1]) if ref.startswith("#/") else None
                return find_cycle(target, seen | {ref}) if target is not None else None

            for value in node.values():
                cycle = find_cycle(value, seen)
                if cycle:
                    return cycle
            return None

        cycle = find_cycle(schema, frozenset())
        if cycle:
            msg = f"Recursive structure detected: {cycle}. Tool inputs must be flat or finitely nested."
            logger.error(msg)
            raise ToolValidationError(msg)

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Produce a compact input schema for MCP clients.

        Drops metadata keys (``$defs``, ``$schema``, ``$id``, ``title``), collapses
        ``Optional[X]`` (``anyOf`` of X and null) into X with a nullable ``type``,
        and closes objects with ``additionalProperties: false`` unless they say otherwise.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema. The input is not modified.
        """
        if not isinstance(schema, dict):
            return schema

        cleaned = {key: value for key, value in schema.items() if key not in _METADATA_KEYS}

        variants = cleaned.get("anyOf")
        if isinstance(variants, list):
            non_null = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                collapsed = {k: v for k, v in cleaned.items() if k != "anyOf"}
                collapsed.update({k: v for k, v in non_null[0].items() if k not in collapsed})
                # explicit nulls stay valid for optional scalars
                if len(non_null) < len(variants) and isinstance(collapsed.get("type"), str):
                    collapsed["type"] = [collapsed["type"], "null"]
                return SchemaValidator.sanitize_schema(collapsed)

        if cleaned.get("type") == "object":
            cleaned.setdefault("additionalProperties", False)

        for key, value in cleaned.items():
            if isinstance(value, dict):
                cleaned[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                cleaned[key] = [SchemaValidator.sanitize_schema(item) for item in value]

        return cleaned
