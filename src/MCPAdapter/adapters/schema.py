# schema.py
import logging
import re
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, create_model

from MCPAdapter.core.errors import SchemaConversionError


class EmptyArgs(BaseModel):
    """Arguments of a tool that declares no input schema."""


class PermissiveArgs(BaseModel):
    """Fallback arguments model: accepts any input mapping."""

    model_config = ConfigDict(extra="allow")


_PRIMITIVES = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "null": type(None),
}

# names that cannot be used as-is for a field; such properties get an alias
_RESERVED_NAMES = frozenset(dir(BaseModel))


def schema_to_model(schema: Optional[Dict[str, Any]], model_name: str = "ToolArgs") -> Type[BaseModel]:
    """
    Turn a JSON schema describing tool arguments into a pydantic model class.

    Never raises: a schema that cannot be converted is logged and replaced
    by a subclass of ``PermissiveArgs``.

    Parameters
    ----------
    schema : dict or None
        JSON schema of the tool input; ``None`` means the tool takes no
        arguments.
    model_name : str
        Name given to the generated model class.

    Returns
    -------
    Type[BaseModel]
    """
    if schema is None:
        return create_model(model_name, __base__=EmptyArgs)

    try:
        model = _SchemaConverter(schema).model(schema, model_name)
        model.model_json_schema()
        return model
    except Exception as e:
        logging.warning(f"Failed to convert JSON schema to pydantic model: {e}")
        return create_model(model_name, __base__=PermissiveArgs)


class _SchemaConverter:
    """Walks one JSON schema; ``$ref`` pointers resolve against ``root``."""

    def __init__(self, root: Any):
        self.root = root
        self._resolving = set()

    # --------------------------
    # Objects
    # --------------------------

    def model(self, schema: Any, name: str) -> Type[BaseModel]:
        if not isinstance(schema, dict):
            raise SchemaConversionError(f"Schema must be an object, got {type(schema).__name__}")
        if "$ref" in schema:
            schema = self._lookup(schema["$ref"])
        schema = self._merge_all_of(schema)

        declared = schema.get("type", "object")
        if declared != "object":
            raise SchemaConversionError(f"Tool input schema must be of type 'object', got {declared!r}")
        return self._build_model(schema, name)

    def _build_model(self, schema: Dict[str, Any], name: str) -> Type[BaseModel]:
        properties = schema.get("properties") or {}
        required = schema.get("required") or []
        if not isinstance(properties, dict):
            raise SchemaConversionError("'properties' must be an object")
        if not isinstance(required, list):
            raise SchemaConversionError("'required' must be an array")

        fields = {}
        for prop, prop_schema in properties.items():
            field_name = self._field_name(prop, fields)
            alias = prop if field_name != prop else None
            annotation = self.annotation(prop_schema, f"{name}_{prop}")
            description = prop_schema.get("description") if isinstance(prop_schema, dict) else None

            if prop in required:
                fields[field_name] = (annotation, Field(..., alias=alias, description=description))
            else:
                default = prop_schema.get("default") if isinstance(prop_schema, dict) else None
                fields[field_name] = (Optional[annotation], Field(default, alias=alias, description=description))

        config = ConfigDict(extra=self._extra(schema), protected_namespaces=())
        return create_model(name, __config__=config, **fields)

    @staticmethod
    def _field_name(prop: Any, taken: Dict[str, Any]) -> str:
        if not isinstance(prop, str) or not prop:
            raise SchemaConversionError(f"Invalid property name: {prop!r}")
        if prop.isidentifier() and not prop.startswith("_") and prop not in _RESERVED_NAMES and prop not in taken:
            return prop

        base = re.sub(r"\W", "_", prop).strip("_") or "field"
        if base[0].isdigit():
            base = f"field_{base}"
        candidate = f"{base}_"
        suffix = 1
        while candidate in taken or candidate in _RESERVED_NAMES:
            candidate = f"{base}_{suffix}"
            suffix += 1
        return candidate

    @staticmethod
    def _extra(schema: Dict[str, Any]) -> str:
        additional = schema.get("additionalProperties")
        if additional is False:
            return "forbid"
        if additional is True or isinstance(additional, dict):
            return "allow"
        return "ignore"

    def _merge_all_of(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        parts = schema.get("allOf")
        if parts is None:
            return schema
        if not isinstance(parts, list):
            raise SchemaConversionError("'allOf' must be an array")

        merged = {k: v for k, v in schema.items() if k != "allOf"}
        properties = dict(merged.get("properties") or {})
        required = list(merged.get("required") or [])
        for part in parts:
            if isinstance(part, dict) and "$ref" in part:
                part = self._lookup(part["$ref"])
            if not isinstance(part, dict):
                raise SchemaConversionError("'allOf' entries must be objects")
            part = self._merge_all_of(part)
            if part.get("type", "object") != "object":
                raise SchemaConversionError("Only object schemas can be combined with 'allOf'")
            properties.update(part.get("properties") or {})
            required.extend(part.get("required") or [])

        merged.update(type="object", properties=properties, required=required)
        return merged

    # --------------------------
    # Field annotations
    # --------------------------

    def annotation(self, schema: Any, name: str) -> Any:
        if schema is True:
            return Any
        if not isinstance(schema, dict):
            raise SchemaConversionError(f"Invalid property schema: {schema!r}")

        if "$ref" in schema:
            return self._resolve(schema["$ref"])
        if "const" in schema:
            return Literal[schema["const"]]
        if "enum" in schema:
            values = schema["enum"]
            if not isinstance(values, list) or not values:
                raise SchemaConversionError("'enum' must be a non-empty array")
            return Literal[tuple(values)]
        for key in ("anyOf", "oneOf"):
            if key in schema:
                options = schema[key]
                if not isinstance(options, list) or not options:
                    raise SchemaConversionError(f"'{key}' must be a non-empty array")
                return self._union(
                    [self.annotation(option, f"{name}_{i}") for i, option in enumerate(options)]
                )
        if "allOf" in schema:
            return self._typed(self._merge_all_of(schema), "object", name)

        declared = schema.get("type")
        if declared is None:
            if "properties" in schema:
                declared = "object"
            elif "items" in schema:
                declared = "array"
            else:
                return Any

        if isinstance(declared, list):
            return self._union([self._typed(schema, t, name) for t in declared])
        return self._typed(schema, declared, name)

    def _typed(self, schema: Dict[str, Any], declared: Any, name: str) -> Any:
        if declared in _PRIMITIVES:
            return _PRIMITIVES[declared]

        if declared == "array":
            items = schema.get("items")
            if items is None:
                return List[Any]
            if isinstance(items, list):
                # tuple validation; accept any of the listed item schemas
                return List[self._union(
                    [self.annotation(item, f"{name}_item{i}") for i, item in enumerate(items)]
                )]
            return List[self.annotation(items, f"{name}_item")]

        if declared == "object":
            if schema.get("properties"):
                return self._build_model(schema, name)
            additional = schema.get("additionalProperties")
            if isinstance(additional, dict):
                return Dict[str, self.annotation(additional, f"{name}_value")]
            return Dict[str, Any]

        raise SchemaConversionError(f"Unsupported JSON schema type: {declared!r}")

    @staticmethod
    def _union(types: List[Any]) -> Any:
        unique = []
        for t in types:
            if t not in unique:
                unique.append(t)
        if not unique:
            raise SchemaConversionError("Empty type union")
        if len(unique) == 1:
            return unique[0]
        return Union[tuple(unique)]

    # --------------------------
    # $ref handling
    # --------------------------

    def _lookup(self, ref: Any) -> Any:
        if not isinstance(ref, str) or not ref.startswith("#/"):
            raise SchemaConversionError(f"Only local $ref pointers are supported, got {ref!r}")

        target = self.root
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or part not in target:
                raise SchemaConversionError(f"Unresolvable $ref: {ref}")
            target = target[part]
        return target

    def _resolve(self, ref: str) -> Any:
        if ref in self._resolving:
            raise SchemaConversionError(f"Recursive $ref is not supported: {ref}")

        self._resolving.add(ref)
        try:
            return self.annotation(self._lookup(ref), ref.rsplit("/", 1)[-1])
        finally:
            self._resolving.discard(ref)
