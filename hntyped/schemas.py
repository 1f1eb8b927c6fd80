"""Composable schema descriptors for untrusted JSON payloads.

A schema walks a value once and reports every violated constraint, not just
the first. ``validate`` returns the value unchanged or raises
``ValidationFailure``; nothing is coerced. Each schema can also export an
equivalent JSON Schema document via ``json_schema()``.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from jsonschema import Draft202012Validator

from .errors import Issue, PathElem, TagDispatchFailure, ValidationFailure

Path = Tuple[PathElem, ...]

_TYPES = Draft202012Validator.TYPE_CHECKER
# integer before number so that 3 reports as "integer" and 3.5 as "number"
_JSON_KINDS = ("null", "boolean", "integer", "number", "string", "array", "object")
PRIMITIVE_KINDS = ("number", "integer", "string", "boolean")


def json_kind(value: Any) -> str:
    for kind in _JSON_KINDS:
        if _TYPES.is_type(value, kind):
            return kind
    return type(value).__name__


class Schema:
    def collect(self, value: Any, path: Path, issues: List[Issue]) -> None:
        """Append every issue found in ``value`` (located at ``path``) to ``issues``."""
        raise NotImplementedError

    def json_schema(self) -> Dict[str, Any]:
        raise NotImplementedError

    def iter_issues(self, value: Any) -> Iterator[Issue]:
        issues: List[Issue] = []
        self.collect(value, (), issues)
        return iter(issues)

    def validate(self, value: Any) -> Any:
        issues: List[Issue] = []
        self.collect(value, (), issues)
        if issues:
            raise ValidationFailure(issues)
        return value

    def is_valid(self, value: Any) -> bool:
        return next(self.iter_issues(value), None) is None


@dataclass(frozen=True)
class Primitive(Schema):
    kind: str
    min_length: Optional[int] = None
    minimum: Optional[float] = None

    def __post_init__(self):
        if self.kind not in PRIMITIVE_KINDS:
            raise ValueError(f"unknown primitive kind {self.kind!r}")
        if self.min_length is not None and self.kind != "string":
            raise ValueError(f"min_length does not apply to {self.kind}")
        if self.minimum is not None and self.kind not in ("number", "integer"):
            raise ValueError(f"minimum does not apply to {self.kind}")

    def collect(self, value, path, issues):
        if not _TYPES.is_type(value, self.kind):
            issues.append(Issue(path, self.kind, json_kind(value)))
            return
        if self.min_length is not None and len(value) < self.min_length:
            expected = "non-empty string" if self.min_length == 1 else f"length >= {self.min_length}"
            issues.append(Issue(path, expected, value))
        if self.minimum is not None and value < self.minimum:
            issues.append(Issue(path, f">= {self.minimum}", value))

    def json_schema(self):
        doc: Dict[str, Any] = {"type": self.kind}
        if self.min_length is not None:
            doc["minLength"] = self.min_length
        if self.minimum is not None:
            doc["minimum"] = self.minimum
        return doc


@dataclass(frozen=True)
class LiteralTag(Schema):
    value: str

    def collect(self, value, path, issues):
        if not (isinstance(value, str) and value == self.value):
            issues.append(Issue(path, f"literal {self.value}", value))

    def json_schema(self):
        return {"const": self.value}


@dataclass(frozen=True)
class ArrayOf(Schema):
    items: Schema
    min_items: int = 0

    def collect(self, value, path, issues):
        if not _TYPES.is_type(value, "array"):
            issues.append(Issue(path, "array", json_kind(value)))
            return
        if len(value) < self.min_items:
            expected = "non-empty array" if self.min_items == 1 else f"at least {self.min_items} items"
            issues.append(Issue(path, expected, len(value)))
        for index, element in enumerate(value):
            self.items.collect(element, path + (index,), issues)

    def json_schema(self):
        doc = {"type": "array", "items": self.items.json_schema()}
        if self.min_items:
            doc["minItems"] = self.min_items
        return doc


@dataclass(frozen=True)
class FieldSpec:
    schema: Schema
    required: bool = True


def optional(schema: Schema) -> FieldSpec:
    """Mark an object field that may be absent; when present it must satisfy ``schema``."""
    return FieldSpec(schema, required=False)


class ObjectWithFields(Schema):
    """A JSON object with declared fields. Undeclared keys are tolerated."""

    def __init__(self, fields: Mapping[str, Union[Schema, FieldSpec]]):
        table = {}
        for name, spec in fields.items():
            table[name] = spec if isinstance(spec, FieldSpec) else FieldSpec(spec)
        self.fields: Mapping[str, FieldSpec] = MappingProxyType(table)

    def __repr__(self):
        return f"ObjectWithFields({sorted(self.fields)})"

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(name for name, spec in self.fields.items() if spec.required)

    def extend(self, *others: "ObjectWithFields") -> "ObjectWithFields":
        return merge(self, *others)

    def collect(self, value, path, issues):
        if not _TYPES.is_type(value, "object"):
            issues.append(Issue(path, "object", json_kind(value)))
            return
        for name, spec in self.fields.items():
            if name in value:
                spec.schema.collect(value[name], path + (name,), issues)
            elif spec.required:
                issues.append(Issue(path + (name,), "present", "absent"))

    def json_schema(self):
        return {
            "type": "object",
            "properties": {name: spec.schema.json_schema() for name, spec in self.fields.items()},
            "required": list(self.required),
            "additionalProperties": True,
        }


def merge(*schemas: ObjectWithFields) -> ObjectWithFields:
    """Fold object schemas into one flat field table.

    A field declared more than once keeps the schema of its first declaration
    and is required if any declaration requires it.
    """
    table: Dict[str, FieldSpec] = {}
    for schema in schemas:
        for name, spec in schema.fields.items():
            first = table.get(name)
            if first is None:
                table[name] = spec
            elif spec.required and not first.required:
                table[name] = FieldSpec(first.schema, required=True)
    return ObjectWithFields(table)


class TaggedUnion(Schema):
    """Exactly one of several object variants, chosen by a literal tag field.

    The tag is matched against the variants in declaration order and the
    first match is the only variant the payload is checked against. An
    unknown tag is terminal: no field-level checks are attempted.
    """

    def __init__(self, tag_field: str, variants: Sequence[ObjectWithFields]):
        self.tag_field = tag_field
        self.variants = tuple(variants)
        tags = []
        for variant in self.variants:
            spec = variant.fields.get(tag_field)
            if spec is None or not spec.required or not isinstance(spec.schema, LiteralTag):
                raise ValueError(f"variant {variant!r} has no required literal {tag_field!r}")
            if spec.schema.value in tags:
                raise ValueError(f"duplicate {tag_field} {spec.schema.value!r}")
            tags.append(spec.schema.value)
        self.tags = tuple(tags)

    def __repr__(self):
        return f"TaggedUnion({self.tag_field!r}, {list(self.tags)})"

    def dispatch(self, tag: Any) -> Optional[ObjectWithFields]:
        for variant_tag, variant in zip(self.tags, self.variants):
            if isinstance(tag, str) and tag == variant_tag:
                return variant
        return None

    def collect(self, value, path, issues):
        if not _TYPES.is_type(value, "object"):
            issues.append(Issue(path, "object", json_kind(value)))
            return
        tag = value.get(self.tag_field)
        variant = self.dispatch(tag)
        if variant is None:
            issues.append(Issue(path + (self.tag_field,), "one of declared tags", tag))
            return
        variant.collect(value, path, issues)

    def validate(self, value):
        if not _TYPES.is_type(value, "object"):
            raise ValidationFailure([Issue((), "object", json_kind(value))])
        tag = value.get(self.tag_field)
        variant = self.dispatch(tag)
        if variant is None:
            raise TagDispatchFailure(self.tag_field, tag, self.tags)
        return variant.validate(value)

    def json_schema(self):
        return {"oneOf": [variant.json_schema() for variant in self.variants]}


def decode(schema: Schema, raw: Any) -> Any:
    """Check ``raw`` against ``schema``; return it unchanged or raise ``ValidationFailure``."""
    return schema.validate(raw)
