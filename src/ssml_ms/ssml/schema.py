"""
SSML Schema Tables.

A schema describes what a target synthesis engine accepts:
    - supported_tags: tag names the engine recognizes
    - required_attributes: attributes every opening tag instance must carry
    - attribute_constraints: legal values per (tag, attribute)

Schemas are plain data. The built-in AWS Polly table below is a dict
literal compiled once into an immutable Schema; alternative engines can be
described in YAML and loaded with load_schema_file().

Constraint Format:
    A constraint is a list of alternatives. Each alternative is either a
    literal string or a regular expression (a compiled pattern in Python,
    or a {"pattern": "..."} mapping in YAML). A value is legal if it equals
    any literal or full-matches any pattern.
    YAML patterns are compiled with re.ASCII, so \\d and \\w match ASCII
    characters only; an Arabic-Indic digit is not a legal number.

Namespaced tags such as "amazon:breath" are atomic names, not
namespace + local-name pairs.

Example YAML:
    root_tag: speak
    supported_tags: [speak, break, emphasis]
    required_attributes:
      emphasis: [level]
    attribute_constraints:
      break:
        strength: [none, weak, medium, strong]
        time:
          - pattern: '^\\d+(\\.\\d+)?(ms|s)$'

Thread Safety:
    Schema instances are frozen: frozensets, tuples and read-only
    mappings all the way down, so one instance can be shared by any
    number of concurrent validators.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple, Union

import yaml

Alternative = Union[str, re.Pattern]


class SchemaDefinitionError(Exception):
    """Raised when a schema table is malformed."""
    pass


@dataclass(frozen=True)
class AttributeConstraint:
    """
    Legal values for one attribute.

    Attributes:
        alternatives: Literal strings and compiled patterns, in declaration order.
    """
    alternatives: Tuple[Alternative, ...]

    def allows(self, value: str) -> bool:
        """Return True if value equals any literal or full-matches any pattern."""
        for alt in self.alternatives:
            if isinstance(alt, str):
                if alt == value:
                    return True
            elif alt.fullmatch(value):
                return True
        return False

    def describe(self) -> list[str]:
        """Human-readable alternatives (patterns shown as /regex/)."""
        return [alt if isinstance(alt, str) else f"/{alt.pattern}/" for alt in self.alternatives]


@dataclass(frozen=True)
class Schema:
    """
    Immutable tag/attribute schema for one synthesis engine.

    Build instances with Schema.from_mapping() rather than the constructor;
    it normalizes every container to its frozen form.
    """
    name: str
    root_tag: str
    supported_tags: frozenset
    required_attributes: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    attribute_constraints: Mapping[str, Mapping[str, AttributeConstraint]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def is_supported(self, tag: str) -> bool:
        return tag in self.supported_tags

    def required_for(self, tag: str) -> Tuple[str, ...]:
        return self.required_attributes.get(tag, ())

    def constraint_for(self, tag: str, attr: str) -> AttributeConstraint | None:
        return self.attribute_constraints.get(tag, {}).get(attr)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view for display (patterns rendered as /regex/)."""
        return {
            "name": self.name,
            "root_tag": self.root_tag,
            "supported_tags": sorted(self.supported_tags),
            "required_attributes": {tag: list(attrs) for tag, attrs in self.required_attributes.items()},
            "attribute_constraints": {
                tag: {attr: c.describe() for attr, c in attrs.items()}
                for tag, attrs in self.attribute_constraints.items()
            },
        }

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], name: str | None = None) -> "Schema":
        """
        Compile a raw schema table into a frozen Schema.

        Args:
            raw: Mapping with supported_tags, required_attributes,
                attribute_constraints and optional root_tag / name.
            name: Overrides raw["name"].

        Raises:
            SchemaDefinitionError: On missing sections, bad types or invalid regex.
        """
        if not isinstance(raw, Mapping):
            raise SchemaDefinitionError("schema must be a mapping")

        tags = raw.get("supported_tags")
        if not tags or isinstance(tags, str):
            raise SchemaDefinitionError("supported_tags must be a non-empty list of tag names")
        supported = frozenset(str(t) for t in tags)

        root_tag = str(raw.get("root_tag", "speak"))
        if root_tag not in supported:
            raise SchemaDefinitionError(f"root tag <{root_tag}> is not in supported_tags")

        required: Dict[str, Tuple[str, ...]] = {}
        for tag, attrs in (raw.get("required_attributes") or {}).items():
            if not isinstance(attrs, (list, tuple)):
                raise SchemaDefinitionError(f"required_attributes.{tag} must be a list")
            # dict.fromkeys keeps declaration order and drops duplicates
            required[str(tag)] = tuple(dict.fromkeys(str(a) for a in attrs))

        constraints: Dict[str, Mapping[str, AttributeConstraint]] = {}
        for tag, attrs in (raw.get("attribute_constraints") or {}).items():
            if not isinstance(attrs, Mapping):
                raise SchemaDefinitionError(f"attribute_constraints.{tag} must be a mapping")
            constraints[str(tag)] = MappingProxyType({
                str(attr): _compile_constraint(f"{tag}.{attr}", spec)
                for attr, spec in attrs.items()
            })

        return cls(
            name=str(name or raw.get("name", "custom")),
            root_tag=root_tag,
            supported_tags=supported,
            required_attributes=MappingProxyType(required),
            attribute_constraints=MappingProxyType(constraints),
        )


def _compile_alternative(where: str, alt: Any) -> Alternative:
    if isinstance(alt, re.Pattern):
        return alt
    if isinstance(alt, Mapping) and "pattern" in alt:
        try:
            return re.compile(str(alt["pattern"]), re.ASCII)
        except re.error as e:
            raise SchemaDefinitionError(f"invalid pattern for {where}: {e}") from e
    if isinstance(alt, (str, int, float)) and not isinstance(alt, bool):
        return str(alt)
    raise SchemaDefinitionError(f"unsupported constraint alternative for {where}: {alt!r}")


def _compile_constraint(where: str, spec: Any) -> AttributeConstraint:
    # A single literal or pattern is shorthand for a one-element list
    if isinstance(spec, (str, re.Pattern, Mapping)):
        spec = [spec]
    if not isinstance(spec, Iterable):
        raise SchemaDefinitionError(f"constraint for {where} must be a list")
    alternatives = tuple(_compile_alternative(where, alt) for alt in spec)
    if not alternatives:
        raise SchemaDefinitionError(f"constraint for {where} is empty")
    return AttributeConstraint(alternatives=alternatives)


# =============================================================================
# AWS Polly
# =============================================================================

_BREATH_DURATIONS = ["default", "x-short", "short", "medium", "long", "x-long"]

POLLY_TABLE: Dict[str, Any] = {
    "name": "polly",
    "root_tag": "speak",
    "supported_tags": [
        "speak", "break", "emphasis", "lang", "mark", "p", "s", "phoneme",
        "prosody", "say-as", "sub", "voice", "audio", "lexicon",
        "amazon:breath", "amazon:auto-breaths", "amazon:effect",
    ],
    "required_attributes": {
        "phoneme": ["alphabet", "ph"],
        "say-as": ["interpret-as"],
        "sub": ["alias"],
        "voice": ["name"],
        "audio": ["src"],
        "lexicon": ["name"],
    },
    "attribute_constraints": {
        "break": {
            "strength": ["none", "x-weak", "weak", "medium", "strong", "x-strong"],
            "time": re.compile(r"^\d+(\.\d+)?(ms|s)$", re.ASCII),
        },
        "emphasis": {
            "level": ["strong", "moderate", "reduced"],
        },
        "prosody": {
            "rate": ["x-slow", "slow", "medium", "fast", "x-fast",
                     re.compile(r"^\d+(\.\d+)?%$", re.ASCII),
                     re.compile(r"^[+\-]\d+(\.\d+)?%$", re.ASCII)],
            "pitch": ["x-low", "low", "medium", "high", "x-high",
                      re.compile(r"^[+\-]\d+(\.\d+)?Hz$", re.ASCII),
                      re.compile(r"^[+\-]\d+(\.\d+)?%$", re.ASCII)],
            "volume": ["silent", "x-soft", "soft", "medium", "loud", "x-loud",
                       re.compile(r"^[+\-]\d+(\.\d+)?dB$", re.ASCII)],
        },
        "say-as": {
            "interpret-as": ["characters", "spell-out", "cardinal", "number", "ordinal",
                             "digits", "fraction", "unit", "date", "time", "telephone",
                             "address", "interjection", "expletive"],
        },
        "phoneme": {
            "alphabet": ["ipa", "x-sampa"],
        },
        "amazon:breath": {
            "duration": _BREATH_DURATIONS,
        },
        "amazon:auto-breaths": {
            "volume": ["default", "x-soft", "soft", "medium", "loud", "x-loud"],
            "frequency": ["default", "x-low", "low", "medium", "high", "x-high"],
            "duration": _BREATH_DURATIONS,
        },
        "amazon:effect": {
            "name": ["whispered"],
        },
    },
}

POLLY_SCHEMA = Schema.from_mapping(POLLY_TABLE)

# Built-in profiles selectable via schema.profile / SSML_MS_SCHEMA_PROFILE
SCHEMA_PROFILES: Mapping[str, Schema] = MappingProxyType({"polly": POLLY_SCHEMA})


def get_schema(profile: str = "polly") -> Schema:
    """
    Look up a built-in schema by profile name.

    Raises:
        SchemaDefinitionError: If the profile is unknown.
    """
    key = (profile or "polly").strip().lower()
    schema = SCHEMA_PROFILES.get(key)
    if schema is None:
        known = ", ".join(sorted(SCHEMA_PROFILES))
        raise SchemaDefinitionError(f"unknown schema profile '{profile}' (known: {known})")
    return schema


def load_schema_file(path: str | Path) -> Schema:
    """
    Load a schema from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SchemaDefinitionError: If the contents are not a valid schema table.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"schema file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SchemaDefinitionError(f"invalid YAML in {p}: {e}") from e

    if not isinstance(raw, Mapping):
        raise SchemaDefinitionError(f"schema file {p} must contain a mapping")
    return Schema.from_mapping(raw, name=raw.get("name") or p.stem)
