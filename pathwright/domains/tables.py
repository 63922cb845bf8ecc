"""Embedded classification tables — keywords, element types, point hints.

The defaults are plain tuples; :class:`ClassifierTables` compiles them into
ordered keyword rules once and is what the selector consumes, so tests can
inject their own tables.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pathwright.models.classification import KnowledgeDomain
from pathwright.models.request import PointType

A = KnowledgeDomain.ACCESS
S = KnowledgeDomain.STRUCTURE
E = KnowledgeDomain.ENCLOSURE
F = KnowledgeDomain.FLOW
M = KnowledgeDomain.MECHANICAL

DOMAIN_KEYWORDS: dict[KnowledgeDomain, tuple[str, ...]] = {
    A: (
        "stairs", "stair", "stairway", "staircase", "steps",
        "ladder", "ladders", "climb", "climbing",
        "ramp", "ramps", "slope", "incline",
        "platform", "platforms", "mezzanine", "deck", "decking",
        "walkway", "walkways", "catwalk", "footbridge",
        "access", "egress", "exit", "entry", "entrance",
        "handrail", "guardrail", "balustrade",
        "elevation", "level", "floor", "landing",
    ),
    S: (
        "beam", "beams", "girder", "joist", "header",
        "column", "columns", "post", "posts", "pillar",
        "frame", "frames", "framing", "framework",
        "support", "supports", "supporting",
        "bracket", "brackets", "cantilever",
        "brace", "bracing", "braced",
        "truss", "trusses",
        "foundation", "base", "footing",
        "load", "loads", "load-bearing", "structural",
    ),
    E: (
        "guard", "guards", "guarding", "machine guard",
        "cover", "covers", "covering", "enclosure",
        "housing", "housings", "cabinet", "box",
        "panel", "panels", "sheet metal",
        "fence", "fences", "fencing", "barrier",
        "door", "doors", "gate", "gates",
        "window", "windows", "viewport",
        "louver", "louvers", "vent", "ventilation",
        "safety", "protection", "protect",
        "contain", "containment", "enclose",
    ),
    F: (
        "pipe", "pipes", "piping", "pipeline",
        "duct", "ducts", "ductwork", "ducting",
        "conduit", "conduits", "raceway",
        "cable", "cables", "cable tray", "wire",
        "tube", "tubes", "tubing",
        "route", "routing", "run", "running",
        "fluid", "liquid", "gas", "air", "water",
        "hvac", "plumbing", "electrical",
        "flow", "flowing", "convey", "transport",
    ),
    M: (
        "shaft", "shafts", "axle", "spindle",
        "coupling", "couplings", "connect", "connection",
        "bearing", "bearings", "bushing",
        "linkage", "linkages", "mechanism",
        "lever", "levers", "arm", "arms",
        "gear", "gears", "gearbox", "transmission",
        "motor", "motors", "drive", "driven",
        "mount", "mounts", "mounting", "vibration",
        "rotate", "rotation", "rotary", "rotating",
        "motion", "movement", "actuator",
    ),
}

# Ordered per domain; order breaks ties between equally scored types.
ELEMENT_TYPES: dict[KnowledgeDomain, tuple[tuple[str, tuple[str, ...]], ...]] = {
    A: (
        ("stairs", ("stairs", "stair", "stairway", "staircase", "steps", "rise", "tread")),
        ("ladder", ("ladder", "ladders", "climb", "rungs", "cage", "fixed ladder")),
        ("ramp", ("ramp", "ramps", "slope", "incline", "ada", "wheelchair")),
        ("platform", ("platform", "platforms", "mezzanine", "deck", "landing")),
        ("walkway", ("walkway", "walkways", "catwalk", "grating", "footbridge")),
    ),
    S: (
        ("beam", ("beam", "beams", "girder", "joist", "header", "span")),
        ("column", ("column", "columns", "post", "posts", "pillar", "vertical")),
        ("bracing", ("brace", "bracing", "braced", "diagonal", "lateral")),
        ("bracket", ("bracket", "brackets", "cantilever", "support bracket")),
        ("connection", ("connection", "joint", "bolted", "welded", "moment")),
    ),
    E: (
        ("guard", ("guard", "guards", "machine guard", "safety guard")),
        ("cover", ("cover", "covers", "lid", "top", "weather cover")),
        ("panel", ("panel", "panels", "sheet", "plate", "skin")),
        ("fence", ("fence", "fences", "fencing", "perimeter", "barrier")),
        ("door", ("door", "doors", "gate", "access door", "hatch")),
        ("louver", ("louver", "louvers", "vent", "ventilation", "air intake")),
    ),
    F: (
        ("pipe", ("pipe", "pipes", "piping", "pipeline", "tubing")),
        ("duct", ("duct", "ducts", "ductwork", "hvac", "air duct")),
        ("conduit", ("conduit", "conduits", "raceway", "electrical")),
        ("cable-tray", ("cable tray", "cable trays", "wire tray", "cable ladder")),
        ("supports", ("hanger", "hangers", "support", "pipe support", "duct hanger")),
    ),
    M: (
        ("shaft", ("shaft", "shafts", "axle", "spindle", "drive shaft")),
        ("coupling", ("coupling", "couplings", "coupler", "flexible coupling")),
        ("linkage", ("linkage", "linkages", "mechanism", "four-bar", "lever")),
        ("bearing", ("bearing", "bearings", "bushing", "pillow block")),
        ("mount", ("mount", "mounts", "mounting", "vibration mount", "isolator")),
    ),
}

POINT_TYPE_HINTS: dict[PointType, tuple[KnowledgeDomain, ...]] = {
    PointType.FLOOR: (A, S),
    PointType.WALL: (E, S),
    PointType.CEILING: (S, F),
    PointType.EQUIPMENT: (M, E, F),
    PointType.STRUCTURE: (S, A),
    PointType.OPENING: (A, E),
    PointType.CUSTOM: (),
}


class KeywordRule(BaseModel):
    """A named, ordered keyword set matched against lower-cased text."""

    model_config = ConfigDict(frozen=True)

    name: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> list[str]:
        """Distinct keywords contained in *text*, in table order."""
        return [kw for kw in self.keywords if kw in text]

    def score(self, text: str) -> int:
        return len(self.matches(text))


def _rule(name: str, keywords: tuple[str, ...]) -> KeywordRule:
    # dict.fromkeys keeps first occurrence order and drops repeats
    return KeywordRule(name=name, keywords=tuple(dict.fromkeys(k.lower() for k in keywords)))


class ClassifierTables(BaseModel):
    """Immutable, injectable tables for the domain selector."""

    model_config = ConfigDict(frozen=True)

    domain_rules: tuple[tuple[KnowledgeDomain, KeywordRule], ...]
    element_rules: dict[KnowledgeDomain, tuple[KeywordRule, ...]]
    point_type_hints: dict[PointType, tuple[KnowledgeDomain, ...]] = Field(default_factory=dict)

    @classmethod
    def build(
        cls,
        domain_keywords: dict[KnowledgeDomain, tuple[str, ...]] | None = None,
        element_types: dict[KnowledgeDomain, tuple[tuple[str, tuple[str, ...]], ...]] | None = None,
        point_type_hints: dict[PointType, tuple[KnowledgeDomain, ...]] | None = None,
    ) -> ClassifierTables:
        """Compile keyword tables into rules, in domain declaration order."""
        domain_keywords = DOMAIN_KEYWORDS if domain_keywords is None else domain_keywords
        element_types = ELEMENT_TYPES if element_types is None else element_types
        hints = POINT_TYPE_HINTS if point_type_hints is None else point_type_hints

        return cls(
            domain_rules=tuple(
                (domain, _rule(domain.value, domain_keywords.get(domain, ())))
                for domain in KnowledgeDomain
            ),
            element_rules={
                domain: tuple(_rule(name, kws) for name, kws in element_types.get(domain, ()))
                for domain in KnowledgeDomain
            },
            point_type_hints=dict(hints),
        )

    def domain_rule(self, domain: KnowledgeDomain) -> KeywordRule:
        for candidate, rule in self.domain_rules:
            if candidate == domain:
                return rule
        return KeywordRule(name=domain.value, keywords=())

    def element_types(self, domain: KnowledgeDomain) -> list[str]:
        return [rule.name for rule in self.element_rules.get(domain, ())]


DEFAULT_TABLES = ClassifierTables.build()
