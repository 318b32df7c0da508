"""Class diagram model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from mermaid_syntax.errors import ParseError
from mermaid_syntax.types import RelationType, Visibility, enum_dict_factory


@dataclass
class MermaidClassMember:
    name: str
    is_method: bool = False
    visibility: Visibility = Visibility.Public
    type_name: str | None = None


@dataclass
class MermaidClass:
    name: str
    members: list[MermaidClassMember] = field(default_factory=list)
    source_line: int = 0
    annotation: str | None = None  # <<interface>>, <<abstract>>, ...

    def add_member(self, member: MermaidClassMember) -> None:
        self.members.append(member)

    @property
    def attributes(self) -> list[MermaidClassMember]:
        return [m for m in self.members if not m.is_method]

    @property
    def methods(self) -> list[MermaidClassMember]:
        return [m for m in self.members if m.is_method]


@dataclass
class MermaidRelation:
    from_name: str
    to_name: str
    relation_type: RelationType = RelationType.Association
    label: str | None = None
    from_cardinality: str | None = None
    to_cardinality: str | None = None


@dataclass
class MermaidClassDiagram:
    title: str | None = None
    classes: dict[str, MermaidClass] = field(default_factory=dict)
    relations: list[MermaidRelation] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)

    def find_class(self, name: str) -> MermaidClass | None:
        return self.classes.get(name)

    def get_or_create_class(self, name: str, source_line: int = 0) -> MermaidClass:
        """Return the class registered under name, creating it on first mention."""
        cls = self.classes.get(name)
        if cls is None:
            cls = MermaidClass(name=name, source_line=source_line)
            self.classes[name] = cls
        return cls

    def add_relation(self, relation: MermaidRelation) -> None:
        self.get_or_create_class(relation.from_name)
        self.get_or_create_class(relation.to_name)
        self.relations.append(relation)

    def endpoints(self, relation: MermaidRelation) -> tuple[MermaidClass, MermaidClass]:
        return self.classes[relation.from_name], self.classes[relation.to_name]

    def to_dict(self) -> dict[str, object]:
        return asdict(self, dict_factory=enum_dict_factory)
