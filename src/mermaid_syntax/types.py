"""Shared type definitions for mermaid-syntax.

Enums used across the lexer, parsers and diagram models.
"""

from __future__ import annotations

from enum import Enum, auto


class Direction(Enum):
    LR = auto()  # LeftRight
    RL = auto()  # RightLeft
    TD = auto()  # TopDown (also TB)
    BT = auto()  # BottomUp

    @classmethod
    def default(cls) -> Direction:
        return cls.TD


class NodeShape(Enum):
    Rectangle = auto()  # id[Text]
    Rounded = auto()  # id(Text)
    Stadium = auto()  # id([Text])
    Subroutine = auto()  # id[[Text]]
    Cylinder = auto()  # id[(Text)]
    Circle = auto()  # id((Text))
    DoubleCircle = auto()  # id(((Text)))
    Asymmetric = auto()  # id>Text]
    Rhombus = auto()  # id{Text}
    Hexagon = auto()  # id{{Text}}
    Parallelogram = auto()  # id[/Text/]
    Trapezoid = auto()  # id[\Text\]

    @classmethod
    def default(cls) -> NodeShape:
        return cls.Rectangle


class EdgeStyle(Enum):
    Solid = auto()
    Dotted = auto()
    Thick = auto()
    Invisible = auto()


class ArrowHead(Enum):
    Normal = auto()
    Open = auto()
    Cross = auto()
    Circle = auto()
    NoHead = auto()


class Visibility(Enum):
    Public = auto()  # +
    Private = auto()  # -
    Protected = auto()  # #
    Package = auto()  # ~


class RelationType(Enum):
    Inheritance = auto()  # <|--
    Composition = auto()  # *--
    Aggregation = auto()  # o--
    Realization = auto()  # ..|>
    Dependency = auto()  # ..>
    Association = auto()  # -->


def enum_dict_factory(pairs: list[tuple[str, object]]) -> dict[str, object]:
    """dataclasses.asdict factory that renders enum members by name."""
    return {key: value.name if isinstance(value, Enum) else value for key, value in pairs}
