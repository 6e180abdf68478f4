"""
Typed NAME:TYPE:VALUE annotations shared by GFA, SAM and GAF records
"""
from dataclasses import dataclass
import json
import re
from types import MappingProxyType

from DshHelper.Errors import ParseError

TAG_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]$")
ARRAY_SUBTYPES = "cCsSiIf"
NUMERIC_TYPES = ("i", "f")


def _read_array(value):
    subtype, _, values = value.partition(",")
    if subtype not in ARRAY_SUBTYPES:
        raise ValueError(f"invalid array subtype {subtype}")
    if not values:
        return subtype, ()
    reader = float if subtype == "f" else int
    return subtype, tuple(reader(v) for v in values.split(","))


TAG_READERS = {
    "A": str,
    "i": int,
    "f": float,
    "Z": str,
    "J": json.loads,
    "H": bytes.fromhex,
    "B": _read_array,
}


@dataclass(frozen=True)
class Tag:
    """
    Annotation on a record; value is kept as written, typed_value
    converts it according to the type code
    """
    name: str
    type: str
    value: str

    @classmethod
    def from_token(cls, token):
        S = token.split(":", maxsplit=2)
        if len(S) != 3:
            raise ParseError("tag must be NAME:TYPE:VALUE", token)
        name, type_code, value = S
        if not TAG_NAME_RE.match(name):
            raise ParseError(f"invalid tag name {name}", token)
        if type_code not in TAG_READERS:
            raise ParseError(f"invalid tag type {type_code}", token)
        if type_code == "A" and len(value) != 1:
            raise ParseError("type A tag value must be a single character",
                token)
        tag = cls(name, type_code, value)
        # coerce once so malformed values are reported at read time
        try:
            tag.typed_value
        except ValueError as e:
            raise ParseError(f"invalid {type_code} value: {e}", token) from e
        return tag

    @property
    def typed_value(self):
        return TAG_READERS[self.type](self.value)

    def __str__(self):
        return f"{self.name}:{self.type}:{self.value}"


def read_tags(tokens):
    """
    Parse tag tokens into a dict keyed by tag name, in input order
    """
    tags = {}
    for token in tokens:
        tag = Tag.from_token(token)
        if tag.name in tags:
            raise ParseError(f"duplicate tag {tag.name}", token)
        tags[tag.name] = tag
    return tags


def format_tags(tags):
    return "".join(f"\t{tag}" for tag in tags.values())


class Tagged:
    """
    Accessors for records carrying a tags mapping; the mapping is made
    read-only on construction
    """
    def __post_init__(self):
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    def has_tag(self, name):
        return name in self.tags

    def tag(self, name, default=None):
        """
        Typed value of a tag, or default when absent
        """
        if name not in self.tags:
            return default
        return self.tags[name].typed_value

    def numeric_tag(self, name):
        """
        Value of an i or f tag; None when absent or of another type
        """
        tag = self.tags.get(name)
        if tag is None or tag.type not in NUMERIC_TYPES:
            return None
        return tag.typed_value
