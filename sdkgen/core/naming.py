"""
Naming utilities for safe binding generation.

Projects schema identifiers into a target language's identifier space:
case conversion, reserved words, structural members and sibling clashes.
Every scope is created for one resource type in one language and passed
explicitly; nothing here keeps state across resource types.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Callable, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from .errors import NamingConfigurationError
from ..logging_config import get_logger

logger = get_logger(__name__)


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


class CaseEquality(Enum):
    """How a target language compares two identifiers."""

    SENSITIVE = "case-sensitive"
    INSENSITIVE = "case-insensitive"

    def key(self, spelling: str) -> str:
        """Comparison key for ``spelling`` under this mode."""
        if self is CaseEquality.INSENSITIVE:
            return spelling.casefold()
        return spelling


class DisambiguationStrategy(Enum):
    """How a colliding identifier gets an alternate spelling."""

    NUMERIC_SUFFIX = "numeric-suffix"
    FIXED_RENAME_TABLE = "fixed-rename-table"


class CollisionReason(Enum):
    RESERVED_WORD = "reserved_word"
    STRUCTURAL_MEMBER = "structural_member"
    SCOPE_MEMBER = "scope_member"


@dataclass(frozen=True)
class NamingRules:
    """Identifier constraints of one target language, as plain data."""

    language: str
    reserved_words: FrozenSet[str] = frozenset()
    case_equality: CaseEquality = CaseEquality.SENSITIVE
    disambiguation: DisambiguationStrategy = DisambiguationStrategy.NUMERIC_SUFFIX
    structural_members: Tuple[str, ...] = ()

    member_case: NamingCase = NamingCase.PASCAL_CASE
    type_case: NamingCase = NamingCase.PASCAL_CASE

    # Agreed renames for known conflicts, keyed by normalized spelling
    rename_table: Mapping[str, str] = field(default_factory=dict, hash=False)

    suffix_separator: str = ""
    suffix_alphabet: str = "0123456789"

    # Members may not share the enclosing type's name (C# CS0542)
    reserve_type_name: bool = False
    digit_prefix: str = "_"

    # Structural spellings; "{type}" expands to the resolved class name
    args_suffix: str = "Args"
    create_name: str = "{type}"
    lookup_name: str = "Get"
    empty_factory_name: str = "Empty"

    def reserved_match(self, spelling: str) -> Optional[str]:
        """Reserved word spelled exactly like ``spelling``, if any.

        Keywords are case-sensitive in every target language, so
        ``case_equality`` only governs clashes between members.
        """
        return spelling if spelling in self.reserved_words else None

    def rename_for(self, normalized: str) -> Optional[str]:
        """Configured fixed rename for ``normalized``, if any."""
        if normalized in self.rename_table:
            return self.rename_table[normalized]
        key = self.case_equality.key(normalized)
        for source, target in self.rename_table.items():
            if self.case_equality.key(source) == key:
                return target
        return None

    def expand(self, pattern: str, type_name: str) -> str:
        return pattern.replace("{type}", type_name)


@dataclass(frozen=True)
class Identifier:
    """A schema token together with its resolved spelling."""

    origin: Optional[str]  # Schema name; None for structural members
    normalized: str
    spelling: str
    structural: bool = False

    @property
    def renamed(self) -> bool:
        return self.spelling != self.normalized

    def __str__(self) -> str:
        return self.spelling


@dataclass(frozen=True)
class CollisionResolved:
    """Record of a rename performed to avoid a collision."""

    scope: str
    desired: str
    normalized: str
    conflicts_with: str
    reason: CollisionReason
    resolved: str

    def describe(self) -> str:
        return (
            f"{self.scope}: '{self.desired}' -> '{self.resolved}' "
            f"({self.reason.value} '{self.conflicts_with}')"
        )


CollisionCallback = Callable[[CollisionResolved], None]


class Scope:
    """Ordered set of identifiers that must not collide with each other."""

    def __init__(
        self, case_equality: CaseEquality = CaseEquality.SENSITIVE, label: str = ""
    ):
        self.case_equality = case_equality
        self.label = label
        self.events: List[CollisionResolved] = []
        self._identifiers: List[Identifier] = []
        self._index: Dict[str, Identifier] = {}

    @classmethod
    def for_rules(cls, rules: NamingRules, label: str = "") -> "Scope":
        return cls(rules.case_equality, label)

    def find(self, spelling: str) -> Optional[Identifier]:
        """Identifier equal to ``spelling`` under this scope's equality rule."""
        return self._index.get(self.case_equality.key(spelling))

    def reserve(self, spelling: str) -> Identifier:
        """Pre-register a structural member; duplicates are ignored."""
        existing = self.find(spelling)
        if existing is not None:
            return existing
        identifier = Identifier(None, spelling, spelling, structural=True)
        self.register(identifier)
        return identifier

    def register(self, identifier: Identifier) -> None:
        key = self.case_equality.key(identifier.spelling)
        if key in self._index:
            raise ValueError(
                f"'{identifier.spelling}' is already registered in scope {self.label!r}"
            )
        self._index[key] = identifier
        self._identifiers.append(identifier)

    @property
    def identifiers(self) -> Tuple[Identifier, ...]:
        return tuple(self._identifiers)

    def spellings(self) -> List[str]:
        return [identifier.spelling for identifier in self._identifiers]

    def __contains__(self, spelling: str) -> bool:
        return self.find(spelling) is not None

    def __iter__(self) -> Iterator[Identifier]:
        return iter(self._identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)


# Case conversion

_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_HUMP_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def _clean_basic(name: str) -> str:
    """Basic name cleanup - remove invalid characters."""
    cleaned = _INVALID_CHARS.sub("_", name)
    cleaned = cleaned.strip("_-")
    if not cleaned:
        cleaned = "field"
    return cleaned


def _to_snake_case(name: str) -> str:
    name = name.replace("-", "_")
    # HTTPServer -> HTTP_Server, userName -> user_Name
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _HUMP_BOUNDARY.sub(r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    return name.strip("_")


def _to_camel_case(name: str) -> str:
    parts = _to_snake_case(name).split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


def _to_pascal_case(name: str) -> str:
    return "".join(part.capitalize() for part in _to_snake_case(name).split("_") if part)


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return _to_snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return _to_camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return _to_pascal_case(name)
    elif target_case == NamingCase.KEBAB_CASE:
        return _to_snake_case(name).replace("_", "-")
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return _to_snake_case(name).upper()
    return name


def normalize(name: str, target_case: NamingCase, digit_prefix: str = "_") -> str:
    """Clean ``name`` and re-case it; never returns an empty string."""
    converted = convert_case(_clean_basic(name), target_case)
    if not converted:
        converted = convert_case("field", target_case)
    if converted[0].isdigit():
        converted = f"{digit_prefix}{converted}"
    return converted


# Collision resolution


def numeric_suffix(n: int, alphabet: str) -> str:
    """Spell ``n`` (>= 1) positionally using the digits in ``alphabet``."""
    if len(alphabet) == 1:
        return alphabet * n
    base = len(alphabet)
    digits = []
    while n:
        n, remainder = divmod(n, base)
        digits.append(alphabet[remainder])
    return "".join(reversed(digits))


def check_rules(rules: NamingRules) -> None:
    """
    Reject rules whose disambiguation strategy cannot make progress.

    Raises:
        NamingConfigurationError: For an empty suffix alphabet or an
            empty fixed rename table.
    """
    if rules.disambiguation == DisambiguationStrategy.NUMERIC_SUFFIX:
        if not rules.suffix_alphabet:
            raise NamingConfigurationError(
                "numeric-suffix disambiguation needs a non-empty suffix alphabet",
                rules.language,
            )
    elif not rules.rename_table:
        raise NamingConfigurationError(
            "fixed-rename-table disambiguation needs at least one rename entry",
            rules.language,
        )

    for source, target in rules.rename_table.items():
        if not target:
            raise NamingConfigurationError(
                f"rename table maps '{source}' to an empty name", rules.language
            )


def _find_collision(
    spelling: str, scope: Scope, rules: NamingRules
) -> Optional[Tuple[CollisionReason, str]]:
    reserved = rules.reserved_match(spelling)
    if reserved is not None:
        return CollisionReason.RESERVED_WORD, reserved

    existing = scope.find(spelling)
    if existing is None:
        return None
    if existing.structural:
        return CollisionReason.STRUCTURAL_MEMBER, existing.spelling
    return CollisionReason.SCOPE_MEMBER, existing.origin or existing.spelling


def _candidates(normalized: str, rules: NamingRules) -> Iterator[str]:
    """Alternate spellings in the order they are tried."""
    renamed = rules.rename_for(normalized)
    if renamed is not None:
        yield renamed

    if rules.disambiguation == DisambiguationStrategy.NUMERIC_SUFFIX:
        if not rules.suffix_alphabet:
            return
        for n in count(1):
            yield f"{normalized}{rules.suffix_separator}{numeric_suffix(n, rules.suffix_alphabet)}"


def resolve(
    desired: str,
    scope: Scope,
    rules: NamingRules,
    *,
    case: Optional[NamingCase] = None,
    on_collision: Optional[CollisionCallback] = None,
) -> Identifier:
    """
    Resolve ``desired`` into a collision-free identifier and register it.

    The result depends on everything registered in ``scope`` before this
    call, so resolving the same names in a different order can produce
    different spellings.

    Args:
        desired: Schema name to project into the target language
        scope: Scope the identifier must not collide with
        rules: Target language rules
        case: Casing to apply (defaults to ``rules.member_case``)
        on_collision: Called with a CollisionResolved event on rename

    Returns:
        The registered Identifier

    Raises:
        NamingConfigurationError: If the rules offer no non-colliding candidate
    """
    normalized = normalize(desired, case or rules.member_case, rules.digit_prefix)

    collision = _find_collision(normalized, scope, rules)
    if collision is None:
        identifier = Identifier(desired, normalized, normalized)
        scope.register(identifier)
        return identifier

    reason, conflicts_with = collision
    resolved = None
    for candidate in _candidates(normalized, rules):
        if _find_collision(candidate, scope, rules) is None:
            resolved = candidate
            break

    if resolved is None:
        raise NamingConfigurationError(
            f"cannot disambiguate '{desired}' (normalized '{normalized}') in scope "
            f"{scope.label!r}: {rules.disambiguation.value} produced no free candidate",
            rules.language,
        )

    identifier = Identifier(desired, normalized, resolved)
    scope.register(identifier)

    event = CollisionResolved(
        scope=scope.label,
        desired=desired,
        normalized=normalized,
        conflicts_with=conflicts_with,
        reason=reason,
        resolved=resolved,
    )
    scope.events.append(event)
    logger.info("Collision resolved: %s", event.describe())
    if on_collision is not None:
        on_collision(event)

    return identifier


def resolve_all(
    names: List[str],
    scope: Scope,
    rules: NamingRules,
    *,
    case: Optional[NamingCase] = None,
    on_collision: Optional[CollisionCallback] = None,
) -> List[Identifier]:
    """Resolve ``names`` sequentially, in the given order."""
    return [
        resolve(name, scope, rules, case=case, on_collision=on_collision)
        for name in names
    ]
