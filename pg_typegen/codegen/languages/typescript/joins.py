"""
Cross-table reference resolution.

Table declarations are generated one at a time, so a foreign key cannot name
the referenced table's interface directly: that table may be generated later,
excluded from the output, or reference the current table back. Instead the
foreign key's ``$type`` is emitted as a forward-reference marker::

    $type: null as unknown /* users */

Once every table has been generated and registered, a single substitution
pass turns each marker whose table is known into a direct reference::

    $type: null as unknown as Users

Markers for unknown tables are left untouched, and resolved text no longer
matches the marker pattern, so resolution is idempotent.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping

from ...core.generator import GeneratorError

MARKER_RE = re.compile(r"(\$type: null as unknown) /\* ([^*]+) \*/")


@dataclass(frozen=True)
class TableNames:
    """Generated identifiers for one table."""

    var: str  # Descriptor constant, e.g. "users"
    type: str  # Read-shape interface, e.g. "Users"
    input: str  # Write-shape interface, e.g. "UsersInput"


def forward_reference(table_name: str) -> str:
    """Placeholder for the read-shape type of a raw table name."""
    return f"null as unknown /* {table_name} */"


class NameRegistry(Mapping[str, TableNames]):
    """
    Raw table name -> TableNames for one generation run.

    Each table is registered once. The registry is frozen before resolution
    starts and is read-only from then on.
    """

    def __init__(self):
        self._names: Dict[str, TableNames] = {}
        self._frozen = False

    def register(self, table_name: str, names: TableNames) -> None:
        if self._frozen:
            raise GeneratorError(
                f"Cannot register table '{table_name}': name registry is frozen"
            )
        if table_name in self._names:
            raise GeneratorError(f"Table '{table_name}' is already registered")
        self._names[table_name] = names

    def freeze(self) -> "NameRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __getitem__(self, table_name: str) -> TableNames:
        return self._names[table_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


def attach_join_types(code: str, table_to_names: Mapping[str, TableNames]) -> str:
    """
    Fill in forward references for every table present in table_to_names.

    '$type: null as unknown /* users */' -> '$type: null as unknown as Users'
    """

    def replace(match: "re.Match[str]") -> str:
        names = table_to_names.get(match.group(2))
        if names is None:
            return match.group(0)
        return f"{match.group(1)} as {names.type}"

    return MARKER_RE.sub(replace, code)


def unresolved_tables(code: str) -> List[str]:
    """Raw table names of the markers left in code, in order of first appearance."""
    seen: Dict[str, None] = {}
    for match in MARKER_RE.finditer(code):
        seen.setdefault(match.group(2), None)
    return list(seen)


class JoinResolver:
    """Resolves forward references against a complete NameRegistry."""

    def __init__(self, registry: NameRegistry):
        if not registry.frozen:
            raise GeneratorError("Name registry must be frozen before resolving joins")
        self.registry = registry

    def resolve(self, code: str) -> str:
        return attach_join_types(code, self.registry)

