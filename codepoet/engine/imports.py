"""
Import resolution (first rendering pass).

The declaration is rendered once into a throw-away CodeWriter that has no
imports. Every class the writer could not name by its simple name is recorded
under its top-level simple name; the resolver then decides, per simple name,
whether it becomes an alias (rendered bare in the second pass) or stays
ambiguous (rendered fully qualified everywhere).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ..config import RenderConfig
from ..logging_config import get_logger
from .code_writer import CodeWriter
from .type_names import ClassName

logger = get_logger(__name__)


class _Ambiguous:
    def __repr__(self) -> str:
        return "AMBIGUOUS"


AMBIGUOUS = _Ambiguous()


@dataclass(frozen=True)
class AliasTable:
    """Result of the first pass.

    Attributes:
        entries: Pairs of simple name and the one class it stands for, or AMBIGUOUS
        import_groups: Classes to import, grouped and sorted within each group
    """

    entries: tuple[tuple[str, ClassName | _Ambiguous], ...] = ()
    import_groups: tuple[tuple[ClassName, ...], ...] = ()

    @property
    def aliases(self) -> Mapping[str, ClassName | _Ambiguous]:
        """Read-only view of the alias decisions, keyed by simple name."""
        return MappingProxyType(dict(self.entries))

    @property
    def imports(self) -> list[ClassName]:
        """All imported classes in rendering order."""
        return [class_name for group in self.import_groups for class_name in group]

    def resolve(self, simple_name: str) -> ClassName | None:
        owner = self.aliases.get(simple_name)
        return owner if isinstance(owner, ClassName) else None

    def is_ambiguous(self, simple_name: str) -> bool:
        return self.aliases.get(simple_name) is AMBIGUOUS

    def imported_types(self) -> dict[str, ClassName]:
        """Simple names that the second pass may write unqualified."""
        return {name: owner for name, owner in self.aliases.items() if isinstance(owner, ClassName)}


class ImportResolver:
    """Builds an AliasTable for one declaration.

    Args:
        config: Rendering configuration (in-scope packages, import groups, line settings)
    """

    def __init__(self, config: RenderConfig | None = None):
        self.config = config if config is not None else RenderConfig()

    def analyze(self, declaration: Any, package_name: str = "") -> AliasTable:
        """Walk every name reference reachable from declaration.

        Args:
            declaration: A top-level type declaration exposing emit(writer)
            package_name: The package the declaration is rendered into

        Returns:
            The alias table for the second pass
        """
        collector = CodeWriter(
            indent=self.config.indent,
            column_limit=self.config.column_limit,
            always_qualify=set(self.config.always_qualify),
        )
        collector.push_package(package_name)
        declaration.emit(collector)
        collector.pop_package()
        return self.build_table(collector)

    def build_table(self, collector: CodeWriter) -> AliasTable:
        aliases: dict[str, ClassName | _Ambiguous] = {}
        for simple_name, owners in collector.importable_types.items():
            if len(owners) > 1:
                logger.debug(
                    "'%s' is ambiguous between %s", simple_name, ", ".join(o.canonical_name for o in owners)
                )
                aliases[simple_name] = AMBIGUOUS
            elif simple_name in collector.referenced_names:
                logger.debug("'%s' is taken by a class of package '%s'", simple_name, collector.package_name)
                aliases[simple_name] = AMBIGUOUS
            elif simple_name in collector.declared_names:
                logger.debug("'%s' is declared by the rendered type", simple_name)
                aliases[simple_name] = AMBIGUOUS
            else:
                logger.debug("'%s' aliases %s", simple_name, owners[0].canonical_name)
                aliases[simple_name] = owners[0]

        to_import = [
            owner
            for owner in aliases.values()
            if isinstance(owner, ClassName) and owner.package_name not in self.config.always_in_scope
        ]
        return AliasTable(tuple(aliases.items()), self._group(to_import))

    def _group(self, class_names: list[ClassName]) -> tuple[tuple[ClassName, ...], ...]:
        groups: dict[str, list[ClassName]] = {prefix: [] for prefix in self.config.import_groups}
        rest: list[ClassName] = []
        for class_name in class_names:
            for prefix in self.config.import_groups:
                if class_name.package_name == prefix or class_name.package_name.startswith(prefix + "."):
                    groups[prefix].append(class_name)
                    break
            else:
                rest.append(class_name)

        ordered = list(groups.values()) + [rest]
        return tuple(
            tuple(sorted(group, key=lambda c: c.canonical_name)) for group in ordered if group
        )
