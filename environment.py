"""Runtime scopes and function values.

This module defines `Environment`, a name-to-value mapping with an optional
parent link forming the lexical scope chain, and `Closure`, the value a
function expression evaluates to. The `Environment` API provides `define`,
`assign`, `lookup`, and existence checks used by the interpreter.

A closure keeps a reference to the environment that was active where it was
defined, not a copy, so bindings added or changed there later are visible
when the closure runs. Parent links are set once at construction and only
point outwards, so the chain can never form a cycle.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
from ast_nodes import ASTNode, IdentifierNode


@dataclass(frozen=True, eq=False)
class Closure:
    parameters: Tuple[IdentifierNode, ...]
    body: ASTNode
    env: "Environment"

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __repr__(self) -> str:
        params = ", ".join(p.name for p in self.parameters)
        return f"Closure(({params}) => ...)"


class Environment:
    def __init__(
        self,
        parent: Optional[Environment] = None,
        bindings: Optional[Dict[str, Any]] = None,
    ):
        self.values: Dict[str, Any] = dict(bindings or {})
        self._parent = parent

    @property
    def parent(self) -> Optional[Environment]:
        return self._parent

    def __repr__(self) -> str:
        return f"Environment({sorted(self.values)}, depth={self.depth})"

    @property
    def depth(self) -> int:
        depth = 0
        scope = self._parent
        while scope is not None:
            depth += 1
            scope = scope._parent
        return depth

    def child(self) -> Environment:
        """Return a new empty scope nested inside this one."""
        return Environment(parent=self)

    def define(self, name: str, value: Any) -> Any:
        """Bind `name` in this scope, shadowing any outer binding."""
        self.values[name] = value
        return value

    def resolve(self, name: str) -> Optional[Environment]:
        """Return the innermost scope that binds `name`, or None."""
        scope: Optional[Environment] = self
        while scope is not None:
            if name in scope.values:
                return scope
            scope = scope._parent
        return None

    def lookup(self, name: str) -> Any:
        """Look up a name in the current and parent scopes."""
        scope = self.resolve(name)
        if scope is None:
            raise KeyError(name)
        return scope.values[name]

    def assign(self, name: str, value: Any) -> Any:
        """Rebind `name` where it is defined, or define it here if unbound."""
        scope = self.resolve(name) or self
        scope.values[name] = value
        return value

    def exists_in_current_scope(self, name: str) -> bool:
        """Check if a name is bound in this scope only."""
        return name in self.values

    def exists(self, name: str) -> bool:
        """Check if a name is bound in any enclosing scope."""
        return self.resolve(name) is not None

    def __contains__(self, name: str) -> bool:
        return self.exists(name)
