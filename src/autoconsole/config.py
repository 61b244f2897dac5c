"""Options for the auto-console pass."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .ast_nodes import Node, Identifier, MemberExpression, CallExpression
from .errors import ConfigError


@dataclass(frozen=True)
class OutputCall:
    """The function wrapper calls go to, as ``object.property``."""
    object: str = "console"
    property: str = "log"

    def __post_init__(self):
        for label, value in (("object", self.object), ("property", self.property)):
            if not isinstance(value, str) or not value.isidentifier():
                raise ConfigError(f"Output call {label} must be an identifier, got {value!r}")

    def __str__(self) -> str:
        return f"{self.object}.{self.property}"

    def callee(self, loc=None) -> MemberExpression:
        """Build a fresh ``object.property`` callee node."""
        return MemberExpression(
            Identifier(self.object, loc=loc),
            Identifier(self.property, loc=loc),
            computed=False,
            loc=loc,
        )

    def matches(self, node: Node, namespace: bool = False) -> bool:
        """True if ``node`` is a call to this output function.

        With ``namespace`` any method of the output object counts, so
        ``console.error(e)`` is recognised as already producing output.
        """
        if not isinstance(node, CallExpression):
            return False
        callee = node.callee
        if not (
            isinstance(callee, MemberExpression)
            and isinstance(callee.object, Identifier)
            and callee.object.name == self.object
        ):
            return False
        if namespace:
            return True
        return (
            not callee.computed
            and isinstance(callee.property, Identifier)
            and callee.property.name == self.property
        )


@dataclass(frozen=True)
class ExclusionPolicy:
    """Function kinds whose bodies are never rewritten.

    Class methods are always walked. Async and generator functions follow
    the kind of the node that defines them.
    """
    kinds: FrozenSet[str] = frozenset(["FunctionDeclaration", "FunctionExpression"])

    FUNCTION_KINDS = frozenset(["FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"])

    def __post_init__(self):
        unknown = set(self.kinds) - self.FUNCTION_KINDS
        if unknown:
            raise ConfigError(f"Cannot exclude non-function kinds: {', '.join(sorted(unknown))}")

    def excludes(self, node: Node) -> bool:
        return node.type in self.kinds

    @classmethod
    def preset(cls, name: str) -> "ExclusionPolicy":
        try:
            return PRESETS[name]
        except KeyError:
            raise ConfigError(
                f"Unknown exclusion preset {name!r}; expected one of: {', '.join(PRESETS)}"
            )


DECLARATIONS_ONLY = ExclusionPolicy(frozenset(["FunctionDeclaration"]))
NAMED_FUNCTIONS = ExclusionPolicy()
ALL_FUNCTIONS = ExclusionPolicy(ExclusionPolicy.FUNCTION_KINDS)

PRESETS: Dict[str, ExclusionPolicy] = {
    "declarations": DECLARATIONS_ONLY,
    "named-functions": NAMED_FUNCTIONS,
    "all-functions": ALL_FUNCTIONS,
}


@dataclass(frozen=True)
class AutoConsoleOptions:
    """Everything the pass can be configured with.

    ``namespace``: leave calls to any method of the output object alone
    (``console.error``, ``console.warn``), not only the output function.
    """
    output: OutputCall = field(default_factory=OutputCall)
    exclude: ExclusionPolicy = NAMED_FUNCTIONS
    namespace: bool = True

    KEYS = frozenset(["object", "property", "exclude", "namespace"])

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> "AutoConsoleOptions":
        """Build options from plugin-style keys: object, property, exclude, namespace."""
        options = dict(options or {})
        unknown = set(options) - cls.KEYS
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        output = OutputCall(
            options.get("object", OutputCall.object),
            options.get("property", OutputCall.property),
        )
        exclude = options.get("exclude", NAMED_FUNCTIONS)
        if isinstance(exclude, str):
            exclude = ExclusionPolicy.preset(exclude)
        elif not isinstance(exclude, ExclusionPolicy):
            exclude = ExclusionPolicy(frozenset(exclude))
        return cls(output=output, exclude=exclude, namespace=bool(options.get("namespace", True)))
