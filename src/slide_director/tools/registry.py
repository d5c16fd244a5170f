"""Lookup structure over a fixed tool catalog."""

from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from slide_director.domain.tool import ToolSpec


class ToolRegistry:
    """
    Ordered, read-only collection of tool specs.

    Args:
        specs: The tool specs in catalog order. Names must be unique.
    """

    def __init__(self, specs: Iterable[ToolSpec]) -> None:
        ordered: Tuple[ToolSpec, ...] = tuple(specs)
        by_name: Dict[str, ToolSpec] = {}
        for spec in ordered:
            if spec.name in by_name:
                raise ValueError(f"Duplicate tool name '{spec.name}'")
            by_name[spec.name] = spec
        self._specs = ordered
        self._by_name = by_name

    def __iter__(self):
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def specs(self) -> Tuple[ToolSpec, ...]:
        return self._specs

    def get(self, name: str) -> Optional[ToolSpec]:
        """
        Retrieves a tool spec by name.

        Args:
            name: The tool name to fetch.

        Returns:
            The matching spec or None.
        """
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [spec.name for spec in self._specs]

    def sensitive_names(self) -> FrozenSet[str]:
        """Returns the names of tools that need user approval."""

        return frozenset(spec.name for spec in self._specs if spec.sensitive)

    def as_openai_tools(self) -> List[Dict[str, Any]]:
        """
        Returns every tool in OpenAI function-calling format.

        Returns:
            Tool schema dictionaries suitable for ``bind_tools``.
        """
        return [spec.as_openai_tool() for spec in self._specs]
