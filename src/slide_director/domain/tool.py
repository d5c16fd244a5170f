from dataclasses import dataclass
from typing import Any, Dict, Type

from pydantic import BaseModel


@dataclass(frozen=True)
class ToolSpec:
    """
    Immutable declaration of a tool the slide agent may call.

    The argument shape lives in a pydantic model so the executor can validate
    model-supplied arguments against it.
    """

    name: str
    description: str
    args_model: Type[BaseModel]
    sensitive: bool = False

    def parameters_schema(self) -> Dict[str, Any]:
        """
        Returns the JSON schema of the tool arguments.

        Returns:
            A JSON schema object without pydantic's title noise.
        """
        schema = self.args_model.model_json_schema()
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        return schema

    def validate_args(self, args: Dict[str, Any]) -> BaseModel:
        """
        Validates raw arguments against the declared shape.

        Args:
            args: Arguments as produced by the model.

        Returns:
            The parsed argument model.

        Raises:
            pydantic.ValidationError: If the arguments do not fit the shape.
        """
        return self.args_model.model_validate(args or {})

    def as_openai_tool(self) -> Dict[str, Any]:
        """
        Returns an OpenAI-compatible tool schema definition.

        Returns:
            A dictionary describing the tool for LLM binding.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters_schema(),
            },
        }
