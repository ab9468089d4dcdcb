"""
Prompt class -- coordinates templates, input variables, and rendering.
"""

from __future__ import annotations
from jinja2 import Environment, StrictUndefined, meta, Template
from typing import TYPE_CHECKING, Any, override
import logging

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# Shared jinja2 environment; undefined variables raise instead of rendering as empty
env = Environment(undefined=StrictUndefined, keep_trailing_newline=False)


class Prompt:
    """
    Takes a jinja2 ready string (not a Template object; the class creates that).
    The three stages of prompt creation:
    - the prompt string, which is provided to the class
    - the jinja template created from the prompt string
    - the rendered prompt, which is returned by the class and submitted to the provider.
    """

    def __init__(self, prompt_string: str):
        self.prompt_string: str = prompt_string
        self.template: Template = env.from_string(prompt_string)
        self.input_schema: set[str] = self._get_input_schema()

    def _get_input_schema(self) -> set[str]:
        """
        Returns the set of variable names referenced by the template.
        """
        parsed_content = env.parse(self.prompt_string)
        return meta.find_undeclared_variables(parsed_content)

    def render(self, input_variables: dict[str, Any]) -> str:
        self.validate_input_variables(input_variables)
        return self.template.render(**input_variables)

    @classmethod
    def from_file(cls, filename: str | Path) -> Prompt:
        """
        Creates a Prompt object from a .jinja2 / .jinja file.
        """
        from pathlib import Path

        filename = Path(filename)
        if not filename.exists():
            raise FileNotFoundError(f"Prompt file {filename} does not exist.")
        if filename.suffix not in {".jinja2", ".jinja"}:
            raise ValueError(f"Prompt file {filename} must be a .jinja2 or .jinja file.")
        return cls(filename.read_text(encoding="utf-8"))

    def validate_input_variables(self, input_variables: dict[str, Any]) -> None:
        """
        Validates that the input variables match the template exactly.
        """
        missing_vars: set[str] = self.input_schema - input_variables.keys()
        if missing_vars:
            raise ValueError(
                f'Prompt is missing required input variable(s): "{'", "'.join(sorted(missing_vars))}"'
            )
        extra_vars: set[str] = input_variables.keys() - self.input_schema
        if extra_vars:
            raise ValueError(
                f'Provided input variable(s) are not referenced in prompt: "{'", "'.join(sorted(extra_vars))}"'
            )

    @override
    def __repr__(self):
        attributes = ", ".join(
            [f"{k}={repr(v)[:50]}" for k, v in self.__dict__.items()]
        )
        return f"{self.__class__.__name__}({attributes})"
