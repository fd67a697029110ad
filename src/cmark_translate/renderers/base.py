#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/renderers/base.py
"""Base classes for renderers that turn a document tree into text."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from cmark_translate.ast import Document, Node
from cmark_translate.exceptions import InvalidOptionsError, RenderingError


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    options : Any
        Renderer configuration (a frozen options dataclass)

    """

    def __init__(self, options: Any):
        """Initialize the renderer with its options."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: Any, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text to a file path or a stream as UTF-8.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes], or IO[str]
            Output destination

        Raises
        ------
        RenderingError
            If the output cannot be written

        """
        if isinstance(output, (str, Path)):
            try:
                Path(output).write_text(text, encoding="utf-8", newline="")
            except OSError as e:
                raise RenderingError(f"Cannot write {output}: {e}", rendering_stage="write", original_error=e) from e
            return

        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]

    @abstractmethod
    def render_to_string(self, document: Document) -> str:
        """Render a document tree to a string."""
        pass


class InlineContentMixin:
    """Mixin providing the capture-and-restore pattern for inline rendering.

    The implementing class must have an ``_output`` list that its visitor
    methods append to.
    """

    _output: list[str]

    def _render_inline_content(self, nodes: list[Node]) -> str:
        """Render inline nodes to a string by temporarily capturing output."""
        saved_output = self._output
        self._output = []
        for node in nodes:
            node.accept(self)
        content = "".join(self._output)
        self._output = saved_output
        return content
