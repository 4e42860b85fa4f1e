"""Structured SVG documents: model, optimizer, transformer and renderer.

The pipeline orchestrator lives in ``svgdoc.processor`` and is imported
explicitly, since it depends on the ``svgcheck`` validation package which in
turn builds on this package's model.
"""

from .errors import ConfigurationError, DocumentValidationError, RenderError, SvgDocError
from .model import Document, document_from_dict
from .optimize import OptimizationOptions, optimize_document
from . import shapes
from .renderer import render_svg, save_svg
from .transform import TransformStep, transform_document, transform_multiple

__all__ = [
    "ConfigurationError",
    "Document",
    "DocumentValidationError",
    "OptimizationOptions",
    "RenderError",
    "SvgDocError",
    "TransformStep",
    "document_from_dict",
    "optimize_document",
    "render_svg",
    "save_svg",
    "shapes",
    "transform_document",
    "transform_multiple",
]
