"""overmark - freehand and arrow annotations over a raster image."""

from .types import (
    AnnotationKind, ToolKind, CommitAction,
    Point, Stroke, Arrow, Annotation, ArrowPolygon,
    ImageSize, SurfaceRect, PointerEvent, CommitEvent,
)
from .geometry import clamp_line_width, arrow_polygon
from .annotations import AnnotationList, clone_annotation, clone_annotations
from .view_math import map_pointer_to_image_space
from .renderer import render, render_flattened, Renderer
from .gesture import GestureMachine
from .commit import CommitController
from .editor import AnnotationEditor

__all__ = [
    'AnnotationKind', 'ToolKind', 'CommitAction',
    'Point', 'Stroke', 'Arrow', 'Annotation', 'ArrowPolygon',
    'ImageSize', 'SurfaceRect', 'PointerEvent', 'CommitEvent',
    'clamp_line_width', 'arrow_polygon',
    'AnnotationList', 'clone_annotation', 'clone_annotations',
    'map_pointer_to_image_space',
    'render', 'render_flattened', 'Renderer',
    'GestureMachine',
    'CommitController',
    'AnnotationEditor',
]
