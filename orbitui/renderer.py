"""Renderer interface, render context and a composite of 2D and 3D renderers."""

from __future__ import annotations

import abc
import copy
import enum
import math
import time
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Optional


class RendererType(enum.Enum):
    """The rendering back ends that can be requested."""

    SKIA = "skia"
    WGPU = "wgpu"
    WEBGL = "webgl"
    AUTO = "auto"


class QualityLevel(enum.Enum):
    """Trade-off between rendering speed and output quality."""

    PERFORMANCE = "performance"
    BALANCED = "balanced"
    QUALITY = "quality"


_ERROR_PREFIXES = {
    "skia": "Skia error",
    "gl": "OpenGL error",
    "init": "Initialization error",
    "general": "Renderer error",
}


class RendererError(Exception):
    """Raised when a renderer cannot be created or fails to render.

    ``kind`` is one of ``"skia"``, ``"gl"``, ``"init"`` or ``"general"``.
    """

    def __init__(self, message: str, kind: str = "general") -> None:
        if kind not in _ERROR_PREFIXES:
            raise ValueError(f"unknown renderer error kind: {kind!r}")
        super().__init__(f"{_ERROR_PREFIXES[kind]}: {message}")
        self.message = message
        self.kind = kind


@dataclass(frozen=True)
class RendererMessage:
    """A message sent to a renderer thread."""

    kind: str
    width: Optional[int] = None
    height: Optional[int] = None
    node: Any = None

    @classmethod
    def init(cls, width: int, height: int) -> "RendererMessage":
        """Initialise the renderer with the given dimensions."""
        return cls("init", width=width, height=height)

    @classmethod
    def begin_frame(cls) -> "RendererMessage":
        """Start a frame."""
        return cls("begin_frame")

    @classmethod
    def end_frame(cls) -> "RendererMessage":
        """Finish a frame."""
        return cls("end_frame")

    @classmethod
    def render(cls, node: Any) -> "RendererMessage":
        """Render ``node``."""
        return cls("render", node=node)

    @classmethod
    def shutdown(cls) -> "RendererMessage":
        """Shut the renderer down."""
        return cls("shutdown")


@dataclass
class RenderContext:
    """Viewport settings plus tracking of components that need re-rendering."""

    viewport_width: int = 0
    viewport_height: int = 0
    device_pixel_ratio: float = 1.0
    vsync_enabled: bool = True
    target_fps: int = 60
    _dirty: dict = field(default_factory=dict, repr=False, compare=False)

    def mark_dirty(self, component_id: Hashable) -> None:
        """Mark a component as needing a re-render."""
        self._dirty[component_id] = True

    def is_dirty(self, component_id: Hashable) -> bool:
        """Whether the component has been marked dirty."""
        return self._dirty.get(component_id, False)

    def mark_clean(self, component_id: Hashable) -> None:
        """Clear the dirty flag of one component."""
        self._dirty.pop(component_id, None)

    def dirty_components(self) -> list:
        """All components currently marked dirty."""
        return list(self._dirty)

    def clear_all_dirty(self) -> None:
        """Clear every dirty flag."""
        self._dirty.clear()


@dataclass
class RenderStats:
    """Performance figures for rendered frames."""

    frame_count: int = 0
    avg_frame_time_ms: float = 0.0
    current_fps: float = 0.0
    draw_calls: int = 0
    vertex_count: int = 0
    component_count: int = 0


class Renderer(abc.ABC):
    """Interface every renderer implements."""

    _initialized: bool = False

    @property
    def is_initialized(self) -> bool:
        """Whether ``init`` has run and ``cleanup`` has not since."""
        return self._initialized

    def init(self) -> None:
        """Prepare the renderer, marking it initialised."""
        self._initialized = True

    @abc.abstractmethod
    def render(self, root: Any, context: RenderContext) -> None:
        """Render the component tree rooted at ``root``."""

    def render_selective(
        self, root: Any, context: RenderContext, dirty_components: Iterable[Hashable]
    ) -> None:
        """Render only dirty components; falls back to a full render by default."""
        self.render(root, context)

    def flush(self) -> bool:
        """Flush pending operations; return whether there was state to flush."""
        return self._initialized

    def cleanup(self) -> None:
        """Release resources, marking the renderer uninitialised."""
        self._initialized = False

    @abc.abstractmethod
    def name(self) -> str:
        """The renderer's name."""

    def stats(self) -> RenderStats:
        """Rendering statistics; empty by default."""
        return RenderStats()

    def reset_stats(self) -> None:
        """Reset rendering statistics; does nothing by default."""

    def set_quality_level(self, level: QualityLevel) -> None:
        """Choose a quality level; ignored by default."""


def create_renderer(renderer_type: RendererType) -> Renderer:
    """Create a renderer of the requested type.

    No native back end is available, so every request raises
    :class:`RendererError` explaining why.
    """
    messages = {
        RendererType.SKIA: "Skia renderer not supported in this build",
        RendererType.WGPU: "WGPU renderer not supported in this build",
        RendererType.WEBGL: "WebGL renderer not supported in this build",
        RendererType.AUTO: "No renderer available - neither WGPU nor Skia enabled",
    }
    try:
        message = messages[RendererType(renderer_type)]
    except ValueError:
        raise ValueError(f"unknown renderer type: {renderer_type!r}") from None
    raise RendererError(message)


class CompositeRenderer(Renderer):
    """Draws 3D content first and 2D content on top, combining their statistics."""

    def __init__(self, renderer_2d: Renderer, renderer_3d: Renderer) -> None:
        self.renderer_2d = renderer_2d
        self.renderer_3d = renderer_3d
        self._stats = RenderStats()

    @classmethod
    def create_default(cls) -> "CompositeRenderer":
        """Build a composite from the default 2D and 3D back ends."""
        renderer_2d = create_renderer(RendererType.SKIA)
        renderer_3d = create_renderer(RendererType.WGPU)
        return cls(renderer_2d, renderer_3d)

    def render(self, root: Any, context: RenderContext) -> None:
        """Render with the 3D renderer, then the 2D renderer, and update stats."""
        start = time.perf_counter()
        self.renderer_3d.render(root, context)
        self.renderer_2d.render(root, context)
        frame_time = (time.perf_counter() - start) * 1000.0

        stats = self._stats
        stats.frame_count += 1
        stats.avg_frame_time_ms = (stats.avg_frame_time_ms + frame_time) / 2.0
        stats.current_fps = 1000.0 / frame_time if frame_time > 0.0 else math.inf

        stats_2d = self.renderer_2d.stats()
        stats_3d = self.renderer_3d.stats()
        stats.draw_calls = stats_2d.draw_calls + stats_3d.draw_calls
        stats.vertex_count = stats_2d.vertex_count + stats_3d.vertex_count
        stats.component_count = stats_2d.component_count + stats_3d.component_count

    def render_selective(
        self, root: Any, context: RenderContext, dirty_components: Iterable[Hashable]
    ) -> None:
        """Selectively render with both renderers, 3D first."""
        dirty = list(dirty_components)
        self.renderer_3d.render_selective(root, context, dirty)
        self.renderer_2d.render_selective(root, context, dirty)

    def name(self) -> str:
        return "Enhanced Composite Renderer"

    def stats(self) -> RenderStats:
        """A copy of the combined statistics."""
        return copy.copy(self._stats)

    def reset_stats(self) -> None:
        """Reset the combined statistics and those of both renderers."""
        self._stats = RenderStats()
        self.renderer_2d.reset_stats()
        self.renderer_3d.reset_stats()

    def set_quality_level(self, level: QualityLevel) -> None:
        """Pass the quality level to both renderers."""
        self.renderer_2d.set_quality_level(level)
        self.renderer_3d.set_quality_level(level)