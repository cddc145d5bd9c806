import pytest

from orbitui.renderer import (
    CompositeRenderer,
    QualityLevel,
    RenderContext,
    Renderer,
    RendererError,
    RendererMessage,
    RendererType,
    RenderStats,
    create_renderer,
)


class RecordingRenderer(Renderer):
    def __init__(self, label, log, draw_calls=0, vertex_count=0, component_count=0):
        self.label = label
        self.log = log
        self._stats = RenderStats(
            draw_calls=draw_calls,
            vertex_count=vertex_count,
            component_count=component_count,
        )
        self.quality = None

    def render(self, root, context):
        self.log.append((self.label, "render", root))

    def name(self):
        return self.label

    def stats(self):
        return self._stats

    def reset_stats(self):
        self._stats = RenderStats()
        self.log.append((self.label, "reset", None))

    def set_quality_level(self, level):
        self.quality = level


class SelectiveRenderer(RecordingRenderer):
    def render_selective(self, root, context, dirty_components):
        self.log.append((self.label, "selective", tuple(dirty_components)))


class FailingRenderer(RecordingRenderer):
    def render(self, root, context):
        raise RendererError("boom")


@pytest.mark.parametrize(
    "renderer_type, message",
    [
        (RendererType.SKIA, "Skia renderer not supported in this build"),
        (RendererType.WGPU, "WGPU renderer not supported in this build"),
        (RendererType.WEBGL, "WebGL renderer not supported in this build"),
        (RendererType.AUTO, "No renderer available - neither WGPU nor Skia enabled"),
    ],
)
def test_create_renderer_reports_unavailable_backend(renderer_type, message):
    with pytest.raises(RendererError) as info:
        create_renderer(renderer_type)
    assert info.value.message == message


def test_create_default_composite_fails_without_backends():
    with pytest.raises(RendererError) as info:
        CompositeRenderer.create_default()
    assert "Skia renderer not supported" in str(info.value)


def test_renderer_error_prefixes():
    assert str(RendererError("x", "skia")) == "Skia error: x"
    assert str(RendererError("x", "gl")) == "OpenGL error: x"
    assert str(RendererError("x", "init")) == "Initialization error: x"
    assert str(RendererError("x")) == "Renderer error: x"


def test_renderer_error_rejects_unknown_kind():
    with pytest.raises(ValueError):
        RendererError("x", "bogus")


def test_renderer_messages():
    init = RendererMessage.init(800, 600)
    assert (init.kind, init.width, init.height) == ("init", 800, 600)
    node = object()
    assert RendererMessage.render(node).node is node
    assert RendererMessage.shutdown().kind == "shutdown"
    assert RendererMessage.begin_frame() == RendererMessage.begin_frame()
    assert RendererMessage.begin_frame() != RendererMessage.end_frame()


def test_render_context_defaults():
    context = RenderContext(1024, 768)
    assert context.viewport_width == 1024
    assert context.viewport_height == 768
    assert context.device_pixel_ratio == 1.0
    assert context.vsync_enabled is True
    assert context.target_fps == 60
    assert context.dirty_components() == []


def test_render_context_dirty_tracking():
    context = RenderContext(10, 10)
    context.mark_dirty(1)
    context.mark_dirty(2)
    context.mark_dirty(1)
    assert context.is_dirty(1)
    assert not context.is_dirty(3)
    assert sorted(context.dirty_components()) == [1, 2]

    context.mark_clean(1)
    assert not context.is_dirty(1)
    assert context.dirty_components() == [2]

    context.mark_clean(99)
    context.clear_all_dirty()
    assert context.dirty_components() == []


def test_default_render_selective_falls_back_to_render():
    log = []
    renderer = RecordingRenderer("r", log)
    context = RenderContext()
    context.mark_dirty(1)
    result = renderer.render_selective("root", context, [1, 2])
    assert result is None
    assert log == [("r", "render", "root")]
    assert context.dirty_components() == [1]


def test_base_renderer_default_stats_empty():
    class Minimal(Renderer):
        def render(self, root, context):
            pass

        def name(self):
            return "minimal"

    renderer = Minimal()
    assert renderer.stats() == RenderStats()
    assert renderer.init() is None and renderer.name() == "minimal"


def test_renderer_is_abstract():
    with pytest.raises(TypeError):
        Renderer()


def test_composite_renders_3d_before_2d():
    log = []
    composite = CompositeRenderer(RecordingRenderer("2d", log), RecordingRenderer("3d", log))
    composite.render("root", RenderContext(100, 100))
    assert log == [("3d", "render", "root"), ("2d", "render", "root")]


def test_composite_combines_stats():
    log = []
    two_d = RecordingRenderer("2d", log, draw_calls=3, vertex_count=40, component_count=5)
    three_d = RecordingRenderer("3d", log, draw_calls=7, vertex_count=100, component_count=2)
    composite = CompositeRenderer(two_d, three_d)
    composite.render(None, RenderContext())
    stats = composite.stats()
    assert stats.frame_count == 1
    assert stats.draw_calls == 3 + 7
    assert stats.vertex_count == 40 + 100
    assert stats.component_count == 5 + 2
    assert stats.avg_frame_time_ms >= 0.0
    assert stats.current_fps > 0.0

    composite.render(None, RenderContext())
    assert composite.stats().frame_count == 2


def test_composite_stats_returns_copy():
    composite = CompositeRenderer(RecordingRenderer("2d", []), RecordingRenderer("3d", []))
    composite.render(None, RenderContext())
    snapshot = composite.stats()
    snapshot.frame_count = 100
    assert composite.stats().frame_count == 1


def test_composite_reset_stats_resets_children():
    log = []
    two_d = RecordingRenderer("2d", log, draw_calls=3)
    three_d = RecordingRenderer("3d", log, draw_calls=4)
    composite = CompositeRenderer(two_d, three_d)
    composite.render(None, RenderContext())
    composite.reset_stats()
    assert composite.stats() == RenderStats()
    assert two_d.stats() == RenderStats()
    assert ("3d", "reset", None) in log and ("2d", "reset", None) in log


def test_composite_selective_render_order():
    log = []
    composite = CompositeRenderer(SelectiveRenderer("2d", log), SelectiveRenderer("3d", log))
    composite.render_selective("root", RenderContext(), [5, 6])
    assert log == [("3d", "selective", (5, 6)), ("2d", "selective", (5, 6))]


def test_composite_quality_level_propagates():
    two_d = RecordingRenderer("2d", [])
    three_d = RecordingRenderer("3d", [])
    composite = CompositeRenderer(two_d, three_d)
    composite.set_quality_level(QualityLevel.QUALITY)
    assert two_d.quality is QualityLevel.QUALITY
    assert three_d.quality is QualityLevel.QUALITY


def test_composite_name():
    composite = CompositeRenderer(RecordingRenderer("2d", []), RecordingRenderer("3d", []))
    assert composite.name() == "Enhanced Composite Renderer"


def test_composite_propagates_errors_and_keeps_stats():
    log = []
    composite = CompositeRenderer(RecordingRenderer("2d", log), FailingRenderer("3d", log))
    with pytest.raises(RendererError):
        composite.render(None, RenderContext())
    assert log == []
    assert composite.stats().frame_count == 0