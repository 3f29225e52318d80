"""Interactive viewer - a raylib window around one AnnotationEditor.

Each frame:
    1. poll mouse/keyboard and turn them into commands
    2. execute the commands against the editor
    3. re-upload the overlay texture if the annotation list changed
    4. draw image, overlay and HUD
"""

from __future__ import annotations
import os
import sys
import traceback
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .commands import (
    Command, CommandQueue, CloseApp,
    PointerDown, PointerMove, PointerUp, PointerLeave,
    SelectTool, SetColor, StepLineWidth,
    Undo, Save, Delete, Cancel,
)
from .config import (
    TARGET_FPS, WINDOW_W, WINDOW_H, WINDOW_TITLE, FIT_DEFAULT_SCALE,
    WIDTH_STEP, COLOR_PRESETS, IMG_EXTS,
    KEY_TOOL_PEN, KEY_TOOL_ARROW, KEY_UNDO, KEY_SAVE, KEY_DELETE, KEY_CANCEL,
    KEY_WIDTH_DOWN, KEY_WIDTH_UP, KEY_COLOR_FIRST, KEY_CLOSE,
)
from .editor import AnnotationEditor
from .logging import log, increment_frame
from .rl_compat import (
    rl, RL_VERSION,
    make_rect as RL_Rect, make_vec2 as RL_V2, make_color as RL_Color,
    draw_text as RL_DrawText, init_window, texture_from_pil, unload_texture,
)
from .types import CommitEvent, PointerEvent, SurfaceRect, ToolKind
from .view_math import fit_surface_rect, rect_contains


def is_supported_image(filepath: str) -> bool:
    """Check if file has a supported image extension."""
    ext = os.path.splitext(filepath)[1].lower()
    return ext in IMG_EXTS


@dataclass
class TextureInfo:
    """A GPU texture and its pixel size."""
    tex: Any
    w: int
    h: int


@dataclass
class MouseState:
    """Current mouse state snapshot."""
    x: float = 0.0
    y: float = 0.0
    left_pressed: bool = False
    left_released: bool = False
    left_down: bool = False


@dataclass
class InputHandler:
    """Handles input polling and command generation."""
    pointer_id: int = 1

    def poll_mouse(self) -> MouseState:
        pos = rl.GetMousePosition()
        return MouseState(
            x=pos.x,
            y=pos.y,
            left_pressed=rl.IsMouseButtonPressed(rl.MOUSE_BUTTON_LEFT),
            left_released=rl.IsMouseButtonReleased(rl.MOUSE_BUTTON_LEFT),
            left_down=rl.IsMouseButtonDown(rl.MOUSE_BUTTON_LEFT),
        )

    def poll(self, editor: AnnotationEditor, rect: Optional[SurfaceRect]) -> List[Command]:
        """Poll keyboard and mouse, return commands for this frame."""
        commands: List[Command] = []

        if rl.IsKeyPressed(KEY_CLOSE):
            commands.append(CloseApp())
            return commands

        if rl.IsKeyPressed(KEY_TOOL_PEN):
            commands.append(SelectTool(ToolKind.PEN))
        if rl.IsKeyPressed(KEY_TOOL_ARROW):
            commands.append(SelectTool(ToolKind.ARROW))
        if rl.IsKeyPressed(KEY_WIDTH_DOWN):
            commands.append(StepLineWidth(-WIDTH_STEP))
        if rl.IsKeyPressed(KEY_WIDTH_UP):
            commands.append(StepLineWidth(WIDTH_STEP))
        for i, color in enumerate(COLOR_PRESETS):
            if rl.IsKeyPressed(KEY_COLOR_FIRST + i):
                commands.append(SetColor(color))
        if rl.IsKeyPressed(KEY_UNDO):
            commands.append(Undo())
        if rl.IsKeyPressed(KEY_SAVE):
            commands.append(Save())
        if rl.IsKeyPressed(KEY_DELETE):
            commands.append(Delete())
        if rl.IsKeyPressed(KEY_CANCEL):
            commands.append(Cancel())

        if rect is None:
            return commands

        mouse = self.poll_mouse()
        event = PointerEvent(mouse.x, mouse.y, self.pointer_id)
        inside = rect_contains(rect, mouse.x, mouse.y)

        if mouse.left_pressed and inside:
            commands.append(PointerDown(event, rect))
        elif editor.is_drawing:
            if mouse.left_released or not mouse.left_down:
                commands.append(PointerUp(event))
            elif not inside:
                commands.append(PointerLeave(event))
            else:
                commands.append(PointerMove(event, rect))

        return commands


@dataclass
class Viewer:
    """
    Main viewer loop.

    Usage:
        viewer = Viewer()
        viewer.open("photo.png")
        viewer.run()
    """
    editor: AnnotationEditor = field(default_factory=AnnotationEditor)
    input_handler: InputHandler = field(default_factory=InputHandler)
    queue: CommandQueue = field(default_factory=CommandQueue)
    image_tex: Optional[TextureInfo] = None
    overlay_tex: Optional[TextureInfo] = None
    overlay_version: int = -1
    screen_w: int = WINDOW_W
    screen_h: int = WINDOW_H
    last_event: Optional[CommitEvent] = None
    running: bool = False

    def __post_init__(self):
        self.editor.subscribe(self._on_commit)

    def open(self, path: str) -> None:
        self.editor.load_image_file(path)

    @property
    def surface_rect(self) -> Optional[SurfaceRect]:
        size = self.editor.state.image.size
        if not size.is_known:
            return None
        return fit_surface_rect(size.width, size.height,
                                self.screen_w, self.screen_h, FIT_DEFAULT_SCALE)

    def run(self) -> None:
        log("[VIEWER] Initializing window")
        init_window(self.screen_w, self.screen_h, WINDOW_TITLE)
        try:
            rl.SetExitKey(0)
        except Exception:
            pass
        rl.SetTargetFPS(TARGET_FPS)
        log(f"[VIEWER] RL_VER={RL_VERSION} window={self.screen_w}x{self.screen_h}")

        self.running = True
        try:
            self._upload_image()
            while self.running and not rl.WindowShouldClose():
                self._frame()
        except Exception as e:
            log(f"[VIEWER][CRITICAL] Unhandled exception: {e!r}")
            log(f"[VIEWER][CRITICAL] Traceback:\n{traceback.format_exc()}")
        finally:
            self._cleanup()

    def _frame(self) -> None:
        self.screen_w, self.screen_h = rl.GetScreenWidth(), rl.GetScreenHeight()
        rect = self.surface_rect

        for cmd in self.input_handler.poll(self.editor, rect):
            if isinstance(cmd, CloseApp):
                cmd.execute(self.editor)
                self.running = False
                return
            self.queue.execute(cmd, self.editor)

        self._sync_overlay()
        self._draw(rect)
        increment_frame()

    # ═══════════════════════════════════════════════════════════════════════
    # Textures
    # ═══════════════════════════════════════════════════════════════════════

    def _upload_image(self) -> None:
        img = self.editor.state.image.image
        if img is None:
            return
        self.image_tex = TextureInfo(texture_from_pil(img), img.width, img.height)

    def _sync_overlay(self) -> None:
        version = self.editor.annotations.version
        surface = self.editor.surface
        if version == self.overlay_version or surface is None:
            return
        if self.overlay_tex:
            unload_texture(self.overlay_tex.tex)
        self.overlay_tex = TextureInfo(texture_from_pil(surface), surface.width, surface.height)
        self.overlay_version = version

    def _cleanup(self) -> None:
        log("[CLEANUP] Unloading textures")
        for ti in (self.image_tex, self.overlay_tex):
            try:
                if ti:
                    unload_texture(ti.tex)
            except Exception:
                pass
        try:
            rl.CloseWindow()
        except Exception:
            pass
        log("[CLEANUP] Cleanup complete")

    # ═══════════════════════════════════════════════════════════════════════
    # Drawing
    # ═══════════════════════════════════════════════════════════════════════

    def _draw_texture(self, ti: Optional[TextureInfo], rect: SurfaceRect) -> None:
        if not ti:
            return
        rl.DrawTexturePro(
            ti.tex,
            RL_Rect(0, 0, ti.w, ti.h),
            RL_Rect(rect.left, rect.top, rect.width, rect.height),
            RL_V2(0, 0), 0.0, RL_Color(255, 255, 255, 255)
        )

    def _draw(self, rect: Optional[SurfaceRect]) -> None:
        rl.BeginDrawing()
        rl.ClearBackground(RL_Color(24, 24, 24, 255))
        if rect is not None:
            self._draw_texture(self.image_tex, rect)
            self._draw_texture(self.overlay_tex, rect)
        self._draw_hud()
        rl.EndDrawing()

    def _draw_hud(self) -> None:
        tools = self.editor.state.tools
        mode = tools.tool.value if tools.enabled else "off"
        line = (f"tool={mode} color={tools.color} width={tools.line_width:g} "
                f"annotations={len(self.editor.annotations)} saved={self.editor.commits.saved_count}")
        RL_DrawText(line, 12, 12, 18, RL_Color(220, 220, 220, 255))
        if self.last_event:
            RL_DrawText(f"last={self.last_event.action.value}", 12, 36, 18,
                        RL_Color(160, 160, 160, 255))

    def _on_commit(self, event: CommitEvent) -> None:
        self.last_event = event


def main() -> None:
    log("[MAIN] Starting viewer")

    path = None
    for a in sys.argv[1:]:
        p = os.path.abspath(a)
        if os.path.isfile(p) and is_supported_image(p):
            path = p
            break

    if not path:
        log("[ARGS] Usage: overmark <image>")
        sys.exit(2)

    viewer = Viewer()
    try:
        viewer.open(path)
    except OSError as e:
        log(f"[MAIN][ERR] Cannot open {path}: {e!r}")
        sys.exit(1)
    viewer.run()


if __name__ == "__main__":
    main()
