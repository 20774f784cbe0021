"""CHIP-8 rendering utilities for visualization."""
import time
from typing import AbstractSet, Iterable, List, Sequence, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT

Pixel = Tuple[int, int]
DisplayLike = Union[AbstractSet[Pixel], np.ndarray]


def display_to_grid(display: DisplayLike) -> np.ndarray:
    """Convert a lit-pixel set to a boolean array of shape (64, 32).

    Cells outside the visible screen are dropped. Arrays are passed through.
    """
    if isinstance(display, np.ndarray):
        if display.shape != (SCREEN_WIDTH, SCREEN_HEIGHT):
            raise ValueError(f"Expected display shape (64, 32), got {display.shape}")
        return display.astype(np.bool_)

    grid = np.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=np.bool_)
    for x, y in display:
        if 0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT:
            grid[x, y] = True
    return grid


def display_diff(previous: AbstractSet[Pixel], current: AbstractSet[Pixel]) -> Tuple[List[Pixel], List[Pixel]]:
    """Cells to light and cells to clear to turn ``previous`` into ``current``.

    Both lists are ordered by row, then column, so a painter moves the cursor
    top to bottom.
    """
    def by_row(pixel):
        return pixel[1], pixel[0]

    added = sorted(current - previous, key=by_row)
    removed = sorted(previous - current, key=by_row)
    return added, removed


def chip8_display_to_rgb(
    display: DisplayLike,
    scale: int = 8,
    on_color: Tuple[int, int, int] = (0, 255, 0),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 display to RGB array with optional upscaling.

    Args:
        display: Lit-pixel set, or boolean array of shape (64, 32)
        scale: Upscaling factor for better visibility (default: 8x)
        on_color: RGB color for "on" pixels (default: green)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")

    # (64 width, 32 height) -> (32 height, 64 width)
    pixels = display_to_grid(display).T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Nearest neighbor upscaling
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
}


def create_color_scheme(
    scheme: str = "classic",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("classic", "amber", "white", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )

    return COLOR_SCHEMES[scheme]


def save_screenshot(
    display: DisplayLike,
    filename: str,
    scale: int = 8,
    color_scheme: str = "classic",
) -> Image.Image:
    """Render a display to an image file and return the PIL image."""
    on_color, off_color = create_color_scheme(color_scheme)
    image = Image.fromarray(chip8_display_to_rgb(display, scale, on_color, off_color))
    image.save(filename)
    return image


def create_video(
        frames: Sequence[DisplayLike],
        filename: str = None,
        fps: float = 60.0,
        scale: int = 8,
        color_scheme: str = "classic",
        persistence: bool = True,
        display: bool = False
) -> None:
    """Display and/or save CHIP-8 video with optional phosphor persistence.

    Args:
        frames: One display per frame (lit-pixel sets or (64, 32) arrays)
        filename: If provided, save video to this MP4 file
        fps: Video frame rate
        scale: Upscaling factor
        color_scheme: Color scheme for rendering
        persistence: Enable phosphor screen simulation (smooth fading)
        display: If True, show video in window (press 'q' to quit, space to pause)
    """
    if not frames or (filename is None and not display):
        return
    displays = np.stack([display_to_grid(frame) for frame in frames])

    height, width = SCREEN_HEIGHT * scale, SCREEN_WIDTH * scale
    on_color, off_color = np.array(create_color_scheme(color_scheme))

    writer = None
    if filename:
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        writer = cv2.VideoWriter(filename, fourcc, fps, (width, height))

    if display:
        window_name = "CHIP-8 Video (q=quit, space=pause)"
        cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)

    # Phosphor glow buffer
    glow = np.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=np.float32) if persistence else None
    decay = 0.8

    frame_delay = 1.0 / fps if display else 0
    paused = False

    try:
        for i, frame_display in enumerate(displays):
            start_time = time.time()

            if persistence:
                glow = glow * decay + frame_display.astype(np.float32)
                glow = np.clip(glow, 0.0, 1.0)
                pixel_values = glow.T  # (32, 64)
            else:
                pixel_values = frame_display.T.astype(np.float32)  # (32, 64)

            # Color interpolation between off and on
            frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH, 3), dtype=np.uint8)
            for c in range(3):
                frame[:, :, c] = off_color[c] + pixel_values * (on_color[c] - off_color[c])

            if scale > 1:
                frame = np.repeat(np.repeat(frame, scale, axis=0), scale, axis=1)
            frame_bgr = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

            if writer:
                writer.write(frame_bgr)

            if display:
                cv2.putText(frame_bgr, f"Frame {i + 1}/{len(displays)}",
                            (10, 25), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

                cv2.imshow(window_name, frame_bgr)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q') or key == 27:  # 'q' or ESC
                    break
                elif key == ord(' '):
                    paused = not paused

                while paused:
                    key = cv2.waitKey(30) & 0xFF
                    if key == ord(' '):
                        paused = False
                        break
                    elif key == ord('q') or key == 27:
                        return

                elapsed = time.time() - start_time
                sleep_time = max(0, frame_delay - elapsed)
                if sleep_time > 0:
                    time.sleep(sleep_time)

    finally:
        if writer:
            writer.release()
        if display:
            cv2.destroyAllWindows()
