"""Paint the keyboard app icon into an RGBA pixel buffer.

The icon is a tree of rounded-rectangle layers evaluated back to front:
the rounded canvas, a keyboard body on top of it, and the key caps on top
of the body. Pixels outside the canvas shape stay fully transparent.
"""

import logging
import math
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Colors matching the app's dark-gold theme
BACKGROUND = (30, 32, 36)
BODY = (50, 54, 62)
ACCENT = (226, 183, 20)
TRANSPARENT = (0, 0, 0, 0)

# Proportions, relative to the canvas
CORNER_RATIO = 0.22
BODY_WIDTH_RATIO = 0.72
BODY_HEIGHT_RATIO = 0.45
BODY_RADIUS_RATIO = 0.06
KEY_SIZE_RATIO = 0.08
KEY_GAP_RATIO = 0.025
KEY_RADIUS_RATIO = 0.015
FIRST_ROW_OFFSET = 0.18
KEYS_PER_ROW = 4
SPACE_BAR_RATIO = 0.65


@dataclass(frozen=True)
class RoundedRect:
    """Axis-aligned rectangle with quarter-circle corners."""

    left: float
    top: float
    width: float
    height: float
    radius: float

    @property
    def degenerate(self):
        """True when the radius is more than half of either side."""
        return self.radius * 2 > min(self.width, self.height)

    def contains(self, x, y):
        """Hit test one pixel. Corner pixels exactly on the arc count as inside."""
        w, h, r = self.width, self.height, self.radius
        if x < self.left or x >= self.left + w or y < self.top or y >= self.top + h:
            return False
        lx = x - self.left
        ly = y - self.top
        if lx < r and ly < r:
            return math.sqrt((lx - r) ** 2 + (ly - r) ** 2) <= r
        if lx >= w - r and ly < r:
            return math.sqrt((lx - (w - r)) ** 2 + (ly - r) ** 2) <= r
        if lx < r and ly >= h - r:
            return math.sqrt((lx - r) ** 2 + (ly - (h - r)) ** 2) <= r
        if lx >= w - r and ly >= h - r:
            return math.sqrt((lx - (w - r)) ** 2 + (ly - (h - r)) ** 2) <= r
        return True


@dataclass(frozen=True)
class Layer:
    """A filled shape plus the layers painted on top of it.

    Children are only tested for pixels that hit this layer, in order, so
    a later child overwrites an earlier one.
    """

    name: str
    shape: RoundedRect
    color: tuple
    children: tuple = field(default=())

    def walk(self):
        """Yield this layer and all of its descendants, back to front."""
        yield self
        for child in self.children:
            yield from child.walk()


def icon_layers(width, height):
    """Build the layer tree for a ``width`` x ``height`` canvas."""
    center_x = width / 2
    center_y = height / 2

    # Keyboard body
    body_width = width * BODY_WIDTH_RATIO
    body_height = height * BODY_HEIGHT_RATIO
    body_left = center_x - body_width / 2
    body_top = center_y - body_height / 2

    # Keys
    key_size = width * KEY_SIZE_RATIO
    key_gap = width * KEY_GAP_RATIO
    key_radius = width * KEY_RADIUS_RATIO
    row_width = KEYS_PER_ROW * key_size + (KEYS_PER_ROW - 1) * key_gap
    row_left = center_x - row_width / 2

    row1_top = body_top + body_height * FIRST_ROW_OFFSET
    row2_top = row1_top + key_size + key_gap
    row3_top = row2_top + key_size + key_gap

    keys = []
    for row, top in (("row1", row1_top), ("row2", row2_top)):
        for k in range(KEYS_PER_ROW):
            key_left = row_left + k * (key_size + key_gap)
            keys.append(Layer(
                f"{row}-key{k + 1}",
                RoundedRect(key_left, top, key_size, key_size, key_radius),
                ACCENT,
            ))

    # Row 3 is a single space bar
    space_width = body_width * SPACE_BAR_RATIO
    space_left = center_x - space_width / 2
    keys.append(Layer(
        "space-bar",
        RoundedRect(space_left, row3_top, space_width, key_size, key_radius),
        ACCENT,
    ))

    body = Layer(
        "body",
        RoundedRect(body_left, body_top, body_width, body_height, width * BODY_RADIUS_RATIO),
        BODY,
        tuple(keys),
    )
    return Layer(
        "canvas",
        RoundedRect(0, 0, width, height, width * CORNER_RATIO),
        BACKGROUND,
        (body,),
    )


def _fill(layer, x, y):
    color = layer.color
    for child in layer.children:
        if child.shape.contains(x, y):
            color = _fill(child, x, y)
    return color


def paint_layers(root, width, height):
    """Rasterize a layer tree. Returns a row-major list of RGBA tuples."""
    for layer in root.walk():
        if layer.shape.degenerate:
            logger.debug(
                "Layer %s at %dx%d has radius %.2f larger than half its size",
                layer.name, width, height, layer.shape.radius,
            )

    pixels = []
    for y in range(height):
        for x in range(width):
            if not root.shape.contains(x, y):
                pixels.append(TRANSPARENT)
                continue
            r, g, b = _fill(root, x, y)
            pixels.append((r, g, b, 255))
    return pixels


def paint(width, height):
    """Paint the keyboard icon at ``width`` x ``height``."""
    return paint_layers(icon_layers(width, height), width, height)
