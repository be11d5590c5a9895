"""
Arcade render layer
-------------------
Pulls a WorldSnapshot and draws each entity kind with its own routine.
Palette and fonts come from an injected AssetHandles collaborator; the
simulation core never sees either.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

import arcade

from .world import WorldSnapshot

Color = Tuple[int, int, int]
Point = Tuple[float, float]


@dataclass(frozen=True)
class AssetHandles:
    """Read-only drawing assets handed to the renderer"""
    background: Color = (0, 0, 0)
    player: Color = (0, 255, 255)
    enemy: Color = (255, 0, 0)
    projectile: Color = (255, 255, 0)
    hud_text: Color = (255, 255, 255)
    bar_background: Color = (128, 128, 128)
    bar_fill: Color = (255, 0, 0)
    game_over: Color = (255, 0, 0)
    font_name: str = "Arial"


def rotated_box(cx: float, cy: float, w: float, h: float, angle: float, nose: float = 0.0) -> List[Point]:
    """Corners of a w x h box centered on (cx, cy) rotated by angle, with an optional nose tip"""
    hw, hh = w / 2.0, h / 2.0
    local = [(-hw, -hh), (hw, -hh)]
    if nose > 0:
        local.append((hw + nose, 0.0))
    local += [(hw, hh), (-hw, hh)]

    c, s = math.cos(angle), math.sin(angle)
    return [(cx + x * c - y * s, cy + x * s + y * c) for x, y in local]


class SceneRenderer:
    """Draws snapshots into the current arcade window (world y points down)"""

    def __init__(self, assets: AssetHandles, width: int, height: int):
        self.assets = assets
        self.width = width
        self.height = height

    def _flip(self, points: List[Point]) -> List[Point]:
        return [(x, self.height - y) for x, y in points]

    def draw(self, snapshot: WorldSnapshot):
        self.draw_background()
        self.draw_player(snapshot)
        self.draw_projectiles(snapshot)
        self.draw_enemies(snapshot)
        self.draw_hud(snapshot)
        if snapshot.terminal:
            self.draw_game_over()

    def draw_background(self):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.assets.background)

    def draw_player(self, snapshot: WorldSnapshot):
        p = snapshot.player
        cx, cy = p.x + p.width / 2.0, p.y + p.height / 2.0
        points = rotated_box(cx, cy, p.width, p.height, p.angle, nose=15)
        arcade.draw_polygon_filled(self._flip(points), self.assets.player)

    def draw_projectiles(self, snapshot: WorldSnapshot):
        for b in snapshot.projectiles:
            r = b.size / 2.0
            arcade.draw_circle_filled(b.x + r, self.height - (b.y + r), r, self.assets.projectile)

    def draw_enemies(self, snapshot: WorldSnapshot):
        for e in snapshot.enemies:
            cx, cy = e.x + e.width / 2.0, e.y + e.height / 2.0
            points = rotated_box(cx, cy, e.width, e.height, e.angle, nose=10)
            arcade.draw_polygon_filled(self._flip(points), self.assets.enemy)

    def draw_hud(self, snapshot: WorldSnapshot):
        arcade.draw_text(
            f"Score: {snapshot.score}", 10, self.height - 30,
            self.assets.hud_text, 20, font_name=self.assets.font_name, bold=True,
        )

        # Health bar, top-right
        bar_w, bar_h = 150, 20
        x0 = self.width - bar_w - 20
        top = self.height - 20
        p = snapshot.player
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, top - bar_h, top, self.assets.bar_background)
        fill = bar_w * p.health / max(1, p.max_health)
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, top - bar_h, top, self.assets.bar_fill)
        arcade.draw_lrbt_rectangle_outline(x0, x0 + bar_w, top - bar_h, top, self.assets.hud_text, 1)

    def draw_game_over(self):
        cy = self.height / 2
        arcade.draw_text(
            "GAME OVER", self.width / 2, cy, self.assets.game_over, 50,
            font_name=self.assets.font_name, bold=True, anchor_x="center",
        )
        arcade.draw_text(
            "Press ENTER to restart", self.width / 2, cy - 40, self.assets.game_over, 20,
            font_name=self.assets.font_name, anchor_x="center",
        )
