"""
Arcade host window: fixed-rate tick driver and event plumbing
"""

from __future__ import annotations

import logging
from typing import Optional

import arcade

from .input_state import Direction
from .render import AssetHandles, SceneRenderer
from .world import World

logger = logging.getLogger(__name__)

TICK_RATE = 1 / 60

KEY_DIRECTIONS = {
    arcade.key.W: Direction.UP,
    arcade.key.UP: Direction.UP,
    arcade.key.S: Direction.DOWN,
    arcade.key.DOWN: Direction.DOWN,
    arcade.key.A: Direction.LEFT,
    arcade.key.LEFT: Direction.LEFT,
    arcade.key.D: Direction.RIGHT,
    arcade.key.RIGHT: Direction.RIGHT,
}


class SurvivorWindow(arcade.Window):
    """Drives one World at 60 Hz and forwards keyboard/pointer events into it"""

    def __init__(self, world: World, assets: Optional[AssetHandles] = None, title: str = "Space Survivor"):
        super().__init__(world.width, world.height, title, update_rate=TICK_RATE)
        self.world = world
        self.renderer = SceneRenderer(assets or AssetHandles(), world.width, world.height)

    def _to_world(self, x: float, y: float):
        # arcade's origin is bottom-left, the world's is top-left
        return x, self.world.height - y

    def on_update(self, delta_time: float):
        if self.world.is_terminal():
            return
        self.world.step()

    def on_draw(self):
        self.clear()
        self.renderer.draw(self.world.snapshot())

    def on_key_press(self, symbol: int, modifiers: int):
        direction = KEY_DIRECTIONS.get(symbol)
        if direction is not None:
            self.world.set_directional(direction, True)
        elif symbol in (arcade.key.ENTER, arcade.key.RETURN) and self.world.is_terminal():
            self.world.restart()
        elif symbol == arcade.key.ESCAPE:
            logger.info("closing at tick %d, score=%d", self.world.tick_count, self.world.score)
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        direction = KEY_DIRECTIONS.get(symbol)
        if direction is not None:
            self.world.set_directional(direction, False)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.world.set_pointer(*self._to_world(x, y))

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        pointer = self._to_world(x, y)
        self.world.set_pointer(*pointer)
        self.world.fire_projectile(pointer)


def play(world: World, assets: Optional[AssetHandles] = None):
    """Open the window and run until it is closed"""
    SurvivorWindow(world, assets)
    arcade.run()
