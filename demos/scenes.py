"""
Demo scenes driving the steering engine.

A scene owns its agents, their trails and every caller-side policy the core
leaves out (snapping to a reached target, wrapping around the window edges,
capping speed, facing along the velocity). Scenes know nothing about windows
or OpenGL, so they run headless just as well.
"""

import logging
import math
import numpy as np
from typing import Callable, Dict, List, Optional

from config import steering as config
from steering import (
    Align, Arrive, Flock, Kinematic, SteeringEngine, VelocityMatch, Wander, get_steering
)
from steering.vector import as_vec, from_angle, heading, length, wrap_angle

from .trail import BreadcrumbTrail

logger = logging.getLogger(__name__)


def _merge(defaults: dict, overrides: Optional[dict]) -> dict:
    settings = dict(defaults)
    if overrides:
        settings.update(overrides)
    return settings


def wrap_position(position: np.ndarray, width: float, height: float) -> np.ndarray:
    """Toroidal wrap of a position into [0, width) x [0, height)."""
    size = np.array((width, height), dtype=np.float64)
    wrapped = np.mod(position, size)
    # Tiny negatives round up to the size itself
    return np.where(wrapped >= size, 0.0, wrapped)


def face_velocity(kinematic: Kinematic, min_speed: float):
    """Point the agent along its velocity when it is moving fast enough."""
    if kinematic.speed > min_speed:
        kinematic.orientation = heading(kinematic.velocity)


class Scene:
    """Base class for demo scenes."""

    name = "scene"
    title = "Scene"

    def __init__(self, width: int, height: int, seed: Optional[int] = None):
        self.width = width
        self.height = height
        self.engine = SteeringEngine(seed=seed)
        self.trails: List[BreadcrumbTrail] = []
        self.time = 0.0
        self.ticks = 0

    @property
    def kinematics(self) -> List[Kinematic]:
        return self.engine.kinematics

    @property
    def target(self) -> Optional[np.ndarray]:
        """Point to highlight on screen, if the scene has one."""
        return None

    def on_pointer(self, position, dt: float):
        """Pointer sampled this frame."""

    def on_click(self, position):
        """Left click at a window position."""

    def update(self, dt: float):
        self.time += dt
        self.ticks += 1
        self._update(dt)
        for trail, kinematic in zip(self.trails, self.kinematics):
            trail.update(kinematic.position, dt)

    def _update(self, dt: float):
        raise NotImplementedError

    def hud_lines(self) -> List[str]:
        return [f"{self.title}  |  Agents: {len(self.engine)}  |  t={self.time:.1f}s"]


class VelocityMatchScene(Scene):
    """One boid matching the velocity of the mouse pointer."""

    name = "velocity"
    title = "Velocity Matching"

    def __init__(self, settings: Optional[dict] = None, seed: Optional[int] = None):
        super().__init__(config.WINDOW["width"], config.WINDOW["height"], seed)
        self.settings = _merge(config.VELOCITY_MATCH, settings)
        self.behavior = VelocityMatch(
            time_to_target=self.settings["time_to_target"],
            max_acceleration=self.settings["max_acceleration"]
        )
        self.engine.add_agent(Kinematic(position=config.BOID["start"]), self.behavior)

        trail = config.TRAIL[self.name]
        if trail["capacity"]:
            self.trails.append(BreadcrumbTrail(trail["capacity"], trail["interval"]))

        self.pointer: Optional[np.ndarray] = None
        self.pointer_velocity = np.zeros(2)

    @property
    def agent(self) -> Kinematic:
        return self.engine.agent(0).kinematic

    def on_pointer(self, position, dt: float):
        if dt < self.settings["min_dt"]:
            return
        position = as_vec(position)
        if self.pointer is not None:
            self.pointer_velocity = (position - self.pointer) / dt
        self.pointer = position

    def _update(self, dt: float):
        if dt < self.settings["min_dt"]:
            return
        pointer = self.pointer if self.pointer is not None else self.agent.position
        target = Kinematic(position=pointer, velocity=self.pointer_velocity)
        self.engine.step(dt, {0: target})
        face_velocity(self.agent, self.settings["heading_speed"])

    def hud_lines(self) -> List[str]:
        lines = super().hud_lines()
        lines.append(
            f"Pointer v: ({self.pointer_velocity[0]:.0f}, {self.pointer_velocity[1]:.0f})  "
            f"Boid speed: {self.agent.speed:.0f}"
        )
        return lines


class ArriveAlignScene(Scene):
    """
    One boid that arrives at, and turns toward, the last clicked point.

    Once within freeze_distance and slower than freeze_speed the boid snaps
    onto the target and stays frozen until the next click.
    """

    name = "arrive"
    title = "Arrive + Align"

    def __init__(self, preset: str = "arrive", settings: Optional[dict] = None,
                 seed: Optional[int] = None):
        super().__init__(config.WINDOW["width"], config.WINDOW["height"], seed)
        if preset not in config.ARRIVE:
            raise KeyError(f"unknown arrive preset {preset!r}")
        self.name = preset
        self.settings = _merge(config.ARRIVAL, settings)
        self.arrive = Arrive(**_merge(config.ARRIVE[preset], (settings or {}).get("arrive")))
        self.align = Align(**_merge(config.ALIGN[preset], (settings or {}).get("align")))

        start = Kinematic(position=config.BOID["start"])
        self.engine.add_agent(start, self.arrive)

        trail = config.TRAIL[preset]
        self.trails.append(BreadcrumbTrail(trail["capacity"], trail["interval"]))

        self.target_position = start.position.copy()
        self.frozen = False

    @property
    def agent(self) -> Kinematic:
        return self.engine.agent(0).kinematic

    @property
    def target(self) -> Optional[np.ndarray]:
        return self.target_position

    def on_click(self, position):
        self.target_position = as_vec(position)
        self.frozen = False
        logger.debug("[Arrive] New target (%.0f, %.0f)", *self.target_position)

    def target_kinematic(self) -> Kinematic:
        """Target at the clicked point, facing away from the agent."""
        to_target = self.target_position - self.agent.position
        if length(to_target) > self.settings["face_distance"]:
            orientation = heading(to_target)
        else:
            orientation = self.agent.orientation
        return Kinematic(position=self.target_position, orientation=orientation)

    def _update(self, dt: float):
        agent = self.agent
        target = self.target_kinematic()
        distance = length(self.target_position - agent.position)

        if self.frozen:
            agent.velocity = np.zeros(2)
            agent.rotation = 0.0
            return

        linear = self.engine.steer(0, target, dt)
        angular, _ = get_steering(self.align, agent, target, dt)

        # Linear half first; the turn is skipped on the tick the agent arrives
        agent.velocity = agent.velocity + linear.linear * dt
        agent.position = agent.position + agent.velocity * dt

        if distance < self.settings["freeze_distance"] and agent.speed < self.settings["freeze_speed"]:
            agent.position = self.target_position.copy()
            agent.velocity = np.zeros(2)
            agent.rotation = 0.0
            agent.orientation = target.orientation
            self.frozen = True
            logger.debug("[Arrive] Arrived at (%.0f, %.0f)", *self.target_position)
            return

        agent.rotation += angular.angular * dt
        agent.orientation = wrap_angle(agent.orientation + agent.rotation * dt)
        if distance < self.settings["stop_distance"]:
            agent.velocity = np.zeros(2)
            agent.rotation = 0.0

    def hud_lines(self) -> List[str]:
        lines = super().hud_lines()
        state = "frozen" if self.frozen else "moving"
        lines.append(f"Click to set a target  |  {state}")
        return lines


class WanderScene(Scene):
    """One boid wandering around a wrap-around window."""

    name = "wander"
    title = "Wander"

    def __init__(self, settings: Optional[dict] = None, seed: Optional[int] = None):
        super().__init__(config.WINDOW["width"], config.WINDOW["height"], seed)
        self.settings = _merge(config.WANDER, settings)
        s = self.settings
        self.behavior = Wander(
            max_acceleration=s["max_acceleration"],
            max_speed=s["max_speed"],
            wander_offset=s["wander_offset"],
            wander_radius=s["wander_radius"],
            wander_rate=s["wander_rate"],
            time_to_target=s["time_to_target"],
            target_radius=s["target_radius"]
        )
        kinematic = Kinematic(position=s["start"], velocity=s["initial_velocity"])
        self.engine.add_agent(kinematic, self.behavior, max_speed=s["max_speed"])

        trail = config.TRAIL[self.name]
        self.trails.append(BreadcrumbTrail(trail["capacity"], trail["interval"]))

    @property
    def agent(self) -> Kinematic:
        return self.engine.agent(0).kinematic

    def _update(self, dt: float):
        self.engine.step(dt)
        agent = self.agent
        face_velocity(agent, 0.001)
        agent.position = wrap_position(agent.position, self.width, self.height)


class FlockScene(Scene):
    """A flock of boids, each wandering when it has nobody in range."""

    name = "flock"
    title = "Flocking"

    def __init__(self, settings: Optional[dict] = None, seed: Optional[int] = None):
        self.settings = _merge(config.FLOCKING, settings)
        s = self.settings
        super().__init__(s["width"], s["height"], seed)

        self.behavior = Flock(
            neighbor_radius=s["neighbor_radius"],
            separation_radius=s["separation_radius"],
            separation_weight=s["separation_weight"],
            alignment_weight=s["alignment_weight"],
            cohesion_weight=s["cohesion_weight"],
            max_acceleration=s["max_acceleration"],
            wander=Wander(
                max_acceleration=s["wander_max_acceleration"],
                max_speed=s["wander_max_speed"],
                wander_offset=s["wander_offset"],
                wander_radius=s["wander_radius"],
                wander_rate=s["wander_rate"],
                time_to_target=s["wander_time_to_target"]
            )
        )

        trail = config.TRAIL[self.name]
        rng = self.engine.rng
        for _ in range(s["count"]):
            position = (float(rng.integers(self.width)), float(rng.integers(self.height)))
            angle = math.radians(float(rng.integers(360)))
            kinematic = Kinematic(
                position=position,
                velocity=from_angle(angle, s["initial_speed"]),
                orientation=angle
            )
            self.engine.add_agent(kinematic, self.behavior, max_speed=s["max_speed"])
            self.trails.append(
                BreadcrumbTrail(trail["capacity"], trail["interval"], trail.get("first_drop"))
            )

        logger.info("[Flock] Spawned %d boids in %dx%d", s["count"], self.width, self.height)

    def _update(self, dt: float):
        self.engine.step(dt)
        for agent in self.kinematics:
            agent.position = wrap_position(agent.position, self.width, self.height)
            face_velocity(agent, 0.0)


SCENES: Dict[str, Callable[..., Scene]] = {
    "velocity": VelocityMatchScene,
    "arrive": lambda settings=None, seed=None: ArriveAlignScene("arrive", settings, seed),
    "arrive-fast": lambda settings=None, seed=None: ArriveAlignScene("arrive-fast", settings, seed),
    "wander": WanderScene,
    "flock": FlockScene,
}


def create_scene(name: str, settings: Optional[dict] = None, seed: Optional[int] = None) -> Scene:
    try:
        factory = SCENES[name]
    except KeyError:
        raise KeyError(f"unknown scene {name!r}, choose from {', '.join(SCENES)}") from None
    return factory(settings=settings, seed=seed)


def run_headless(scene: Scene, ticks: int, dt: float) -> Scene:
    """Advance a scene by a fixed number of fixed-size ticks."""
    for _ in range(ticks):
        scene.update(dt)
    logger.info("[Headless] %s: %d ticks of %.4fs (t=%.2fs)", scene.title, ticks, dt, scene.time)
    return scene
