"""
Game session: one player, one obstacle list, one run state.

The host calls step() once per simulation tick with the input events
that arrived since the previous tick and draws the returned Snapshot.

Per PLAYING tick:
    1. input events, in arrival order
    2. difficulty (score, speed, spawn interval, milestone, spawn timer)
    3. obstacles advance, collide with the player, offscreen ones drop out
    4. player physics (gravity, integration, ground collision)

A collision ends the tick at step 3: the remaining obstacles stay where
they are, the player is not moved, and the phase becomes GAME_OVER.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union
import logging
import random

from astrorun.config.settings import GameSettings
from astrorun.core.events import Event, EventBus, EventType
from astrorun.core.state import GamePhase, StateMachine
from astrorun.game.collision import overlaps
from astrorun.game.difficulty import DifficultyController, RunState
from astrorun.game.entities import Obstacle, PlayerEntity
from astrorun.game.particles import JetpackBurst
from astrorun.game.spawner import ObstacleSpawner
from astrorun.storage.base import KeyValueStore, MemoryStore
from astrorun.storage.highscore import DEFAULT_KEY, HighScoreKeeper

logger = logging.getLogger(__name__)

HINT_SCORE_LIMIT = 150
HINT_START_ALPHA = 0.7


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float
    vy: float
    is_grounded: bool
    jumps_used: int


@dataclass(frozen=True)
class ObstacleView:
    x: float
    y: float
    width: float
    height: float
    color_seed: float


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    size: float
    hue: float
    saturation: float
    alpha: float  # 0-100


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the session handed to the renderer each tick."""

    phase: GamePhase
    tick: int
    player: PlayerView
    obstacles: Tuple[ObstacleView, ...]
    particles: Tuple[ParticleView, ...]
    score: int
    high_score: int
    environment_index: int
    obstacle_speed: float
    field_width: float
    field_height: float
    ground_y: float
    hint_alpha: float = 0.0


InputEvent = Union[Event, EventType]


class GameSession:
    """Owns the simulation and its START -> PLAYING -> GAME_OVER lifecycle."""

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        store: Optional[KeyValueStore] = None,
        *,
        high_score_key: str = DEFAULT_KEY,
        rng: Optional[random.Random] = None,
        effects_rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.settings = settings or GameSettings()
        cfg = self.settings

        self._rng = rng or random.Random()
        self.event_bus = event_bus

        self.state_machine = StateMachine(GamePhase.START)
        self.state_machine.add_listener(self._on_phase_change)

        self.player = PlayerEntity(
            width=cfg.player_width,
            height=cfg.player_height,
            gravity=cfg.gravity,
            jump_force=cfg.jump_force,
            double_jump_force=cfg.double_jump_force,
        )
        self.spawner = ObstacleSpawner(cfg, self._rng)
        self.difficulty = DifficultyController(cfg, self._rng)
        self.effects = JetpackBurst(effects_rng)
        self.high_scores = HighScoreKeeper(store or MemoryStore(), high_score_key)

        self.field_width = float(cfg.field_width)
        self.field_height = float(cfg.field_height)
        self.ground_y = cfg.ground_y

        self.run: RunState = self.difficulty.new_run_state(high_score=self.high_scores.load())
        self.obstacles: List[Obstacle] = []
        self._tick = 0

        self.player.reset(*self.start_position)
        logger.info(f"GameSession created ({cfg.field_width}x{cfg.field_height}, high score {self.run.high_score})")

    # Properties
    @property
    def phase(self) -> GamePhase:
        return self.state_machine.phase

    @property
    def start_position(self) -> Tuple[float, float]:
        """Where the player stands at the start of every run."""
        return self.field_width / 4, self.ground_y - self.player.height / 2

    @property
    def tick_count(self) -> int:
        return self._tick

    # Lifecycle
    def step(self, events: Iterable[InputEvent] = ()) -> Snapshot:
        """Run one simulation tick and return the resulting snapshot.

        Args:
            events: Input events received since the previous tick. Each is
                applied once, in order, before any physics runs.
        """
        for event in events:
            self._handle_input(event)

        phase = self.phase
        if phase == GamePhase.START:
            self.player.pin_to_ground(self.ground_y)
        elif phase == GamePhase.PLAYING:
            self._simulate()

        self.effects.update()
        self._tick += 1
        return self.snapshot()

    def reset_run(self) -> None:
        """Clear the field and put the player back at the start position."""
        self.difficulty.reset_run(self.run)
        self.obstacles = []
        self.effects.clear()
        self.player.reset(*self.start_position)

    def reset(self) -> None:
        """Return to the START phase with fresh counters. High score is kept."""
        self.state_machine.reset()
        self.run = self.difficulty.new_run_state(high_score=self.run.high_score)
        self.reset_run()

    def resize(self, width: float, height: float) -> None:
        """Adapt to a new field size, keeping the player on screen."""
        if width <= 0 or height <= self.settings.ground_offset:
            logger.warning(f"Ignoring invalid field size {width}x{height}")
            return

        self.field_width = float(width)
        self.field_height = float(height)
        self.ground_y = self.field_height - self.settings.ground_offset

        self.player.x = self.field_width / 4
        self.player.y = min(self.player.y, self.ground_y - self.player.height / 2)
        logger.debug(f"Field resized to {width}x{height}, ground at {self.ground_y}")

    # Input
    def _handle_input(self, event: InputEvent) -> None:
        event_type = event.type if isinstance(event, Event) else event
        phase = self.phase

        if event_type == EventType.JUMP_PRESSED:
            if phase == GamePhase.START:
                self._start_run()
            elif phase == GamePhase.PLAYING:
                # The burst fires on every press, even with no jump left
                self.player.jump()
                self._burst()
        elif event_type == EventType.RESTART_PRESSED:
            if phase == GamePhase.GAME_OVER:
                self._start_run()
        else:
            logger.debug(f"Ignoring non-input event {event_type}")

    def _start_run(self) -> None:
        self.reset_run()
        if self.state_machine.transition(GamePhase.PLAYING):
            self._emit(EventType.RUN_STARTED)
            self._burst()

    def _burst(self) -> None:
        self.effects.emit(self.player.x, self.player.bottom, self.settings.burst_particles)

    # Simulation
    def _simulate(self) -> None:
        run = self.run

        if self.difficulty.tick(run):
            self.obstacles.append(self.spawner.spawn(run.score, self.field_width, self.ground_y))
            self.difficulty.rearm_spawn_timer(run)

        if self._advance_obstacles():
            self._end_run()
            return

        self.player.apply_gravity()
        self.player.integrate(self.ground_y)
        self.player.check_ground_collision(self.ground_y)

    def _advance_obstacles(self) -> bool:
        """Move every obstacle and rebuild the list without offscreen ones.

        Returns:
            True if the player hit an obstacle
        """
        player_box = self.player.bounding_box()
        speed = self.run.obstacle_speed
        kept: List[Obstacle] = []

        for index, obstacle in enumerate(self.obstacles):
            obstacle.advance(speed)

            if overlaps(player_box, obstacle.bounding_box()):
                logger.info(f"Collision with {obstacle} at score {self.run.score}")
                kept.append(obstacle)
                kept.extend(self.obstacles[index + 1:])
                self.obstacles = kept
                return True

            if not obstacle.is_offscreen():
                kept.append(obstacle)

        self.obstacles = kept
        return False

    def _end_run(self) -> None:
        run = self.run

        if run.score > run.high_score:
            previous = run.high_score
            run.high_score = run.score
            self.high_scores.save(run.score)
            logger.info(f"New high score: {run.score} (was {previous})")
            self._emit(EventType.NEW_HIGH_SCORE, score=run.score, previous=previous)

        self.state_machine.transition(GamePhase.GAME_OVER)
        self._emit(EventType.RUN_ENDED, score=run.score)

    # Events
    def _on_phase_change(self, old_phase: GamePhase, new_phase: GamePhase) -> None:
        self._emit(EventType.PHASE_CHANGED, old=old_phase, new=new_phase)

    def _emit(self, event_type: EventType, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="session"))

    # Snapshot
    def hint_alpha(self) -> float:
        """Opacity of the controls hint, fading out over the first points."""
        if self.phase != GamePhase.PLAYING or self.run.score >= HINT_SCORE_LIMIT:
            return 0.0
        return HINT_START_ALPHA * (1 - self.run.score / HINT_SCORE_LIMIT)

    def snapshot(self) -> Snapshot:
        """Build an immutable view of the current state."""
        p = self.player
        return Snapshot(
            phase=self.phase,
            tick=self._tick,
            player=PlayerView(
                x=p.x,
                y=p.y,
                width=p.width,
                height=p.height,
                vy=p.vy,
                is_grounded=p.is_grounded,
                jumps_used=p.jumps_used,
            ),
            obstacles=tuple(
                ObstacleView(x=o.x, y=o.y, width=o.width, height=o.height, color_seed=o.color_seed)
                for o in self.obstacles
            ),
            particles=tuple(
                ParticleView(x=q.x, y=q.y, size=q.size, hue=q.hue, saturation=q.saturation, alpha=q.lifespan)
                for q in self.effects.particles
            ),
            score=self.run.score,
            high_score=self.run.high_score,
            environment_index=self.run.environment_index,
            obstacle_speed=self.run.obstacle_speed,
            field_width=self.field_width,
            field_height=self.field_height,
            ground_y=self.ground_y,
            hint_alpha=self.hint_alpha(),
        )
