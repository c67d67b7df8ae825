"""Host-side wiring: settings, key bindings, window update loop, CLI."""

import json
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

pygame = pytest.importorskip("pygame")

from astrorun.config.settings import GameSettings, Settings, StorageSettings, get_settings  # noqa: E402
from astrorun.core.events import EventType, jump_event  # noqa: E402
from astrorun.core.state import GamePhase  # noqa: E402
from astrorun.main import build_session, parse_args  # noqa: E402
from astrorun.simulator.window import GameWindow, WindowConfig, event_for_key  # noqa: E402


class TestSettings:
    def test_defaults(self):
        cfg = GameSettings()
        assert cfg.gravity == 0.6
        assert cfg.jump_force == -11.0
        assert cfg.double_jump_force == -9.0
        assert cfg.start_speed == 4.0
        assert cfg.speed_increase == 0.003
        assert cfg.milestone_step == 100
        assert cfg.ground_y == 460.0

    @pytest.mark.parametrize("overrides", [
        {"jump_force": 5.0},
        {"gravity": 0.0},
        {"spawn_interval_floor": 100.0},
        {"obstacle_min_width": 60.0},
        {"obstacle_min_height_cap": 70.0},
        {"ground_offset": 540},
        {"spawn_jitter": 1.0},
    ])
    def test_rejects_inconsistent_values(self, overrides):
        with pytest.raises(ValidationError):
            GameSettings(**overrides)

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ASTRORUN_GAME__GRAVITY", "0.9")
        monkeypatch.setenv("ASTRORUN_DISPLAY__FPS", "120")
        monkeypatch.setenv("ASTRORUN_DEBUG", "true")

        settings = Settings()

        assert settings.game.gravity == 0.9
        assert settings.display.fps == 120
        assert settings.debug is True

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestKeyBindings:
    @pytest.mark.parametrize("key", [pygame.K_SPACE, pygame.K_UP, pygame.K_w])
    def test_jump_keys(self, key):
        assert event_for_key(key).type == EventType.JUMP_PRESSED

    def test_restart_key(self):
        assert event_for_key(pygame.K_r).type == EventType.RESTART_PRESSED

    @pytest.mark.parametrize("key", [pygame.K_x, pygame.K_ESCAPE, pygame.K_d])
    def test_unbound_keys(self, key):
        assert event_for_key(key) is None


class TestGameWindow:
    @pytest.fixture
    def window(self, session, bus):
        return GameWindow(session, WindowConfig(fps=4), event_bus=bus)

    def test_keypress_reaches_session_on_next_tick(self, window, session):
        window._handle_keydown(SimpleNamespace(key=pygame.K_SPACE))
        assert session.phase == GamePhase.START

        window._update(0.25)

        assert session.phase == GamePhase.PLAYING
        assert window._snapshot.score == 1

    def test_input_waits_for_a_tick(self, window, bus, session):
        bus.emit(jump_event())
        window._update(0.125)
        assert len(window.inputs) == 1
        assert session.phase == GamePhase.START

        window._update(0.125)
        assert len(window.inputs) == 0
        assert session.phase == GamePhase.PLAYING

    def test_each_press_applied_once(self, window, bus, session):
        bus.emit(jump_event())
        window._update(0.5)
        # second tick sees no input: still a grounded runner, not a jump
        assert session.phase == GamePhase.PLAYING
        assert session.player.jumps_used == 0
        assert session.run.score == 2

    def test_quit_and_debug_keys(self, window):
        window._running = True
        window._handle_keydown(SimpleNamespace(key=pygame.K_d))
        assert window._show_debug is True
        window._handle_keydown(SimpleNamespace(key=pygame.K_ESCAPE))
        assert window._running is False

    def test_resize_updates_session_and_renderer(self, window, session):
        window._handle_resize(1280, 720)
        assert session.ground_y == 640.0
        assert window.renderer.buffer.shape == (720, 1280, 3)
        assert window._snapshot.field_width == 1280.0


class TestCli:
    def test_parse_args(self):
        args = parse_args(["--debug", "--seed", "3"])
        assert args.debug is True
        assert args.seed == 3
        assert args.reset_high_score is False

    def test_build_session_reads_high_score_file(self, tmp_path):
        path = tmp_path / "hs.json"
        path.write_text(json.dumps({"astroRunHighScore": 77}))
        settings = Settings(storage=StorageSettings(high_score_path=path))

        session = build_session(settings, seed=1)

        assert session.run.high_score == 77
        assert session.phase == GamePhase.START
