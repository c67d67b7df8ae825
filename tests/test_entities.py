import pytest

from astrorun.game.entities import BoundingBox, Obstacle, PlayerEntity

GROUND = 460.0


@pytest.fixture
def player() -> PlayerEntity:
    p = PlayerEntity()
    p.reset(240.0, GROUND - 30.0)
    return p


def step_physics(player: PlayerEntity) -> None:
    player.apply_gravity()
    player.integrate(GROUND)
    player.check_ground_collision(GROUND)


class TestPlayer:
    def test_reset_puts_player_at_rest(self, player):
        player.vy = 5.0
        player.is_grounded = False
        player.jumps_used = 2

        player.reset(100.0, 200.0)

        assert (player.x, player.y) == (100.0, 200.0)
        assert player.vy == 0.0
        assert player.is_grounded
        assert player.jumps_used == 0

    def test_first_jump_from_ground(self, player):
        assert player.jump() is True
        assert player.vy == -11.0
        assert player.is_grounded is False
        assert player.jumps_used == 1

    def test_double_jump_then_exhausted(self, player):
        player.jump()
        step_physics(player)

        assert player.jump() is True
        assert player.vy == -9.0
        assert player.jumps_used == 2

        vy = player.vy
        assert player.jump() is False
        assert player.vy == vy
        assert player.jumps_used == 2

    def test_double_jump_while_falling(self, player):
        player.y = GROUND - 200
        player.vy = 4.0
        player.is_grounded = False
        player.jumps_used = 1

        assert player.jump() is True
        assert player.vy == -9.0

    def test_gravity_applies_on_integrate(self, player):
        player.y = 100.0
        player.apply_gravity()
        player.integrate(GROUND)

        assert player.vy == pytest.approx(0.6)
        assert player.y == pytest.approx(100.6)
        assert player.ay == 0.0

    def test_integrate_clamps_below_ground(self, player):
        player.is_grounded = False
        player.jumps_used = 2
        player.vy = 50.0

        player.integrate(GROUND)

        assert player.bottom == GROUND
        assert player.vy == 0.0
        assert player.is_grounded
        assert player.jumps_used == 0

    @pytest.mark.parametrize("vy", [0.0, 0.5, 12.0])
    def test_lands_when_touching_ground_and_not_rising(self, player, vy):
        player.is_grounded = False
        player.jumps_used = 1
        player.vy = vy

        assert player.check_ground_collision(GROUND) is True
        assert player.y == GROUND - 30.0
        assert player.vy == 0.0
        assert player.jumps_used == 0

    def test_no_landing_while_rising(self, player):
        player.is_grounded = False
        player.jumps_used = 1
        player.vy = -3.0

        assert player.check_ground_collision(GROUND) is False
        assert player.is_grounded is False

    def test_airborne_check_does_not_clear_grounded(self, player):
        player.y = 200.0
        player.vy = 1.0

        assert player.check_ground_collision(GROUND) is False
        assert player.is_grounded is True

    def test_jump_arc_returns_to_ground(self, player):
        player.jump()
        peak = player.y
        for ticks in range(1, 100):
            step_physics(player)
            peak = min(peak, player.y)
            if player.is_grounded:
                break

        assert player.is_grounded
        assert player.jumps_used == 0
        assert player.bottom == GROUND
        assert 30 < ticks < 45
        assert peak < GROUND - 30.0 - 90

    def test_bounding_box_is_centered(self, player):
        box = player.bounding_box()
        assert box == BoundingBox(left=220.0, top=400.0, right=260.0, bottom=460.0)
        assert box.width == 40.0
        assert box.height == 60.0

    def test_pin_to_ground(self, player):
        player.y = 10.0
        player.vy = -4.0
        player.pin_to_ground(GROUND)

        assert player.bottom == GROUND
        assert player.vy == 0.0
        assert player.is_grounded


class TestObstacle:
    def test_advance_moves_left(self):
        obstacle = Obstacle(x=500.0, y=410.0, width=40.0, height=50.0)
        for _ in range(10):
            obstacle.advance(4.5)
        assert obstacle.x == pytest.approx(455.0)
        assert obstacle.y == 410.0

    def test_offscreen_only_after_right_edge_passes_zero(self):
        obstacle = Obstacle(x=1000.0, y=0.0, width=40.0, height=50.0)
        for _ in range(104):
            obstacle.advance(10.0)
        assert obstacle.right == 0.0
        assert not obstacle.is_offscreen()

        obstacle.advance(10.0)
        assert obstacle.is_offscreen()

    def test_bounding_box_is_corner_anchored(self):
        box = Obstacle(x=10.0, y=20.0, width=30.0, height=40.0).bounding_box()
        assert box == BoundingBox(left=10.0, top=20.0, right=40.0, bottom=60.0)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 10)])
    def test_rejects_empty_size(self, width, height):
        with pytest.raises(ValueError):
            Obstacle(x=0.0, y=0.0, width=width, height=height)


def test_box_from_center_and_corner_agree():
    assert BoundingBox.from_center(50, 50, 20, 10) == BoundingBox.from_corner(40, 45, 20, 10)
