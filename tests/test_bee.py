"""
Unit tests for bee_colony/model/bee.py
"""

import pytest

from bee_colony.model.bee import Bee, BeeRole


class TestBeeRole:
    """Tests for BeeRole enum"""

    def test_role_values(self):
        """Test BeeRole enum values"""
        assert BeeRole.SCOUT.value == "scout"
        assert BeeRole.ONLOOKER.value == "onlooker"
        assert BeeRole.FORAGER.value == "forager"


class TestMovement:
    """Tests for bee movement primitives"""

    def test_move_toward_by_step(self):
        """Test movement along the line to the goal"""
        bee = Bee(0, (0, 0))
        bee.move_toward((10, 0), 3)
        assert bee.position == pytest.approx((3.0, 0.0))

    def test_move_toward_never_overshoots(self):
        """Test a goal closer than one step is landed on exactly"""
        bee = Bee(0, (0, 0))
        bee.move_toward((3, 4), 10)
        assert bee.position == (3.0, 4.0)

    def test_distance_to(self):
        """Test Euclidean distance"""
        bee = Bee(0, (1, 1))
        assert bee.distance_to((4, 5)) == pytest.approx(5.0)

    def test_wander_bounded(self, rng):
        """Test random displacement stays within the step box"""
        bee = Bee(0, (50, 50))
        for _ in range(100):
            start = bee.position
            bee.wander(5, rng)
            assert abs(bee.position[0] - start[0]) <= 5 + 1e-9
            assert abs(bee.position[1] - start[1]) <= 5 + 1e-9

    def test_hover_bounded(self, rng):
        """Test hovering stays in the jitter box around the centre"""
        bee = Bee(0, (0, 0))
        for _ in range(100):
            bee.hover((50, 50), 10, rng)
            assert 45 <= bee.position[0] <= 55
            assert 45 <= bee.position[1] <= 55


class TestRoleState:
    """Tests for role and target bookkeeping"""

    def test_defaults(self):
        """Test a new bee is an idle onlooker"""
        bee = Bee(4, (1, 2))
        assert bee.role == BeeRole.ONLOOKER
        assert bee.target_id is None
        assert not bee.returning_to_hive
        assert bee.is_idle_onlooker

    def test_become_clears_return_flag(self):
        """Test leaving the scout role drops the return flag"""
        bee = Bee(0, (0, 0), BeeRole.SCOUT)
        bee.returning_to_hive = True
        bee.become(BeeRole.FORAGER)
        assert bee.role == BeeRole.FORAGER
        assert not bee.returning_to_hive

    def test_targets(self):
        """Test assigning and clearing a target"""
        bee = Bee(0, (0, 0))
        bee.assign_target(3)
        assert bee.target_id == 3
        assert not bee.is_idle_onlooker
        bee.clear_target()
        assert bee.target_id is None

    def test_snapshot(self):
        """Test snapshot mirrors the bee"""
        bee = Bee(2, (1.5, 2.5), BeeRole.SCOUT)
        bee.assign_target(1)
        bee.returning_to_hive = True
        snap = bee.to_snapshot()
        assert (snap.bee_id, snap.x, snap.y) == (2, 1.5, 2.5)
        assert snap.role == "scout"
        assert snap.target_id == 1
        assert snap.returning_to_hive
