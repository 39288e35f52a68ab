"""Test shortest-path search over the battlefield grid."""
import pytest
from tactics.config import BattleConfig
from tactics.errors import OutOfBoundsError
from tactics.model import Unit
from tactics.pathfinding import PathFinder, find_path

POLICIES = ["uniform", "weighted"]


def make_unit(name: str, x: int, y: int, alive: bool = True) -> Unit:
    """Create a plain unit at (x, y)."""
    return Unit(name=name, unit_type="TestType", health=100, base_attack=20, cost=50,
                x=x, y=y, alive=alive)


def make_finder(cost: str, width: int = 27, height: int = 21) -> PathFinder:
    return PathFinder.from_config(BattleConfig(field_width=width, field_height=height, path_cost=cost))


def assert_valid_path(path, units, width, height):
    """Every step is in bounds, adjacent to the previous one and not blocked."""
    blocked = {u.position for u in units if u.alive} - {path[0], path[-1]}
    for (x, y) in path:
        assert 0 <= x < width and 0 <= y < height
        assert (x, y) not in blocked
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert max(abs(ax - bx), abs(ay - by)) == 1


@pytest.mark.parametrize("cost", POLICIES)
def test_straight_path_on_open_grid(cost):
    """(0,0) -> (3,0) on an open 5x5 grid is a 4-cell straight line."""
    finder = make_finder(cost, 5, 5)
    a, t = make_unit("A", 0, 0), make_unit("T", 3, 0)

    path = finder.find_target_path(a, t, [a, t])

    assert path == [(0, 0), (1, 0), (2, 0), (3, 0)]


@pytest.mark.parametrize("cost", POLICIES)
def test_diagonal_path_on_open_grid(cost):
    """(0,0) -> (3,3) goes straight down the diagonal."""
    finder = make_finder(cost, 5, 5)
    a, t = make_unit("A", 0, 0), make_unit("T", 3, 3)

    path = finder.find_target_path(a, t, [a, t])

    assert path == [(0, 0), (1, 1), (2, 2), (3, 3)]


@pytest.mark.parametrize("cost", POLICIES)
def test_equal_length_routes_tie_break(cost):
    """(0,0) -> (1,2) has two equally short routes; the one via (0,1) wins."""
    finder = make_finder(cost)

    path = finder.find_path((0, 0), (1, 2), [])

    assert path == [(0, 0), (0, 1), (1, 2)]


@pytest.mark.parametrize("cost", POLICIES)
def test_detours_around_obstacle(cost):
    """A living unit between attacker and target forces a diagonal detour."""
    finder = make_finder(cost)
    a, t = make_unit("A", 0, 0), make_unit("T", 2, 0)
    obstacle = make_unit("Obstacle", 1, 0)

    path = finder.find_target_path(a, t, [a, t, obstacle])

    assert path == [(0, 0), (1, 1), (2, 0)]
    assert (1, 0) not in path


@pytest.mark.parametrize("cost", POLICIES)
def test_surrounded_target_is_unreachable(cost):
    """Living units on all 8 neighbours of the target leave no path."""
    finder = make_finder(cost)
    a, t = make_unit("A", 0, 0), make_unit("T", 2, 2)
    units = [a, t]
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx or dy:
                units.append(make_unit("Block", 2 + dx, 2 + dy))

    assert finder.find_target_path(a, t, units) == []


@pytest.mark.parametrize("cost", POLICIES)
def test_same_position_returns_single_cell(cost):
    finder = make_finder(cost)
    a, t = make_unit("A", 5, 5), make_unit("T", 5, 5)

    assert finder.find_target_path(a, t, [a, t]) == [(5, 5)]


@pytest.mark.parametrize("cost", POLICIES)
def test_dead_units_do_not_block(cost):
    """A dead unit directly in the way does not lengthen the path."""
    finder = make_finder(cost)
    a, t = make_unit("A", 0, 0), make_unit("T", 2, 0)
    dead = make_unit("Dead", 1, 0, alive=False)

    path = finder.find_target_path(a, t, [a, t, dead])

    assert path == [(0, 0), (1, 0), (2, 0)]


@pytest.mark.parametrize("cost", POLICIES)
def test_path_along_field_edge(cost):
    finder = make_finder(cost)

    path = finder.find_path((0, 0), (0, 10), [])

    assert len(path) == 11
    assert path[0] == (0, 0)
    assert path[-1] == (0, 10)


@pytest.mark.parametrize("cost", POLICIES)
def test_long_distance_path(cost):
    """Both policies need 20 moves for (0,0) -> (20,15) on an open field."""
    finder = make_finder(cost)

    path = finder.find_path((0, 0), (20, 15), [])

    assert path[0] == (0, 0)
    assert path[-1] == (20, 15)
    assert len(path) == 21
    assert_valid_path(path, [], 27, 21)


@pytest.mark.parametrize("cost", POLICIES)
def test_path_through_gap_in_wall(cost):
    """A wall at x=3 with a single gap at y=4 must be crossed through the gap."""
    finder = make_finder(cost, 5, 5)
    a, t = make_unit("A", 0, 0), make_unit("T", 4, 0)
    wall = [make_unit(f"W{y}", 3, y) for y in range(4)]
    units = [a, t] + wall

    path = finder.find_target_path(a, t, units)

    assert (3, 4) in path
    assert len(path) == 9
    assert_valid_path(path, units, 5, 5)


@pytest.mark.parametrize("cost", POLICIES)
def test_repeated_queries_are_identical(cost):
    finder = make_finder(cost)
    units = [make_unit("A", 1, 1), make_unit("T", 9, 6), make_unit("X", 5, 3), make_unit("Y", 5, 4)]

    first = finder.find_target_path(units[0], units[1], units)
    second = finder.find_target_path(units[0], units[1], units)

    assert first == second
    assert_valid_path(first, units, 27, 21)


def test_out_of_bounds_start_is_rejected():
    finder = make_finder("weighted", 5, 5)

    with pytest.raises(OutOfBoundsError):
        finder.find_path((5, 0), (0, 0), [])
    with pytest.raises(OutOfBoundsError):
        finder.find_path((0, 0), (0, -1), [])


def test_units_off_the_field_are_ignored():
    """Roster entries outside the grid never block or raise."""
    finder = make_finder("uniform", 5, 5)

    path = finder.find_path((0, 0), (2, 0), [make_unit("Far", 40, 40)])

    assert path == [(0, 0), (1, 0), (2, 0)]


def test_unknown_cost_policy_is_rejected():
    from tactics.grid import Battlefield

    with pytest.raises(ValueError):
        PathFinder(Battlefield(5, 5), "manhattan")


def test_module_level_find_path_uses_default_config():
    assert find_path((0, 0), (26, 20), [])[-1] == (26, 20)
