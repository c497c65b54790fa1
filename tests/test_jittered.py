import itertools

import numpy as np
import pytest

from progressive_samples import DOMAIN_SIZE, JitteredSequence
from progressive_samples.jittered import CHILD_QUADRANTS, choose_children, locate
from progressive_samples.verify import check_progressive, grid_violations


def test_four_points_one_per_quadrant():
    seq = JitteredSequence(seed=1)
    seq.extend(4)
    quadrants = []
    for point in seq.points():
        x, y = seq.to01(point)
        assert 0.0 <= x < 1.0 and 0.0 <= y < 1.0
        quadrants.append((x >= 0.5, y >= 0.5))
    assert sorted(quadrants) == sorted(itertools.product([False, True], repeat=2))


@pytest.mark.parametrize("seed", [1, 2, 12345])
def test_one_point_per_cell_at_every_level(seed):
    seq = JitteredSequence(seed=seed)
    seq.extend(1024)
    for count in (1, 4, 16, 64, 256, 1024):
        assert grid_violations(seq.points(), count) == []


def test_check_progressive_passes():
    seq = JitteredSequence(seed=3)
    assert check_progressive(seq.extend(256)) == []


def test_coordinates_stay_in_domain():
    pts = JitteredSequence(seed=8).extend(256)
    assert pts.dtype == np.uint32
    assert int(pts.max()) < DOMAIN_SIZE


def test_deterministic_for_seed():
    a = JitteredSequence(seed=21).extend(64)
    b = JitteredSequence(seed=21).extend(64)
    np.testing.assert_array_equal(a, b)
    c = JitteredSequence(seed=22).extend(64)
    assert not np.array_equal(a, c)


def test_incremental_matches_direct():
    grown = JitteredSequence(seed=6)
    grown.extend(5)
    grown.extend(20)
    grown.extend(64)
    direct = JitteredSequence(seed=6)
    direct.extend(64)
    np.testing.assert_array_equal(grown.points(), direct.points())


def test_prefix_of_larger_request_matches_smaller_request():
    small = JitteredSequence(seed=6).extend(16)
    large = JitteredSequence(seed=6).extend(256)
    np.testing.assert_array_equal(large[:16], small)


def test_generation_runs_whole_rounds():
    seq = JitteredSequence()
    seq.extend(5)
    assert seq.size() == 5
    assert seq.generated == 16
    generated = seq.generated
    seq.extend(12)
    assert seq.size() == 12
    assert seq.generated == generated


def test_extend_is_idempotent():
    seq = JitteredSequence(seed=4)
    first = seq.extend(64).copy()
    store = seq._store
    second = seq.extend(64)
    np.testing.assert_array_equal(first, second)
    assert seq._store is store


def test_clear_replays_from_seed():
    seq = JitteredSequence(seed=4)
    first = seq.extend(64).copy()
    seq.clear()
    assert seq.size() == 0 and seq.generated == 0
    np.testing.assert_array_equal(seq.extend(64), first)


def test_set_seed_after_generation_rejected():
    seq = JitteredSequence()
    seq.extend(4)
    with pytest.raises(RuntimeError):
        seq.set_seed(3)


def test_degenerate_source_keeps_grid_invariant(constant_source):
    seq = JitteredSequence(rng_factory=constant_source)
    seq.extend(256)
    assert check_progressive(seq.points()) == []


def test_child_table_covers_the_other_three_quadrants():
    for parent, (diagonal, flip_x, flip_y) in CHILD_QUADRANTS.items():
        assert diagonal == (1 - parent[0], 1 - parent[1])
        assert flip_x == (1 - diagonal[0], diagonal[1])
        assert flip_y == (diagonal[0], 1 - diagonal[1])
        for coin in (0.0, 0.7):
            children = choose_children(parent, coin)
            assert len(set(children) | {parent}) == 4


def test_coin_picks_adjacent_axis():
    assert choose_children((0, 0), 0.25) == ((1, 1), (0, 1), (1, 0))
    assert choose_children((0, 0), 0.75) == ((1, 1), (1, 0), (0, 1))


def test_locate_clamps_edges():
    last = DOMAIN_SIZE - 1
    assert locate((0, 0), 1) == (0, 0, (0, 0))
    assert locate((last, last), 1) == (0, 0, (1, 1))
    assert locate((last, 0), 4) == (3, 0, (1, 0))
    # beyond the domain still resolves to the last cell
    assert locate((DOMAIN_SIZE, DOMAIN_SIZE), 2) == (1, 1, (1, 1))


def test_resolution_limit():
    seq = JitteredSequence()
    with pytest.raises(ValueError, match="fixed-point domain resolution"):
        seq._check_resolution(4**24)
    seq._check_resolution(4**12)
