import numpy as np
import pytest

from progressive_samples import DOMAIN_SIZE, MultiJitteredSequence
from progressive_samples.verify import check_progressive, grid_violations, stratum_violations


def test_sixteen_points_fill_sixteen_strata():
    seq = MultiJitteredSequence(seed=1)
    pts = seq.extend(16).astype(np.int64)
    width = DOMAIN_SIZE // 16
    assert len(set(pts[:, 0] // width)) == 16
    assert len(set(pts[:, 1] // width)) == 16


@pytest.mark.parametrize("seed", [1, 2, 99, 4000000000])
def test_strata_and_cells_at_every_level(seed):
    seq = MultiJitteredSequence(seed=seed)
    pts = seq.extend(4096)
    for count in (1, 4, 16, 64, 256, 1024, 4096):
        assert stratum_violations(pts, count) == []
        assert grid_violations(pts, count) == []
    for count in (2, 8, 32, 128, 512, 2048):
        assert stratum_violations(pts, count) == []


def test_check_progressive_passes():
    seq = MultiJitteredSequence(seed=5)
    assert check_progressive(seq.extend(1024), stratified=True) == []


def test_deterministic_for_seed():
    a = MultiJitteredSequence(seed=13).extend(256)
    b = MultiJitteredSequence(seed=13).extend(256)
    np.testing.assert_array_equal(a, b)


def test_incremental_matches_direct():
    grown = MultiJitteredSequence(seed=7)
    grown.extend(16)
    grown.extend(40)
    grown.extend(256)
    direct = MultiJitteredSequence(seed=7)
    direct.extend(256)
    np.testing.assert_array_equal(grown.points(), direct.points())


def test_prefix_of_larger_request_matches_smaller_request():
    small = MultiJitteredSequence(seed=7).extend(64)
    large = MultiJitteredSequence(seed=7).extend(1024)
    np.testing.assert_array_equal(large[:64], small)


def test_extend_is_idempotent():
    seq = MultiJitteredSequence(seed=3)
    first = seq.extend(100).copy()
    second = seq.extend(100)
    np.testing.assert_array_equal(first, second)
    assert seq.generated == 256


def test_clear_replays_from_seed():
    seq = MultiJitteredSequence(seed=3)
    first = seq.extend(64).copy()
    seq.clear()
    np.testing.assert_array_equal(seq.extend(64), first)


def test_differs_from_plain_jittered_after_first_round():
    from progressive_samples import JitteredSequence

    pmj = MultiJitteredSequence(seed=1).extend(64)
    pj = JitteredSequence(seed=1).extend(64)
    # both start from the same seed point
    np.testing.assert_array_equal(pmj[0], pj[0])
    assert not np.array_equal(pmj, pj)


def test_build_occupied_marks_existing_strata():
    seq = MultiJitteredSequence(seed=1)
    seq.extend(16)
    width = seq.build_occupied(16)
    assert width == DOMAIN_SIZE // 32
    assert seq._occupied_x.shape == (32,)
    assert int(seq._occupied_x.sum()) == 16
    assert int(seq._occupied_y.sum()) == 16


def test_build_occupied_rejects_too_fine_resolution():
    seq = MultiJitteredSequence()
    with pytest.raises(ValueError, match="fixed-point domain resolution"):
        seq.build_occupied(DOMAIN_SIZE)


def test_request_beyond_resolution_fails_before_mutating():
    seq = MultiJitteredSequence()
    with pytest.raises(ValueError, match="fixed-point domain resolution"):
        seq.extend(4**11 + 1)
    assert seq.size() == 0
    assert seq.generated == 0


def test_largest_supported_level_passes_resolution_check():
    seq = MultiJitteredSequence()
    seq._check_resolution(4**11)
    with pytest.raises(ValueError):
        seq._check_resolution(4**12)


def test_degenerate_source_hits_draw_cap(constant_source):
    seq = MultiJitteredSequence(rng_factory=constant_source)
    with pytest.raises(RuntimeError, match="no free x-stratum"):
        seq.extend(4)
