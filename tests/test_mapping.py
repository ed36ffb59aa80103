import numpy as np
from luma_clahe.processing.histogram import NUM_BINS, clip_histogram
from luma_clahe.processing.mapping import IDENTITY_TABLE, build_mapping_table, round_half_up


def test_table_shape_and_dtype():
    table = build_mapping_table(np.ones(NUM_BINS, dtype=np.int64))
    assert table.shape == (NUM_BINS,)
    assert table.dtype == np.uint8


def test_known_table_for_clipped_flat_tile():
    """Counts at bins 0, 1, 2 and 128 (one each) give steps of 255/4."""
    counts = np.zeros(NUM_BINS, dtype=np.int64)
    counts[[0, 1, 2, 128]] = 1
    table = build_mapping_table(counts)
    assert table[0] == 64      # 63.75
    assert table[1] == 128     # 127.5 rounds half up
    assert table[2] == 191     # 191.25
    assert np.all(table[3:128] == 191)
    assert np.all(table[128:] == 255)


def test_last_entry_is_full_scale(rng):
    counts = rng.integers(0, 50, size=NUM_BINS)
    counts[0] += 1
    assert build_mapping_table(counts)[-1] == 255


def test_uniform_histogram_is_near_identity():
    table = build_mapping_table(np.ones(NUM_BINS, dtype=np.int64))
    diff = np.abs(table.astype(np.int16) - np.arange(NUM_BINS))
    assert diff.max() <= 1


def test_monotonic_on_random_histograms(rng):
    for _ in range(50):
        hist = rng.integers(0, 200, size=NUM_BINS)
        hist[rng.integers(0, NUM_BINS)] += 5000
        clipped = clip_histogram(hist, float(rng.uniform(0.5, 4.0)))
        table = build_mapping_table(clipped.counts)
        assert np.all(np.diff(table.astype(np.int16)) >= 0)


def test_empty_histogram_gives_identity():
    table = build_mapping_table(np.zeros(NUM_BINS, dtype=np.int64))
    assert np.array_equal(table, IDENTITY_TABLE)
    # Returned table is a private copy
    table[0] = 7
    assert IDENTITY_TABLE[0] == 0


def test_round_half_up():
    assert round_half_up([0.0, 0.5, 1.5, 2.4999, 127.5]).tolist() == [0, 1, 2, 2, 128]


def test_round_half_up_below_half_stays_down():
    """The largest double below 0.5 must round to 0, not 1."""
    assert round_half_up(0.49999999999999994) == 0


def test_table_entry_just_below_half_rounds_down():
    # 49 * (255 / 24990) evaluates to 0.49999999999999994
    counts = np.zeros(NUM_BINS, dtype=np.int64)
    counts[0] = 49
    counts[255] = 24941
    table = build_mapping_table(counts)
    assert table[0] == 0
    assert table[255] == 255
