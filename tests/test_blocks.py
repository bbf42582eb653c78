import numpy as np
import pytest
from numpy.testing import assert_array_equal

from curvebuild.curves import (
    CurveBuildingBlock,
    CurveBuildingBlockBundle,
    CurveBuildingBlockBundleBuilder,
)
from curvebuild.exceptions import BlockCollisionError


def _bundle(*names):
    builder = CurveBuildingBlockBundleBuilder()
    for name in names:
        builder.add(name, np.eye(1))
    return builder.build()


def _placed(name, start, size=1):
    block = CurveBuildingBlock({name: (start, size)})
    return CurveBuildingBlockBundle({name: (block, np.eye(size))})


def test_new_blocks_are_consecutive():
    builder = CurveBuildingBlockBundleBuilder()
    assert builder.add("USD-OIS", np.eye(1)) == (0, 1)
    assert builder.add("USD-3M", np.eye(2)) == (1, 2)
    assert builder.add("USD-6M", np.eye(1)) == (3, 1)

    bundle = builder.build()
    assert bundle.unit_map == {"USD-OIS": (0, 1), "USD-3M": (1, 2), "USD-6M": (3, 1)}
    assert bundle.total_size == 4
    assert bundle.block_for("USD-3M").unit_map == bundle.unit_map


def test_block_continuity_after_exogenous_bundle():
    exogenous = _bundle("EUR-OIS", "EUR-6M", "EUR-3M")
    builder = CurveBuildingBlockBundleBuilder()
    builder.merge(exogenous)
    for name in ("USD-OIS", "USD-3M"):
        builder.add(name, np.eye(1))
    bundle = builder.build()

    assert bundle.unit_map["USD-OIS"] == (3, 1)
    assert bundle.unit_map["USD-3M"] == (4, 1)
    # exogenous entries are kept verbatim
    assert bundle.block_for("EUR-OIS") is exogenous.block_for("EUR-OIS")
    assert bundle.unit_map["EUR-6M"] == (1, 1)


def test_identical_exogenous_entries_merge_once():
    shared = _bundle("EUR-OIS")
    builder = CurveBuildingBlockBundleBuilder()
    builder.merge(shared)
    builder.merge(shared)
    assert builder.add("USD-OIS", np.eye(1)) == (1, 1)


def test_overlapping_exogenous_bundles_collide():
    builder = CurveBuildingBlockBundleBuilder()
    builder.merge(_bundle("EUR-OIS"))
    with pytest.raises(BlockCollisionError) as excinfo:
        builder.merge(_bundle("GBP-OIS"))
    assert excinfo.value.name == "GBP-OIS"


def test_same_curve_with_two_ranges_collides():
    builder = CurveBuildingBlockBundleBuilder()
    builder.merge(_bundle("EUR-OIS"))
    with pytest.raises(BlockCollisionError):
        builder.merge(_placed("EUR-OIS", 2))


def test_repeated_new_curve_collides():
    builder = CurveBuildingBlockBundleBuilder()
    builder.add("USD-OIS", np.eye(1))
    with pytest.raises(BlockCollisionError):
        builder.add("USD-OIS", np.eye(1))


def test_merge_after_add_is_rejected():
    builder = CurveBuildingBlockBundleBuilder()
    builder.add("USD-OIS", np.eye(1))
    with pytest.raises(ValueError):
        builder.merge(_bundle("EUR-OIS"))


def test_next_free_index_skips_gaps():
    builder = CurveBuildingBlockBundleBuilder()
    builder.merge(_placed("EUR-OIS", 3))
    assert builder.add("USD-OIS", np.eye(1)) == (4, 1)


def test_jacobians_are_read_only_copies():
    jacobian = np.eye(1)
    builder = CurveBuildingBlockBundleBuilder()
    builder.add("USD-OIS", jacobian)
    bundle = builder.build()

    jacobian[0, 0] = 5.0
    assert bundle.jacobian_for("USD-OIS")[0, 0] == 1.0
    with pytest.raises(ValueError):
        bundle.jacobian_for("USD-OIS")[0, 0] = 2.0


def test_global_jacobian_places_blocks():
    builder = CurveBuildingBlockBundleBuilder()
    builder.add("USD-OIS", np.eye(1))
    builder.add("USD-3M", np.array([[0.5, 2.0]]))
    matrix = builder.build().global_jacobian()

    assert_array_equal(matrix, np.array([[1.0, 0.0], [0.5, 2.0]]))


def test_to_frame():
    frame = _bundle("USD-OIS", "USD-3M").to_frame()
    assert list(frame["curve"]) == ["USD-OIS", "USD-3M"]
    assert list(frame["end"]) == [1, 2]


def test_bundle_rejects_block_without_its_curve():
    block = CurveBuildingBlock({"USD-OIS": (0, 1)})
    with pytest.raises(ValueError):
        CurveBuildingBlockBundle({"USD-3M": (block, np.eye(1))})
