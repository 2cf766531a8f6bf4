import pytest

from thresig.weights import (
    RUNTIME_DB_WEIGHT,
    U64_MAX,
    DbWeight,
    exec_script_weight,
    pass_script_weight,
)


def test_base_weights_without_database_cost():
    assert pass_script_weight(DbWeight()) == 886_901_000
    assert exec_script_weight(DbWeight()) == 10_000


def test_default_argument_is_free_database():
    assert pass_script_weight() == pass_script_weight(DbWeight())
    assert exec_script_weight() == exec_script_weight(DbWeight())


def test_pass_script_adds_one_read_and_one_write():
    w = RUNTIME_DB_WEIGHT
    assert pass_script_weight(w) - pass_script_weight() == w.reads(1) + w.writes(1)


def test_exec_script_adds_two_reads_and_two_writes():
    w = RUNTIME_DB_WEIGHT
    assert exec_script_weight(w) - exec_script_weight() == w.reads(2) + w.writes(2)


def test_reads_and_writes_scale_linearly():
    w = DbWeight(read=7, write=11)
    assert w.reads(3) == 3 * w.reads(1)
    assert w.writes(5) == 5 * w.writes(1)


def test_saturation_at_u64_limit():
    w = DbWeight(read=U64_MAX, write=U64_MAX)
    assert w.reads(2) == U64_MAX
    assert w.writes(3) == U64_MAX
    assert pass_script_weight(w) == U64_MAX


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        DbWeight(1, 1).reads(-1)


def test_out_of_range_weight_rejected():
    with pytest.raises(ValueError):
        DbWeight(read=-1)