import pytest

from okestra.controllers.network import distribute

SUBNETS = ["s1", "s2", "s3", "s4"]


@pytest.mark.parametrize(
    "count,subnets,quantity,assigned",
    [
        (6, SUBNETS, 2, ("s1", "s2", "s3")),
        (9, SUBNETS, 3, ("s1", "s2", "s3")),
        (4, SUBNETS[:3], 2, ("s1", "s2")),
        (5, SUBNETS[:3], 5, ("s1",)),
        (7, SUBNETS, 7, ("s1",)),
    ],
)
def test_distribute_prefers_widest_even_split(count, subnets, quantity, assigned):
    dist = distribute(count, subnets)
    assert dist.quantity_per_subnet == quantity
    assert dist.subnet_ids == assigned
    assert dist.count == count


def test_distribute_zero_count():
    dist = distribute(0, SUBNETS)
    assert dist.quantity_per_subnet == 0
    assert dist.subnet_ids == ()
    assert not dist.distributable


@pytest.mark.parametrize("subnets", [[], ["s1"], ["s1", "s2"]])
def test_distribute_needs_three_worker_subnets(subnets):
    dist = distribute(6, subnets)
    assert dist.quantity_per_subnet == 0
    assert dist.subnet_ids == ()


def test_distribute_is_deterministic():
    assert distribute(12, SUBNETS) == distribute(12, SUBNETS)


def test_distribute_does_not_alias_input():
    subnets = list(SUBNETS)
    dist = distribute(3, subnets)
    subnets[0] = "changed"
    assert dist.subnet_ids[0] == "s1"
