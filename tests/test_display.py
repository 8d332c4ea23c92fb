import pytest
from galaxy.display import DisplayOrder
from planetgen.planet_factory import generate_planet

def test_assign_orders_by_distance():
    far = generate_planet(9_000.0, seed=1)
    near = generate_planet(10.0, seed=2)
    mid = generate_planet(500.0, seed=3)

    order = DisplayOrder()
    order.assign([far, near, mid])

    assert order.ordered_ids() == [near.id, mid.id, far.id]
    assert order.index_of(near.id) == 0
    assert len(order) == 3

def test_swap_exchanges_slots():
    a, b, c = (generate_planet(d, seed=s) for s, d in enumerate((1.0, 2.0, 3.0)))
    order = DisplayOrder()
    order.assign([a, b, c])

    order.swap(a.id, c.id)

    assert order.ordered_ids() == [c.id, b.id, a.id]

def test_swap_unknown_id():
    a = generate_planet(1.0, seed=1)
    order = DisplayOrder()
    order.assign([a])
    with pytest.raises(KeyError):
        order.swap(a.id, generate_planet(2.0, seed=2).id)
