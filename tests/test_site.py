from rogue_pursuit.dungeon import Site


def test_distances():
    a = Site(1, 2)
    b = Site(4, 0)
    assert a.manhattan_to(b) == 5
    assert b.manhattan_to(a) == 5
    assert a.chebyshev_to(b) == 3
    assert a.manhattan_to(a) == 0


def test_structural_equality_and_hashing():
    assert Site(3, 4) == Site(3, 4)
    assert Site(3, 4) != Site(4, 3)
    assert len({Site(3, 4), Site(3, 4), Site(0, 0)}) == 2
    assert {Site(1, 1): "x"}[Site(1, 1)] == "x"


def test_row_major_ordering_and_str():
    sites = [Site(1, 0), Site(0, 5), Site(0, 1)]
    assert sorted(sites) == [Site(0, 1), Site(0, 5), Site(1, 0)]
    assert str(Site(2, 7)) == "(2,7)"


def test_surrounding_is_three_by_three_block():
    block = list(Site(0, 0).surrounding())
    assert len(block) == 9
    assert block[0] == Site(-1, -1)
    assert block[4] == Site(0, 0)
    assert block == sorted(block)
