from collections import Counter

from falling_blocks.game import PieceGenerator, TetrominoType


def test_seven_draws_contain_every_type_once():
    gen = PieceGenerator(seed=3)
    kinds = [gen.next().type for _ in range(7)]
    assert sorted(kinds) == sorted(TetrominoType)


def test_many_bags_are_balanced():
    gen = PieceGenerator(seed=11)
    counts = Counter(gen.next().type for _ in range(7 * 20))
    assert set(counts) == set(TetrominoType)
    assert all(n == 20 for n in counts.values())


def test_each_bag_window_is_a_permutation():
    gen = PieceGenerator(seed=5)
    for _ in range(10):
        window = {gen.next().type for _ in range(7)}
        assert window == set(TetrominoType)


def test_reset_starts_a_fresh_bag():
    gen = PieceGenerator(seed=1)
    gen.next()
    gen.next()
    assert len(gen.remaining) == 5
    gen.reset()
    assert gen.remaining == ()
    kinds = {gen.next().type for _ in range(7)}
    assert kinds == set(TetrominoType)


def test_pieces_spawn_unrotated():
    gen = PieceGenerator(seed=2)
    assert all(gen.next().rotation == 0 for _ in range(14))


def test_same_seed_same_sequence():
    a = PieceGenerator(seed=42)
    b = PieceGenerator(seed=42)
    assert [a.next() for _ in range(21)] == [b.next() for _ in range(21)]
