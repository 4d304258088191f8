import unittest

from game import CardPool, NIL, MAX_CARDS, PoolExhausted


class TestCardPool(unittest.TestCase):
    def test_given_new_pool_when_inspected_then_full_capacity_and_nothing_in_use(self):
        pool = CardPool()
        self.assertEqual(pool.capacity, MAX_CARDS)
        self.assertEqual(pool.capacity, 52)
        self.assertEqual(pool.in_use, 0)

    def test_given_acquired_cell_when_reading_then_card_and_successor_bound(self):
        pool = CardPool()
        bottom = pool.acquire(4, NIL)
        top = pool.acquire(8, bottom)
        self.assertNotEqual(bottom, top)
        self.assertEqual(pool.card(top), 8)
        self.assertEqual(pool.successor(top), bottom)
        self.assertEqual(pool.successor(bottom), NIL)
        self.assertEqual(pool.in_use, 2)

    def test_given_released_cell_when_acquiring_again_then_same_cell_reused(self):
        pool = CardPool()
        h1 = pool.acquire(4, NIL)
        pool.release(h1)
        self.assertEqual(pool.in_use, 0)
        h2 = pool.acquire(9, NIL)
        self.assertEqual(h1, h2)
        self.assertEqual(pool.card(h2), 9)

    def test_given_full_pool_when_acquiring_then_pool_exhausted(self):
        pool = CardPool(capacity=3)
        handle = NIL
        for card in (4, 5, 6):
            handle = pool.acquire(card, handle)
        with self.assertRaises(PoolExhausted):
            pool.acquire(7, handle)
        # Fatal errors are runtime errors
        self.assertTrue(issubclass(PoolExhausted, RuntimeError))

    def test_given_used_pool_when_reset_then_every_cell_available_again(self):
        pool = CardPool(capacity=4)
        for card in (4, 5, 6, 7):
            pool.acquire(card, NIL)
        pool.reset()
        self.assertEqual(pool.in_use, 0)
        handles = {pool.acquire(c, NIL) for c in (4, 5, 6, 7)}
        self.assertEqual(handles, {0, 1, 2, 3})

    def test_given_bad_capacity_when_creating_then_value_error(self):
        with self.assertRaises(ValueError):
            CardPool(capacity=0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
