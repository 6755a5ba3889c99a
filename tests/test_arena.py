import unittest

from crcmatrix.arena import Arena
from crcmatrix.constants import HEAP_SIZE


class Exhausted(Exception):
    pass


class ArenaTestCase(unittest.TestCase):
    def test_default_capacity(self):
        self.assertEqual(Arena().capacity, HEAP_SIZE)

    def test_allocate_and_release(self):
        arena = Arena(64)
        with arena.allocate(48):
            self.assertEqual(arena.used, 48)
            self.assertEqual(arena.available, 16)
            with arena.allocate(16):
                self.assertEqual(arena.available, 0)
        self.assertEqual(arena.used, 0)
        self.assertEqual(arena.peak, 64)

    def test_released_on_error(self):
        arena = Arena(64)
        with self.assertRaises(KeyError):
            with arena.allocate(32):
                raise KeyError
        self.assertEqual(arena.used, 0)

    def test_exhaustion_halts(self):
        arena = Arena(32)
        with self.assertLogs("crcmatrix.arena", level="CRITICAL"):
            with self.assertRaises(SystemExit):
                with arena.allocate(48):
                    self.fail("allocation should not succeed")
        self.assertEqual(arena.used, 0)

    def test_exhaustion_policy(self):
        calls = []

        def policy(arena, size):
            calls.append((arena.used, size))
            raise Exhausted

        arena = Arena(32, on_exhausted=policy)
        with arena.allocate(16):
            with self.assertRaises(Exhausted):
                with arena.allocate(24):
                    pass
        self.assertEqual(calls, [(16, 24)])

    def test_policy_must_not_return(self):
        arena = Arena(8, on_exhausted=lambda arena, size: None)
        with self.assertRaises(AssertionError):
            with arena.allocate(16):
                pass

    def test_capacity_checked(self):
        with self.assertRaises(ValueError):
            Arena(0)
