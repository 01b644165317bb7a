#!/usr/bin/env python3
"""
Tests for traffic statistics aggregation.
"""

from __future__ import annotations

import unittest

from sim.routes import Direction, Route
from sim.stats import TrafficStats
from sim.vehicle import Vehicle


def _finished(vehicle_id: int, distance: float, alive: float,
              entered: float, exited: float, close_calls: int = 0) -> Vehicle:
    car = Vehicle(vehicle_id=vehicle_id, direction=Direction.UP, route=Route.STRAIGHT)
    car.distance_travelled = distance
    car.time_alive_s = alive
    car.intersection_entered_s = entered
    car.intersection_exited_s = exited
    car.close_calls = close_calls
    return car


class TrafficStatsTests(unittest.TestCase):
    def test_empty_summary(self) -> None:
        s = TrafficStats().summary()

        self.assertEqual(s.total_spawned, 0)
        self.assertEqual(s.total_exited, 0)
        self.assertEqual(s.total_distance_px, 0.0)
        self.assertIsNone(s.avg_intersection_time_s)
        self.assertIsNone(s.avg_time_in_system_s)
        self.assertEqual(s.by_direction[Direction.LEFT], 0)

    def test_spawn_and_rejection_tallies(self) -> None:
        stats = TrafficStats()
        stats.record_spawn(Vehicle(vehicle_id=0, direction=Direction.UP, route=Route.LEFT))
        stats.record_spawn(Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.RIGHT))
        stats.record_rejection(Direction.DOWN)

        s = stats.summary()

        self.assertEqual(s.total_spawned, 2)
        self.assertEqual(s.rejected_spawns, 1)
        self.assertEqual(s.by_direction[Direction.UP], 2)
        self.assertEqual(s.by_route[Route.LEFT], 1)
        self.assertEqual(s.by_route[Route.STRAIGHT], 0)

    def test_exit_aggregates(self) -> None:
        stats = TrafficStats()
        stats.record_exit(_finished(0, 100.0, 2.0, 0.5, 1.5, close_calls=1))
        stats.record_exit(_finished(1, 300.0, 4.0, 1.0, 4.0, close_calls=2))
        stats.record_runtime(0.25)
        stats.record_runtime(0.25)

        s = stats.summary()

        self.assertEqual(s.total_exited, 2)
        self.assertAlmostEqual(s.total_distance_px, 400.0)
        self.assertAlmostEqual(s.avg_distance_px, 200.0)
        self.assertAlmostEqual(s.avg_intersection_time_s, 2.0)
        self.assertAlmostEqual(s.min_intersection_time_s, 1.0)
        self.assertAlmostEqual(s.max_intersection_time_s, 3.0)
        self.assertAlmostEqual(s.avg_time_in_system_s, 3.0)
        self.assertAlmostEqual(s.runtime_s, 0.5)
        self.assertEqual(s.close_calls, 3)
        self.assertEqual(s.peak_speed, 120.0)

    def test_vehicle_without_crossing_is_not_averaged(self) -> None:
        stats = TrafficStats()
        car = _finished(0, 50.0, 1.0, 0.5, 1.0)
        car.intersection_exited_s = None
        stats.record_exit(car)

        self.assertEqual(stats.total_exited, 1)
        self.assertIsNone(stats.summary().avg_intersection_time_s)

    def test_report_in_metres(self) -> None:
        stats = TrafficStats()
        stats.record_exit(_finished(0, 100.0, 2.0, 0.5, 1.5, close_calls=1))
        stats.record_exit(_finished(1, 100.0, 2.0, 0.5, 1.5))

        lines = stats.report_lines()

        self.assertIn("Total distance travelled: 20.00 m", lines)
        self.assertIn("Avg distance per vehicle: 10.00 m", lines)
        self.assertIn("Peak speed: 12.0 m/s", lines)
        self.assertIn("Collisions avoided: 1", lines)


if __name__ == "__main__":
    unittest.main()
