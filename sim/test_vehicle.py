#!/usr/bin/env python3
"""
Tests for vehicle motion along compiled paths.
"""

from __future__ import annotations

import unittest

from sim.physics import approach, facing_of, stopping_distance
from sim.routes import Direction, Route, compile_path
from sim.traffic_policy import VelocityLevel
from sim.vehicle import Regulation, Vehicle

# Power-of-two tick keeps every step exactly representable.
DT = 1.0 / 64.0


class PhysicsHelperTests(unittest.TestCase):
    def test_approach_is_bounded_and_non_negative(self) -> None:
        self.assertEqual(approach(100.0, 120.0, 5.0), 105.0)
        self.assertEqual(approach(100.0, 102.0, 5.0), 102.0)
        self.assertEqual(approach(3.0, 0.0, 5.0), 0.0)
        self.assertEqual(approach(0.0, -10.0, 5.0), 0.0)

    def test_stopping_distance(self) -> None:
        self.assertEqual(stopping_distance(120.0, 240.0), 30.0)
        self.assertEqual(stopping_distance(0.0, 0.0), 0.0)

    def test_facing_of_ties_resolve_horizontally(self) -> None:
        self.assertIs(facing_of(0.0, -5.0), Direction.UP)
        self.assertIs(facing_of(5.0, 1.0), Direction.RIGHT)
        self.assertIs(facing_of(-3.0, 3.0), Direction.LEFT)


class VehicleMotionTests(unittest.TestCase):
    def test_initial_state(self) -> None:
        car = Vehicle(vehicle_id=7, direction=Direction.UP, route=Route.STRAIGHT)
        self.assertEqual((car.x, car.y), (495.0, 915.0))
        self.assertEqual(car.speed, 120.0)
        self.assertEqual(car.target_speed, 120.0)
        self.assertIs(car.facing, Direction.UP)
        self.assertFalse(car.finished)

    def test_moves_exactly_speed_times_dt(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT)

        car.update(DT, [])

        self.assertAlmostEqual(car.x, 495.0)
        self.assertAlmostEqual(car.y, 915.0 - 120.0 * DT)
        self.assertAlmostEqual(car.distance_travelled, 120.0 * DT)
        self.assertAlmostEqual(car.time_alive_s, DT)

    def test_speed_change_is_bounded_by_rate(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.RIGHT, route=Route.STRAIGHT, speed=0.0)

        car.update(DT, [])

        self.assertAlmostEqual(car.speed, car.policy.acceleration_rate * DT)

    def test_up_straight_end_to_end(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT)
        final = car.path[-1]

        for _ in range(1000):
            if car.finished:
                break
            car.update(DT, [])

        self.assertTrue(car.finished)
        self.assertAlmostEqual(car.x, final[0], places=6)
        self.assertAlmostEqual(car.y, final[1], places=6)
        self.assertTrue(car.is_out_of_bounds())
        self.assertAlmostEqual(car.distance_travelled, 1020.0, places=6)

    def test_turning_vehicle_follows_every_waypoint(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.DOWN, route=Route.RIGHT)
        visited = []

        for _ in range(2000):
            if car.finished:
                break
            before = car.current_target
            car.update(DT, [])
            if car.current_target != before:
                visited.append((car.x, car.y))

        self.assertTrue(car.finished)
        for got, want in zip(visited, compile_path(Direction.DOWN, Route.RIGHT)[1:]):
            self.assertAlmostEqual(got[0], want[0], places=6)
            self.assertAlmostEqual(got[1], want[1], places=6)

    def test_arrival_is_idempotent(self) -> None:
        car = Vehicle(
            vehicle_id=1, direction=Direction.RIGHT, route=Route.STRAIGHT,
            path=((0.0, 0.0), (3.0, 0.0)),
        )
        self.assertEqual(car.next_waypoint, (3.0, 0.0))
        for _ in range(10):
            car.update(DT, [])
        self.assertTrue(car.finished)
        position = (car.x, car.y)
        self.assertIsNone(car.next_waypoint)
        alive = car.time_alive_s

        for _ in range(5):
            car.update(DT, [])

        self.assertEqual((car.x, car.y), position)
        self.assertEqual(car.time_alive_s, alive)

    def test_zero_length_segment_counts_as_arrival(self) -> None:
        car = Vehicle(
            vehicle_id=1, direction=Direction.RIGHT, route=Route.STRAIGHT,
            path=((0.0, 0.0), (0.0, 0.0), (30.0, 0.0)),
        )
        self.assertIs(car.facing, Direction.RIGHT)

        car.update(DT, [])
        self.assertEqual(car.current_target, 2)
        self.assertEqual((car.x, car.y), (0.0, 0.0))

        car.update(DT, [])
        self.assertAlmostEqual(car.x, 120.0 * DT)

    def test_empty_path_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.LEFT, path=())

    def test_non_positive_dt_is_rejected(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.LEFT)
        with self.assertRaises(ValueError):
            car.update(0.0, [])
        with self.assertRaises(ValueError):
            car.update(-DT, [])

    def test_out_of_bounds_regardless_of_state(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.LEFT, route=Route.STRAIGHT)
        self.assertFalse(car.is_out_of_bounds())

        car.x = -61.0
        car.speed = 0.0
        self.assertTrue(car.is_out_of_bounds())
        self.assertTrue(car.is_out_of_bounds())

    def test_facing_follows_segment_after_pivot(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.LEFT)
        car.x, car.y = car.path[2]
        car.current_target = 3
        self.assertIs(car.facing, Direction.LEFT)

        car.current_target = len(car.path)
        self.assertIs(car.facing, Direction.LEFT)


class IntersectionBookkeepingTests(unittest.TestCase):
    def test_crossing_time_recorded_for_straight_path(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT)
        for _ in range(1000):
            if car.finished:
                break
            car.update(DT, [])

        self.assertIsNotNone(car.intersection_entered_s)
        self.assertIsNotNone(car.intersection_exited_s)
        # Six box tiles at 120 px/s.
        self.assertAlmostEqual(car.intersection_time_s, 180.0 / 120.0, delta=2 * DT)

    def test_entry_and_exit_recorded_only_once(self) -> None:
        car = Vehicle(
            vehicle_id=1, direction=Direction.RIGHT, route=Route.STRAIGHT,
            path=((300.0, 450.0), (600.0, 450.0), (300.0, 450.0), (600.0, 450.0)),
        )
        first = None
        entries = 0
        was_inside = car.in_intersection

        for _ in range(2000):
            if car.finished:
                break
            car.update(DT, [])
            if car.in_intersection and not was_inside:
                entries += 1
            was_inside = car.in_intersection
            if first is None and car.intersection_exited_s is not None:
                first = (car.intersection_entered_s, car.intersection_exited_s)

        self.assertGreater(entries, 1)
        self.assertIsNotNone(first)
        self.assertEqual((car.intersection_entered_s, car.intersection_exited_s), first)


class VelocityLevelTests(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertIs(VelocityLevel.parse(" fast "), VelocityLevel.FAST)
        with self.assertRaises(ValueError):
            VelocityLevel.parse("warp")

    def test_level_change_applies_while_clear(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT)

        car.set_velocity_level(VelocityLevel.FAST)

        self.assertEqual(car.target_speed, car.policy.fast_speed)

    def test_level_change_deferred_while_regulated(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT)
        car.regulation = Regulation.CAUTION
        car.target_speed = car.policy.caution_speed

        car.set_velocity_level(VelocityLevel.FAST)
        self.assertEqual(car.target_speed, car.policy.caution_speed)
        self.assertIs(car.velocity_level, VelocityLevel.FAST)

        car.update(DT, [])
        self.assertEqual(car.target_speed, car.policy.fast_speed)


if __name__ == "__main__":
    unittest.main()
