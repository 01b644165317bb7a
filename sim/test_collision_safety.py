#!/usr/bin/env python3
"""
Safety tests for per-vehicle speed regulation against peers ahead.
"""

from __future__ import annotations

import unittest

from sim.physics import stopping_distance
from sim.routes import Direction, Route
from sim.traffic_policy import DEFAULT_POLICY, VelocityLevel
from sim.vehicle import Regulation, Vehicle, VehicleState

DT = 1.0 / 64.0


def _stopped_peer(x: float, y: float, vehicle_id: int = 99,
                  facing: Direction = Direction.UP) -> VehicleState:
    return VehicleState(vehicle_id=vehicle_id, x=x, y=y, speed=0.0, facing=facing)


class RegulatorSafetyTests(unittest.TestCase):
    def setUp(self) -> None:
        # UP/STRAIGHT starts at (495, 915) heading toward y = 555.
        self.car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT)

    def test_gap_inside_caution_band_sets_caution_speed(self) -> None:
        gap = 75.0
        self.assertGreater(gap, DEFAULT_POLICY.emergency_distance)
        self.assertLess(gap, DEFAULT_POLICY.safety_distance)
        leader = _stopped_peer(self.car.x, self.car.y - gap)

        self.car.update(DT, [leader])

        self.assertIs(self.car.regulation, Regulation.CAUTION)
        self.assertEqual(self.car.target_speed, DEFAULT_POLICY.caution_speed)
        self.assertEqual(self.car.close_calls, 0)

    def test_gap_just_beyond_safety_distance_is_clear_at_every_level(self) -> None:
        for level in VelocityLevel:
            with self.subTest(level=level):
                car = Vehicle(vehicle_id=1, direction=Direction.UP,
                              route=Route.STRAIGHT, velocity_level=level)
                leader = _stopped_peer(car.x, car.y - DEFAULT_POLICY.safety_distance - 0.5)

                car.update(DT, [leader])

                self.assertIs(car.regulation, Regulation.CLEAR)
                self.assertEqual(car.target_speed, DEFAULT_POLICY.speed_for(level))

    def test_gap_at_emergency_distance_stops(self) -> None:
        leader = _stopped_peer(self.car.x, self.car.y - DEFAULT_POLICY.emergency_distance)

        self.car.update(DT, [leader])

        self.assertIs(self.car.regulation, Regulation.EMERGENCY)
        self.assertEqual(self.car.target_speed, 0.0)

    def test_trailing_vehicle_stops_at_emergency_distance(self) -> None:
        leader = _stopped_peer(self.car.x, self.car.y - 80.0)
        min_gap = float("inf")

        for _ in range(600):
            self.car.update(DT, [leader])
            min_gap = min(min_gap, self.car.y - leader.y)

        floor = DEFAULT_POLICY.emergency_distance - DEFAULT_POLICY.emergency_overshoot
        self.assertGreaterEqual(min_gap, floor)
        self.assertLessEqual(min_gap, DEFAULT_POLICY.emergency_distance)
        self.assertIs(self.car.regulation, Regulation.EMERGENCY)
        self.assertEqual(self.car.speed, 0.0)
        self.assertEqual(self.car.close_calls, 1)

    def test_fast_approach_reaches_caution_speed_before_emergency_band(self) -> None:
        car = Vehicle(vehicle_id=1, direction=Direction.UP, route=Route.STRAIGHT,
                      velocity_level=VelocityLevel.FAST)
        leader = _stopped_peer(car.x, car.y - 150.0)
        seen = []
        speed_entering_emergency = None
        min_gap = float("inf")

        for _ in range(600):
            speed_before = car.speed
            car.update(DT, [leader])
            if car.regulation not in seen:
                seen.append(car.regulation)
                if car.regulation is Regulation.EMERGENCY:
                    speed_entering_emergency = speed_before
            min_gap = min(min_gap, car.y - leader.y)

        self.assertEqual(seen, [Regulation.CLEAR, Regulation.CAUTION, Regulation.EMERGENCY])
        self.assertLessEqual(speed_entering_emergency, DEFAULT_POLICY.caution_speed)
        self.assertGreaterEqual(
            min_gap, DEFAULT_POLICY.emergency_distance - DEFAULT_POLICY.emergency_overshoot
        )

    def test_default_tuning_brakes_fast_traffic_within_caution_band(self) -> None:
        p = DEFAULT_POLICY
        braking = (stopping_distance(p.fast_speed, p.acceleration_rate)
                   - stopping_distance(p.caution_speed, p.acceleration_rate))
        # One tick at fast speed may pass before the safety distance is seen.
        self.assertLessEqual(braking + p.fast_speed * p.max_tick_s,
                             p.safety_distance - p.emergency_distance)
        self.assertGreaterEqual(p.spawn_clearance, p.safety_distance)

    def test_peer_in_adjacent_lane_is_ignored(self) -> None:
        neighbour = _stopped_peer(self.car.x + 30.0, self.car.y - 40.0)

        self.car.update(DT, [neighbour])

        self.assertIs(self.car.regulation, Regulation.CLEAR)
        self.assertEqual(self.car.target_speed, DEFAULT_POLICY.medium_speed)

    def test_peer_behind_is_ignored(self) -> None:
        follower = _stopped_peer(self.car.x, self.car.y + 40.0)

        self.car.update(DT, [follower])

        self.assertIs(self.car.regulation, Regulation.CLEAR)

    def test_self_is_excluded_from_peers(self) -> None:
        start_y = self.car.y
        peers = [self.car, self.car.snapshot()]

        self.car.update(DT, peers)

        self.assertIs(self.car.regulation, Regulation.CLEAR)
        self.assertLess(self.car.y, start_y)
        self.assertEqual(self.car.close_calls, 0)

    def test_obstruction_clearing_restores_baseline(self) -> None:
        leader = _stopped_peer(self.car.x, self.car.y - 80.0)
        self.car.update(DT, [leader])
        self.assertEqual(self.car.target_speed, DEFAULT_POLICY.caution_speed)

        self.car.update(DT, [])

        self.assertIs(self.car.regulation, Regulation.CLEAR)
        self.assertEqual(self.car.target_speed, DEFAULT_POLICY.medium_speed)

    def test_close_call_counted_once_per_emergency_episode(self) -> None:
        leader = _stopped_peer(self.car.x, self.car.y - 40.0)

        for _ in range(3):
            self.car.update(DT, [leader])

        self.assertIs(self.car.regulation, Regulation.EMERGENCY)
        self.assertEqual(self.car.close_calls, 1)
        self.assertEqual(self.car.target_speed, 0.0)


class CrossingPriorityTests(unittest.TestCase):
    """Vehicles on perpendicular headings: the later spawn waits."""

    def setUp(self) -> None:
        self.car = Vehicle(vehicle_id=5, direction=Direction.UP, route=Route.STRAIGHT)

    def test_later_crossing_vehicle_is_not_an_obstacle(self) -> None:
        crosser = _stopped_peer(self.car.x, self.car.y - 30.0, vehicle_id=6,
                                facing=Direction.LEFT)

        self.car.update(DT, [crosser])

        self.assertIs(self.car.regulation, Regulation.CLEAR)
        self.assertIsNone(self.car.gap_ahead([crosser]))

    def test_earlier_crossing_vehicle_blocks(self) -> None:
        crosser = _stopped_peer(self.car.x, self.car.y - 30.0, vehicle_id=4,
                                facing=Direction.RIGHT)

        self.car.update(DT, [crosser])

        self.assertIs(self.car.regulation, Regulation.EMERGENCY)
        self.assertEqual(self.car.target_speed, 0.0)

    def test_mutual_crossing_conflict_stops_only_the_later_vehicle(self) -> None:
        # LEFT/STRAIGHT and DOWN/STRAIGHT both 10 px short of (405, 405).
        first = Vehicle(vehicle_id=7, direction=Direction.LEFT, route=Route.STRAIGHT,
                        path=((415.0, 405.0), (-105.0, 405.0)))
        second = Vehicle(vehicle_id=8, direction=Direction.DOWN, route=Route.STRAIGHT,
                         path=((405.0, 395.0), (405.0, 1005.0)))
        frozen = (first.snapshot(), second.snapshot())

        first.update(DT, frozen)
        second.update(DT, frozen)

        self.assertIs(first.regulation, Regulation.CLEAR)
        self.assertIs(second.regulation, Regulation.EMERGENCY)
        self.assertLess(first.x, 415.0)

    def test_same_heading_peer_blocks_whatever_its_id(self) -> None:
        leader = _stopped_peer(self.car.x, self.car.y - 30.0, vehicle_id=50)

        self.car.update(DT, [leader])

        self.assertIs(self.car.regulation, Regulation.EMERGENCY)


if __name__ == "__main__":
    unittest.main()
