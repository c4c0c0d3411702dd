"""
Danger Grid Core - Quick Start Example

세 대의 항공기로 danger grid를 만들고 planner 비용을 조회
"""
import logging

from danger_grid_core import Aircraft, DangerGrid, DangerGridConfig, SpreadPolicy


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Danger Grid Core - Quick Start")
    print("=" * 60)

    # 1. Aircraft (grid squares, x=east, y=south)
    aircraft = [
        Aircraft.heading_straight_to(0, location=(0, 0), final_destination=(14, 14)),   # owner
        Aircraft.heading_straight_to(1, location=(5, 9), final_destination=(5, 0)),     # northbound
        Aircraft(
            plane_id=2,
            location=(13, 2),
            bearing=225.0,
            destination=(9, 6),
            final_destination=(2, 6),
        ),
    ]
    print("\n[Aircraft]")
    for plane in aircraft:
        print(f"  #{plane.plane_id}: at {tuple(plane.location)}, "
              f"hdg={plane.bearing:.0f}°, goal={tuple(plane.final_destination)}")

    # 2. Danger grid for aircraft 0 (15 x 15 squares, 10 s look-ahead)
    config = DangerGridConfig(look_ahead=10)
    grid = DangerGrid(aircraft, width=150, height=150, resolution=10, owner_id=0, config=config)
    print(f"\n{grid}")
    print(f"Plane danger: {grid.plane_danger:.2f}")

    # 3. Danger over time at a crossing cell
    print("\n[Danger at (5, 6)]")
    for seconds in range(0, config.look_ahead + 1):
        print(f"  t={seconds:+3d}s  {grid(5, 6, seconds):8.2f}")

    print("\n[Layer t=+3 s]")
    grid.dump(3)

    # 4. Bearing-gated spreading for comparison
    gated = DangerGrid(aircraft, width=150, height=150, resolution=10, owner_id=0,
                       config=config.replace(spread_policy=SpreadPolicy.BEARING_GATED_5))
    print("\n[Layer t=+3 s, bearing-gated spread]")
    gated.dump(3)

    # 5. Fuse the distance to the owner's goal
    grid.calculate_distance_costs(goal_x=14, goal_y=14)
    print("\n[Planner cost at t=+3 s]")
    grid.dump_big_numbers(3)
    print(f"\nDistance-only cost at (0, 0): {grid.get_dist_cost_at(0, 0):.2f}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
