"""
End-to-end run against the live GraphHopper API.

Loads segments from a CSV (see generate_mock_segments.py) into an in-memory
store, plans a hunt from a start point and writes the GPX export next to it.
Needs GRAPHHOPPER_API_KEY in the environment or in .env.
"""
import argparse
import logging
from typing import List

import pandas as pd

from hunt import InMemoryRouteStore, KomHuntPlanner, KomHuntRequest, MAX_SEGMENTS_PER_HUNT
from routing import GraphHopperClient, KomHuntError, Point, TravelProfile
from segments import InMemorySegmentStore, StarredSegment, kom_time_to_seconds


def load_segments(filepath: str) -> List[StarredSegment]:
    df = pd.read_csv(filepath, dtype={"segment_id": str})
    # pandas reads empty cells as NaN
    df = df.astype(object).where(pd.notna(df), None)

    segments = []
    for _, row in df.iterrows():
        segments.append(
            StarredSegment(
                id=row["segment_id"],
                name=row["name"],
                distance_m=float(row["distance_m"]),
                start_latitude=float(row["start_lat"]),
                start_longitude=float(row["start_lon"]),
                end_latitude=float(row["end_lat"]),
                end_longitude=float(row["end_lon"]),
                polyline=row.get("polyline"),
                kom_time_s=kom_time_to_seconds(row.get("kom_time")),
                average_grade=row.get("average_grade"),
            )
        )
    return segments


def main():
    parser = argparse.ArgumentParser(description="Plan a KOM hunt from a segments CSV")
    parser.add_argument("--segments", default="mock_segments.csv")
    parser.add_argument("--start", default="48.8566,2.3522", help="lat,lon")
    parser.add_argument("--profile", default=TravelProfile.BIKE.value,
                        choices=[p.value for p in TravelProfile])
    parser.add_argument("--go-back", action="store_true")
    parser.add_argument("--name", default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    segment_store = InMemorySegmentStore()
    records = load_segments(args.segments)
    segment_store.upsert_many(records)

    lat, lon = (float(v) for v in args.start.split(","))
    request = KomHuntRequest(
        segment_ids=[r.id for r in records[:MAX_SEGMENTS_PER_HUNT]],
        start_point=Point(lat, lon, name="Start"),
        profile=TravelProfile(args.profile),
        go_back=args.go_back,
        route_name=args.name,
    )

    planner = KomHuntPlanner(segment_store, InMemoryRouteStore(), GraphHopperClient())

    try:
        result = planner.generate_route("local", request)
    except KomHuntError as exc:
        print(f"Hunt failed [{exc.kind}]: {exc.message}")
        raise SystemExit(1)

    route = result.route
    print(f"\n--- KOM Hunt {result.route_id} ---")
    print(f"Total: {route.total_distance_m / 1000:.1f}km, {route.total_duration_s / 60:.0f}min")
    for position, summary in enumerate(result.segments, 1):
        kom = f"{summary.kom_time_s}s" if summary.kom_time_s is not None else "n/a"
        print(f"  {position}. {summary.name} ({summary.distance_m:.0f}m, KOM {kom})")
    for leg in route.legs:
        print(f"     {leg.label}: {leg.distance_m:.0f}m, {leg.duration_s:.0f}s")

    exported = planner.export_route(result.route_id, "local", "gpx")
    with open(exported.filename, "w", encoding="utf-8") as f:
        f.write(exported.content)
    print(f"\nGPX written to {exported.filename}")


if __name__ == "__main__":
    main()
