import argparse

import numpy as np
import pandas as pd

from routing.models import Point
from routing.polyline_codec import encode
from routing.geo import haversine_m


def generate_mock_segments(num_segments=10, output_file="mock_segments.csv", seed=None):
    """
    Generates a small dataset of starred segments scattered around a city centre,
    shaped like what the segment sync stores (flat coordinates, distance, polyline, KOM time).
    Roughly half of the segments get a cached polyline so both traversal paths
    of the assembler (cached geometry / provider fallback) get exercised.
    """
    # Centre on Paris (same default start as the route tests)
    CENTER_LAT = 48.8566
    CENTER_LON = 2.3522

    rng = np.random.default_rng(seed)
    rows = []

    for segment_index in range(num_segments):
        # Segment starts within ~10km of the centre (roughly 0.1 degrees)
        start_lat = CENTER_LAT + rng.uniform(-0.1, 0.1)
        start_lon = CENTER_LON + rng.uniform(-0.1, 0.1)

        # and runs 0.5-3km in a random direction
        heading = rng.uniform(0, 2 * np.pi)
        length_deg = rng.uniform(0.005, 0.027)
        end_lat = start_lat + length_deg * np.cos(heading)
        end_lon = start_lon + length_deg * np.sin(heading)

        start = Point(start_lat, start_lon)
        end = Point(end_lat, end_lon)

        polyline = None
        if rng.random() < 0.5:
            lats = np.linspace(start_lat, end_lat, 12)
            lons = np.linspace(start_lon, end_lon, 12)
            polyline = encode([Point(float(la), float(lo)) for la, lo in zip(lats, lons)])

        kom_seconds = int(rng.uniform(60, 600))
        rows.append({
            "segment_id": str(1000 + segment_index),
            "name": f"Mock Climb {segment_index + 1}",
            "distance_m": round(haversine_m(start, end), 1),
            "start_lat": start_lat,
            "start_lon": start_lon,
            "end_lat": end_lat,
            "end_lon": end_lon,
            "polyline": polyline,
            "kom_time": f"{kom_seconds // 60}:{kom_seconds % 60:02d}",
            "average_grade": round(rng.uniform(0, 9), 1),
        })

    df = pd.DataFrame(rows)
    df.to_csv(output_file, index=False)
    print(f"Wrote {len(df)} segments to {output_file}")
    return df


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate mock starred segments")
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--output", default="mock_segments.csv")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()
    generate_mock_segments(args.count, args.output, args.seed)
