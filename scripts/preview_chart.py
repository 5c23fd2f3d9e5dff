"""
Local elevation chart preview for a .fit file.

Decodes the file (no DB or API needed) and renders the elevation profile
to /tmp/preview_elevation.png.

Usage:
    source .venv/bin/activate && python scripts/preview_chart.py ride.fit
"""
import argparse
import sys
from pathlib import Path

# Allow running directly from repo root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from trackfit.charts.elevation import make_elevation_chart
from trackfit.fit.decoder import FitDecodeError, read_fit_file
from trackfit.geo.linestring import fit_records_to_geojson

OUT_PATH = Path("/tmp/preview_elevation.png")


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("fit_file", type=Path)
    parser.add_argument("--keep-zero-altitude", action="store_true",
                        help="keep 0 m altitude readings in the profile")
    args = parser.parse_args()

    try:
        decoded = read_fit_file(args.fit_file)
    except FitDecodeError as exc:
        print(f"❌ {exc}")
        return 1

    feature = fit_records_to_geojson(decoded.records, keep_zero_altitude=args.keep_zero_altitude)
    chart = make_elevation_chart(feature)
    if chart is None:
        print("Nothing to chart: no GPS track or no altitude data.")
        return 1

    png, caption = chart
    OUT_PATH.write_bytes(png)
    print(f"✅ {caption}")
    print(f"   Written to {OUT_PATH}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
