"""
Main entrypoint.

Usage:
    python -m trackfit                     # starts the API under uvicorn
    python -m trackfit decode ride.fit     # prints the ride's GeoJSON Feature
"""
import json
import logging
import sys
from pathlib import Path

from trackfit.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def _run_decode(path: Path) -> int:
    from trackfit.fit.decoder import FitDecodeError, read_fit_file
    from trackfit.geo.linestring import fit_records_to_geojson

    try:
        decoded = read_fit_file(path, check_crc=get_settings().fit_check_crc)
    except FitDecodeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    feature = fit_records_to_geojson(decoded.records)
    if feature is None:
        logger.info("%s has no usable position data", path)
    print(json.dumps(feature, default=str, indent=2))
    return 0


def _run_api() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Starting API on %s:%d", settings.api_host, settings.api_port)
    uvicorn.run("trackfit.api.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    # Dispatch on first argument: `python -m trackfit decode FILE` or just `python -m trackfit`
    if len(sys.argv) > 1 and sys.argv[1] == "decode":
        if len(sys.argv) != 3:
            print("Usage: python -m trackfit decode FILE.fit", file=sys.stderr)
            sys.exit(2)
        sys.exit(_run_decode(Path(sys.argv[2])))
    else:
        _run_api()
