"""
FIT upload routes: decode an uploaded .fit file into map / chart data.

Decode failures (not a FIT file, failed integrity check) come back as 400
with the decoder's message as `detail`, for display to the user as-is.
A file without usable GPS data is not an error: `feature` is null.
"""
import asyncio
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from trackfit.charts.elevation import make_elevation_chart
from trackfit.config import Settings, get_settings
from trackfit.fit.decoder import DecodedFit, FitDecodeError, decode_fit
from trackfit.geo.linestring import fit_records_to_geojson

logger = logging.getLogger(__name__)

router = APIRouter()


async def run_blocking(fn, *args, **kwargs):
    """Run CPU-bound decode / render work in the thread pool."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, lambda: fn(*args, **kwargs))


async def read_fit_upload(file: UploadFile, settings: Settings) -> DecodedFit:
    """Read an upload (bounded by max_upload_bytes) and decode it, or raise HTTPException."""
    data = await file.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="FIT file too large")
    try:
        return await run_blocking(decode_fit, data, check_crc=settings.fit_check_crc)
    except FitDecodeError as exc:
        logger.warning("Rejected upload %s: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _render_elevation_chart(records):
    return make_elevation_chart(fit_records_to_geojson(records))


@router.post("/fit")
async def upload_fit(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
):
    """Decode a FIT file into a LineString Feature plus its session summaries."""
    decoded = await read_fit_upload(file, settings)
    feature = await run_blocking(fit_records_to_geojson, decoded.records)
    logger.info(
        "Decoded upload %s: %d records, %s",
        file.filename,
        len(decoded.records),
        "no usable positions" if feature is None else
        f"{len(feature['geometry']['coordinates'])} points",
    )
    return {
        "feature": feature,
        "sessions": [asdict(s) for s in decoded.sessions],
        "record_count": len(decoded.records),
    }


@router.post("/fit/elevation.png")
async def upload_fit_elevation_chart(
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
):
    """Render the elevation profile of a FIT file. 204 when there is nothing to chart."""
    decoded = await read_fit_upload(file, settings)
    chart = await run_blocking(_render_elevation_chart, decoded.records)
    if chart is None:
        return Response(status_code=204)
    png, caption = chart
    return Response(content=png, media_type="image/png", headers={"X-Chart-Caption": caption})
