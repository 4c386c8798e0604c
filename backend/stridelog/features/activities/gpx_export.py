"""
GPX export of stored activities.

One track per activity, one track segment per route segment, so pauses
show up as gaps in any GPX viewer.
"""

import logging

import gpxpy
import gpxpy.gpx

from .types import ActivityRecord

logger = logging.getLogger(__name__)


def build_gpx(record: ActivityRecord) -> gpxpy.gpx.GPX:
    """
    Build a GPX document for an activity.

    Args:
        record: Activity with segments

    Returns:
        gpxpy GPX object
    """
    gpx = gpxpy.gpx.GPX()
    gpx.creator = "StrideLog"
    gpx.time = record.created_at

    track = gpxpy.gpx.GPXTrack(name=f"{record.type} {record.created_at:%Y-%m-%d %H:%M}")
    track.type = record.type
    if record.comment:
        track.description = record.comment
    gpx.tracks.append(track)

    for segment in record.segments:
        gpx_segment = gpxpy.gpx.GPXTrackSegment()
        for point in segment:
            gpx_segment.points.append(
                gpxpy.gpx.GPXTrackPoint(point.latitude, point.longitude)
            )
        track.segments.append(gpx_segment)

    return gpx


def export_gpx(record: ActivityRecord) -> str:
    """Serialize an activity to GPX XML."""
    xml = build_gpx(record).to_xml()
    logger.debug(f"Exported activity {record.id} to GPX ({record.point_count} points)")
    return xml

