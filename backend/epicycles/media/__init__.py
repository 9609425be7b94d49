"""External collaborators: contour producer and video frame sink."""

from epicycles.media.contour import ContourConfig, ContourResult, extract_contour
from epicycles.media.video import VideoConfig, VideoWriter

__all__ = ["ContourConfig", "ContourResult", "extract_contour", "VideoConfig", "VideoWriter"]
