"""Xtream Codes API adapter."""

from __future__ import annotations

from .client import (
    XtreamAccountExpiredError,
    XtreamAPIError,
    XtreamAuthenticationError,
    XtreamClient,
    XtreamCredentials,
)
from .fetcher import XtreamCatalogFetcher
from .schema import (
    XtreamAuthResponse,
    XtreamCategory,
    XtreamLiveStream,
    XtreamSeries,
    XtreamVodStream,
)
from .translator import translate_live_stream, translate_series, translate_vod_stream

__all__ = [
    "XtreamAPIError",
    "XtreamAccountExpiredError",
    "XtreamAuthResponse",
    "XtreamAuthenticationError",
    "XtreamCatalogFetcher",
    "XtreamCategory",
    "XtreamClient",
    "XtreamCredentials",
    "XtreamLiveStream",
    "XtreamSeries",
    "XtreamVodStream",
    "translate_live_stream",
    "translate_series",
    "translate_vod_stream",
]
