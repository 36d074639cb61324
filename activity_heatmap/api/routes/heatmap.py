import hashlib
from datetime import date

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from fastapi.responses import Response

from activity_heatmap.api.schemas.heatmap import ThemeItem
from activity_heatmap.api.schemas.heatmap import ThemesResponse
from activity_heatmap.clients.activity_client import ActivitySource
from activity_heatmap.clients.activity_client import HTTPActivitySource
from activity_heatmap.clients.activity_client import UpstreamDataError
from activity_heatmap.models import MAX_WINDOW_DAYS
from activity_heatmap.services.heatmap_service import render_json
from activity_heatmap.services.heatmap_service import render_svg
from activity_heatmap.services.options import parse_int
from activity_heatmap.services.options import parse_render_options
from activity_heatmap.services.render import RenderError
from activity_heatmap.services.themes import default_registry
from activity_heatmap.settings import Settings


router = APIRouter()
settings = Settings()


def get_activity_source() -> ActivitySource:
    return HTTPActivitySource(
        base_url=settings.activity_api_base_url,
        token=settings.activity_api_token,
        timeout=settings.activity_api_timeout_seconds,
    )


def get_today() -> date:
    return date.today()


def _cached_response(content: bytes, media_type: str) -> Response:
    etag = hashlib.sha256(content).hexdigest()[:32]
    return Response(
        content=content,
        media_type=media_type,
        headers={
            "Cache-Control": f"public, max-age={settings.heatmap_cache_max_age_seconds}",
            "ETag": f'"{etag}"',
        },
    )


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/themes")
def get_available_themes() -> ThemesResponse:
    """Return every registered theme with its colors."""

    return ThemesResponse(
        themes=[
            ThemeItem(
                id=theme.id,
                name=theme.name,
                bg_color=theme.background_color,
                text_color=theme.text_color,
                colors=list(theme.colors),
            )
            for theme in default_registry.themes()
        ]
    )


@router.get("/heatmap/{username}")
def get_heatmap_svg(
    username: str,
    request: Request,
    source: ActivitySource = Depends(get_activity_source),
    today: date = Depends(get_today),
) -> Response:
    """Return the activity heatmap image for an account."""

    account = username.removesuffix(".svg")
    options = parse_render_options(dict(request.query_params))

    try:
        content = render_svg(account, options, source=source, today=today)
    except UpstreamDataError as exc:
        raise HTTPException(
            status_code=502, detail="Activity data is unavailable"
        ) from exc
    except RenderError as exc:
        raise HTTPException(status_code=500, detail="Failed to render heatmap") from exc

    return _cached_response(content, "image/svg+xml")


@router.get("/activity/{username}")
def get_activity_json(
    username: str,
    request: Request,
    source: ActivitySource = Depends(get_activity_source),
    today: date = Depends(get_today),
) -> Response:
    """Return the per-day activity summary for an account."""

    account = username.removesuffix(".json")
    window_days = parse_int(request.query_params.get("days"), MAX_WINDOW_DAYS)

    try:
        content = render_json(account, window_days, source=source, today=today)
    except UpstreamDataError as exc:
        raise HTTPException(
            status_code=502, detail="Activity data is unavailable"
        ) from exc
    except RenderError as exc:
        raise HTTPException(status_code=500, detail="Failed to render activity") from exc

    return _cached_response(content, "application/json")
