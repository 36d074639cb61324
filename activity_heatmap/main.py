from fastapi import FastAPI

from activity_heatmap.api.routes.heatmap import router
from activity_heatmap.core.middleware import PublicRateLimitMiddleware
from activity_heatmap.core.observability import configure_logging
from activity_heatmap.core.observability import init_sentry
from activity_heatmap.settings import Settings


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application serving heatmap images and summaries."""

    app_settings = app_settings or Settings()
    configure_logging(app_settings)
    init_sentry(app_settings)

    app = FastAPI(title="Activity Heatmap API")
    app.add_middleware(
        PublicRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    app.include_router(router)
    return app


app = create_app()
