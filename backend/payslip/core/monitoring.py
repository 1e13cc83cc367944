import sentry_sdk

from payslip.core.config import settings


def configure_error_monitoring() -> None:
    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.env, traces_sample_rate=0.2)


def report_exception(exc: BaseException, **context) -> None:
    """Forward a handled exception to Sentry. No-op when Sentry is not configured."""
    sentry_sdk.capture_exception(exc, extras=context)
