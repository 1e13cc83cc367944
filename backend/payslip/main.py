from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payslip.api.routes import health, seed
from payslip.core.config import settings
from payslip.core.logging import configure_logging, get_logger
from payslip.core.middleware import RequestLoggingMiddleware
from payslip.core.monitoring import configure_error_monitoring
from payslip.core.observability import configure_observability
from payslip.db.session import Base, engine
from payslip.domains.audit.router import router as audit_router
from payslip.domains.employees.router import router as employee_router
from payslip.domains.payroll.router import router as payroll_router

configure_logging(settings.log_level, settings.json_logs)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(seed.router)
app.include_router(payroll_router)
app.include_router(audit_router)
app.include_router(employee_router)


@app.on_event("startup")
def startup_event() -> None:
    if settings.auto_create_schema:
        import payslip.models  # noqa: F401  registers tables on Base.metadata

        Base.metadata.create_all(bind=engine)
        logger.info("schema_created")
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Payslip Generator API is running.", "environment": settings.env}
