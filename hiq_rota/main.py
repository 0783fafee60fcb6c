import logging

from fastapi import FastAPI

from hiq_rota.core.config import settings
from hiq_rota.api.routes import job_roles, locations, revenue_thresholds, rotas, shift_rules, staff

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="HIQ Rota API", version="0.1.0")

app.include_router(locations.router, prefix="/api/v1")
app.include_router(staff.router, prefix="/api/v1")
app.include_router(job_roles.router, prefix="/api/v1")
app.include_router(shift_rules.router, prefix="/api/v1")
app.include_router(revenue_thresholds.router, prefix="/api/v1")
app.include_router(rotas.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
