from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taxcore.core.config import settings
from taxcore.routers import tax

OPENAPI_TAGS = [
    {
        "name": "Tax",
        "description": "Tax profiles, codes and rates; tax calculation and snapshot locking.",
    },
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Jurisdiction-specific sales tax / VAT calculation for priced line items, "
        "and immutable tax snapshots for finalized invoices and expenses."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tax.router, prefix="/v1/tax", tags=["Tax"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
