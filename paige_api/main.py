import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paige_api.config import settings
from paige_api.routers import onboarding
from paige_api.services import http_client
from paige_api.utils.logger import logger

app = FastAPI(title="Paige Onboarding API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(f"Starting Paige Onboarding API under ENV={settings.env}")

app.include_router(onboarding.router)


@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared httpx.AsyncClient when the application shuts down."""
    logger.info("Application shutdown event triggered.")
    await http_client.shutdown_httpx_client()


if __name__ == "__main__":
    uvicorn.run("paige_api.main:app", host="0.0.0.0", port=8000, reload=True)
