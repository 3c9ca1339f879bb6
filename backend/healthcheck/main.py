from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healthcheck.config import ALLOWED_ORIGINS, configure_logging
from healthcheck.routers import auth, doctors, history, predict

configure_logging()

app = FastAPI(title="HealthCheck AI API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(predict.router, prefix="/api/predict", tags=["predict"])
app.include_router(doctors.router, prefix="/api/doctors", tags=["doctors"])
app.include_router(history.router, prefix="/api/history", tags=["history"])


@app.get("/")
async def root():
    return {"message": "HealthCheck AI Backend is running..."}


@app.get("/api/health")
async def health():
    return {"status": "ok"}
