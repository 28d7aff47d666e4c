from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.presentation.api.v1.estimate_router import router as estimate_router
from app.presentation.api.v1.location_router import router as location_router
from app.presentation.api.v1.repair_shop_router import router as repair_shop_router


app = FastAPI(title="Repair Estimator Backend", version="1.0.0")

# Enable permissive CORS (allow all origins). Use with caution in production.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"status": "ok", "message": "Repair Estimator Backend running"}

app.include_router(estimate_router)
app.include_router(location_router)
app.include_router(repair_shop_router)
