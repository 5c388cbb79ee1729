from fastapi import FastAPI

from app.api.v1.router import api_router


app = FastAPI(title="Production Floor")
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def root():
    return {"status": "ok", "message": "Production floor backend running"}
