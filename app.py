import os

import uvicorn
from fastapi import FastAPI

from scraper import run_session
from sw_career_pkg.models import SessionRequest

app = FastAPI(title="SW Career Portal Scraper")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/scrape/sw-career")
async def scrape_sw_career(data: SessionRequest):
    # Each call runs its own browser session from sign-in to sign-out
    return await run_session(data)


if __name__ == "__main__":
    uvicorn.run(app, host=os.environ.get("HOST", "127.0.0.1"), port=int(os.environ.get("PORT", "8000")))
