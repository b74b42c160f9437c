import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from deps.config import LOG_LEVEL, get_paytable
from routers import rounds, verify
from services.errors import InvalidInput, OutOfRange
from services.payout import Paytable

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Plinko Fairness API")

# Routers
app.include_router(rounds.router)
app.include_router(verify.router)


@app.exception_handler(InvalidInput)
async def invalid_input(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(OutOfRange)
async def out_of_range(request: Request, exc: OutOfRange):
    logger.error("invariant violated on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "internal invariant violated"})


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/docs")

@app.get("/healthz")
def healthz():
    return {"ok": True}

@app.get("/paytable")
def paytable(table: Paytable = Depends(get_paytable)):
    return {"rows": table.rows, "bins": table.to_list(), "nominal_rtp": round(table.nominal_rtp(), 6)}
