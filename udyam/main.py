from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from udyam.api.routes import router
from udyam.api.schemas import ErrorResponse
from udyam.observability.logging import log
from udyam.settings import settings

app = FastAPI(title="Udyam Registration Wizard API")

origins = [x.strip() for x in settings.CORS_ORIGINS.split(",") if x.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Registration wizard API is running. POST /wizards to start.",
    }


@app.get("/health")
def health():
    return {"status": "ok"}


# Rejections inside the wizard are soft and come back as part of the view;
# anything reaching this handler is a bug, reported without crashing the worker.
@app.exception_handler(Exception)
async def universal_exception_handler(request: Request, exc: Exception):
    log(
        event="unhandled_exception",
        path=request.url.path,
        errorType=type(exc).__name__,
        error=str(exc)[:500],
    )
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(message="Internal error. Please retry.").model_dump(),
    )
