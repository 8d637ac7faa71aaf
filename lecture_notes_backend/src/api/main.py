import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lecture_notes_database.config import get_settings
from lecture_notes_database.errors import (
    CantSwapAcrossScope,
    EmptyFilterError,
    InvalidPassword,
    NotAdminError,
    NotFoundError,
    NothingToUpdateError,
    StoreError,
    UnauthenticatedError,
    UnexpectedError,
)
from lecture_notes_database.hierarchy import build_tree

from .deps import get_db
from .routes import notes, sections, subsections, users
from .schemas import RootResponse

logger = logging.getLogger(__name__)

settings = get_settings()

# FastAPI app config
app = FastAPI(
    title="Lecture Notes Backend API",
    description="Backend API for organizing lecture notes into sections and subsections.",
    version="1.0.0",
    openapi_tags=[
        {"name": "Authentication", "description": "User registration, login and sessions"},
        {"name": "Sections", "description": "Ordered top level sections"},
        {"name": "Subsections", "description": "Ordered subsections within a section"},
        {"name": "Notes", "description": "Ordered note links"},
    ]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sections.router)
app.include_router(subsections.router)
app.include_router(notes.router)
app.include_router(users.router)


# PUBLIC_INTERFACE
@app.get("/", response_model=RootResponse, summary="Whole notes tree", tags=["General"])
def root_index(db=Depends(get_db)):
    """
    Every section with its subsections, their notes, and the notes attached
    directly to the section, all ordered by position.
    """
    return RootResponse(sections=build_tree(db))

# Health Check
@app.get("/health", summary="Health Check", tags=["General"])
def health_check():
    """Simple health check endpoint."""
    return {"message": "Healthy"}


ERROR_STATUS = {
    NotFoundError: 404,
    NothingToUpdateError: 400,
    EmptyFilterError: 400,
    InvalidPassword: 401,
    UnauthenticatedError: 401,
    NotAdminError: 403,
    CantSwapAcrossScope: 409,
    UnexpectedError: 500,
}

@app.exception_handler(StoreError)
def store_error_handler(request, exc: StoreError):
    status_code = ERROR_STATUS.get(type(exc), 500)
    content = {"detail": exc.message}
    if isinstance(exc, NotFoundError) and exc.missing_ids:
        content["missing_ids"] = list(exc.missing_ids)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


if __name__ == "__main__":
    import uvicorn

    from lecture_notes_database.init_db import init_db

    logging.basicConfig(level=settings.log_level.upper())
    init_db()
    logger.info("The connection was established and the tables were verified")
    uvicorn.run(app, host="0.0.0.0", port=8000)
