# backend/employee_api/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from employee_api.api.auth_routes import router as auth_router
from employee_api.api.routes import router as api_router
from employee_api.core.config import Settings, get_settings
from employee_api.core.database import init_db, make_engine, make_session_factory
from employee_api.core.errors import AppError, InternalFailure, ValidationFailed, field_errors
from employee_api.core.logging_config import setup_logging
from employee_api.core.security import JWTTokenSigner

logger = logging.getLogger("employee_api")


def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(ValidationFailed(field_errors(exc.errors())))


def register_error_middleware(app: FastAPI) -> None:
    """Turn unexpected errors into the generic 500 body.

    Must be registered before CORSMiddleware so the 500 still passes
    back through CORS and carries its headers.
    """

    @app.middleware("http")
    async def catch_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            # full detail stays in the server log, the client gets the generic message
            logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
            return _error_response(InternalFailure())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    engine = make_engine(settings.database_url)
    session_factory = make_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(
            engine,
            session_factory,
            settings.default_admin_username,
            settings.default_admin_password,
        )
        logger.info("Employee API started (env=%s)", settings.app_env)
        yield
        engine.dispose()

    app = FastAPI(title="Employee Admin API", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.token_signer = JWTTokenSigner(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )

    # last added runs outermost: CORS wraps the error middleware
    register_error_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(api_router, prefix="/api", tags=["employees"])

    @app.get("/")
    def root():
        return {"message": "Employee CRUD API running"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("employee_api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
