"""
FastAPI Main Application
========================

Server-side gateway for churn predictions. The browser never talks to
the inference endpoint directly; it posts to /api/predict here.
"""

from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from config import get_config
from .gateway import INTERNAL_FAILURE, GatewayError, PredictionGateway
from .schemas import ErrorResponse, FeatureVector, HealthResponse, PredictionResponse


def get_gateway(request: Request) -> PredictionGateway:
    """Get the gateway attached to the running app."""
    return request.app.state.gateway


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location or 'body'}: {error.get('msg')}")
    return "; ".join(parts)


def create_app(gateway: Optional[PredictionGateway] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        gateway: Gateway to forward predictions through; built from
            config.yaml when omitted

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Churn Predictor API",
        description="Gateway relaying customer churn predictions to the hosted model",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.gateway = gateway or PredictionGateway()
    logger.info(f"Churn Predictor API forwarding to {app.state.gateway.upstream_url}")

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected prediction payload: {exc.errors()}")
        return JSONResponse(
            status_code=422,
            content={
                "error": "Invalid prediction payload",
                "details": _summarize_validation_errors(exc),
            },
        )

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {
            "message": "Churn Predictor API",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(gateway: PredictionGateway = Depends(get_gateway)):
        """Check API health status."""
        return HealthResponse(
            status="healthy",
            upstream_url=gateway.upstream_url,
            timestamp=datetime.now()
        )

    @app.post(
        "/api/predict",
        tags=["Predictions"],
        responses={
            200: {"model": PredictionResponse},
            422: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def predict(
        features: FeatureVector,
        gateway: PredictionGateway = Depends(get_gateway)
    ):
        """
        Relay a feature vector to the inference endpoint.

        Returns the endpoint's JSON body as-is, e.g. ``{"data": 1}``.
        """
        try:
            result = await gateway.predict(features.model_dump())
        except GatewayError:
            raise
        except Exception as e:
            logger.exception("Error in predict route")
            raise GatewayError(500, INTERNAL_FAILURE, str(e) or "Unknown error") from e

        return JSONResponse(content=result)

    return app


app = create_app()


# Run with: uvicorn src.api.main:app --reload
if __name__ == "__main__":
    import uvicorn

    config = get_config()
    api_config = config.get("api", {})

    uvicorn.run(
        "src.api.main:app",
        host=api_config.get("host", "0.0.0.0"),
        port=api_config.get("port", 8000),
        reload=api_config.get("reload", True)
    )
