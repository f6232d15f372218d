"""
Repayment Calculator API Application Factory
"""

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging
from ..policy import SystemSettings
from .calculator import router as calculator_router
from .dependencies import get_default_settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    config = get_config()
    setup_logging(
        level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file
    )
    
    app = FastAPI(
        title="Loan Repayment Calculator API",
        description="Repayment quotes, borrowing capacity and repayment schedules",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include routers
    app.include_router(calculator_router, prefix="/calculator", tags=["Calculator"])
    
    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "repayment_calculator_api",
            "version": __version__
        }

    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Loan Repayment Calculator API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "settings": "/settings",
                "quote": "/calculator/quote",
                "capacity": "/calculator/capacity",
                "schedule": "/calculator/schedule",
                "minimum_tenure": "/calculator/minimum-tenure"
            }
        }

    @app.get("/settings")
    async def get_settings(settings: SystemSettings = Depends(get_default_settings)):
        """Default lending policy applied when a request carries no settings"""
        return settings.to_dict()
    
    return app


def run_server(host: str = None, port: int = None, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    uvicorn.run(
        "repayment_core.api:create_app",
        factory=True,
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
