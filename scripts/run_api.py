"""
Run FastAPI Server
==================

Script to start the prediction gateway.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 8000 --reload
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from config import get_config
from src.utils import setup_logging


def parse_args():
    """Parse command line arguments."""
    api_config = get_config().get("api", {})

    parser = argparse.ArgumentParser(description="Run the churn prediction gateway")

    parser.add_argument(
        "--host",
        type=str,
        default=api_config.get("host", "0.0.0.0"),
        help="Host to bind to"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=api_config.get("port", 8000),
        help="Port to bind to"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=api_config.get("reload", False),
        help="Enable auto-reload"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of workers"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (defaults to config.yaml)"
    )

    return parser.parse_args()


def main():
    """Run the API server."""
    args = parse_args()
    setup_logging(level=args.log_level)

    print(f"""
    ╔═══════════════════════════════════════════════════╗
    ║       Churn Predictor Gateway                     ║
    ╠═══════════════════════════════════════════════════╣
    ║  Host: {args.host:<15}                          ║
    ║  Port: {args.port:<15}                          ║
    ║  Reload: {str(args.reload):<13}                          ║
    ╠═══════════════════════════════════════════════════╣
    ║  API Docs: http://localhost:{args.port}/docs            ║
    ║  Predict:  POST /api/predict                      ║
    ╚═══════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1
    )


if __name__ == "__main__":
    main()
