"""
Run Streamlit Dashboard
=======================

Script to start the Streamlit front end.

Usage:
    python scripts/run_dashboard.py
    python scripts/run_dashboard.py --port 8501
"""

import argparse
import subprocess
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import get_config


def parse_args():
    """Parse command line arguments."""
    dashboard_config = get_config().get("dashboard", {})

    parser = argparse.ArgumentParser(description="Run Streamlit dashboard")

    parser.add_argument(
        "--port",
        type=int,
        default=dashboard_config.get("port", 8501),
        help="Port to run on"
    )
    parser.add_argument(
        "--browser",
        action="store_true",
        help="Open browser automatically"
    )

    return parser.parse_args()


def main():
    """Run the dashboard."""
    args = parse_args()

    dashboard_path = project_root / "src" / "dashboard" / "app.py"

    print(f"""
    ╔═══════════════════════════════════════════════════╗
    ║       Churn Predictor Dashboard                   ║
    ╠═══════════════════════════════════════════════════╣
    ║  URL: http://localhost:{args.port}                      ║
    ╠═══════════════════════════════════════════════════╣
    ║  NOTE: Make sure the API server is running!       ║
    ║        Run: python scripts/run_api.py             ║
    ╚═══════════════════════════════════════════════════╝
    """)

    cmd = [
        sys.executable, "-m", "streamlit", "run",
        str(dashboard_path),
        "--server.port", str(args.port),
        "--server.headless", str(not args.browser).lower(),
    ]

    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    main()
