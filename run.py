#!/usr/bin/env python3
"""
Repayment Calculator Entry Point

Starts the FastAPI server exposing the repayment calculations.
Host and port come from REPAYMENT_API_HOST / REPAYMENT_API_PORT.
"""

import sys

from repayment_core.api import run_server
from repayment_core.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("Starting Loan Repayment Calculator...")
    print("All financial calculations use Decimal precision")
    print(f"API available at: http://localhost:{config.api_port}")
    print(f"Documentation at: http://localhost:{config.api_port}/docs")
    print()
    
    try:
        run_server()
    except KeyboardInterrupt:
        print("\nShutting down Loan Repayment Calculator...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
