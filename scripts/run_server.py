"""Runs the API locally with uvicorn.

Usage:
    python scripts/run_server.py [--test] [--port 8000] [--reload]

--test points the app at DATABASE_URL_TEST and creates the tables on startup.
"""
import argparse
import os

import uvicorn
from dotenv import load_dotenv

# Loads DATABASE_URL_PROD / DATABASE_URL_TEST and friends into the environment
load_dotenv()


def main():
    parser = argparse.ArgumentParser(description="Run the Availability Manager backend.")
    parser.add_argument("--test", action="store_true", help="Use the test database.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=int(os.environ.get('PORT', 8000)))
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    if args.test:
        os.environ['TEST_MODE'] = "True"
        os.environ['CREATE_TABLES_ON_STARTUP'] = "True"
        print("--- Running with TEST DATABASE ---")

    # Settings are read on import, so the environment must be final by now
    uvicorn.run("availability_manager.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == '__main__':
    main()
