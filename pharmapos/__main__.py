# pharmapos/__main__.py
import argparse

import uvicorn

from .config import configure_logging


def main():
    parser = argparse.ArgumentParser(description="Run the PharmaPOS API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8085)
    parser.add_argument("--log-level", default=None, help="Overrides PHARMAPOS_LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(args.log_level)
    uvicorn.run("pharmapos.main:app", host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
