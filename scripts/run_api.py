#!/usr/bin/env python
"""
Start the Trip Quote API under uvicorn.

Usage:
    python scripts/run_api.py [--port 8000] [--data-dir ./data] [--no-reload]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the Trip Quote API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--data-dir", help="where pricingConfig.json is stored")
    parser.add_argument("--no-reload", action="store_true")
    parser.add_argument("--log-level", default=os.environ.get("TRIP_QUOTE_LOG_LEVEL", "info"))
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    env = os.environ.copy()
    src_path = str(project_root / "src")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src_path, env.get("PYTHONPATH")]))
    if args.data_dir:
        env["TRIP_QUOTE_DATA_DIR"] = str(Path(args.data_dir).resolve())

    cmd = [
        sys.executable, "-m", "uvicorn", "trip_quote.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
        "--log-level", args.log_level,
    ]
    if not args.no_reload:
        cmd.append("--reload")

    print(f"Starting Trip Quote API on http://{args.host}:{args.port} ...")
    try:
        subprocess.run(cmd, env=env, cwd=project_root)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
