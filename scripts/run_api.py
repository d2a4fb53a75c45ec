#!/usr/bin/env python
"""
Run the configurator API with uvicorn.

Usage:
    python scripts/run_api.py [--port 8000] [--no-reload]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def src_env(project_root: Path) -> dict:
    """Environment with src/ on PYTHONPATH."""
    env = os.environ.copy()
    src_path = str(project_root / "src")
    if "PYTHONPATH" in env:
        env["PYTHONPATH"] = f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env["PYTHONPATH"] = src_path
    return env


def main():
    parser = argparse.ArgumentParser(description="Run the configurator API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", default="8000")
    parser.add_argument("--no-reload", action="store_true")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent

    cmd = [
        sys.executable, "-m", "uvicorn",
        "configurator_tool.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if not args.no_reload:
        cmd.append("--reload")

    print(f"Starting Configurator API on {args.host}:{args.port}...")
    try:
        subprocess.run(cmd, cwd=str(project_root), env=src_env(project_root))
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
