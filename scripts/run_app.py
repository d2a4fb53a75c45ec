#!/usr/bin/env python
"""
Run the Streamlit configurator preview.

Usage:
    python scripts/run_app.py
"""
import subprocess
import sys
from pathlib import Path

from run_api import src_env


def main():
    project_root = Path(__file__).parent.parent
    ui_path = project_root / 'src' / 'configurator_tool' / 'ui' / 'app_streamlit.py'

    if not ui_path.exists():
        print(f"ERROR: preview app not found at {ui_path}")
        sys.exit(1)

    cmd = [sys.executable, '-m', 'streamlit', 'run', str(ui_path)]
    print(f"Starting configurator preview: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, cwd=str(project_root), env=src_env(project_root))
    except KeyboardInterrupt:
        print("\nPreview stopped.")


if __name__ == "__main__":
    main()
